"""Markdown line codec for RTM tasks.

A rendered line embeds the task identifier as a markdown link target:

    - [ ] [🐮](rtm:101:33:55) Buy milk 🔺 📅 2024-05-01 #Inbox #errand

The ``(rtm:list:series:task)`` tag is the only link between a line of
text and a remote task. Every function here is total over strings.
"""

import re
from typing import Iterable, Optional

from rtm_bridge.tasks.models import FormattedTask, TaskRef

ID_GLYPH = "🐮"
INCOMPLETE_MARKER = "- [ ]"
COMPLETE_MARKER = "- [x]"

_ID_TAG_PATTERN = re.compile(r"\(rtm:([\w\d]+):([\w\d]+):([\w\d]+)\)", re.ASCII)
_CHECKBOX_PREFIX = re.compile(r"^[-*] \[[ x]\] ")
_BULLET_PREFIX = re.compile(r"^[-*] ")
_LIST_SLUG_SEPARATORS = re.compile(r"[\s,.]+")


def id_tag(ref: TaskRef) -> str:
    """Render the embedded identifier, e.g. ``[🐮](rtm:101:33:55)``."""
    return f"[{ID_GLYPH}](rtm:{ref.list_id}:{ref.series_id}:{ref.task_id})"


def list_tag(list_name: str) -> str:
    """Render a list name as " #Slug", or "" for an unnamed list."""
    if not list_name:
        return ""
    return f" #{_LIST_SLUG_SEPARATORS.sub('_', list_name)}"


def tags_list(tags: Iterable[str]) -> str:
    return "".join(f" #{tag}" for tag in tags)


def encode_task(task: FormattedTask) -> str:
    """Render a FormattedTask as a single unchecked markdown line (no newline)."""
    return (
        f"{INCOMPLETE_MARKER} {id_tag(task.rtm_id)} {task.name}"
        f"{task.priority}{task.due}{list_tag(task.list_name)}{tags_list(task.tags)}"
    )


def encode_new_task(ref: TaskRef, name: str) -> str:
    """Render a freshly added task, which has only a name and an id."""
    return f"{INCOMPLETE_MARKER} {id_tag(ref)} {name}"


def render_block(tasks: Iterable[FormattedTask]) -> str:
    """Render tasks as a block of lines, each terminated by a newline."""
    return "".join(f"{encode_task(task)}\n" for task in tasks)


def decode_ref(line: str) -> Optional[TaskRef]:
    """Extract the TaskRef from the first id tag in ``line``.

    Returns:
        The TaskRef, or None when the line is not a tracked RTM task.
    """
    match = _ID_TAG_PATTERN.search(line)
    if match is None:
        return None
    return TaskRef(list_id=match.group(1), series_id=match.group(2), task_id=match.group(3))


def extract_task_name(line: str) -> str:
    """Strip a leading checkbox or bullet marker to recover free task text."""
    name = _CHECKBOX_PREFIX.sub("", line, count=1)
    name = _BULLET_PREFIX.sub("", name, count=1)
    return name.strip()


def mark_completed(line: str) -> str:
    """Replace the first incomplete checkbox marker with the complete one."""
    return line.replace(INCOMPLETE_MARKER, COMPLETE_MARKER, 1)

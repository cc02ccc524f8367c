"""Builds FormattedTask objects from ``rtm.tasks.getList`` responses."""

import logging
from typing import Any, Mapping

from rtm_bridge.api.exceptions import MalformedResponseError

from .models import MISSING_LIST_ID, FormattedTask, TaskRef
from .normalize import normalize_to_array

logger = logging.getLogger(__name__)

DUE_GLYPH = "📅"

# RTM priority codes; "N" (no priority) and anything else render as ""
PRIORITY_GLYPHS = {
    "1": "🔺",
    "2": "🔼",
    "3": "🔽",
}


def format_due(raw_due: str) -> str:
    """Render a raw due timestamp as " 📅 YYYY-MM-DD", or "" when empty."""
    if not raw_due:
        return ""
    date_part = raw_due.split("T", 1)[0]
    return f" {DUE_GLYPH} {date_part}"


def format_priority(raw_priority: str) -> str:
    """Render a raw priority code as a glyph fragment, or ""."""
    glyph = PRIORITY_GLYPHS.get(raw_priority)
    return f" {glyph}" if glyph else ""


def _tags_of(series: Mapping[str, Any]) -> tuple[str, ...]:
    container = series.get("tags")
    # An untagged series comes back as an empty list instead of an object
    if not isinstance(container, Mapping):
        return ()
    return tuple(str(tag) for tag in normalize_to_array(container.get("tag")))


def _resolve_list_id(task_list: Mapping[str, Any], series: Mapping[str, Any]) -> str:
    return str(task_list.get("id") or series.get("list_id") or MISSING_LIST_ID)


def build_task(
    series: Mapping[str, Any],
    task_list: Mapping[str, Any],
    list_map: Mapping[str, str],
) -> FormattedTask | None:
    """Build one FormattedTask from a task series.

    Only the first task occurrence drives due date and priority. Returns
    None when the series has no occurrence at all.
    """
    occurrences = normalize_to_array(series.get("task"))
    if not occurrences:
        logger.warning("Skipping series %s without task occurrences", series.get("id"))
        return None
    task = occurrences[0]

    list_id = _resolve_list_id(task_list, series)
    raw_due = task.get("due") or ""
    raw_priority = task.get("priority") or ""

    return FormattedTask(
        name=series.get("name", ""),
        due=format_due(raw_due),
        priority=format_priority(raw_priority),
        list_name=list_map.get(list_id, ""),
        tags=_tags_of(series),
        rtm_id=TaskRef(
            list_id=list_id,
            series_id=str(series.get("id", "")),
            task_id=str(task.get("id", "")),
        ),
        raw_priority=raw_priority,
        raw_due=raw_due,
    )


def build_tasks(
    response: Mapping[str, Any],
    list_map: Mapping[str, str],
) -> list[FormattedTask]:
    """Convert an ``rtm.tasks.getList`` envelope into FormattedTasks.

    Args:
        response: Parsed JSON envelope (``{"rsp": {...}}``).
        list_map: List id -> name map from build_list_map.

    Returns:
        Tasks in the order they appear in the response. Empty when the
        response carries no tasks collection.

    Raises:
        MalformedResponseError: If the envelope has no ``rsp`` object.
    """
    rsp = response.get("rsp")
    if not isinstance(rsp, Mapping):
        raise MalformedResponseError("Response has no 'rsp' object")

    tasks_container = rsp.get("tasks")
    if not isinstance(tasks_container, Mapping) or not tasks_container.get("list"):
        logger.info("Response contains no tasks")
        return []

    formatted: list[FormattedTask] = []
    for task_list in normalize_to_array(tasks_container.get("list")):
        for series in normalize_to_array(task_list.get("taskseries")):
            task = build_task(series, task_list, list_map)
            if task is not None:
                formatted.append(task)

    logger.debug("Built %d tasks", len(formatted))
    return formatted

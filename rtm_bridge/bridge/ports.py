"""Host capability interfaces used by the bridge operations."""

from abc import ABC, abstractmethod
from typing import Sequence

from rtm_bridge.tasks.models import FormattedTask


class LineEditor(ABC):
    """Access to the host document, one line at a time.

    Implementations can use different backends:
    - MarkdownDocument: A markdown file on disk
    - An editor plugin adapter wrapping the host's document API
    """

    @abstractmethod
    def get_line(self, line_number: int) -> str:
        """Return the text of a line (0-based), without its newline."""
        pass

    @abstractmethod
    def set_line(self, line_number: int, text: str) -> None:
        """Replace the text of a line (0-based)."""
        pass

    @abstractmethod
    def replace_selection(self, text: str) -> None:
        """Insert a block of text at the current selection."""
        pass


class Notifier(ABC):
    """Short user-facing notices (status, empty results, failures)."""

    @abstractmethod
    def notify(self, message: str) -> None:
        pass


class TaskSelector(ABC):
    """Lets the user pick which fetched tasks to import."""

    @abstractmethod
    def select(self, tasks: Sequence[FormattedTask]) -> list[bool]:
        """Return one flag per task; True means import it."""
        pass


class SelectAll(TaskSelector):
    """Selects every task. Used for non-interactive imports."""

    def select(self, tasks: Sequence[FormattedTask]) -> list[bool]:
        return [True] * len(tasks)

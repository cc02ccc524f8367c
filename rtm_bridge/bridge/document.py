"""File-backed LineEditor for running the bridge outside an editor."""

import logging
from pathlib import Path
from typing import Optional

from .ports import LineEditor

logger = logging.getLogger(__name__)


class MarkdownDocument(LineEditor):
    """A markdown file edited line by line.

    Lines are split on "\\n" only; a line's own "\\r" and the file's
    trailing newline are kept as found, so untouched lines are written
    back byte for byte. The "selection" is an insertion point before
    ``insert_at`` (0-based); when unset, inserted blocks are appended.
    Every change is written back immediately.
    """

    def __init__(self, path: Path, insert_at: Optional[int] = None):
        self._path = Path(path)
        self._insert_at = insert_at
        text = ""
        if self._path.exists():
            with open(self._path, encoding="utf-8", newline="") as note:
                text = note.read()

        parts = text.split("\n")
        self._trailing_newline = text.endswith("\n") or not text
        # Raw lines, each still carrying its "\r" when the file uses CRLF
        self._lines = parts[:-1] if text.endswith("\n") else ([] if not text else parts)
        self._eol_cr = "\r" if self._lines and self._lines[0].endswith("\r") else ""

    @property
    def path(self) -> Path:
        return self._path

    @property
    def lines(self) -> list[str]:
        return [self._strip_cr(line) for line in self._lines]

    @staticmethod
    def _strip_cr(line: str) -> str:
        return line[:-1] if line.endswith("\r") else line

    def _check(self, line_number: int) -> None:
        if not 0 <= line_number < len(self._lines):
            raise IndexError(
                f"Line {line_number + 1} is out of range for {self._path} "
                f"({len(self._lines)} lines)"
            )

    def get_line(self, line_number: int) -> str:
        self._check(line_number)
        return self._strip_cr(self._lines[line_number])

    def set_line(self, line_number: int, text: str) -> None:
        self._check(line_number)
        cr = "\r" if self._lines[line_number].endswith("\r") else ""
        self._lines[line_number] = text + cr
        self._write()

    def replace_selection(self, text: str) -> None:
        block = [f"{line}{self._eol_cr}" for line in text.rstrip("\n").split("\n")] if text else []
        if self._insert_at is None:
            position = len(self._lines)
        else:
            position = max(0, min(self._insert_at, len(self._lines)))
        self._lines[position:position] = block
        self._write()
        logger.debug("Inserted %d lines at %d in %s", len(block), position, self._path)

    def _write(self) -> None:
        text = "\n".join(self._lines)
        if self._trailing_newline and self._lines:
            text += "\n"
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with open(self._path, "w", encoding="utf-8", newline="") as note:
            note.write(text)

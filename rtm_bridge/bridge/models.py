"""Data models for bridge operation results."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class OperationResult:
    """Outcome of a single bridge operation (import, add, complete)."""

    name: str
    success: bool
    details: dict[str, Any] = field(default_factory=dict)
    error: str | None = None

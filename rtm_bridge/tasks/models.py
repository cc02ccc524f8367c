"""Data models for the tasks module."""

from dataclasses import dataclass, field
from typing import Any

# Placeholder list id used when the source record carries none
MISSING_LIST_ID = "MISSING"


@dataclass(frozen=True)
class TaskRef:
    """Three-part identifier addressing one task occurrence in RTM.

    Attributes:
        list_id: Id of the list holding the task, or MISSING_LIST_ID.
        series_id: Id of the task series.
        task_id: Id of the occurrence within the series.
    """

    list_id: str
    series_id: str
    task_id: str

    @property
    def is_addressable(self) -> bool:
        """Whether the ref can be used for mutating calls."""
        return bool(self.list_id) and self.list_id != MISSING_LIST_ID

    def to_dict(self) -> dict[str, str]:
        return {"list": self.list_id, "series": self.series_id, "task": self.task_id}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TaskRef":
        return cls(
            list_id=str(data["list"]),
            series_id=str(data["series"]),
            task_id=str(data["task"]),
        )


@dataclass(frozen=True)
class FormattedTask:
    """A remote task prepared for rendering as a markdown line.

    Attributes:
        name: Task name, verbatim from the series.
        due: Rendered due fragment (e.g. " 📅 2024-05-01") or "".
        priority: Rendered priority glyph fragment or "".
        list_name: Display name of the containing list, or "".
        tags: Tag names in source order.
        rtm_id: Identifier of the representative occurrence.
        raw_priority: Untransformed priority value from the service.
        raw_due: Untransformed due value from the service.
    """

    name: str
    rtm_id: TaskRef
    due: str = ""
    priority: str = ""
    list_name: str = ""
    tags: tuple[str, ...] = field(default_factory=tuple)
    raw_priority: str = ""
    raw_due: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "name": self.name,
            "due": self.due,
            "priority": self.priority,
            "listName": self.list_name,
            "tags": list(self.tags),
            "rtmId": self.rtm_id.to_dict(),
            "rawPriority": self.raw_priority,
            "rawDue": self.raw_due,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FormattedTask":
        """Deserialize from dictionary."""
        return cls(
            name=data["name"],
            rtm_id=TaskRef.from_dict(data["rtmId"]),
            due=data.get("due", ""),
            priority=data.get("priority", ""),
            list_name=data.get("listName", ""),
            tags=tuple(data.get("tags", ())),
            raw_priority=data.get("rawPriority", ""),
            raw_due=data.get("rawDue", ""),
        )

"""Task models and response handling for Remember The Milk.

Normalizes the service's single-item-or-array JSON and maps task series
into FormattedTask objects ready for rendering.
"""

from .builder import build_task, build_tasks, format_due, format_priority
from .models import MISSING_LIST_ID, FormattedTask, TaskRef
from .normalize import build_list_map, normalize_to_array

__all__ = [
    # Models
    "FormattedTask",
    "TaskRef",
    "MISSING_LIST_ID",
    # Normalization
    "normalize_to_array",
    "build_list_map",
    # Building
    "build_task",
    "build_tasks",
    "format_due",
    "format_priority",
]

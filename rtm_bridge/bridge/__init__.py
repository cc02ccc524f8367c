"""Document-facing bridge operations.

Connects RtmClient, the task builder and the markdown codec behind narrow
host ports (line editor, notifier, task selector).
"""

from .document import MarkdownDocument
from .models import OperationResult
from .ports import LineEditor, Notifier, SelectAll, TaskSelector
from .service import DEFAULT_FILTER, RtmBridge

__all__ = [
    "RtmBridge",
    "OperationResult",
    "DEFAULT_FILTER",
    # Ports
    "LineEditor",
    "Notifier",
    "TaskSelector",
    "SelectAll",
    "MarkdownDocument",
]

"""RtmBridge - connects the RTM client, task builder and markdown codec."""

import logging
from typing import Optional

from rtm_bridge.api import RtmClient, RtmError, RtmSession
from rtm_bridge.markdown import (
    decode_ref,
    encode_new_task,
    extract_task_name,
    mark_completed,
    render_block,
)
from rtm_bridge.tasks import FormattedTask, build_list_map, build_tasks

from .models import OperationResult
from .ports import LineEditor, Notifier, SelectAll, TaskSelector

logger = logging.getLogger(__name__)

DEFAULT_FILTER = "status:incomplete"


class RtmBridge:
    """Runs the document-facing operations: import, add and complete.

    The document is only touched after every remote call of an operation
    has succeeded, so a failure never leaves a partial edit behind.

    Example:
        bridge = RtmBridge(client, session, notifier)
        result = bridge.import_tasks(editor, "list:Inbox")
    """

    def __init__(
        self,
        client: RtmClient,
        session: RtmSession,
        notifier: Notifier,
    ):
        self._client = client
        self._session = session
        self._notifier = notifier

    def _failed(self, name: str, notice: str, error: Exception | str) -> OperationResult:
        self._notifier.notify(notice)
        return OperationResult(name=name, success=False, error=str(error))

    def check_auth(self) -> bool:
        """Notify and return False unless keys and token are configured."""
        credentials = self._client.credentials
        if not credentials.has_app_keys:
            self._notifier.notify("Please set your API Key and Secret in settings.")
            return False
        if not credentials.auth_token:
            self._notifier.notify("Please authenticate with RTM from settings.")
            return False
        return True

    # -------------------- Fetch --------------------

    def fetch_list_map(self) -> dict[str, str]:
        """Fetch list names; on failure, degrade to an empty map."""
        try:
            return build_list_map(self._client.get_lists())
        except RtmError:
            logger.exception("Failed to fetch list names; list tags will be omitted")
            return {}

    def fetch_tasks(self, filter_str: str = DEFAULT_FILTER) -> list[FormattedTask]:
        """Fetch and build tasks matching an RTM filter.

        Raises:
            RtmError: If the task fetch fails.
        """
        list_map = self.fetch_list_map()
        response = self._client.get_tasks(filter_str)
        tasks = build_tasks(response, list_map)
        logger.info("Fetched %d tasks for filter %r", len(tasks), filter_str)
        return tasks

    def import_tasks(
        self,
        editor: LineEditor,
        filter_str: str = DEFAULT_FILTER,
        selector: Optional[TaskSelector] = None,
    ) -> OperationResult:
        """Fetch tasks, let the user choose, and insert them as lines.

        Args:
            editor: Document receiving the rendered block.
            filter_str: RTM search filter.
            selector: Chooses tasks to import. Defaults to all of them.
        """
        name = "import"
        if not self.check_auth():
            return OperationResult(name=name, success=False, error="not authenticated")

        self._notifier.notify("Fetching tasks...")
        try:
            tasks = self.fetch_tasks(filter_str)
        except RtmError as e:
            logger.exception("Fetching tasks failed")
            return self._failed(name, f"Fetch error: {e}", e)

        if not tasks:
            self._notifier.notify("No tasks found.")
            return OperationResult(name=name, success=True, details={"fetched": 0, "inserted": 0})

        flags = (selector or SelectAll()).select(tasks)
        chosen = [task for index, task in enumerate(tasks) if index < len(flags) and flags[index]]

        if not chosen:
            self._notifier.notify("No tasks selected.")
            return OperationResult(
                name=name, success=True, details={"fetched": len(tasks), "inserted": 0}
            )

        editor.replace_selection(render_block(chosen))
        self._notifier.notify(f"{len(chosen)} tasks inserted.")
        return OperationResult(
            name=name,
            success=True,
            details={"fetched": len(tasks), "inserted": len(chosen)},
        )

    # -------------------- Add --------------------

    def add_task_from_line(self, editor: LineEditor, line_number: int) -> OperationResult:
        """Send the text of a line to RTM and replace it with a tracked line."""
        name = "add"
        if not self.check_auth():
            return OperationResult(name=name, success=False, error="not authenticated")

        task_name = extract_task_name(editor.get_line(line_number))
        if not task_name:
            return self._failed(name, "Task name is empty.", "empty task name")

        self._notifier.notify(f"Adding: {task_name}")
        try:
            ref = self._client.add_task(self._session, task_name)
        except RtmError as e:
            logger.exception("Adding task %r failed", task_name)
            return self._failed(name, f"Add error: {e}", e)

        editor.set_line(line_number, encode_new_task(ref, task_name))
        self._notifier.notify("Added to RTM!")
        return OperationResult(name=name, success=True, details=ref.to_dict())

    # -------------------- Complete --------------------

    def complete_task_at_line(self, editor: LineEditor, line_number: int) -> OperationResult:
        """Complete the RTM task linked from a line and tick its checkbox."""
        name = "complete"
        if not self.check_auth():
            return OperationResult(name=name, success=False, error="not authenticated")

        line = editor.get_line(line_number)
        ref = decode_ref(line)
        if ref is None:
            return self._failed(name, "Error: No RTM Link found.", "no id tag on line")
        if not ref.is_addressable:
            return self._failed(name, "Error: List ID invalid.", f"invalid list id {ref.list_id!r}")

        self._notifier.notify("Completing task...")
        try:
            self._client.complete_task(self._session, ref)
        except RtmError as e:
            logger.exception("Completing task %s failed", ref.task_id)
            return self._failed(name, f"Completion error: {e}", e)

        editor.set_line(line_number, mark_completed(line))
        self._notifier.notify("Task completed!")
        return OperationResult(name=name, success=True, details=ref.to_dict())

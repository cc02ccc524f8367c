"""CLI entry point for the RTM markdown bridge."""

import argparse
import sys
from pathlib import Path
from typing import Sequence

from dotenv import load_dotenv

from rtm_bridge.api import RtmAuthenticator, RtmClient, RtmError, RtmSession
from rtm_bridge.bridge import (
    DEFAULT_FILTER,
    MarkdownDocument,
    Notifier,
    OperationResult,
    RtmBridge,
    TaskSelector,
)
from rtm_bridge.logging_config import configure_logging
from rtm_bridge.settings import JsonFileSettingsStore, SettingsError
from rtm_bridge.tasks import FormattedTask


class ConsoleNotifier(Notifier):
    def notify(self, message: str) -> None:
        print(message)


class PromptSelector(TaskSelector):
    """Asks y/n for every fetched task on stdin."""

    def select(self, tasks: Sequence[FormattedTask]) -> list[bool]:
        print(f"Select Tasks ({len(tasks)})")
        flags = []
        for task in tasks:
            info = task.name
            if task.list_name:
                info += f" [{task.list_name}]"
            if task.due:
                info += task.due
            answer = input(f"  import '{info}'? [Y/n] ").strip().lower()
            flags.append(answer in ("", "y", "yes"))
        return flags


def _line_index(line: int) -> int:
    if line < 1:
        raise argparse.ArgumentTypeError("line numbers start at 1")
    return line - 1


def _print_result(result: OperationResult) -> int:
    if result.error:
        print(f"ERROR: {result.error}", file=sys.stderr)
    return 0 if result.success else 1


def run_auth(client: RtmClient, store: JsonFileSettingsStore, session: RtmSession) -> int:
    authenticator = RtmAuthenticator(client, store=store, session=session)
    request = authenticator.start()
    print("Authorize the application in your browser:")
    print(f"  {request.url}")
    input("Press Enter once you have granted access...")
    authenticator.finish(request.frob)
    print("Success!")
    return 0


def main() -> int:
    load_dotenv()

    parser = argparse.ArgumentParser(description="Sync markdown task lines with Remember The Milk")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Set logging level (overrides LOG_LEVEL env var)",
    )
    parser.add_argument(
        "--settings",
        type=Path,
        default=None,
        help="Settings file (default: RTM_SETTINGS_PATH or config/rtm_settings.json)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("auth", help="Authorize this app and store the auth token")

    import_parser = subparsers.add_parser("import", help="Insert RTM tasks into a markdown file")
    import_parser.add_argument("file", type=Path)
    import_parser.add_argument(
        "--filter",
        default=DEFAULT_FILTER,
        help=f"RTM search filter, e.g. list:Inbox, due:today (default: {DEFAULT_FILTER})",
    )
    import_parser.add_argument(
        "--select", action="store_true", help="Choose tasks interactively before inserting"
    )
    import_parser.add_argument(
        "--at", type=int, default=None, metavar="LINE", help="Insert before this line (1-based)"
    )

    add_parser = subparsers.add_parser("add", help="Add the task on a line to RTM")
    add_parser.add_argument("file", type=Path)
    add_parser.add_argument("line", type=int, help="Line number (1-based)")

    complete_parser = subparsers.add_parser("complete", help="Complete the RTM task on a line")
    complete_parser.add_argument("file", type=Path)
    complete_parser.add_argument("line", type=int, help="Line number (1-based)")

    args = parser.parse_args()
    configure_logging(level_override=args.log_level)

    store = JsonFileSettingsStore(path=args.settings)
    try:
        credentials = store.load()
    except SettingsError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    session = RtmSession(credentials)
    client = RtmClient(credentials)

    if args.command == "auth":
        try:
            return run_auth(client, store, session)
        except (RtmError, SettingsError) as e:
            print(f"ERROR: Authentication failed: {e}", file=sys.stderr)
            return 1

    bridge = RtmBridge(client, session, ConsoleNotifier())

    try:
        if args.command == "import":
            insert_at = _line_index(args.at) if args.at is not None else None
            document = MarkdownDocument(args.file, insert_at=insert_at)
            selector = PromptSelector() if args.select else None
            result = bridge.import_tasks(document, args.filter, selector)
        elif args.command == "add":
            result = bridge.add_task_from_line(MarkdownDocument(args.file), _line_index(args.line))
        else:
            result = bridge.complete_task_at_line(
                MarkdownDocument(args.file), _line_index(args.line)
            )
    except (IndexError, argparse.ArgumentTypeError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    return _print_result(result)


if __name__ == "__main__":
    sys.exit(main())

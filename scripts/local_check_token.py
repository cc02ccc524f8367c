#!/usr/bin/env python3
"""Local smoke test for run_bridge.py.

Validates that RTM credentials are configured, that the stored token is
accepted, and that a small task fetch succeeds.

Run from project root:
    python scripts/local_check_token.py [--filter "due:today"]
"""

import argparse
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent

sys.path.insert(0, str(PROJECT_ROOT))
from dotenv import load_dotenv

load_dotenv(PROJECT_ROOT / ".env")

from rtm_bridge.api import RtmAuthenticator, RtmClient, RtmError, RtmSession  # noqa: E402
from rtm_bridge.bridge import Notifier, RtmBridge  # noqa: E402
from rtm_bridge.markdown import encode_task  # noqa: E402
from rtm_bridge.settings import JsonFileSettingsStore  # noqa: E402


def check_prerequisites(store: JsonFileSettingsStore) -> list[str]:
    errors = []
    credentials = store.load()
    if not credentials.api_key:
        errors.append("Missing API key (RTM_API_KEY or apiKey in settings)")
    if not credentials.shared_secret:
        errors.append("Missing shared secret (RTM_SHARED_SECRET or sharedSecret in settings)")
    if not credentials.auth_token:
        errors.append("Missing auth token (run 'python run_bridge.py auth')")
    return errors


def main() -> int:
    parser = argparse.ArgumentParser(description="Check RTM credentials and fetch a few tasks")
    parser.add_argument("--filter", default="status:incomplete")
    args = parser.parse_args()

    store = JsonFileSettingsStore()
    print(f"Checking prerequisites ({store.path}) ...\n")
    errors = check_prerequisites(store)

    if errors:
        for err in errors:
            print(f"  ✗ {err}")
        print(
            "\nSetup instructions:"
            "\n  1. Set RTM_API_KEY and RTM_SHARED_SECRET in .env or export them"
            "\n  2. Run 'python run_bridge.py auth' once to store a token"
        )
        return 1

    credentials = store.load()
    client = RtmClient(credentials)
    session = RtmSession(credentials)

    try:
        token_ok = RtmAuthenticator(client, open_browser=None).verify()
        print(f"  {'✓' if token_ok else '✗'} auth token accepted")
        tasks = RtmBridge(client, session, notifier=_PrintNotifier()).fetch_tasks(args.filter)
    except RtmError as e:
        print(f"  ✗ {type(e).__name__}: {e}")
        return 1

    print(f"\nFetched {len(tasks)} tasks for filter {args.filter!r}:\n")
    for task in tasks[:10]:
        print(f"  {encode_task(task)}")
    return 0 if token_ok else 1


class _PrintNotifier(Notifier):
    def notify(self, message: str) -> None:
        print(message)


if __name__ == "__main__":
    sys.exit(main())

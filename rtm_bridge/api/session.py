"""Per-process RTM session state."""

import logging
from typing import TYPE_CHECKING, Optional

from rtm_bridge.settings import Credentials

if TYPE_CHECKING:
    from .client import RtmClient

logger = logging.getLogger(__name__)


class RtmSession:
    """Holds credentials and the lazily created timeline.

    Mutating calls take the session explicitly so the cached timeline is
    visible to callers. There is no lock: two operations racing on first
    use may both create a timeline, and the later one is kept. Any valid
    timeline is accepted by the service, so that is harmless.
    """

    def __init__(self, credentials: Optional[Credentials] = None):
        self.credentials = credentials or Credentials()
        self.timeline: Optional[str] = None

    def get_or_create_timeline(self, client: "RtmClient") -> str:
        """Return the cached timeline, creating it on first use.

        Raises:
            RtmError: If the timeline cannot be created.
        """
        if self.timeline is None:
            self.timeline = client.create_timeline()
            logger.debug("Created timeline %s", self.timeline)
        return self.timeline

    def reset_timeline(self) -> None:
        """Forget the cached timeline (e.g. after re-authentication)."""
        self.timeline = None

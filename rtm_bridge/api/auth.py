"""Desktop authentication flow for Remember The Milk."""

import logging
import webbrowser
from dataclasses import dataclass
from typing import Callable, Optional

from rtm_bridge.settings import SettingsStore

from .client import RtmClient
from .exceptions import MissingCredentialsError
from .session import RtmSession

logger = logging.getLogger(__name__)


@dataclass
class AuthRequest:
    """A pending authorization: the frob and the URL the user must open."""

    frob: str
    url: str


class RtmAuthenticator:
    """Runs the frob-based desktop auth handshake and persists the token.

    The user authorizes the app in a browser out-of-band; finish() is then
    called with the same frob to obtain a long-lived token.
    """

    def __init__(
        self,
        client: RtmClient,
        store: Optional[SettingsStore] = None,
        session: Optional[RtmSession] = None,
        open_browser: Optional[Callable[[str], object]] = webbrowser.open,
        perms: str = "delete",
    ):
        """Initialize the authenticator.

        Args:
            client: Client whose credentials receive the token.
            store: Where to persist credentials after a successful exchange.
            session: Session whose timeline is reset after re-authentication.
            open_browser: Callable used to open the auth URL; None disables it.
            perms: Permission level to request.
        """
        self._client = client
        self._store = store
        self._session = session
        self._open_browser = open_browser
        self._perms = perms

    def start(self) -> AuthRequest:
        """Request a frob and open the authorization page.

        Raises:
            MissingCredentialsError: If API key or shared secret is empty.
            RtmError: If the frob request fails.
        """
        frob = self._client.get_frob()
        url = self._client.build_auth_url(frob, perms=self._perms)
        logger.info("Authorization URL generated with perms=%s", self._perms)
        if self._open_browser is not None:
            self._open_browser(url)
        return AuthRequest(frob=frob, url=url)

    def finish(self, frob: str) -> str:
        """Exchange an authorized frob for a token and persist it.

        Returns:
            The new auth token.
        """
        if not frob:
            raise MissingCredentialsError("No frob to exchange; run start() first")
        token = self._client.get_token(frob)
        credentials = self._client.credentials
        credentials.auth_token = token
        if self._store is not None:
            self._store.save(credentials)
        if self._session is not None:
            self._session.reset_timeline()
        logger.info("Authentication completed")
        return token

    def verify(self) -> bool:
        """Check that the stored token is still accepted by the service."""
        auth = self._client.check_token()
        return bool(auth.get("token"))

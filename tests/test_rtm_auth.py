"""Unit tests for the RtmAuthenticator."""

from unittest.mock import MagicMock

import pytest

from rtm_bridge.api import (
    AUTH_URL,
    MissingCredentialsError,
    RemoteApiError,
    RtmAuthenticator,
    RtmClient,
    RtmSession,
)
from rtm_bridge.settings import InMemorySettingsStore
from tests.rtm_test_helpers import fail, http_returning, make_credentials, ok, sent_params


class TestRtmAuthenticator:
    def test_start_opens_signed_url(self):
        http = http_returning(ok(frob="frob1"))
        client = RtmClient(make_credentials(auth_token=""), http=http)
        opened = MagicMock()

        request = RtmAuthenticator(client, open_browser=opened).start()

        assert request.frob == "frob1"
        assert request.url.startswith(f"{AUTH_URL}?api_key=key123&perms=delete&frob=frob1&api_sig=")
        opened.assert_called_once_with(request.url)
        assert sent_params(http)["method"] == "rtm.auth.getFrob"
        assert "auth_token" not in sent_params(http)

    def test_start_without_browser(self):
        client = RtmClient(make_credentials(), http=http_returning(ok(frob="frob1")))
        request = RtmAuthenticator(client, open_browser=None).start()
        assert request.frob == "frob1"

    def test_start_requires_app_keys(self):
        http = MagicMock()
        client = RtmClient(make_credentials(api_key=""), http=http)

        with pytest.raises(MissingCredentialsError):
            RtmAuthenticator(client, open_browser=None).start()
        http.get.assert_not_called()

    def test_finish_stores_token(self):
        credentials = make_credentials(auth_token="")
        client = RtmClient(
            credentials, http=http_returning(ok(auth={"token": "newtoken", "perms": "delete"}))
        )
        store = InMemorySettingsStore()
        session = RtmSession(credentials)
        session.timeline = "old"

        token = RtmAuthenticator(client, store=store, session=session, open_browser=None).finish("frob1")

        assert token == "newtoken"
        assert credentials.auth_token == "newtoken"
        assert store.load().auth_token == "newtoken"
        assert store.load().api_key == "key123"
        assert session.timeline is None

    def test_finish_failure_keeps_previous_token(self):
        credentials = make_credentials(auth_token="old")
        client = RtmClient(credentials, http=http_returning(fail("Invalid frob - did you authenticate?", "101")))
        store = InMemorySettingsStore()

        with pytest.raises(RemoteApiError):
            RtmAuthenticator(client, store=store, open_browser=None).finish("frob1")
        assert credentials.auth_token == "old"
        assert store.load().auth_token == ""

    def test_finish_requires_frob(self):
        client = RtmClient(make_credentials(), http=MagicMock())
        with pytest.raises(MissingCredentialsError):
            RtmAuthenticator(client, open_browser=None).finish("")

    def test_verify(self):
        client = RtmClient(
            make_credentials(),
            http=http_returning(ok(auth={"token": "token789", "perms": "delete", "user": {"id": "1"}})),
        )
        assert RtmAuthenticator(client, open_browser=None).verify() is True

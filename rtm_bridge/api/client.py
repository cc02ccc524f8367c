"""RtmClient for the Remember The Milk REST API."""

import logging
from typing import TYPE_CHECKING, Any, Mapping, Optional
from urllib.parse import urlencode

import requests

from rtm_bridge.settings import Credentials
from rtm_bridge.tasks.models import MISSING_LIST_ID, TaskRef
from rtm_bridge.tasks.normalize import normalize_to_array

from .exceptions import (
    MalformedResponseError,
    MissingCredentialsError,
    RemoteApiError,
    TransportError,
)
from .signing import signed

if TYPE_CHECKING:
    from .session import RtmSession

logger = logging.getLogger(__name__)

REST_URL = "https://api.rememberthemilk.com/services/rest/"
AUTH_URL = "https://www.rememberthemilk.com/services/auth/"
# None leaves the transport default in place
DEFAULT_TIMEOUT = None


class RtmClient:
    """Signed-request client for the RTM REST API.

    Every call is a single GET with an MD5 ``api_sig``. Responses are
    returned as parsed envelopes; shape normalization is left to the
    tasks module.
    """

    def __init__(
        self,
        credentials: Credentials,
        http: Optional[requests.Session] = None,
        timeout: Optional[float] = DEFAULT_TIMEOUT,
    ):
        """Initialize the client.

        Args:
            credentials: Credentials object. Read on every call, so later
                updates (e.g. a fresh auth token) are picked up.
            http: requests Session to use. Created lazily if not provided.
            timeout: Per-request timeout in seconds. None (default) keeps
                the requests transport default.
        """
        self._credentials = credentials
        self._http = http
        self._timeout = timeout

    @property
    def credentials(self) -> Credentials:
        return self._credentials

    def _get_http(self) -> requests.Session:
        if self._http is None:
            self._http = requests.Session()
        return self._http

    def _require_app_keys(self) -> None:
        if not self._credentials.has_app_keys:
            raise MissingCredentialsError("API key and shared secret must be configured")

    def _build_params(
        self,
        method: str,
        params: Optional[Mapping[str, Any]],
        with_token: bool,
    ) -> dict[str, str]:
        merged: dict[str, Any] = dict(params or {})
        merged["method"] = method
        merged["api_key"] = self._credentials.api_key
        merged["format"] = "json"
        if with_token and self._credentials.auth_token:
            merged["auth_token"] = self._credentials.auth_token
        return signed(self._credentials.shared_secret, merged)

    def _request(self, method: str, query: dict[str, str]) -> dict[str, Any]:
        logger.debug("Calling RTM method %s", method)
        try:
            response = self._get_http().get(REST_URL, params=query, timeout=self._timeout)
            response.raise_for_status()
        except requests.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else None
            logger.error("RTM HTTP error (status=%s) for %s", status_code, method)
            raise TransportError(
                f"RTM request {method} failed with HTTP {status_code}",
                status_code=status_code,
            ) from e
        except requests.RequestException as e:
            logger.error("RTM request %s failed: %s", method, e)
            raise TransportError(f"RTM request {method} failed: {e}") from e

        try:
            payload = response.json()
        except ValueError as e:
            raise MalformedResponseError(f"RTM returned non-JSON body for {method}") from e

        rsp = payload.get("rsp") if isinstance(payload, dict) else None
        if not isinstance(rsp, dict):
            raise MalformedResponseError(f"RTM response for {method} has no 'rsp' object")

        if rsp.get("stat") != "ok":
            err = rsp.get("err") or {}
            message = err.get("msg") or "unknown"
            code = err.get("code")
            logger.error("RTM API error for %s (code=%s): %s", method, code, message)
            raise RemoteApiError(message, code=code)

        return payload

    def call(self, method: str, params: Optional[Mapping[str, Any]] = None) -> dict[str, Any]:
        """Call an authenticated API method.

        Args:
            method: RTM method name, e.g. "rtm.tasks.getList".
            params: Method-specific parameters.

        Returns:
            The parsed response envelope, unmodified.

        Raises:
            MissingCredentialsError: If API key or shared secret is empty.
            TransportError: If the HTTP request fails.
            RemoteApiError: If the service reports ``stat: "fail"``.
            MalformedResponseError: If the body is not a JSON envelope.
        """
        self._require_app_keys()
        return self._request(method, self._build_params(method, params, with_token=True))

    def call_without_auth_token(
        self, method: str, params: Optional[Mapping[str, Any]] = None
    ) -> dict[str, Any]:
        """Call a method that must not carry the auth token (auth bootstrap)."""
        self._require_app_keys()
        return self._request(method, self._build_params(method, params, with_token=False))

    # -------------------- Read Operations --------------------

    def get_lists(self) -> dict[str, Any]:
        """Fetch all lists (``rtm.lists.getList``)."""
        return self.call("rtm.lists.getList")

    def get_tasks(self, filter_str: str = "") -> dict[str, Any]:
        """Fetch tasks matching an RTM search filter (``rtm.tasks.getList``)."""
        params = {"filter": filter_str} if filter_str else {}
        return self.call("rtm.tasks.getList", params)

    # -------------------- Mutating Operations --------------------

    def create_timeline(self) -> str:
        """Create a new timeline (``rtm.timelines.create``).

        Raises:
            MalformedResponseError: If the response carries no timeline.
        """
        response = self.call("rtm.timelines.create")
        timeline = response["rsp"].get("timeline")
        if not timeline:
            raise MalformedResponseError("rtm.timelines.create returned no timeline")
        return str(timeline)

    def add_task(self, session: "RtmSession", name: str, parse: bool = True) -> TaskRef:
        """Add a task (``rtm.tasks.add``) on the session's timeline.

        Args:
            session: Session holding the timeline.
            name: Task name; with ``parse`` RTM applies Smart Add syntax.
            parse: Enable Smart Add parsing.

        Returns:
            TaskRef of the created task.
        """
        timeline = session.get_or_create_timeline(self)
        params = {"timeline": timeline, "name": name}
        if parse:
            params["parse"] = "1"
        response = self.call("rtm.tasks.add", params)
        ref = ref_from_add_response(response)
        logger.info("Added task (list=%s, series=%s, task=%s)", ref.list_id, ref.series_id, ref.task_id)
        return ref

    def complete_task(self, session: "RtmSession", ref: TaskRef) -> dict[str, Any]:
        """Mark a task complete (``rtm.tasks.complete``).

        Raises:
            ValueError: If the ref has no usable list id.
        """
        if not ref.is_addressable:
            raise ValueError(f"Cannot complete task without a list id: {ref}")
        timeline = session.get_or_create_timeline(self)
        response = self.call(
            "rtm.tasks.complete",
            {
                "timeline": timeline,
                "list_id": ref.list_id,
                "taskseries_id": ref.series_id,
                "task_id": ref.task_id,
            },
        )
        logger.info("Completed task %s", ref.task_id)
        return response

    # -------------------- Authentication --------------------

    def get_frob(self) -> str:
        """Request a frob for the desktop auth flow (``rtm.auth.getFrob``)."""
        response = self.call_without_auth_token("rtm.auth.getFrob")
        frob = response["rsp"].get("frob")
        if not frob:
            raise MalformedResponseError("rtm.auth.getFrob returned no frob")
        return str(frob)

    def get_token(self, frob: str) -> str:
        """Exchange an authorized frob for an auth token (``rtm.auth.getToken``)."""
        response = self.call_without_auth_token("rtm.auth.getToken", {"frob": frob})
        auth = response["rsp"].get("auth") or {}
        token = auth.get("token") if isinstance(auth, dict) else None
        if not token:
            raise MalformedResponseError("rtm.auth.getToken returned no token")
        return str(token)

    def check_token(self) -> dict[str, Any]:
        """Validate the current auth token (``rtm.auth.checkToken``).

        Returns:
            The ``auth`` object (token, perms, user).
        """
        if not self._credentials.auth_token:
            raise MissingCredentialsError("No auth token configured")
        response = self.call("rtm.auth.checkToken")
        return response["rsp"].get("auth") or {}

    def build_auth_url(self, frob: str, perms: str = "delete") -> str:
        """Build the signed URL the user opens to authorize the app."""
        self._require_app_keys()
        query = signed(
            self._credentials.shared_secret,
            {"api_key": self._credentials.api_key, "perms": perms, "frob": frob},
        )
        return f"{AUTH_URL}?{urlencode(query)}"


def ref_from_add_response(response: Mapping[str, Any]) -> TaskRef:
    """Extract the TaskRef of a task created by ``rtm.tasks.add``.

    Raises:
        MalformedResponseError: If list, series or task is missing.
    """
    rsp = response.get("rsp") or {}
    task_list = next(iter(normalize_to_array(rsp.get("list"))), None)
    if not task_list:
        raise MalformedResponseError("rtm.tasks.add response has no list")
    series = next(iter(normalize_to_array(task_list.get("taskseries"))), None)
    if not series:
        raise MalformedResponseError("rtm.tasks.add response has no task series")
    task = next(iter(normalize_to_array(series.get("task"))), None)
    if not task:
        raise MalformedResponseError("rtm.tasks.add response has no task")
    return TaskRef(
        list_id=str(task_list.get("id") or series.get("list_id") or MISSING_LIST_ID),
        series_id=str(series["id"]),
        task_id=str(task["id"]),
    )

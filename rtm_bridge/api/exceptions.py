"""Exceptions for the RTM API module."""

from typing import Optional


class RtmError(Exception):
    """Base exception for all Remember The Milk errors."""

    pass


class MissingCredentialsError(RtmError):
    """Raised when the API key, shared secret or auth token is not configured."""

    pass


class TransportError(RtmError):
    """Raised when the HTTP request itself fails (connection, DNS, timeout, non-2xx)."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class RemoteApiError(RtmError):
    """Raised when the service answers with ``stat: "fail"``.

    Attributes:
        code: Service error code, if one was supplied.
    """

    def __init__(self, message: str = "unknown", code: Optional[str] = None):
        self.code = code
        super().__init__(message)


class MalformedResponseError(RtmError):
    """Raised when a response does not have the expected envelope shape."""

    pass

"""Remember The Milk REST API integration.

Provides the signed RtmClient, the per-process RtmSession holding the
timeline, and the desktop authentication flow.
"""

from .auth import AuthRequest, RtmAuthenticator
from .client import AUTH_URL, REST_URL, RtmClient, ref_from_add_response
from .exceptions import (
    MalformedResponseError,
    MissingCredentialsError,
    RemoteApiError,
    RtmError,
    TransportError,
)
from .session import RtmSession
from .signing import sign, signed

__all__ = [
    # Main classes
    "RtmClient",
    "RtmSession",
    "RtmAuthenticator",
    "AuthRequest",
    # Signing
    "sign",
    "signed",
    "ref_from_add_response",
    "REST_URL",
    "AUTH_URL",
    # Exceptions
    "RtmError",
    "MissingCredentialsError",
    "TransportError",
    "RemoteApiError",
    "MalformedResponseError",
]

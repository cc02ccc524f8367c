"""Data models for persisted bridge settings."""

from dataclasses import dataclass
from typing import Any


@dataclass
class Credentials:
    """Remember The Milk application keys and user token.

    Attributes:
        api_key: Application API key.
        shared_secret: Application shared secret used for signing.
        auth_token: User token obtained through the frob exchange.
    """

    api_key: str = ""
    shared_secret: str = ""
    auth_token: str = ""

    @property
    def has_app_keys(self) -> bool:
        """True when both API key and shared secret are set."""
        return bool(self.api_key and self.shared_secret)

    @property
    def is_authenticated(self) -> bool:
        """True when app keys and a user token are all set."""
        return self.has_app_keys and bool(self.auth_token)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the persisted settings format."""
        return {
            "apiKey": self.api_key,
            "sharedSecret": self.shared_secret,
            "authToken": self.auth_token,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Credentials":
        """Deserialize, merging stored values over empty defaults."""
        defaults = cls()
        return cls(
            api_key=data.get("apiKey") or defaults.api_key,
            shared_secret=data.get("sharedSecret") or defaults.shared_secret,
            auth_token=data.get("authToken") or defaults.auth_token,
        )

    def __repr__(self) -> str:
        # Keep secrets out of logs and tracebacks
        return (
            f"Credentials(api_key={self.api_key!r}, "
            f"shared_secret={'***' if self.shared_secret else ''!r}, "
            f"auth_token={'***' if self.auth_token else ''!r})"
        )

"""Settings repository interfaces for RTM credentials."""

import json
import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from .exceptions import SettingsError
from .models import Credentials

logger = logging.getLogger(__name__)

# Environment variables that take precedence over the stored file
ENV_OVERRIDES = {
    "api_key": "RTM_API_KEY",
    "shared_secret": "RTM_SHARED_SECRET",
    "auth_token": "RTM_AUTH_TOKEN",
}


class SettingsStore(ABC):
    """Interface for loading and saving credentials.

    Implementations can use different backends:
    - InMemorySettingsStore: For testing and embedding in a host
    - JsonFileSettingsStore: JSON file on disk for the CLI
    """

    @abstractmethod
    def load(self) -> Credentials:
        """Load credentials, merged over empty defaults.

        Returns:
            Credentials object (fields may be empty strings)
        """
        pass

    @abstractmethod
    def save(self, credentials: Credentials) -> None:
        """Persist credentials.

        Args:
            credentials: Credentials to store
        """
        pass


class InMemorySettingsStore(SettingsStore):
    """In-memory implementation for tests and host embedding."""

    def __init__(self, credentials: Optional[Credentials] = None) -> None:
        self._data = (credentials or Credentials()).to_dict()

    def load(self) -> Credentials:
        return Credentials.from_dict(self._data)

    def save(self, credentials: Credentials) -> None:
        self._data = credentials.to_dict()


class JsonFileSettingsStore(SettingsStore):
    """Stores credentials as a JSON file.

    Environment variables RTM_API_KEY, RTM_SHARED_SECRET and RTM_AUTH_TOKEN
    override the stored values on load when they are set.
    """

    def __init__(self, path: Optional[Path] = None, use_env: bool = True):
        """Initialize the store.

        Args:
            path: Settings file location.
                Defaults to RTM_SETTINGS_PATH env var, or config/rtm_settings.json.
            use_env: Apply environment variable overrides on load.
        """
        project_root = Path(__file__).parent.parent.parent

        if path:
            self._path = path
        elif os.environ.get("RTM_SETTINGS_PATH"):
            self._path = Path(os.environ["RTM_SETTINGS_PATH"])
        else:
            self._path = project_root / "config" / "rtm_settings.json"

        self._use_env = use_env

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Credentials:
        """Load credentials from disk.

        Raises:
            SettingsError: If the file exists but is not a JSON object.
        """
        data: dict = {}
        if self._path.exists():
            try:
                with open(self._path, encoding="utf-8") as settings_file:
                    data = json.load(settings_file)
            except (OSError, json.JSONDecodeError) as e:
                raise SettingsError(f"Cannot read settings from {self._path}: {e}") from e
            if not isinstance(data, dict):
                raise SettingsError(f"Settings file {self._path} must contain a JSON object")
        else:
            logger.debug("No settings file at %s, using defaults", self._path)

        credentials = Credentials.from_dict(data)

        if self._use_env:
            for attr, env_var in ENV_OVERRIDES.items():
                value = os.environ.get(env_var)
                if value:
                    setattr(credentials, attr, value)

        return credentials

    def save(self, credentials: Credentials) -> None:
        """Write credentials to disk, creating parent directories.

        Raises:
            SettingsError: If the file cannot be written.
        """
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with open(self._path, "w", encoding="utf-8") as settings_file:
                json.dump(credentials.to_dict(), settings_file, indent=2)
        except OSError as e:
            raise SettingsError(f"Cannot write settings to {self._path}: {e}") from e
        logger.info("Saved settings to %s", self._path)

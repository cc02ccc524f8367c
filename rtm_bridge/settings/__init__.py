"""Credential settings for the RTM bridge.

Provides the Credentials model and stores that load it merged over
empty defaults.
"""

from .exceptions import SettingsError
from .models import Credentials
from .store import InMemorySettingsStore, JsonFileSettingsStore, SettingsStore

__all__ = [
    "Credentials",
    "SettingsStore",
    "InMemorySettingsStore",
    "JsonFileSettingsStore",
    "SettingsError",
]

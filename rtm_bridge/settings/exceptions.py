"""Exceptions for the settings module."""


class SettingsError(Exception):
    """Raised when stored settings cannot be read or written."""

    pass

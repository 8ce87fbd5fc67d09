"""Local key/value settings storage."""

from desk.storage.database import SettingsDatabase

__all__ = ["SettingsDatabase"]

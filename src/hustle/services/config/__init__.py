"""Config services for user settings."""

from hustle.services.config.settings import (
    DEFAULT_SETTINGS_PATH,
    HustleSettings,
    HustleSettingsManager,
)

__all__ = [
    "DEFAULT_SETTINGS_PATH",
    "HustleSettings",
    "HustleSettingsManager",
]

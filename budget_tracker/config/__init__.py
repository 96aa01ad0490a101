"""Configuration package."""

from budget_tracker.config.settings import (
    AppSettings,
    IdentitySettings,
    Settings,
    StorageSettings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "AppSettings",
    "IdentitySettings",
    "Settings",
    "StorageSettings",
    "get_settings",
    "validate_all_settings",
]

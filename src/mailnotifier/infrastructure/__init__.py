"""Infrastructure layer - IMAP, cursor file, notifications and configuration."""

from mailnotifier.infrastructure.settings import Settings, get_settings, load_settings

__all__ = [
    "Settings",
    "get_settings",
    "load_settings",
]

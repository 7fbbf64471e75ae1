"""Notification sinks."""

from mailnotifier.infrastructure.notifications.console import ConsolePrinter
from mailnotifier.infrastructure.notifications.desktop import DesktopNotifier

__all__ = [
    "ConsolePrinter",
    "DesktopNotifier",
]

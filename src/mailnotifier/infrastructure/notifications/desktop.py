"""Native desktop notifications."""

from __future__ import annotations

import html
import platform
import subprocess
from typing import Optional

from loguru import logger

from mailnotifier.application.ports.notifier import Notifier
from mailnotifier.domain.entities.mail_message import NotificationPayload


class DesktopNotifier(Notifier):
    """Send notifications with notify-send (Linux) or osascript (macOS).

    Delivery is best-effort: a missing binary, a timeout or a non-zero exit
    is logged at debug level and otherwise ignored.
    """

    def __init__(self, app_name: str = "Gmail", system: Optional[str] = None, timeout: float = 5.0):
        self.app_name = app_name
        self.system = system or platform.system()
        self.timeout = timeout

    def notify(self, payload: NotificationPayload, *, expire_after_ms: int) -> None:
        if self.system == "Linux":
            cmd = self.linux_command(payload, expire_after_ms)
        elif self.system == "Darwin":
            cmd = self.macos_command(payload)
        else:
            logger.warning(f"Desktop notifications not supported on {self.system}")
            return
        self._run(cmd)

    def linux_command(self, payload: NotificationPayload, expire_after_ms: int) -> list[str]:
        # notify-send bodies are rendered as Pango markup
        body = f"<b>{html.escape(payload.subject)}</b>\n\n{html.escape(payload.body)}"
        return [
            "notify-send",
            "--app-name", self.app_name,
            "--expire-time", str(expire_after_ms),
            f"From: {payload.sender}",
            body,
        ]

    def macos_command(self, payload: NotificationPayload) -> list[str]:
        def quote(text: str) -> str:
            return text.replace("\\", "\\\\").replace('"', '\\"')

        message = quote(payload.body or payload.subject)
        script = (
            f'display notification "{message}" '
            f'with title "{quote(self.app_name)}" '
            f'subtitle "{quote("From: " + payload.sender)}"'
        )
        return ["osascript", "-e", script]

    def _run(self, cmd: list[str]) -> None:
        try:
            subprocess.run(cmd, check=True, capture_output=True, timeout=self.timeout)
        except FileNotFoundError:
            logger.debug(f"{cmd[0]} not available")
        except subprocess.TimeoutExpired:
            logger.debug(f"{cmd[0]} timed out")
        except subprocess.CalledProcessError as e:
            logger.debug(f"{cmd[0]} failed: {e}")

"""Daemon loop - checks the mailbox at a fixed interval until signalled."""

from __future__ import annotations

import signal
import time
from dataclasses import dataclass
from datetime import datetime

from loguru import logger

from mailnotifier.application.ports.cursor_store import CursorStore
from mailnotifier.application.use_cases.check_mailbox import CheckMailboxUseCase

# Longest single sleep; bounds how long a stop signal can go unnoticed
SLEEP_SLICE_SECONDS = 1.0


@dataclass
class PollerStats:
    """Track poller statistics."""
    ticks_completed: int = 0
    total_announced: int = 0
    total_errors: int = 0
    last_tick: datetime | None = None


class Poller:
    """
    Single-mailbox polling loop.

    Runs one check immediately, then one per `poll_interval` seconds.
    Exactly one check is in flight at a time; SIGINT/SIGTERM end the loop
    once the current check returns.
    """

    def __init__(
        self,
        use_case: CheckMailboxUseCase,
        cursor_store: CursorStore,
        poll_interval: float = 15.0,
        fetch_count: int = 10,
    ):
        self.use_case = use_case
        self.cursor_store = cursor_store
        self.poll_interval = poll_interval
        self.fetch_count = fetch_count
        self.running = False
        self.stats = PollerStats()

    def tick(self) -> None:
        """Check the mailbox once."""
        self.stats.last_tick = datetime.now()
        try:
            count = self.use_case.run(self.fetch_count, cursor_store=self.cursor_store)
            self.stats.total_announced += count
        except Exception as e:
            self.stats.total_errors += 1
            logger.exception(f"Mailbox check failed: {e}")
        self.stats.ticks_completed += 1

    def stop(self) -> None:
        self.running = False

    def _handle_shutdown(self, signum, frame) -> None:
        """Handle graceful shutdown."""
        logger.info(f"Received signal {signum}, shutting down...")
        self.stop()

    def _log_stats(self) -> None:
        logger.info(
            f"Poller stats: "
            f"ticks={self.stats.ticks_completed}, "
            f"announced={self.stats.total_announced}, "
            f"errors={self.stats.total_errors}"
        )

    def _sleep_until_next_tick(self) -> None:
        # Sleep in small increments to respond to signals quickly
        sleep_remaining = self.poll_interval
        while sleep_remaining > 0 and self.running:
            sleep_time = min(sleep_remaining, SLEEP_SLICE_SECONDS)
            time.sleep(sleep_time)
            sleep_remaining -= sleep_time

    def run(self) -> int:
        """Run the poll loop. Returns the process exit code."""
        previous = {
            sig: signal.signal(sig, self._handle_shutdown)
            for sig in (signal.SIGTERM, signal.SIGINT)
        }

        logger.info(f"Watching {self.use_case.folder} every {self.poll_interval:g}s")
        self.running = True
        try:
            self.tick()
            while self.running:
                self._sleep_until_next_tick()
                if self.running:
                    self.tick()
        finally:
            for sig, handler in previous.items():
                signal.signal(sig, handler)

        logger.info("Poller shutdown complete")
        self._log_stats()
        return 0

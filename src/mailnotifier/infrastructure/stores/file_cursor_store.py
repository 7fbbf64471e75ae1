"""Text-file store for the last announced UID."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from loguru import logger

from mailnotifier.application.ports.cursor_store import Cursor, CursorStore
from mailnotifier.domain.errors import PersistenceError

DEFAULT_CURSOR_PATH = ".gmail_last_uid.txt"


class FileCursorStore(CursorStore):
    """Keep the cursor as a decimal string in a single file.

    The file is read once; afterwards the in-memory value is authoritative.
    Both operations are best-effort: a missing or corrupt file reads as an
    empty cursor and a failed write is logged and dropped.
    """

    def __init__(self, path: str | Path = DEFAULT_CURSOR_PATH):
        self.path = Path(os.path.expanduser(str(path)))
        self._cursor: Optional[Cursor] = None

    def _read(self) -> int:
        try:
            raw = self.path.read_text(encoding="utf-8").strip()
        except FileNotFoundError:
            return 0
        except (OSError, UnicodeDecodeError) as e:
            raise PersistenceError(f"Cannot read {self.path}: {e}") from e

        try:
            value = int(raw)
        except ValueError as e:
            raise PersistenceError(f"Corrupt cursor in {self.path}: {raw[:20]!r}") from e
        if value < 0:
            raise PersistenceError(f"Negative cursor in {self.path}: {value}")
        return value

    def load(self) -> Cursor:
        if self._cursor is not None:
            return self._cursor

        try:
            last_seen = self._read()
        except PersistenceError as e:
            logger.warning(f"{e}; starting without history")
            last_seen = 0
        else:
            logger.debug(f"Loaded cursor from {self.path}: UID {last_seen}")
        self._cursor = Cursor(last_seen_id=last_seen)
        return self._cursor

    def save(self, last_seen_id: int) -> None:
        self._cursor = Cursor(last_seen_id=last_seen_id)
        try:
            self.path.write_text(str(last_seen_id), encoding="utf-8")
        except OSError as e:
            logger.warning(f"Failed to save cursor to {self.path}: {e}")
            return
        logger.debug(f"Saved cursor to {self.path}: UID {last_seen_id}")

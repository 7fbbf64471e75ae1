"""Store implementations."""

from mailnotifier.infrastructure.stores.file_cursor_store import FileCursorStore

__all__ = [
    "FileCursorStore",
]

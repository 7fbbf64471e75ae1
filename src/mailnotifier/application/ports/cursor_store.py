from __future__ import annotations
from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class Cursor:
    # UID of the newest message already handled; 0 means no history
    last_seen_id: int = 0

    @property
    def has_history(self) -> bool:
        return self.last_seen_id != 0


class CursorStore(Protocol):
    def load(self) -> Cursor: ...
    def save(self, last_seen_id: int) -> None: ...

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class FetchWindow:
    # 1-based inclusive range of mailbox positions (sequence numbers, not UIDs)
    start: int
    end: int

    @property
    def size(self) -> int:
        return self.end - self.start + 1

    def as_sequence_set(self) -> str:
        return f"{self.start}:{self.end}"


def compute_window(mailbox_size: int, requested: int) -> Optional[FetchWindow]:
    """Window covering the last `requested` messages of the mailbox.

    Returns None for an empty mailbox, in which case nothing should be fetched.
    """
    if requested < 1:
        raise ValueError(f"requested count must be >= 1, got {requested}")
    if mailbox_size <= 0:
        return None
    start = max(1, mailbox_size - requested + 1)
    return FetchWindow(start=start, end=mailbox_size)

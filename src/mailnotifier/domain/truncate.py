"""Body truncation that never leaves half a link behind."""

from __future__ import annotations

import re

URL_RE = re.compile(r'https?://[^\s<>"]+')
ELLIPSIS = "..."


def truncate_body(text: str, max_len: int) -> str:
    """Cut `text` to at most `max_len` characters, ellipsis included.

    If the naive cut point lands inside a URL the cut moves back to the start
    of that URL. When that leaves nothing (the text opens with an overlong
    URL) the result is an empty string.
    """
    if max_len <= 0:
        raise ValueError(f"max_len must be positive, got {max_len}")
    if len(text) <= max_len:
        return text

    cut = max_len - len(ELLIPSIS)
    for match in URL_RE.finditer(text):
        if match.start() < cut < match.end():
            cut = match.start()
            break

    if cut <= 0:
        return ""
    return text[:cut] + ELLIPSIS

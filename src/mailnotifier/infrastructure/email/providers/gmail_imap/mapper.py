from __future__ import annotations
import re
from datetime import datetime
from typing import Optional, Sequence, Union

from loguru import logger

from mailnotifier.domain.entities.mail_message import MailMessage
from mailnotifier.infrastructure.email.rfc822 import parse_rfc822

UID_RE = re.compile(rb"UID (\d+)")

FetchData = Sequence[Union[bytes, tuple[bytes, bytes], None]]


def _group_fetch_data(data: FetchData) -> list[tuple[bytes, bytes]]:
    """Pair each literal with all the non-literal text of its FETCH line.

    imaplib returns `(b'1 (UID 7 BODY[] {12}', literal)` tuples followed by a
    closing b')' element. Some servers put UID after the literal, so the
    closing element is kept as part of the line.
    """
    records: list[list[bytes]] = []
    for item in data:
        if isinstance(item, tuple):
            records.append([item[0], item[1]])
        elif isinstance(item, bytes) and records:
            records[-1][0] += b" " + item
    return [(line, literal) for line, literal in records]


def _sender_address(em) -> str:
    header = em.get("From")
    if header is None:
        return ""
    addresses = getattr(header, "addresses", ())
    if addresses:
        return addresses[0].addr_spec
    return str(header).strip()


def _received_at(em) -> Optional[datetime]:
    dt = em.get("Date")
    try:
        return dt.datetime if dt else None
    except Exception:
        return None


def to_mail_message(uid: int, rfc822_bytes: bytes, want_body: bool) -> MailMessage:
    em = parse_rfc822(rfc822_bytes)
    return MailMessage(
        uid=uid,
        sender=_sender_address(em),
        subject=str(em.get("Subject") or "").strip(),
        received_at=_received_at(em),
        raw_body=rfc822_bytes if want_body else None,
    )


def fetch_response_to_messages(data: FetchData, want_body: bool) -> list[MailMessage]:
    messages: list[MailMessage] = []
    for line, literal in _group_fetch_data(data):
        match = UID_RE.search(line)
        if match is None:
            logger.warning(f"FETCH response without UID: {line[:80]!r}")
            continue
        messages.append(to_mail_message(int(match.group(1)), literal, want_body))
    return messages

from __future__ import annotations
from email import policy
from email.message import EmailMessage
from email.parser import BytesParser
from typing import Iterator, Optional

from loguru import logger

from mailnotifier.domain.errors import ParseError


def parse_rfc822(rfc822_bytes: bytes) -> EmailMessage:
    return BytesParser(policy=policy.default).parsebytes(rfc822_bytes)


def _body_parts(part: EmailMessage) -> Iterator[EmailMessage]:
    """Leaf parts of the message itself, in transport order.

    Attachments and embedded messages (message/rfc822 and friends) are
    yielded as single leaves; their contents are never visited.
    """
    if part.get_content_disposition() == "attachment" or part.get_content_maintype() == "message":
        yield part
    elif part.is_multipart():
        for sub in part.iter_parts():
            yield from _body_parts(sub)
    else:
        yield part


def _is_inline_plain_text(part: EmailMessage) -> bool:
    if part.get_content_type() != "text/plain":
        return False
    return part.get_content_disposition() != "attachment"


def _part_text(part: EmailMessage) -> str:
    try:
        return part.get_content()
    except (LookupError, UnicodeError, ValueError, AssertionError) as e:
        raise ParseError(f"Undecodable text/plain part: {e}") from e


def extract_plain_text(rfc822_bytes: Optional[bytes]) -> str:
    """Plaintext body of a message, or "" if there is none.

    Walks the parts in transport order and keeps the LAST inline text/plain
    part. Attachments, forwarded messages and non-text parts are ignored; a
    part that fails to decode is skipped.
    """
    if not rfc822_bytes:
        return ""

    try:
        em = parse_rfc822(rfc822_bytes)
        parts = list(_body_parts(em))
    except Exception as e:
        logger.debug(f"Could not parse message body: {e}")
        return ""

    text = ""
    for part in parts:
        if not _is_inline_plain_text(part):
            continue
        try:
            text = _part_text(part)
        except ParseError as e:
            logger.debug(str(e))
    return text

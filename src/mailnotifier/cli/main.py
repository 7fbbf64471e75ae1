"""Command line entry point: watch the mailbox, or read the last N messages and exit."""

from __future__ import annotations

import argparse
import os
import sys
from typing import Optional, Sequence

from loguru import logger

from mailnotifier.application.use_cases.check_mailbox import CheckMailboxUseCase
from mailnotifier.cli.poller import Poller
from mailnotifier.domain.errors import ConfigError
from mailnotifier.infrastructure.email.providers.gmail_imap.client import (
    GmailImapConfig,
    GmailImapMailboxClient,
)
from mailnotifier.infrastructure.notifications import ConsolePrinter, DesktopNotifier
from mailnotifier.infrastructure.settings import Settings, get_settings
from mailnotifier.infrastructure.stores import FileCursorStore

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)

EPILOG = """\
Environment Variables (required):
  GMAIL_USER               Gmail address
  GMAIL_READER             Gmail app password
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mailnotifier",
        description="Gmail Desktop Notifier - Monitors Gmail and sends desktop notifications",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-l", "--length",
        type=int,
        default=None,
        metavar="INT",
        help="Message body length for notifications (default: 500, 0=disable)",
    )
    parser.add_argument(
        "-r", "--read",
        type=int,
        default=0,
        metavar="INT",
        help="Read last x emails to stdout and exit",
    )
    return parser


def configure_logging(level: str) -> None:
    logger.remove()
    logger.add(sys.stderr, format=LOG_FORMAT, level=level.upper())


def build_use_case(settings: Settings, body_length: int) -> CheckMailboxUseCase:
    client = GmailImapMailboxClient(
        GmailImapConfig(
            email=settings.gmail_user,
            password=settings.gmail_reader.get_secret_value(),
            host=settings.imap_host,
            port=settings.imap_port,
        )
    )
    return CheckMailboxUseCase(
        client=client,
        notifier=DesktopNotifier(app_name=settings.notification_app_name),
        console=ConsolePrinter(),
        folder=settings.imap_folder,
        body_length=body_length,
        expire_after_ms=settings.notification_expire_ms,
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.length is not None and args.length < 0:
        parser.error("--length must be >= 0")
    if args.read < 0:
        parser.error("--read must be >= 0")

    configure_logging(os.getenv("LOG_LEVEL", "INFO"))

    try:
        settings = get_settings()
    except ConfigError as e:
        logger.error(f"Error: {e}")
        return 1
    configure_logging(settings.log_level)

    body_length = settings.body_length if args.length is None else args.length
    use_case = build_use_case(settings, body_length)

    if args.read > 0:
        use_case.run(args.read)
        return 0

    poller = Poller(
        use_case=use_case,
        cursor_store=FileCursorStore(settings.cursor_path),
        poll_interval=settings.poll_interval_seconds,
        fetch_count=settings.poll_fetch_count,
    )
    return poller.run()


if __name__ == "__main__":
    raise SystemExit(main())

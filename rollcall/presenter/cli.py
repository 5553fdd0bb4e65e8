"""
rollcall-presenter: show a rotating check-in QR code in the terminal.

Usage:
    rollcall-presenter --api-url https://attendance.example.com --token "$ADMIN_JWT"

The admin credential can also come from ROLLCALL_TOKEN so it stays out of
shell history.
"""
import argparse
import os
import signal
import sys
from typing import List, Optional

import requests

from rollcall.core.config import settings
from rollcall.core.logging_config import get_logger, setup_logging
from rollcall.presenter.client import RotationClient
from rollcall.presenter.render import render_countdown, render_token

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Display a rotating attendance QR code.")
    parser.add_argument(
        "--api-url",
        default=os.getenv("ROLLCALL_API_URL", "http://localhost:8000"),
        help="Rollcall API root (default: $ROLLCALL_API_URL or http://localhost:8000)",
    )
    parser.add_argument(
        "--checkin-url",
        default=settings.CHECKIN_BASE_URL,
        help="Base URL encoded in the QR code (default: CHECKIN_BASE_URL)",
    )
    parser.add_argument(
        "--token",
        default=os.getenv("ROLLCALL_TOKEN"),
        help="Admin bearer credential (default: $ROLLCALL_TOKEN)",
    )
    parser.add_argument(
        "--interval",
        type=int,
        default=settings.ROTATION_INTERVAL_SECONDS,
        help="Seconds between rotations (default: ROTATION_INTERVAL_SECONDS)",
    )
    parser.add_argument("--log-level", default=settings.LOG_LEVEL)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.token:
        parser.error("an admin credential is required (--token or ROLLCALL_TOKEN)")
    if args.interval <= 0 or args.interval >= settings.SESSION_TTL_SECONDS:
        parser.error(
            f"--interval must be between 1 and {settings.SESSION_TTL_SECONDS - 1} "
            "so every code outlives its rotation"
        )

    setup_logging(level=args.log_level)

    with requests.Session() as http:
        client = RotationClient(
            http,
            args.api_url,
            args.token,
            interval=args.interval,
            on_token=lambda token: render_token(token, args.checkin_url),
            on_tick=render_countdown,
        )
        signal.signal(signal.SIGTERM, lambda signum, frame: client.stop())
        try:
            client.run()
        except KeyboardInterrupt:
            client.stop()

    return 0


if __name__ == "__main__":
    sys.exit(main())

"""Presenter-side token rotation loop."""
import threading
from typing import Callable, Optional

import requests

from rollcall.core.constants import ROTATION_INTERVAL_SECONDS
from rollcall.core.logging_config import get_logger

logger = get_logger(__name__)

SESSIONS_PATH = "/api/v1/sessions"


class RotationClient:
    """
    Mint a fresh check-in token every ``interval`` seconds and count down to the next one.

    ``http`` is anything with a requests-style ``post(url, headers=, timeout=)``
    (a ``requests.Session`` in production). Only one mint request is ever in
    flight: a refresh fired while another is running returns None without
    touching the network. If minting fails the previous token stays current,
    and it keeps working on attendees' screens until its own expiry.

    Args:
        http: HTTP client used for the mint call
        base_url: API root, e.g. "https://attendance.example.com"
        credential: Admin bearer credential
        interval: Seconds between rotations; must be shorter than the session TTL
        on_token: Called with each newly minted token
        on_tick: Called with the seconds left after every countdown step
    """

    def __init__(
        self,
        http,
        base_url: str,
        credential: str,
        interval: int = ROTATION_INTERVAL_SECONDS,
        on_token: Optional[Callable[[str], None]] = None,
        on_tick: Optional[Callable[[int], None]] = None,
        timeout: float = 10,
    ):
        if interval <= 0:
            raise ValueError("interval must be positive")

        self.http = http
        self.base_url = base_url.rstrip("/")
        self.credential = credential
        self.interval = interval
        self.on_token = on_token
        self.on_tick = on_tick
        self.timeout = timeout

        self.current_token: Optional[str] = None
        self.seconds_left = 0

        self._in_flight = threading.Lock()
        self._countdown_lock = threading.Lock()
        self._stopped = threading.Event()

    @property
    def in_flight(self) -> bool:
        return self._in_flight.locked()

    def refresh(self) -> Optional[str]:
        """Mint one token now. Returns it, or None if skipped or failed."""
        if not self._in_flight.acquire(blocking=False):
            logger.debug("token_refresh_skipped", reason="in_flight")
            return None
        try:
            token = self._mint()
        finally:
            self._in_flight.release()

        if token is None:
            return None

        self.current_token = token
        with self._countdown_lock:
            self.seconds_left = self.interval
        if self.on_token:
            self.on_token(token)
        return token

    def _mint(self) -> Optional[str]:
        url = f"{self.base_url}{SESSIONS_PATH}"
        try:
            response = self.http.post(
                url,
                headers={"Authorization": f"Bearer {self.credential}"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.warning("token_mint_failed", error=str(e))
            return None

        if response.status_code != 200:
            logger.warning("token_mint_rejected", status_code=response.status_code)
            return None

        try:
            session = response.json().get("session") or {}
        except ValueError:
            logger.warning("token_mint_bad_response")
            return None

        token = session.get("token")
        if not token:
            logger.warning("token_mint_bad_response")
            return None

        logger.info("token_rotated", session_id=session.get("id"), expires_at=session.get("expires_at"))
        return token

    def tick(self) -> int:
        """Advance the countdown by one second, never below zero."""
        with self._countdown_lock:
            if self.seconds_left > 0:
                self.seconds_left -= 1
            remaining = self.seconds_left
        if self.on_tick:
            self.on_tick(remaining)
        return remaining

    def _run_countdown(self) -> None:
        while not self._stopped.wait(1):
            self.tick()

    def run(self) -> None:
        """Rotate until stop() is called. Blocks the calling thread."""
        self._stopped.clear()
        ticker = threading.Thread(target=self._run_countdown, name="rollcall-countdown", daemon=True)
        ticker.start()
        logger.info("rotation_started", interval=self.interval)
        try:
            while True:
                self.refresh()
                if self._stopped.wait(self.interval):
                    break
        finally:
            self._stopped.set()
            ticker.join(timeout=2)
            logger.info("rotation_stopped")

    def stop(self) -> None:
        self._stopped.set()

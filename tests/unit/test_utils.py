from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

from rollcall.core.utils import local_day, to_timezone, to_utc

NEW_YORK = ZoneInfo("America/New_York")


def test_to_utc_assumes_naive_is_utc():
    """SQLite hands back naive datetimes that were stored as UTC."""
    naive = datetime(2026, 3, 1, 12, 0, 0)
    assert to_utc(naive) == datetime(2026, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


def test_to_utc_converts_aware():
    local = datetime(2026, 3, 1, 7, 0, 0, tzinfo=NEW_YORK)
    assert to_utc(local) == datetime(2026, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


def test_to_timezone():
    utc = datetime(2026, 7, 1, 12, 0, 0, tzinfo=timezone.utc)
    assert to_timezone(utc, NEW_YORK).hour == 8


def test_local_day_before_local_midnight():
    """03:30 UTC is still the previous evening in New York."""
    dt = datetime(2026, 10, 20, 3, 30, tzinfo=timezone.utc)
    assert local_day(dt, NEW_YORK) == date(2026, 10, 19)


def test_local_day_after_local_midnight():
    dt = datetime(2026, 10, 20, 4, 30, tzinfo=timezone.utc)
    assert local_day(dt, NEW_YORK) == date(2026, 10, 20)


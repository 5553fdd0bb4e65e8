"""Dashboard statistics."""
from datetime import datetime
from typing import Dict, Optional
from zoneinfo import ZoneInfo

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from rollcall.db.models import Checkin, Profile
from rollcall.core import config
from rollcall.core.exceptions import StoreUnavailableError
from rollcall.core.logging_config import get_logger
from rollcall.core.utils import local_day, utcnow

logger = get_logger(__name__)


def get_stats(db: Session, now: Optional[datetime] = None, tz: Optional[ZoneInfo] = None) -> Dict[str, int]:
    """
    Attendance totals for the admin dashboard.

    "Today" is the same local-midnight day window the check-in recorder uses,
    so checkins_today counts rows by their checkin_day.
    """
    tz = tz or config.settings.tz
    today = local_day(now or utcnow(), tz)

    try:
        total_users = db.query(func.count(Profile.user_id)).scalar() or 0
        total_checkins = db.query(func.count(Checkin.id)).scalar() or 0
        checkins_today = db.query(func.count(Checkin.id)).filter(
            Checkin.checkin_day == today
        ).scalar() or 0
        unique_checkins_today = db.query(func.count(func.distinct(Checkin.user_id))).filter(
            Checkin.checkin_day == today
        ).scalar() or 0
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("stats_query_failed", error=str(e))
        raise StoreUnavailableError() from e

    return {
        "total_users": total_users,
        "total_checkins": total_checkins,
        "checkins_today": checkins_today,
        "unique_checkins_today": unique_checkins_today,
    }

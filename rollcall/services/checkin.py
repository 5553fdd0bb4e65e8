"""Check-in business logic."""
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List, Optional, Tuple
from zoneinfo import ZoneInfo

from sqlalchemy import insert
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from rollcall.db.models import AttendanceSession, Checkin, Profile
from rollcall.core import config
from rollcall.core.exceptions import ConstraintViolationError, StoreUnavailableError
from rollcall.core.logging_config import get_logger
from rollcall.core.utils import local_day, to_utc, utcnow
from rollcall.services.identity import Identity

logger = get_logger(__name__)

# Dialects with INSERT ... ON CONFLICT DO NOTHING
_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


@dataclass
class CheckinResult:
    checkin: Checkin
    created: bool

    @property
    def already_checked_in(self) -> bool:
        return not self.created


def _find_checkin_for_day(db: Session, user_id: str, day) -> Optional[Checkin]:
    return db.query(Checkin).filter(
        Checkin.user_id == user_id,
        Checkin.checkin_day == day
    ).first()


def _insert_if_absent(db: Session, values: Dict) -> bool:
    """
    Insert a check-in unless one already exists for (user_id, checkin_day).

    Returns True when this call created the row. The unique constraint
    uq_checkin_user_day makes the existence check and the insert one atomic
    step; concurrent callers for the same day all see exactly one winner.
    """
    dialect = db.get_bind().dialect.name
    upsert_insert = _UPSERT_INSERTS.get(dialect)

    try:
        if upsert_insert is not None:
            stmt = upsert_insert(Checkin).values(**values).on_conflict_do_nothing(
                index_elements=["user_id", "checkin_day"]
            )
            result = db.execute(stmt)
            db.commit()
            return result.rowcount == 1

        # Other dialects: rely on the unique constraint raising
        db.execute(insert(Checkin).values(**values))
        db.commit()
        return True
    except IntegrityError:
        db.rollback()
        if upsert_insert is not None:
            # Conflict on the day key is swallowed above, so this is something else
            # (e.g. a session id that does not exist)
            raise
        return False


def record_checkin(
    db: Session,
    identity: Identity,
    session: AttendanceSession,
    now: Optional[datetime] = None,
    tz: Optional[ZoneInfo] = None,
) -> CheckinResult:
    """
    Record attendance for today, at most once per identity per local day.

    The session must already have passed validate_token() for this request;
    expiry is not re-checked here. Profiles are never created here either.

    Args:
        db: Database session
        identity: Attendee checking in
        session: Validated session backing this check-in
        now: Check-in time (defaults to current UTC time)
        tz: Timezone whose midnight starts the day window (defaults to TIMEZONE)

    Returns:
        CheckinResult with created=True for a new row, or the existing row of
        today with created=False (no write performed)

    Raises:
        ConstraintViolationError: Insert rejected for a reason other than the day key
        StoreUnavailableError: Database failure
    """
    now = to_utc(now) if now else utcnow()
    tz = tz or config.settings.tz
    day = local_day(now, tz)

    values = {
        "user_id": identity.id,
        "session_id": session.id,
        "checked_in_at": now,
        "checkin_day": day,
    }

    try:
        created = _insert_if_absent(db, values)
        checkin_record = _find_checkin_for_day(db, identity.id, day)
    except IntegrityError as e:
        logger.error(
            "checkin_constraint_violation",
            user_id=identity.id,
            session_id=session.id,
            error=str(e.orig),
        )
        raise ConstraintViolationError() from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("checkin_store_failed", user_id=identity.id, session_id=session.id, error=str(e))
        raise StoreUnavailableError() from e

    if checkin_record is None:
        # Neither inserted nor found: the store lost our write
        logger.error("checkin_missing_after_write", user_id=identity.id, day=day.isoformat())
        raise ConstraintViolationError()

    if created:
        logger.info(
            "checkin_recorded",
            checkin_id=checkin_record.id,
            user_id=identity.id,
            session_id=session.id,
            day=day.isoformat(),
        )
    else:
        logger.info(
            "checkin_duplicate",
            checkin_id=checkin_record.id,
            user_id=identity.id,
            day=day.isoformat(),
        )

    return CheckinResult(checkin=checkin_record, created=created)


def list_checkins(
    db: Session,
    identity: Identity,
    include_all: bool = False,
) -> List[Tuple[Checkin, Optional[Profile]]]:
    """
    List check-ins newest first.

    Attendees always get only their own rows. Admins asking for everything get
    every row paired with the attendee's profile (None if they never set one).
    """
    try:
        if include_all and identity.is_admin:
            rows = (
                db.query(Checkin, Profile)
                .outerjoin(Profile, Profile.user_id == Checkin.user_id)
                .order_by(Checkin.checked_in_at.desc(), Checkin.id.desc())
                .all()
            )
            return [(checkin_record, profile) for checkin_record, profile in rows]

        checkins = (
            db.query(Checkin)
            .filter(Checkin.user_id == identity.id)
            .order_by(Checkin.checked_in_at.desc(), Checkin.id.desc())
            .all()
        )
        return [(checkin_record, None) for checkin_record in checkins]
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("checkin_list_failed", user_id=identity.id, error=str(e))
        raise StoreUnavailableError() from e

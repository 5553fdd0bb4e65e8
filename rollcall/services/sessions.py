"""Check-in session issuing, validation and retention."""
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from rollcall.db.models import AttendanceSession, Checkin
from rollcall.core import config
from rollcall.core.constants import SESSION_TOKEN_MAX_ATTEMPTS
from rollcall.core.exceptions import (
    ConstraintViolationError,
    SessionExpiredError,
    SessionNotFoundError,
    StoreUnavailableError,
)
from rollcall.core.logging_config import get_logger
from rollcall.core.security import generate_session_token
from rollcall.core.utils import to_utc, utcnow
from rollcall.services.identity import Identity

logger = get_logger(__name__)


def issue_session(
    db: Session,
    identity: Identity,
    now: Optional[datetime] = None,
    ttl_seconds: Optional[int] = None,
) -> AttendanceSession:
    """
    Mint a new check-in session for an admin.

    The caller must already have passed the role gate with {admin}. Earlier
    sessions are left untouched: they are the parents of historical check-ins.

    Args:
        db: Database session
        identity: Issuing admin
        now: Issue time (defaults to current UTC time)
        ttl_seconds: Override SESSION_TTL_SECONDS

    Returns:
        The persisted AttendanceSession

    Raises:
        ConstraintViolationError: Token collided on every attempt
        StoreUnavailableError: Database failure
    """
    created_at = to_utc(now) if now else utcnow()
    ttl = ttl_seconds if ttl_seconds is not None else config.settings.SESSION_TTL_SECONDS
    expires_at = created_at + timedelta(seconds=ttl)

    for attempt in range(1, SESSION_TOKEN_MAX_ATTEMPTS + 1):
        session = AttendanceSession(
            token=generate_session_token(),
            created_by=identity.id,
            created_at=created_at,
            expires_at=expires_at,
        )
        try:
            db.add(session)
            db.commit()
            db.refresh(session)
        except IntegrityError:
            # Collision unlikely but possible; the unique index is the last line of defence
            db.rollback()
            logger.warning("session_token_collision", attempt=attempt)
            continue
        except SQLAlchemyError as e:
            db.rollback()
            logger.error("session_issue_failed", user_id=identity.id, error=str(e))
            raise StoreUnavailableError() from e

        logger.info(
            "session_issued",
            session_id=session.id,
            created_by=identity.id,
            expires_at=expires_at.isoformat(),
        )
        return session

    logger.error("session_issue_exhausted", user_id=identity.id, attempts=SESSION_TOKEN_MAX_ATTEMPTS)
    raise ConstraintViolationError("Failed to generate unique session token")


def get_current_session(db: Session, now: Optional[datetime] = None) -> Optional[AttendanceSession]:
    """Most recently created session that has not expired yet, or None."""
    now = to_utc(now) if now else utcnow()
    try:
        return (
            db.query(AttendanceSession)
            .filter(AttendanceSession.expires_at > now)
            .order_by(AttendanceSession.created_at.desc(), AttendanceSession.id.desc())
            .first()
        )
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("current_session_lookup_failed", error=str(e))
        raise StoreUnavailableError() from e


def validate_token(db: Session, token: str, now: Optional[datetime] = None) -> AttendanceSession:
    """
    Resolve a presented token to a live session.

    Token comparison is exact; no trimming or case folding happens here.

    Raises:
        SessionNotFoundError: Token was never issued
        SessionExpiredError: Token was issued but expires_at <= now
    """
    now = to_utc(now) if now else utcnow()
    try:
        session = db.query(AttendanceSession).filter(AttendanceSession.token == token).first()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("session_lookup_failed", error=str(e))
        raise StoreUnavailableError() from e

    if session is None:
        raise SessionNotFoundError()

    # SQLite hands back naive datetimes; stored values are always UTC
    if to_utc(session.expires_at) <= now:
        raise SessionExpiredError()

    return session


def prune_sessions(db: Session, older_than_days: int, now: Optional[datetime] = None) -> int:
    """
    Delete long-expired sessions that no check-in references.

    Sessions backing any check-in are kept forever so attendance history stays
    intact.

    Args:
        db: Database session
        older_than_days: Only sessions that expired more than this many days ago
        now: Reference time (defaults to current UTC time)

    Returns:
        Number of sessions deleted
    """
    if older_than_days < 0:
        raise ValueError("older_than_days must not be negative")

    now = to_utc(now) if now else utcnow()
    cutoff = now - timedelta(days=older_than_days)

    referenced = select(Checkin.session_id)
    try:
        deleted = (
            db.query(AttendanceSession)
            .filter(
                AttendanceSession.expires_at < cutoff,
                ~AttendanceSession.id.in_(referenced),
            )
            .delete(synchronize_session=False)
        )
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("session_prune_failed", error=str(e))
        raise StoreUnavailableError() from e

    logger.info("sessions_pruned", deleted=deleted, cutoff=cutoff.isoformat())
    return deleted

"""Profile business logic."""
from datetime import datetime
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from rollcall.db.models import NameChangeLog, Profile
from rollcall.core.constants import DEFAULT_ROLE
from rollcall.core.exceptions import ConstraintViolationError, StoreUnavailableError
from rollcall.core.logging_config import get_logger
from rollcall.core.utils import to_utc, utcnow

logger = get_logger(__name__)


def get_profile(db: Session, user_id: str) -> Optional[Profile]:
    """Get a stored profile, or None if the user never set one."""
    try:
        return db.query(Profile).filter(Profile.user_id == user_id).first()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("profile_lookup_failed", user_id=user_id, error=str(e))
        raise StoreUnavailableError() from e


def save_profile(
    db: Session,
    user_id: str,
    full_name: str,
    email: str,
    ip_address: str = "unknown",
    user_agent: str = "unknown",
    now: Optional[datetime] = None,
    _retry: bool = True,
) -> Profile:
    """
    Create or update the caller's profile.

    New profiles always start as attendee; updates never touch the role.
    The initial name and every later rename are appended to the name change log.
    """
    now = to_utc(now) if now else utcnow()

    try:
        profile = db.query(Profile).filter(Profile.user_id == user_id).first()

        if profile is None:
            profile = Profile(
                user_id=user_id,
                full_name=full_name,
                email=email,
                role=DEFAULT_ROLE,
                created_at=now,
                updated_at=now,
            )
            db.add(profile)
            db.add(NameChangeLog(
                user_id=user_id,
                previous_name=None,
                new_name=full_name,
                ip_address=ip_address,
                user_agent=user_agent,
                changed_at=now,
            ))
            logger.info("profile_created", user_id=user_id)
        else:
            if profile.full_name != full_name:
                db.add(NameChangeLog(
                    user_id=user_id,
                    previous_name=profile.full_name,
                    new_name=full_name,
                    ip_address=ip_address,
                    user_agent=user_agent,
                    changed_at=now,
                ))
                logger.info("profile_renamed", user_id=user_id)
            profile.full_name = full_name
            profile.email = email
            profile.updated_at = now

        db.commit()
        db.refresh(profile)
        return profile
    except IntegrityError:
        db.rollback()
        # Two first-time saves raced on the primary key; the second becomes an update
        if _retry:
            return save_profile(db, user_id, full_name, email, ip_address, user_agent, now, _retry=False)
        logger.error("profile_save_conflict", user_id=user_id)
        raise ConstraintViolationError("Failed to save profile")
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("profile_save_failed", user_id=user_id, error=str(e))
        raise StoreUnavailableError() from e

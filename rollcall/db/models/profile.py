"""Profile model."""
from datetime import datetime, timezone as tz
from sqlalchemy import Column, String, DateTime, CheckConstraint
from sqlalchemy.orm import relationship

from rollcall.db.base import Base
from rollcall.core.constants import DEFAULT_ROLE, MAX_EMAIL_LENGTH, MAX_FULL_NAME_LENGTH, ROLES


class Profile(Base):
    __tablename__ = "attendance_users"

    # Externally issued by the identity provider; never generated here
    user_id = Column(String(255), primary_key=True)
    full_name = Column(String(MAX_FULL_NAME_LENGTH), nullable=False)
    email = Column(String(MAX_EMAIL_LENGTH), nullable=False)
    role = Column(String(20), nullable=False, default=DEFAULT_ROLE)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(tz.utc))
    updated_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(tz.utc))

    # Relationships
    sessions = relationship("AttendanceSession", back_populates="creator")
    name_changes = relationship("NameChangeLog", back_populates="profile")

    __table_args__ = (
        CheckConstraint(f"role IN {ROLES!r}", name="ck_attendance_users_role"),
    )

"""Checkin model."""
from datetime import datetime, timezone as tz
from sqlalchemy import Column, Integer, String, Date, DateTime, ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import relationship

from rollcall.db.base import Base

CHECKIN_DAY_CONSTRAINT = "uq_checkin_user_day"


class Checkin(Base):
    __tablename__ = "attendance_checkins"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(255), nullable=False)
    session_id = Column(
        Integer,
        ForeignKey("attendance_sessions.id", ondelete="RESTRICT"),
        nullable=False,
    )
    checked_in_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(tz.utc))
    # Local calendar date of checked_in_at in the configured timezone
    checkin_day = Column(Date, nullable=False)

    # Relationships
    session = relationship("AttendanceSession", back_populates="checkins")

    __table_args__ = (
        Index("idx_checkins_session", "session_id"),
        Index("idx_checkins_checked_in_at", "checked_in_at"),
        UniqueConstraint("user_id", "checkin_day", name=CHECKIN_DAY_CONSTRAINT),
    )

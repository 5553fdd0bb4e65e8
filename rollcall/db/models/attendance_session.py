"""AttendanceSession model."""
from datetime import datetime, timezone as tz
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship

from rollcall.db.base import Base


class AttendanceSession(Base):
    """A minted check-in credential. Rows are immutable and outlive their expiry."""

    __tablename__ = "attendance_sessions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    token = Column(String(64), unique=True, nullable=False)
    created_by = Column(String(255), ForeignKey("attendance_users.user_id"), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(tz.utc))
    expires_at = Column(DateTime(timezone=True), nullable=False)

    # Relationships
    creator = relationship("Profile", back_populates="sessions")
    # No cascade: deleting a session must never take check-ins with it
    checkins = relationship("Checkin", back_populates="session", passive_deletes="all")

    __table_args__ = (
        Index("idx_attendance_sessions_expires", "expires_at"),
    )

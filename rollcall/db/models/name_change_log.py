"""NameChangeLog model."""
from datetime import datetime, timezone as tz
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship

from rollcall.db.base import Base
from rollcall.core.constants import MAX_FULL_NAME_LENGTH


class NameChangeLog(Base):
    __tablename__ = "attendance_name_change_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(255), ForeignKey("attendance_users.user_id"), nullable=False)
    previous_name = Column(String(MAX_FULL_NAME_LENGTH), nullable=True)  # NULL on initial set
    new_name = Column(String(MAX_FULL_NAME_LENGTH), nullable=False)
    ip_address = Column(String(64), nullable=False, default="unknown")
    user_agent = Column(String(512), nullable=False, default="unknown")
    changed_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(tz.utc))

    # Relationships
    profile = relationship("Profile", back_populates="name_changes")

    __table_args__ = (Index("idx_name_change_logs_user", "user_id"),)

"""Database models."""
from rollcall.db.models.profile import Profile
from rollcall.db.models.attendance_session import AttendanceSession
from rollcall.db.models.checkin import Checkin
from rollcall.db.models.name_change_log import NameChangeLog

__all__ = ["Profile", "AttendanceSession", "Checkin", "NameChangeLog"]

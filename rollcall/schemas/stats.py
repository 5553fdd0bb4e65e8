"""Dashboard statistics schemas."""
from pydantic import BaseModel


class AttendanceStats(BaseModel):
    total_users: int
    total_checkins: int
    checkins_today: int
    unique_checkins_today: int


class StatsEnvelope(BaseModel):
    stats: AttendanceStats

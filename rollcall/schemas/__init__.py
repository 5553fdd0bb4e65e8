"""Pydantic schemas for request/response validation."""
from rollcall.schemas.session import SessionOut, SessionEnvelope, PruneResponse
from rollcall.schemas.checkin import CheckinRequest, CheckinOut, CheckinResponse, CheckinList
from rollcall.schemas.profile import ProfileUpdate, ProfileOut, ProfileEnvelope
from rollcall.schemas.stats import AttendanceStats, StatsEnvelope
from rollcall.schemas.common import ErrorResponse

__all__ = [
    "SessionOut",
    "SessionEnvelope",
    "PruneResponse",
    "CheckinRequest",
    "CheckinOut",
    "CheckinResponse",
    "CheckinList",
    "ProfileUpdate",
    "ProfileOut",
    "ProfileEnvelope",
    "AttendanceStats",
    "StatsEnvelope",
    "ErrorResponse",
]

"""Check-in schemas."""
from datetime import date, datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from rollcall.schemas.common import utc_datetime
from rollcall.schemas.profile import ProfileOut


class CheckinRequest(BaseModel):
    # Format is checked in the endpoint so a bad token gets the 400 check-in body, not a 422
    token: Optional[Any] = None


class CheckinOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: str
    session_id: int
    checked_in_at: datetime
    checkin_day: date
    user: Optional[ProfileOut] = None

    @field_validator('checked_in_at')
    @classmethod
    def ensure_utc(cls, v: datetime) -> datetime:
        return utc_datetime(v)


class CheckinResponse(BaseModel):
    success: bool = True
    checkin: CheckinOut
    message: str
    alreadyCheckedIn: Optional[bool] = None


class CheckinList(BaseModel):
    checkins: List[CheckinOut]

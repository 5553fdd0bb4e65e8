"""Check-in session schemas."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from rollcall.schemas.common import utc_datetime


class SessionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    token: str
    created_by: str
    created_at: datetime
    expires_at: datetime

    @field_validator('created_at', 'expires_at')
    @classmethod
    def ensure_utc(cls, v: datetime) -> datetime:
        return utc_datetime(v)


class SessionEnvelope(BaseModel):
    session: Optional[SessionOut] = None


class PruneResponse(BaseModel):
    success: bool = True
    deleted: int

"""Profile schemas."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from rollcall.core.constants import MAX_EMAIL_LENGTH, MAX_FULL_NAME_LENGTH
from rollcall.core.sanitization import sanitize_full_name, validate_email
from rollcall.schemas.common import utc_datetime


class ProfileUpdate(BaseModel):
    full_name: str = Field(..., min_length=1, max_length=MAX_FULL_NAME_LENGTH)
    email: str = Field(..., min_length=1, max_length=MAX_EMAIL_LENGTH)

    @field_validator('full_name')
    @classmethod
    def sanitize_full_name_field(cls, v: str) -> str:
        """Sanitize and validate display name."""
        return sanitize_full_name(v)

    @field_validator('email')
    @classmethod
    def validate_email_field(cls, v: str) -> str:
        return validate_email(v)


class ProfileOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: str
    full_name: str
    email: str
    role: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator('created_at', 'updated_at')
    @classmethod
    def ensure_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return utc_datetime(v)


class ProfileEnvelope(BaseModel):
    user: Optional[ProfileOut] = None

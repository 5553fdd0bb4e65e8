"""Common response schemas."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from rollcall.core.utils import to_utc


class ErrorResponse(BaseModel):
    """Check-in failure body, kept flat so clients can branch on ``code``."""
    success: bool = False
    error: str
    code: str


def utc_datetime(v: Optional[datetime]) -> Optional[datetime]:
    """Re-attach UTC to timestamps read back from stores that drop tzinfo."""
    if v is None:
        return v
    return to_utc(v)

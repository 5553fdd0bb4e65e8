"""Dashboard statistics endpoint."""
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from rollcall.api.deps import get_db, require_roles, TIMEZONE
from rollcall.core.constants import ROLE_ADMIN
from rollcall.core.exceptions import StoreError
from rollcall.core.rate_limit import limiter, RATE_LIMITS
from rollcall.schemas import AttendanceStats, StatsEnvelope
from rollcall.services.identity import Identity
from rollcall.services.stats import get_stats

router = APIRouter()


@router.get("", response_model=StatsEnvelope)
@limiter.limit(RATE_LIMITS["read"])
async def get_stats_endpoint(
    request: Request,
    identity: Identity = Depends(require_roles(ROLE_ADMIN)),
    db: Session = Depends(get_db)
):
    """Attendance totals for today and all time (admin only)."""
    try:
        stats = get_stats(db, tz=TIMEZONE)
    except StoreError:
        raise HTTPException(status_code=500, detail="Failed to fetch stats")
    return StatsEnvelope(stats=AttendanceStats(**stats))

"""Profile endpoints for the signed-in caller."""
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from rollcall.api.deps import get_db, get_current_identity
from rollcall.core.exceptions import StoreError
from rollcall.core.rate_limit import limiter, RATE_LIMITS, get_client_ip
from rollcall.schemas import ProfileEnvelope, ProfileOut, ProfileUpdate
from rollcall.services.identity import Identity
from rollcall.services.profiles import get_profile, save_profile

router = APIRouter()

MAX_USER_AGENT_LENGTH = 500


@router.get("/me", response_model=ProfileEnvelope)
@limiter.limit(RATE_LIMITS["read"])
async def get_my_profile(
    request: Request,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    """Get the caller's profile; ``{"user": null}`` until they set a name."""
    try:
        profile = get_profile(db, identity.id)
    except StoreError:
        raise HTTPException(status_code=500, detail="Failed to fetch profile")
    if profile is None:
        return ProfileEnvelope(user=None)
    return ProfileEnvelope(user=ProfileOut.model_validate(profile))


@router.post("/me", response_model=ProfileEnvelope)
@limiter.limit(RATE_LIMITS["profile_write"])
async def save_my_profile(
    request: Request,
    profile_data: ProfileUpdate,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    """
    Create or update the caller's profile.

    First save creates an attendee profile; later saves may change the name
    and email but never the role. Every name change is written to the audit
    log along with the client IP and user agent.

    Example:
        Request:
            POST /api/v1/users/me
            {"full_name": "Ada Lovelace", "email": "ada@example.com"}

        Response (200):
            {"user": {"user_id": "...", "full_name": "Ada Lovelace", "role": "attendee", ...}}
    """
    user_agent = (request.headers.get("User-Agent") or "unknown")[:MAX_USER_AGENT_LENGTH]
    try:
        profile = save_profile(
            db,
            identity.id,
            profile_data.full_name,
            profile_data.email,
            ip_address=get_client_ip(request) or "unknown",
            user_agent=user_agent,
        )
    except StoreError:
        raise HTTPException(status_code=500, detail="Failed to save profile")
    return ProfileEnvelope(user=ProfileOut.model_validate(profile))

"""Check-in endpoints."""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from rollcall.api.deps import get_db, get_current_identity, TIMEZONE
from rollcall.core.constants import ROLE_ADMIN
from rollcall.core.exceptions import ForbiddenError, SessionValidationError, StoreError
from rollcall.core.logging_config import get_logger
from rollcall.core.rate_limit import limiter, RATE_LIMITS
from rollcall.core.sanitization import validate_token_format
from rollcall.schemas import CheckinList, CheckinOut, CheckinRequest, CheckinResponse, ErrorResponse, ProfileOut
from rollcall.services.checkin import list_checkins, record_checkin
from rollcall.services.identity import Identity, authorize
from rollcall.services.sessions import validate_token

logger = get_logger(__name__)
router = APIRouter()


def _checkin_error(message: str, code: str, status_code: int = 400) -> JSONResponse:
    body = ErrorResponse(error=message, code=code)
    return JSONResponse(status_code=status_code, content=body.model_dump())


@router.post(
    "",
    response_model=CheckinResponse,
    response_model_exclude_none=True,
    responses={400: {"model": ErrorResponse}},
)
@limiter.limit(RATE_LIMITS["check_in"])
async def checkin_endpoint(
    request: Request,
    checkin_request: CheckinRequest,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    """
    Redeem a scanned check-in token (idempotent per day).

    The first successful redemption of the local day records attendance;
    any later redemption that day, with this or any other live token,
    returns the same check-in with ``alreadyCheckedIn: true`` and writes
    nothing.

    Args:
        request: FastAPI Request (for rate limiting)
        checkin_request: Body with the token from the QR code
        identity: Resolved caller (injected)
        db: Database session (injected)

    Returns:
        CheckinResponse with the check-in record

    Failure bodies (400) carry ``code`` so the client can branch:
        - invalid_token: missing or malformed token
        - profile_required: caller must set a display name first
        - token_not_found: token was never issued
        - token_expired: token is past its expiry; rescan the current QR code

    Example:
        Request:
            POST /api/v1/checkins
            Authorization: Bearer eyJhbGc...
            {"token": "q3N0d2x0YnJ3d1V1b0ZkT2hQa0x5"}

        Response (200, first scan today):
            {
                "success": true,
                "checkin": {"id": 5, "user_id": "...", "session_id": 17, ...},
                "message": "Successfully checked in!"
            }

        Response (200, repeat scan):
            {
                "success": true,
                "checkin": {"id": 5, ...},
                "message": "You have already checked in today",
                "alreadyCheckedIn": true
            }

        Response (400):
            {
                "success": false,
                "error": "QR code has expired. Please scan the current QR code.",
                "code": "token_expired"
            }
    """
    if checkin_request.token is None:
        return _checkin_error("Missing session token", "invalid_token")
    try:
        token = validate_token_format(checkin_request.token)
    except ValueError as e:
        return _checkin_error(str(e), "invalid_token")

    # The client prompts for a display name; the recorder never invents one
    if not identity.has_profile:
        return _checkin_error("Please tell us your name before checking in", "profile_required")

    try:
        session = validate_token(db, token)
    except SessionValidationError as e:
        logger.info("checkin_rejected", reason=e.code)
        return _checkin_error(e.message, e.code)
    except StoreError:
        raise HTTPException(status_code=500, detail="Internal server error")

    try:
        result = record_checkin(db, identity, session, tz=TIMEZONE)
    except StoreError:
        raise HTTPException(status_code=500, detail="Failed to record check-in")

    if result.already_checked_in:
        return CheckinResponse(
            checkin=CheckinOut.model_validate(result.checkin),
            message="You have already checked in today",
            alreadyCheckedIn=True,
        )

    return CheckinResponse(
        checkin=CheckinOut.model_validate(result.checkin),
        message="Successfully checked in!",
    )


@router.get("", response_model=CheckinList, response_model_exclude_none=True)
@limiter.limit(RATE_LIMITS["read"])
async def list_checkins_endpoint(
    request: Request,
    scope: Optional[str] = Query(None, pattern="^(mine|all)$"),
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    """
    List check-ins, newest first.

    Attendees get their own. Admins may pass ``scope=all`` to get everyone's,
    each enriched with the attendee's profile (``user``), which is absent for
    attendees who never saved one.
    """
    include_all = scope == "all"
    if include_all:
        try:
            authorize(identity, [ROLE_ADMIN])
        except ForbiddenError as e:
            raise HTTPException(status_code=e.status_code, detail=e.message)

    try:
        rows = list_checkins(db, identity, include_all=include_all)
    except StoreError:
        raise HTTPException(status_code=500, detail="Failed to fetch checkins")

    checkins = []
    for checkin_record, profile in rows:
        item = CheckinOut.model_validate(checkin_record)
        if profile is not None:
            item.user = ProfileOut.model_validate(profile)
        checkins.append(item)

    return CheckinList(checkins=checkins)

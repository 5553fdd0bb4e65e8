"""Check-in session endpoints."""
from fastapi import APIRouter, Depends, HTTPException, Request, Response
from sqlalchemy.orm import Session

from rollcall.api.deps import get_db, require_roles
from rollcall.core import config
from rollcall.core.constants import ROLE_ADMIN
from rollcall.core.exceptions import StoreError
from rollcall.core.rate_limit import limiter, RATE_LIMITS
from rollcall.presenter.render import checkin_url, generate_qr_svg
from rollcall.schemas import SessionEnvelope, SessionOut
from rollcall.services.identity import Identity
from rollcall.services.sessions import get_current_session, issue_session

router = APIRouter()


@router.post("", response_model=SessionEnvelope)
@limiter.limit(RATE_LIMITS["issue_session"])
async def issue_session_endpoint(
    request: Request,
    identity: Identity = Depends(require_roles(ROLE_ADMIN)),
    db: Session = Depends(get_db)
):
    """
    Mint a fresh check-in token (admin only).

    The presenter calls this on every rotation. Each call creates a new
    session row; earlier sessions are never deleted or shortened, so a token
    already on an attendee's screen keeps working until its own expiry.

    Returns:
        SessionEnvelope with the new session

    Raises:
        HTTPException: 401 if unauthenticated
        HTTPException: 403 if the caller is not an admin
        HTTPException: 500 on store failure

    Example:
        Request:
            POST /api/v1/sessions
            Authorization: Bearer eyJhbGc...

        Response (200):
            {
                "session": {
                    "id": 17,
                    "token": "q3N0d2x0YnJ3d1V1b0ZkT2hQa0x5",
                    "created_by": "0b5e...",
                    "created_at": "2026-10-19T14:00:00Z",
                    "expires_at": "2026-10-19T14:03:05Z"
                }
            }
    """
    try:
        session = issue_session(db, identity)
    except StoreError:
        raise HTTPException(status_code=500, detail="Failed to create session")
    return SessionEnvelope(session=SessionOut.model_validate(session))


@router.get("/current", response_model=SessionEnvelope)
async def current_session_endpoint(
    identity: Identity = Depends(require_roles(ROLE_ADMIN)),
    db: Session = Depends(get_db)
):
    """
    Get the newest unexpired session (admin only).

    Returns ``{"session": null}`` when nothing is live, e.g. on first load or
    after the presenter was down for longer than the TTL.
    """
    try:
        session = get_current_session(db)
    except StoreError:
        raise HTTPException(status_code=500, detail="Failed to fetch session")
    if session is None:
        return SessionEnvelope(session=None)
    return SessionEnvelope(session=SessionOut.model_validate(session))


@router.get(
    "/current/qr",
    response_class=Response,
    responses={200: {"content": {"image/svg+xml": {}}}, 404: {"description": "No live session"}},
)
async def current_session_qr_endpoint(
    identity: Identity = Depends(require_roles(ROLE_ADMIN)),
    db: Session = Depends(get_db)
):
    """
    QR code (SVG) for the newest live session's check-in URL (admin only).

    Lets a browser presenter screen show the code without rendering it
    client-side. The image is never cached since it changes every rotation.
    """
    try:
        session = get_current_session(db)
    except StoreError:
        raise HTTPException(status_code=500, detail="Failed to fetch session")
    if session is None:
        raise HTTPException(status_code=404, detail="No active session")

    svg = generate_qr_svg(checkin_url(config.settings.CHECKIN_BASE_URL, session.token))
    return Response(
        content=svg,
        media_type="image/svg+xml",
        headers={"Cache-Control": "no-store"},
    )

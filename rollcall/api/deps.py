"""Shared API dependencies."""
from typing import Callable, Optional

import structlog
from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from rollcall.db import get_db
from rollcall.core.config import settings
from rollcall.core.exceptions import AuthError
from rollcall.services.identity import Identity, authorize, resolve_identity

# Day boundaries for check-ins and stats
TIMEZONE = settings.tz

BEARER_SCHEME = "bearer"


def get_bearer_credential(authorization: Optional[str] = Header(None)) -> str:
    """Extract the raw credential from an ``Authorization: Bearer ...`` header."""
    scheme, _, credential = (authorization or "").partition(" ")
    # Scheme names are case-insensitive
    if scheme.lower() != BEARER_SCHEME or not credential.strip():
        raise HTTPException(
            status_code=401,
            detail="Missing or invalid authorization header",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return credential.strip()


async def get_current_identity(
    credential: str = Depends(get_bearer_credential),
    db: Session = Depends(get_db),
) -> Identity:
    """Resolve the caller on every request; roles are never cached between calls."""
    # Must stay async: sync dependencies run on a copied context and the user_id binding would be lost
    try:
        identity = resolve_identity(db, credential)
    except AuthError as e:
        headers = {"WWW-Authenticate": "Bearer"} if e.status_code == 401 else None
        raise HTTPException(status_code=e.status_code, detail=e.message, headers=headers)

    structlog.contextvars.bind_contextvars(user_id=identity.id)
    return identity


def require_roles(*allowed_roles: str) -> Callable[..., Identity]:
    """
    Role gate as a FastAPI dependency.

    Usage:
        @router.post("", dependencies=[Depends(require_roles("admin"))])
        async def endpoint(identity: Identity = Depends(require_roles("admin"))): ...

    With no roles any authenticated identity passes.
    """
    def dependency(identity: Identity = Depends(get_current_identity)) -> Identity:
        try:
            authorize(identity, allowed_roles)
        except AuthError as e:
            raise HTTPException(status_code=e.status_code, detail=e.message)
        return identity

    return dependency


__all__ = [
    "get_db",
    "get_bearer_credential",
    "get_current_identity",
    "require_roles",
    "TIMEZONE",
]

"""Admin maintenance endpoints."""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from rollcall.api.deps import get_db, require_roles
from rollcall.core import config
from rollcall.core.constants import ROLE_ADMIN
from rollcall.core.exceptions import StoreError
from rollcall.schemas import PruneResponse
from rollcall.services.sessions import prune_sessions

router = APIRouter(dependencies=[Depends(require_roles(ROLE_ADMIN))])


@router.post("/sessions/prune", response_model=PruneResponse)
async def prune_sessions_endpoint(
    days: Optional[int] = Query(None, ge=0),
    db: Session = Depends(get_db)
):
    """
    Delete expired sessions that no check-in references (admin only).

    Only sessions that expired more than ``days`` days ago are considered.
    Without ``days`` the SESSION_RETENTION_DAYS setting applies; if that is
    unset too, nothing is pruned and 400 is returned.
    """
    older_than_days = days if days is not None else config.settings.SESSION_RETENTION_DAYS
    if older_than_days is None:
        raise HTTPException(
            status_code=400,
            detail="No retention window: pass ?days= or set SESSION_RETENTION_DAYS",
        )

    try:
        deleted = prune_sessions(db, older_than_days)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StoreError:
        raise HTTPException(status_code=500, detail="Failed to prune sessions")

    return PruneResponse(deleted=deleted)

"""Main API router for v1."""
from fastapi import APIRouter

from rollcall.api.v1.endpoints import admin, checkins, sessions, stats, users

api_router = APIRouter(prefix="/api/v1")

# Include all endpoint routers
api_router.include_router(sessions.router, prefix="/sessions", tags=["Sessions"])
api_router.include_router(checkins.router, prefix="/checkins", tags=["Check-ins"])
api_router.include_router(users.router, prefix="/users", tags=["Users"])
api_router.include_router(stats.router, prefix="/stats", tags=["Stats"])
api_router.include_router(admin.router, prefix="/admin", tags=["Admin"])

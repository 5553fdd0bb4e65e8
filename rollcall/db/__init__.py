"""Database package."""
from rollcall.db.session import engine, SessionLocal, get_db
from rollcall.db.base import Base

__all__ = ["engine", "SessionLocal", "get_db", "Base"]

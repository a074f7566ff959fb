"""Reusable FastAPI dependencies."""

from .database import get_db_session

__all__ = ["get_db_session"]

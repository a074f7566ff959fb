"""Database session dependency."""

from collections.abc import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.infrastructure.database import session_scope
from backoffice.infrastructure.database.repositories.audit_repository import CLIENT_IP_KEY


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Per-request unit of work tagged with the caller's address for audit entries."""
    info = {CLIENT_IP_KEY: request.client.host} if request.client is not None else {}
    async with session_scope(**info) as session:
        yield session


__all__ = ["CLIENT_IP_KEY", "get_db_session"]

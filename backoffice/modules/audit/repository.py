"""Repository protocol for audit log entries."""

from __future__ import annotations

from typing import Any, Protocol, Sequence

from backoffice.db.models import AuditLog as AuditLogModel


class AuditRepository(Protocol):
    async def add_entry(
        self,
        *,
        user_id: str | None,
        action: str,
        entity_type: str,
        entity_id: str | None,
        old_values: dict[str, Any] | None,
        new_values: dict[str, Any] | None,
    ) -> AuditLogModel:
        ...

    async def list_entries(
        self,
        *,
        entity_type: str | None,
        entity_id: str | None,
        limit: int,
        offset: int,
    ) -> Sequence[AuditLogModel]:
        ...

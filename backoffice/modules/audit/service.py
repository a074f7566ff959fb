"""Audit trail for back-office mutations."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Mapping

from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.db.models import AuditLog as AuditLogModel

from .models import AuditEntry
from .repository import AuditRepository


def _jsonable(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


def _snapshot(values: Mapping[str, Any] | None) -> dict[str, Any] | None:
    if values is None:
        return None
    return {key: _jsonable(value) for key, value in values.items()}


@dataclass(slots=True)
class AuditService:
    repository: AuditRepository

    @classmethod
    def with_session(cls, session: AsyncSession) -> "AuditService":
        from backoffice.infrastructure.database.repositories.audit_repository import SqlAuditRepository

        return cls(SqlAuditRepository(session))

    async def record(
        self,
        *,
        actor_id: str | None,
        action: str,
        entity_type: str,
        entity_id: str | None,
        old_values: Mapping[str, Any] | None = None,
        new_values: Mapping[str, Any] | None = None,
    ) -> AuditEntry:
        row = await self.repository.add_entry(
            user_id=actor_id,
            action=action,
            entity_type=entity_type,
            entity_id=entity_id,
            old_values=_snapshot(old_values),
            new_values=_snapshot(new_values),
        )
        return self._to_domain(row)

    async def list_entries(
        self,
        *,
        entity_type: str | None = None,
        entity_id: str | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[AuditEntry]:
        rows = await self.repository.list_entries(
            entity_type=entity_type,
            entity_id=entity_id,
            limit=limit,
            offset=offset,
        )
        return [self._to_domain(row) for row in rows]

    @staticmethod
    def _to_domain(model: AuditLogModel) -> AuditEntry:
        return AuditEntry(
            id=model.id,
            user_id=model.user_id,
            action=model.action,
            entity_type=model.entity_type,
            entity_id=model.entity_id,
            old_values=model.old_values,
            new_values=model.new_values,
            created_at=model.created_at,
            ip_address=model.ip_address,
        )

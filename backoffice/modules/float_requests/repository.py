"""Repository protocol for float requests."""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Protocol, Sequence

from backoffice.db.models import FloatRequest as FloatRequestModel


class FloatRequestRepository(Protocol):
    async def create(
        self,
        *,
        agent_id: str,
        amount: Decimal,
        currency: str,
        urgency: str,
        reason: str,
        notes: str | None,
    ) -> FloatRequestModel:
        ...

    async def get(self, request_id: str) -> FloatRequestModel | None:
        ...

    async def list(
        self,
        *,
        agent_id: str | None,
        status: str | None,
        limit: int,
        offset: int,
    ) -> Sequence[FloatRequestModel]:
        ...

    async def update_status(
        self,
        request_id: str,
        *,
        expected: str,
        values: dict[str, Any],
    ) -> FloatRequestModel | None:
        ...

    async def count_by_status(self, status: str) -> int:
        ...

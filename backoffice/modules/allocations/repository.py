"""Repository protocol for float allocation history."""

from __future__ import annotations

from decimal import Decimal
from typing import Protocol, Sequence

from backoffice.db.models import FloatAllocation as FloatAllocationModel


class AllocationRepository(Protocol):
    async def create(
        self,
        *,
        agent_id: str,
        allocated_by: str | None,
        amount: Decimal,
        currency: str,
        notes: str | None,
        float_request_id: str | None,
    ) -> FloatAllocationModel:
        ...

    async def list(
        self,
        *,
        agent_id: str | None,
        float_request_id: str | None,
        limit: int,
        offset: int,
    ) -> Sequence[FloatAllocationModel]:
        ...

"""SQLAlchemy implementation for float allocation history"""

from __future__ import annotations

from decimal import Decimal
from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.db.models import FloatAllocation


class SqlAllocationRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(
        self,
        *,
        agent_id: str,
        allocated_by: str | None,
        amount: Decimal,
        currency: str,
        notes: str | None,
        float_request_id: str | None,
    ) -> FloatAllocation:
        allocation = FloatAllocation(
            agent_id=agent_id,
            allocated_by=allocated_by,
            amount=amount,
            currency=currency,
            notes=notes,
            float_request_id=float_request_id,
        )
        self.session.add(allocation)
        await self.session.flush()
        await self.session.refresh(allocation)
        return allocation

    async def list(
        self,
        *,
        agent_id: str | None,
        float_request_id: str | None,
        limit: int,
        offset: int,
    ) -> Sequence[FloatAllocation]:
        stmt = select(FloatAllocation)
        if agent_id:
            stmt = stmt.where(FloatAllocation.agent_id == agent_id)
        if float_request_id:
            stmt = stmt.where(FloatAllocation.float_request_id == float_request_id)
        stmt = stmt.order_by(FloatAllocation.created_at.desc()).offset(offset).limit(limit)
        result = await self.session.execute(stmt)
        return result.scalars().all()

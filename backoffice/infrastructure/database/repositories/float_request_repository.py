"""SQLAlchemy implementation for float requests"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Sequence

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.db.models import FloatRequest


class SqlFloatRequestRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(
        self,
        *,
        agent_id: str,
        amount: Decimal,
        currency: str,
        urgency: str,
        reason: str,
        notes: str | None,
    ) -> FloatRequest:
        request = FloatRequest(
            agent_id=agent_id,
            amount=amount,
            currency=currency,
            urgency=urgency,
            reason=reason,
            notes=notes,
            status="pending",
        )
        self.session.add(request)
        await self.session.flush()
        await self.session.refresh(request)
        return request

    async def get(self, request_id: str) -> FloatRequest | None:
        stmt = select(FloatRequest).where(FloatRequest.id == request_id).execution_options(populate_existing=True)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def list(
        self,
        *,
        agent_id: str | None,
        status: str | None,
        limit: int,
        offset: int,
    ) -> Sequence[FloatRequest]:
        stmt = select(FloatRequest)
        if agent_id:
            stmt = stmt.where(FloatRequest.agent_id == agent_id)
        if status:
            stmt = stmt.where(FloatRequest.status == status)
        stmt = stmt.order_by(FloatRequest.created_at.desc()).offset(offset).limit(limit)
        result = await self.session.execute(stmt)
        return result.scalars().all()

    async def update_status(
        self,
        request_id: str,
        *,
        expected: str,
        values: dict[str, Any],
    ) -> FloatRequest | None:
        stmt = (
            update(FloatRequest)
            .where(FloatRequest.id == request_id, FloatRequest.status == expected)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        if result.rowcount == 0:
            return None
        return await self.get(request_id)

    async def count_by_status(self, status: str) -> int:
        stmt = select(func.count()).select_from(FloatRequest).where(FloatRequest.status == status)
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

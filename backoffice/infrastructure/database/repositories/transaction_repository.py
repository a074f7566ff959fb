"""SQLAlchemy implementation for the transaction repository"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Collection, Sequence

from sqlalchemy import desc, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.db.models import Transaction


class SqlTransactionRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(
        self,
        *,
        agent_id: str,
        transaction_type: str,
        amount: Decimal,
        currency: str,
        recipient_phone: str,
        recipient_name: str | None,
        metadata: dict[str, Any],
    ) -> Transaction:
        tx = Transaction(
            agent_id=agent_id,
            transaction_type=transaction_type,
            amount=amount,
            currency=currency,
            recipient_phone=recipient_phone,
            recipient_name=recipient_name,
            metadata_=metadata,
            status="pending",
            approval_status="pending",
        )
        self.session.add(tx)
        await self.session.flush()
        await self.session.refresh(tx)
        return tx

    async def get(self, transaction_id: str) -> Transaction | None:
        stmt = (
            select(Transaction)
            .where(Transaction.id == transaction_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def list(
        self,
        *,
        approval_status: str | None,
        agent_id: str | None,
        limit: int,
        offset: int,
    ) -> Sequence[Transaction]:
        stmt = select(Transaction)
        if approval_status and approval_status != "all":
            stmt = stmt.where(Transaction.approval_status == approval_status)
        if agent_id:
            stmt = stmt.where(Transaction.agent_id == agent_id)
        stmt = stmt.order_by(desc(Transaction.created_at)).offset(offset).limit(limit)
        result = await self.session.execute(stmt)
        return result.scalars().all()

    async def list_escalated(self, limit: int, offset: int) -> Sequence[Transaction]:
        stmt = (
            select(Transaction)
            .where(Transaction.approval_status == "escalated")
            .order_by(desc(Transaction.escalated_at))
            .offset(offset)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return result.scalars().all()

    async def update_status(
        self,
        transaction_id: str,
        *,
        expected: Collection[str],
        values: dict[str, Any],
    ) -> Transaction | None:
        stmt = (
            update(Transaction)
            .where(Transaction.id == transaction_id)
            .where(Transaction.approval_status.in_(list(expected)))
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        if result.rowcount == 0:
            return None
        return await self.get(transaction_id)

    async def approved_volume(self, agent_id: str, *, transaction_type: str, currency: str) -> Decimal:
        stmt = select(func.coalesce(func.sum(Transaction.amount), 0)).where(
            Transaction.agent_id == agent_id,
            Transaction.transaction_type == transaction_type,
            Transaction.currency == currency,
            Transaction.approval_status == "approved",
        )
        result = await self.session.execute(stmt)
        return Decimal(str(result.scalar_one()))

    async def count_by_approval_status(self) -> dict[str, int]:
        stmt = select(Transaction.approval_status, func.count()).group_by(Transaction.approval_status)
        result = await self.session.execute(stmt)
        return {status: count for status, count in result.all()}

    async def approved_volume_by_currency(self) -> dict[str, Decimal]:
        stmt = (
            select(Transaction.currency, func.coalesce(func.sum(Transaction.amount), 0))
            .where(Transaction.approval_status == "approved")
            .group_by(Transaction.currency)
        )
        result = await self.session.execute(stmt)
        return {currency: Decimal(str(total)) for currency, total in result.all()}

"""Direct float allocation and allocation history."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.db.models import FloatAllocation as FloatAllocationModel
from backoffice.modules.accounts import Account, AccountService
from backoffice.modules.audit import AuditService
from backoffice.modules.wallets import WalletService, WalletSnapshot

from .exceptions import AgentNotFoundError
from .models import AllocationInput, AllocationRecord
from .repository import AllocationRepository

logger = logging.getLogger(__name__)

ENTITY_TYPE = "float_allocation"


@dataclass(slots=True)
class AllocationService:
    repository: AllocationRepository
    accounts: AccountService
    wallets: WalletService
    audit: AuditService

    @classmethod
    def with_session(cls, session: AsyncSession) -> "AllocationService":
        from backoffice.infrastructure.database.repositories.allocation_repository import (
            SqlAllocationRepository,
        )

        return cls(
            SqlAllocationRepository(session),
            AccountService.with_session(session),
            WalletService.with_session(session),
            AuditService.with_session(session),
        )

    async def record(
        self,
        *,
        agent_id: str,
        allocated_by: str | None,
        amount: Decimal,
        currency: str,
        notes: str | None = None,
        float_request_id: str | None = None,
    ) -> AllocationRecord:
        """Append an allocation history row without touching balances."""
        model = await self.repository.create(
            agent_id=agent_id,
            allocated_by=allocated_by,
            amount=amount,
            currency=currency,
            notes=notes,
            float_request_id=float_request_id,
        )
        return self._to_domain(model)

    async def allocate(
        self, allocator: Account, payload: AllocationInput
    ) -> tuple[AllocationRecord, WalletSnapshot]:
        agent = await self.accounts.get_by_id(payload.agent_id)
        if agent is None:
            logger.warning("Allocation by %s to unknown agent %s", allocator.id, payload.agent_id)
            raise AgentNotFoundError(payload.agent_id)

        allocation = await self.record(
            agent_id=agent.id,
            allocated_by=allocator.id,
            amount=payload.amount,
            currency=payload.currency,
            notes=payload.notes,
        )
        wallet = await self.wallets.credit(agent.id, payload.currency, payload.amount)

        await self.audit.record(
            actor_id=allocator.id,
            action="allocate",
            entity_type=ENTITY_TYPE,
            entity_id=allocation.id,
            new_values={
                "agent_id": agent.id,
                "amount": payload.amount,
                "currency": payload.currency,
                "balance": wallet.balance,
            },
        )
        logger.info(
            "Allocated %s %s to %s by %s", payload.amount, payload.currency, agent.id, allocator.id
        )
        return allocation, wallet

    async def list_allocations(
        self,
        *,
        agent_id: str | None = None,
        float_request_id: str | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[AllocationRecord]:
        rows = await self.repository.list(
            agent_id=agent_id,
            float_request_id=float_request_id,
            limit=limit,
            offset=offset,
        )
        return [self._to_domain(row) for row in rows]

    @staticmethod
    def _to_domain(model: FloatAllocationModel) -> AllocationRecord:
        return AllocationRecord(
            id=model.id,
            agent_id=model.agent_id,
            allocated_by=model.allocated_by,
            float_request_id=model.float_request_id,
            amount=model.amount,
            currency=model.currency,
            notes=model.notes,
            created_at=model.created_at,
        )

"""Float request review.

Approval credits the requesting agent's wallet and appends an allocation
history row. All writes share the caller's session, so the request status,
the balance and the history row commit or roll back together.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.db.models import FloatRequest as FloatRequestModel
from backoffice.modules.accounts import Account
from backoffice.modules.allocations import AllocationRecord, AllocationService
from backoffice.modules.audit import AuditService
from backoffice.modules.common.validation import ensure_reason, limits
from backoffice.modules.transactions.exceptions import ReasonRequiredError
from backoffice.modules.wallets import WalletService, WalletSnapshot

from .exceptions import FloatRequestNotFoundError, FloatRequestStateError
from .models import FloatRequestInput, FloatRequestRecord, FloatRequestStatus
from .repository import FloatRequestRepository

logger = logging.getLogger(__name__)

ENTITY_TYPE = "float_request"


@dataclass(slots=True)
class FloatApproval:
    request: FloatRequestRecord
    wallet: WalletSnapshot
    allocation: AllocationRecord


@dataclass(slots=True)
class FloatRequestService:
    repository: FloatRequestRepository
    wallets: WalletService
    allocations: AllocationService
    audit: AuditService

    @classmethod
    def with_session(cls, session: AsyncSession) -> "FloatRequestService":
        from backoffice.infrastructure.database.repositories.float_request_repository import (
            SqlFloatRequestRepository,
        )

        return cls(
            SqlFloatRequestRepository(session),
            WalletService.with_session(session),
            AllocationService.with_session(session),
            AuditService.with_session(session),
        )

    async def create(self, agent: Account, payload: FloatRequestInput) -> FloatRequestRecord:
        model = await self.repository.create(
            agent_id=agent.id,
            amount=payload.amount,
            currency=payload.currency,
            urgency=payload.urgency,
            reason=payload.reason,
            notes=payload.notes,
        )
        logger.info("Float request %s for %s %s opened by %s", model.id, payload.amount, payload.currency, agent.id)
        return self._to_domain(model)

    async def get(self, request_id: str) -> FloatRequestRecord:
        model = await self.repository.get(request_id)
        if model is None:
            raise FloatRequestNotFoundError(request_id)
        return self._to_domain(model)

    async def list_requests(
        self,
        viewer: Account,
        *,
        status: str | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[FloatRequestRecord]:
        """Reviewers see every request; other roles only their own."""
        agent_id = None if viewer.is_reviewer() else viewer.id
        if status == "all":
            status = None
        rows = await self.repository.list(agent_id=agent_id, status=status, limit=limit, offset=offset)
        return [self._to_domain(row) for row in rows]

    async def count_pending(self) -> int:
        return await self.repository.count_by_status(FloatRequestStatus.PENDING.value)

    async def approve(self, request_id: str, reviewer: Account) -> FloatApproval:
        request = await self._mark(
            request_id,
            FloatRequestStatus.APPROVED,
            {
                "status": FloatRequestStatus.APPROVED.value,
                "reviewed_by": reviewer.id,
                "reviewed_at": datetime.now(timezone.utc),
            },
        )

        wallet = await self.wallets.credit(request.agent_id, request.currency, request.amount)
        allocation = await self.allocations.record(
            agent_id=request.agent_id,
            allocated_by=reviewer.id,
            amount=request.amount,
            currency=request.currency,
            notes=f"Approved float request: {request.reason}",
            float_request_id=request.id,
        )

        await self.audit.record(
            actor_id=reviewer.id,
            action=FloatRequestStatus.APPROVED.value,
            entity_type=ENTITY_TYPE,
            entity_id=request.id,
            old_values={"status": FloatRequestStatus.PENDING},
            new_values={
                "status": FloatRequestStatus.APPROVED,
                "wallet_id": wallet.id,
                "balance": wallet.balance,
                "allocation_id": allocation.id,
            },
        )
        logger.info(
            "Float request %s approved by %s; wallet %s now %s %s",
            request.id,
            reviewer.id,
            wallet.id,
            wallet.balance,
            wallet.currency,
        )
        return FloatApproval(request=request, wallet=wallet, allocation=allocation)

    async def reject(self, request_id: str, reviewer: Account, reason: str | None) -> FloatRequestRecord:
        cleaned = ensure_reason(reason, limits().max_reason_length)
        if cleaned is None:
            raise ReasonRequiredError("A rejection reason is required")

        request = await self._mark(
            request_id,
            FloatRequestStatus.REJECTED,
            {
                "status": FloatRequestStatus.REJECTED.value,
                "reviewed_by": reviewer.id,
                "reviewed_at": datetime.now(timezone.utc),
                "rejection_reason": cleaned,
            },
        )
        await self.audit.record(
            actor_id=reviewer.id,
            action=FloatRequestStatus.REJECTED.value,
            entity_type=ENTITY_TYPE,
            entity_id=request.id,
            old_values={"status": FloatRequestStatus.PENDING},
            new_values={"status": FloatRequestStatus.REJECTED, "rejection_reason": cleaned},
        )
        logger.info("Float request %s rejected by %s", request.id, reviewer.id)
        return request

    async def _mark(
        self, request_id: str, target: FloatRequestStatus, values: dict[str, Any]
    ) -> FloatRequestRecord:
        current = await self.get(request_id)
        if current.status is not FloatRequestStatus.PENDING:
            logger.warning("Cannot mark float request %s %s: already %s", request_id, target.value, current.status.value)
            raise FloatRequestStateError(request_id, current.status.value)

        model = await self.repository.update_status(
            request_id, expected=FloatRequestStatus.PENDING.value, values=values
        )
        if model is None:
            latest = await self.get(request_id)
            raise FloatRequestStateError(request_id, latest.status.value)
        return self._to_domain(model)

    @staticmethod
    def _to_domain(model: FloatRequestModel) -> FloatRequestRecord:
        return FloatRequestRecord(
            id=model.id,
            agent_id=model.agent_id,
            amount=model.amount,
            currency=model.currency,
            reason=model.reason,
            urgency=model.urgency,
            status=FloatRequestStatus(model.status),
            reviewed_by=model.reviewed_by,
            reviewed_at=model.reviewed_at,
            rejection_reason=model.rejection_reason,
            notes=model.notes,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

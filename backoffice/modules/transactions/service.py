"""Transaction review service.

Implements the approval lifecycle::

    pending ──► approved | rejected | escalated
    escalated ──► approved | rejected

Every status write is conditional on the row still being in a permitted
source state, so two reviewers acting on the same record cannot both win.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.db.models import Transaction as TransactionModel
from backoffice.modules.accounts import Account
from backoffice.modules.audit import AuditService
from backoffice.modules.common.validation import ensure_reason, limits

from .exceptions import InvalidTransitionError, ReasonRequiredError, TransactionNotFoundError
from .models import ApprovalStatus, TransactionInput, TransactionRecord, can_transition, source_states
from .repository import TransactionRepository

logger = logging.getLogger(__name__)

ENTITY_TYPE = "transaction"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(slots=True)
class TransactionService:
    repository: TransactionRepository
    audit: AuditService

    @classmethod
    def with_session(cls, session: AsyncSession) -> "TransactionService":
        from backoffice.infrastructure.database.repositories.transaction_repository import (
            SqlTransactionRepository,
        )

        return cls(SqlTransactionRepository(session), AuditService.with_session(session))

    async def submit(self, agent: Account, payload: TransactionInput) -> TransactionRecord:
        model = await self.repository.create(
            agent_id=agent.id,
            transaction_type=payload.transaction_type,
            amount=payload.amount,
            currency=payload.currency,
            recipient_phone=payload.recipient_phone,
            recipient_name=payload.recipient_name,
            metadata=payload.metadata,
        )
        logger.info("Transaction %s submitted by %s", model.id, agent.id)
        return self._to_domain(model)

    async def get(self, transaction_id: str) -> TransactionRecord:
        model = await self.repository.get(transaction_id)
        if model is None:
            raise TransactionNotFoundError(transaction_id)
        return self._to_domain(model)

    async def list_transactions(
        self,
        *,
        approval_status: str | None = None,
        agent_id: str | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[TransactionRecord]:
        rows = await self.repository.list(
            approval_status=approval_status,
            agent_id=agent_id,
            limit=limit,
            offset=offset,
        )
        return [self._to_domain(row) for row in rows]

    async def list_escalated(self, limit: int = 50, offset: int = 0) -> list[TransactionRecord]:
        rows = await self.repository.list_escalated(limit, offset)
        return [self._to_domain(row) for row in rows]

    async def approve(self, transaction_id: str, reviewer: Account) -> TransactionRecord:
        return await self._transition(
            transaction_id,
            ApprovalStatus.APPROVED,
            reviewer,
            {
                "approval_status": ApprovalStatus.APPROVED.value,
                "status": ApprovalStatus.APPROVED.value,
                "approved_by": reviewer.id,
                "approved_at": utcnow(),
            },
        )

    async def reject(self, transaction_id: str, reviewer: Account, reason: str | None) -> TransactionRecord:
        cleaned = ensure_reason(reason, limits().max_reason_length)
        if cleaned is None:
            raise ReasonRequiredError("A rejection reason is required")
        return await self._transition(
            transaction_id,
            ApprovalStatus.REJECTED,
            reviewer,
            {
                "approval_status": ApprovalStatus.REJECTED.value,
                "status": ApprovalStatus.REJECTED.value,
                "approved_by": reviewer.id,
                "approved_at": utcnow(),
                "rejection_reason": cleaned,
            },
        )

    async def escalate(self, transaction_id: str, escalator: Account, reason: str | None) -> TransactionRecord:
        cleaned = ensure_reason(reason, limits().max_reason_length)
        if cleaned is None:
            raise ReasonRequiredError("An escalation reason is required")
        return await self._transition(
            transaction_id,
            ApprovalStatus.ESCALATED,
            escalator,
            {
                "approval_status": ApprovalStatus.ESCALATED.value,
                "escalated_by": escalator.id,
                "escalated_at": utcnow(),
                "escalation_reason": cleaned,
            },
        )

    async def approved_volume(self, agent_id: str, *, transaction_type: str, currency: str) -> Decimal:
        return await self.repository.approved_volume(
            agent_id, transaction_type=transaction_type, currency=currency
        )

    async def status_counts(self) -> dict[str, int]:
        counts = {status.value: 0 for status in ApprovalStatus}
        counts.update(await self.repository.count_by_approval_status())
        return counts

    async def approved_volume_by_currency(self) -> dict[str, Decimal]:
        return await self.repository.approved_volume_by_currency()

    async def _transition(
        self,
        transaction_id: str,
        target: ApprovalStatus,
        actor: Account,
        values: dict[str, Any],
    ) -> TransactionRecord:
        current = await self.get(transaction_id)
        if not can_transition(current.approval_status, target):
            logger.warning(
                "Rejected %s on transaction %s in state %s",
                target.value,
                transaction_id,
                current.approval_status.value,
            )
            raise InvalidTransitionError(transaction_id, current.approval_status.value, target.value)

        model = await self.repository.update_status(
            transaction_id,
            expected=[state.value for state in source_states(target)],
            values=values,
        )
        if model is None:
            # Another reviewer moved the record between our read and write.
            latest = await self.get(transaction_id)
            raise InvalidTransitionError(transaction_id, latest.approval_status.value, target.value)

        await self.audit.record(
            actor_id=actor.id,
            action=target.value,
            entity_type=ENTITY_TYPE,
            entity_id=transaction_id,
            old_values={"approval_status": current.approval_status},
            new_values=values,
        )
        logger.info("Transaction %s %s by %s", transaction_id, target.value, actor.id)
        return self._to_domain(model)

    @staticmethod
    def _to_domain(model: TransactionModel) -> TransactionRecord:
        return TransactionRecord(
            id=model.id,
            agent_id=model.agent_id,
            transaction_type=model.transaction_type,
            amount=model.amount,
            currency=model.currency,
            recipient_phone=model.recipient_phone,
            recipient_name=model.recipient_name,
            status=model.status,
            approval_status=ApprovalStatus(model.approval_status),
            approved_by=model.approved_by,
            approved_at=model.approved_at,
            rejection_reason=model.rejection_reason,
            escalated_by=model.escalated_by,
            escalated_at=model.escalated_at,
            escalation_reason=model.escalation_reason,
            commission_amount=model.commission_amount if model.commission_amount is not None else Decimal("0"),
            metadata=dict(model.metadata_ or {}),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )


"""Repository protocol for transactions."""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Collection, Protocol, Sequence

from backoffice.db.models import Transaction as TransactionModel


class TransactionRepository(Protocol):
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
    ) -> TransactionModel:
        ...

    async def get(self, transaction_id: str) -> TransactionModel | None:
        ...

    async def list(
        self,
        *,
        approval_status: str | None,
        agent_id: str | None,
        limit: int,
        offset: int,
    ) -> Sequence[TransactionModel]:
        ...

    async def list_escalated(self, limit: int, offset: int) -> Sequence[TransactionModel]:
        ...

    async def update_status(
        self,
        transaction_id: str,
        *,
        expected: Collection[str],
        values: dict[str, Any],
    ) -> TransactionModel | None:
        ...

    async def approved_volume(self, agent_id: str, *, transaction_type: str, currency: str) -> Decimal:
        ...

    async def count_by_approval_status(self) -> dict[str, int]:
        ...

    async def approved_volume_by_currency(self) -> dict[str, Decimal]:
        ...

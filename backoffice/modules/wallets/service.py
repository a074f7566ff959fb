"""Wallet domain service"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.db.models import Wallet as WalletModel
from backoffice.modules.audit import AuditService

from .exceptions import WalletNotFoundError
from .models import WalletSnapshot
from .repository import WalletRepository

logger = logging.getLogger(__name__)

ENTITY_TYPE = "wallet"


@dataclass(slots=True)
class WalletService:
    repository: WalletRepository
    audit: AuditService

    @classmethod
    def with_session(cls, session: AsyncSession) -> "WalletService":
        from backoffice.infrastructure.database.repositories.wallet_repository import SqlWalletRepository

        return cls(SqlWalletRepository(session), AuditService.with_session(session))

    async def get_wallet(self, owner_id: str, currency: str) -> WalletSnapshot | None:
        wallet = await self.repository.get_wallet(owner_id, currency)
        return self._to_snapshot(wallet) if wallet else None

    async def list_wallets(self, owner_id: str | None = None) -> list[WalletSnapshot]:
        rows = await self.repository.list_wallets(owner_id)
        return [self._to_snapshot(row) for row in rows]

    async def credit(self, owner_id: str, currency: str, amount: Decimal) -> WalletSnapshot:
        """Add ``amount`` to the (owner, currency) wallet, opening it on first credit."""
        wallet = await self.repository.get_wallet(owner_id, currency)
        if wallet is None:
            created = await self.repository.create_wallet(owner_id, currency, amount)
            if created is not None:
                logger.info("Opened %s wallet for %s with %s", currency, owner_id, amount)
                return self._to_snapshot(created)
            # Lost a race with a concurrent opener; fall through to a plain credit.
            wallet = await self.repository.get_wallet(owner_id, currency)
            if wallet is None:
                raise WalletNotFoundError(f"{owner_id}/{currency}")

        updated = await self.repository.add_to_balance(wallet.id, amount)
        if updated is None:
            raise WalletNotFoundError(wallet.id)
        logger.info("Credited %s %s to wallet %s", amount, currency, wallet.id)
        return self._to_snapshot(updated)

    async def top_up(self, wallet_id: str, amount: Decimal, *, actor_id: str) -> WalletSnapshot:
        wallet = await self.repository.get_by_id(wallet_id)
        if wallet is None:
            raise WalletNotFoundError(wallet_id)
        previous = wallet.balance

        updated = await self.repository.add_to_balance(wallet_id, amount)
        if updated is None:
            raise WalletNotFoundError(wallet_id)

        await self.audit.record(
            actor_id=actor_id,
            action="top_up",
            entity_type=ENTITY_TYPE,
            entity_id=wallet_id,
            old_values={"balance": previous},
            new_values={"balance": updated.balance, "amount": amount},
        )
        logger.info("Wallet %s topped up %s -> %s", wallet_id, previous, updated.balance)
        return self._to_snapshot(updated)

    @staticmethod
    def _to_snapshot(model: WalletModel) -> WalletSnapshot:
        return WalletSnapshot(
            id=model.id,
            owner_id=model.user_id,
            currency=model.currency,
            balance=model.balance,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

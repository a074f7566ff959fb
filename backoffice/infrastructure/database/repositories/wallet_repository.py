"""SQLAlchemy implementation for wallet balances"""

from __future__ import annotations

from decimal import Decimal
from typing import Sequence

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.db.models import Wallet


class SqlWalletRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_wallet(self, owner_id: str, currency: str) -> Wallet | None:
        stmt = (
            select(Wallet)
            .where(Wallet.user_id == owner_id, Wallet.currency == currency)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def get_by_id(self, wallet_id: str) -> Wallet | None:
        stmt = select(Wallet).where(Wallet.id == wallet_id).execution_options(populate_existing=True)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def list_wallets(self, owner_id: str | None) -> Sequence[Wallet]:
        stmt = select(Wallet)
        if owner_id:
            stmt = stmt.where(Wallet.user_id == owner_id)
        stmt = stmt.order_by(Wallet.user_id, Wallet.currency)
        result = await self.session.execute(stmt)
        return result.scalars().all()

    async def create_wallet(self, owner_id: str, currency: str, balance: Decimal) -> Wallet | None:
        """Insert a wallet row; returns ``None`` if the (owner, currency) pair already exists."""
        wallet = Wallet(user_id=owner_id, currency=currency, balance=balance)
        try:
            async with self.session.begin_nested():
                self.session.add(wallet)
                await self.session.flush()
        except IntegrityError:
            return None
        await self.session.refresh(wallet)
        return wallet

    async def add_to_balance(self, wallet_id: str, amount: Decimal) -> Wallet | None:
        stmt = (
            update(Wallet)
            .where(Wallet.id == wallet_id)
            .values(balance=Wallet.balance + amount)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        if result.rowcount == 0:
            return None
        return await self.get_by_id(wallet_id)

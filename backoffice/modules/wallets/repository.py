"""Repository protocol for wallet balances."""

from __future__ import annotations

from decimal import Decimal
from typing import Protocol, Sequence

from backoffice.db.models import Wallet as WalletModel


class WalletRepository(Protocol):
    async def get_wallet(self, owner_id: str, currency: str) -> WalletModel | None:
        ...

    async def get_by_id(self, wallet_id: str) -> WalletModel | None:
        ...

    async def list_wallets(self, owner_id: str | None) -> Sequence[WalletModel]:
        ...

    async def create_wallet(self, owner_id: str, currency: str, balance: Decimal) -> WalletModel | None:
        ...

    async def add_to_balance(self, wallet_id: str, amount: Decimal) -> WalletModel | None:
        ...

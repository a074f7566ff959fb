"""Domain models for wallet balances."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass(slots=True)
class WalletSnapshot:
    id: str
    owner_id: str
    currency: str
    balance: Decimal
    created_at: Optional[datetime]
    updated_at: Optional[datetime]


@dataclass(slots=True)
class WalletTopupInput:
    wallet_id: str
    amount: Decimal

"""Payloads for outbound notifications."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional


@dataclass(slots=True)
class TransactionEmail:
    email: str
    full_name: str
    transaction_type: str
    amount: Decimal
    currency: str
    status: str
    transaction_id: str
    recipient_name: Optional[str] = None
    recipient_phone: Optional[str] = None


@dataclass(slots=True)
class WelcomeEmail:
    email: str
    full_name: str
    role: str

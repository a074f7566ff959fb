"""Domain models for agent float requests."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

URGENCY_LEVELS = ("low", "medium", "high", "critical")


class FloatRequestStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


@dataclass(slots=True)
class FloatRequestInput:
    amount: Decimal
    currency: str
    urgency: str
    reason: str
    notes: Optional[str] = None


@dataclass(slots=True)
class FloatRequestRecord:
    id: str
    agent_id: str
    amount: Decimal
    currency: str
    reason: str
    urgency: str
    status: FloatRequestStatus
    reviewed_by: Optional[str]
    reviewed_at: Optional[datetime]
    rejection_reason: Optional[str]
    notes: Optional[str]
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

"""Domain models for float allocations."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass(slots=True)
class AllocationInput:
    agent_id: str
    amount: Decimal
    currency: str
    notes: Optional[str] = None


@dataclass(slots=True)
class AllocationRecord:
    id: str
    agent_id: str
    allocated_by: Optional[str]
    float_request_id: Optional[str]
    amount: Decimal
    currency: str
    notes: Optional[str]
    created_at: Optional[datetime]

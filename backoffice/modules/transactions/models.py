"""Domain models and approval lifecycle for transactions."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

TRANSACTION_TYPES = (
    "airtime",
    "mtn_momo",
    "digicash",
    "m_gurush",
    "mpesa_kenya",
    "uganda_mobile_money",
)


class ApprovalStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    ESCALATED = "escalated"


# Edges of the review lifecycle. Nothing leads back to PENDING.
TRANSITIONS: dict[ApprovalStatus, frozenset[ApprovalStatus]] = {
    ApprovalStatus.PENDING: frozenset(
        {ApprovalStatus.APPROVED, ApprovalStatus.REJECTED, ApprovalStatus.ESCALATED}
    ),
    ApprovalStatus.ESCALATED: frozenset({ApprovalStatus.APPROVED, ApprovalStatus.REJECTED}),
    ApprovalStatus.APPROVED: frozenset(),
    ApprovalStatus.REJECTED: frozenset(),
}


def can_transition(current: ApprovalStatus | str, target: ApprovalStatus | str) -> bool:
    return ApprovalStatus(target) in TRANSITIONS[ApprovalStatus(current)]


def source_states(target: ApprovalStatus) -> frozenset[ApprovalStatus]:
    """States from which ``target`` may be entered."""
    return frozenset(state for state, targets in TRANSITIONS.items() if target in targets)


def is_terminal(status: ApprovalStatus | str) -> bool:
    return not TRANSITIONS[ApprovalStatus(status)]


@dataclass(slots=True)
class TransactionInput:
    transaction_type: str
    amount: Decimal
    currency: str
    recipient_phone: str
    recipient_name: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class TransactionRecord:
    id: str
    agent_id: Optional[str]
    transaction_type: str
    amount: Decimal
    currency: str
    recipient_phone: Optional[str]
    recipient_name: Optional[str]
    status: str
    approval_status: ApprovalStatus
    approved_by: Optional[str]
    approved_at: Optional[datetime]
    rejection_reason: Optional[str]
    escalated_by: Optional[str]
    escalated_at: Optional[datetime]
    escalation_reason: Optional[str]
    commission_amount: Decimal
    metadata: dict[str, Any]
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

"""Domain models for back-office accounts."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

SUPER_AGENT = "super_agent"
SALES_ASSISTANT = "sales_assistant"
SALES_AGENT = "sales_agent"
HR_FINANCE = "hr_finance"

ROLES = frozenset({SUPER_AGENT, SALES_ASSISTANT, SALES_AGENT, HR_FINANCE})
REVIEWER_ROLES = frozenset({SUPER_AGENT, SALES_ASSISTANT})
ACCOUNT_MANAGER_ROLES = frozenset({SUPER_AGENT, HR_FINANCE})


@dataclass(slots=True)
class Account:
    id: str
    email: str
    role: str
    is_active: bool
    password_hash: str = field(repr=False)
    full_name: Optional[str] = None
    phone: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    last_login_at: Optional[datetime] = None

    def is_reviewer(self) -> bool:
        return self.role in REVIEWER_ROLES

    def is_super_agent(self) -> bool:
        return self.role == SUPER_AGENT

    def can_manage_accounts(self) -> bool:
        return self.role in ACCOUNT_MANAGER_ROLES

    def can_assign_role(self, role: str) -> bool:
        """HR/finance staff may create any account except another super agent."""
        if self.is_super_agent():
            return True
        return self.can_manage_accounts() and role != SUPER_AGENT

    @property
    def display_name(self) -> str:
        return self.full_name or self.email


@dataclass(slots=True)
class AccountCreateInput:
    email: str
    password: str
    role: str = SALES_AGENT
    full_name: Optional[str] = None
    phone: Optional[str] = None
    is_active: bool = True


# Sentinel used to differentiate between "not provided" and explicit None.
UNSET = object()


@dataclass(slots=True)
class AccountUpdateInput:
    full_name: Optional[str] | object = UNSET
    phone: Optional[str] | object = UNSET
    is_active: Optional[bool] | object = UNSET
    role: Optional[str] | object = UNSET
    password: Optional[str] | object = UNSET

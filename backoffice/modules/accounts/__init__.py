"""Account domain exports."""

from .exceptions import (
    AccountAlreadyExistsError,
    AccountError,
    AccountNotFoundError,
    AccountPermissionError,
    InvalidRoleError,
)
from .models import (
    ACCOUNT_MANAGER_ROLES,
    HR_FINANCE,
    REVIEWER_ROLES,
    ROLES,
    SALES_AGENT,
    SALES_ASSISTANT,
    SUPER_AGENT,
    UNSET,
    Account,
    AccountCreateInput,
    AccountUpdateInput,
)
from .service import AccountService

__all__ = [
    "ACCOUNT_MANAGER_ROLES",
    "Account",
    "AccountAlreadyExistsError",
    "AccountCreateInput",
    "AccountError",
    "AccountNotFoundError",
    "AccountPermissionError",
    "AccountService",
    "AccountUpdateInput",
    "HR_FINANCE",
    "InvalidRoleError",
    "REVIEWER_ROLES",
    "ROLES",
    "SALES_AGENT",
    "SALES_ASSISTANT",
    "SUPER_AGENT",
    "UNSET",
]

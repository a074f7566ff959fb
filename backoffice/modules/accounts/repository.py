"""Persistence boundary for accounts."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping, Protocol, Sequence

from .models import Account


class AccountRepository(Protocol):
    async def get_by_id(self, account_id: str) -> Account | None: ...

    async def get_by_email(self, email: str) -> Account | None: ...

    async def list_accounts(self, role: str | None = None) -> Sequence[Account]: ...

    async def create_account(self, *, email: str, password_hash: str, role: str, **profile: Any) -> Account:
        """Insert an account; ``profile`` carries full_name, phone and is_active."""

    async def update_fields(self, account_id: str, changes: Mapping[str, Any]) -> Account | None:
        """Apply column changes and return the fresh account, or ``None`` if it is gone."""

    async def set_last_login(self, account_id: str, timestamp: datetime) -> None: ...

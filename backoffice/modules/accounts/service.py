"""Domain services for account management."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.core.crypto import hash_password, verify_password

from .exceptions import AccountAlreadyExistsError, AccountNotFoundError, AccountPermissionError, InvalidRoleError
from .models import ROLES, Account, AccountCreateInput, AccountUpdateInput, UNSET
from .repository import AccountRepository

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


class AccountService:
    """Encapsulates core account use cases."""

    def __init__(self, repository: AccountRepository) -> None:
        self._repository = repository

    @classmethod
    def with_session(cls, session: AsyncSession) -> "AccountService":
        # Deferred import: the SQL repository imports this package's models.
        from backoffice.infrastructure.database.repositories.account_repository import SqlAccountRepository

        return cls(SqlAccountRepository(session))

    async def get_by_id(self, account_id: str) -> Account | None:
        return await self._repository.get_by_id(account_id)

    async def get_by_email(self, email: str) -> Account | None:
        return await self._repository.get_by_email(normalize_email(email))

    async def list_accounts(self, role: str | None = None) -> Sequence[Account]:
        return await self._repository.list_accounts(role)

    async def authenticate(self, email: str, password: str) -> Account | None:
        account = await self.get_by_email(email)
        if account is None or not account.is_active:
            return None
        if not verify_password(password, account.password_hash):
            logger.warning("Failed login for %s", account.email)
            return None
        return account

    async def create_account(self, payload: AccountCreateInput, *, created_by: Account | None = None) -> Account:
        if payload.role not in ROLES:
            raise InvalidRoleError(payload.role)
        if created_by is not None and not created_by.can_assign_role(payload.role):
            raise AccountPermissionError(f"{created_by.role} cannot create {payload.role} accounts")

        email = normalize_email(payload.email)
        existing = await self._repository.get_by_email(email)
        if existing is not None:
            raise AccountAlreadyExistsError(f"Email already registered: {email}")

        account = await self._repository.create_account(
            email=email,
            password_hash=hash_password(payload.password),
            role=payload.role,
            full_name=payload.full_name,
            phone=payload.phone,
            is_active=payload.is_active,
        )
        logger.info(
            "Created %s account %s (by %s)", account.role, account.id, created_by.id if created_by else "system"
        )
        return account

    async def update_account(self, account_id: str, payload: AccountUpdateInput) -> Account:
        """Apply only the fields the caller supplied; ``None`` clears profile text."""
        changes: dict[str, object] = {}
        for name in ("full_name", "phone"):
            value = getattr(payload, name)
            if value is not UNSET:
                changes[name] = value
        if payload.is_active is not UNSET and payload.is_active is not None:
            changes["is_active"] = payload.is_active
        if payload.role is not UNSET and payload.role is not None:
            if payload.role not in ROLES:
                raise InvalidRoleError(payload.role)
            changes["role"] = payload.role
        if payload.password is not UNSET and payload.password is not None:
            changes["password_hash"] = hash_password(payload.password)

        account = await self._repository.update_fields(account_id, changes)
        if account is None:
            raise AccountNotFoundError(account_id)
        if changes:
            logger.info("Updated account %s (%s)", account_id, ", ".join(sorted(changes)))
        return account

    async def set_last_login(self, account_id: str) -> None:
        await self._repository.set_last_login(account_id, datetime.now(timezone.utc))

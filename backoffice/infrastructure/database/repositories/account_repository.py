"""SQLAlchemy implementation of the account repository."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping, Sequence

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.db.models import Account as AccountModel
from backoffice.modules.accounts.models import Account

UPDATABLE_FIELDS = frozenset({"full_name", "phone", "is_active", "role", "password_hash"})


class SqlAccountRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def _fetch_one(self, *criteria) -> AccountModel | None:
        result = await self._session.execute(select(AccountModel).where(*criteria))
        return result.scalar_one_or_none()

    async def get_by_id(self, account_id: str) -> Account | None:
        model = await self._fetch_one(AccountModel.id == account_id)
        return self._to_domain(model) if model is not None else None

    async def get_by_email(self, email: str) -> Account | None:
        model = await self._fetch_one(AccountModel.email == email)
        return self._to_domain(model) if model is not None else None

    async def list_accounts(self, role: str | None = None) -> Sequence[Account]:
        stmt = select(AccountModel).order_by(AccountModel.created_at.desc(), AccountModel.email)
        if role:
            stmt = stmt.where(AccountModel.role == role)
        result = await self._session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars()]

    async def create_account(self, *, email: str, password_hash: str, role: str, **profile: Any) -> Account:
        model = AccountModel(email=email, password_hash=password_hash, role=role, **profile)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_domain(model)

    async def update_fields(self, account_id: str, changes: Mapping[str, Any]) -> Account | None:
        unknown = set(changes) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update account fields: {', '.join(sorted(unknown))}")
        if changes:
            await self._session.execute(
                update(AccountModel)
                .where(AccountModel.id == account_id)
                .values(**changes)
                .execution_options(synchronize_session=False)
            )
        result = await self._session.execute(
            select(AccountModel)
            .where(AccountModel.id == account_id)
            .execution_options(populate_existing=True)
        )
        model = result.scalar_one_or_none()
        return self._to_domain(model) if model is not None else None

    async def set_last_login(self, account_id: str, timestamp: datetime) -> None:
        await self._session.execute(
            update(AccountModel).where(AccountModel.id == account_id).values(last_login_at=timestamp)
        )

    @staticmethod
    def _to_domain(model: AccountModel) -> Account:
        return Account(
            id=model.id,
            email=model.email,
            role=model.role,
            is_active=bool(model.is_active),
            password_hash=model.password_hash,
            full_name=model.full_name,
            phone=model.phone,
            created_at=model.created_at,
            updated_at=model.updated_at,
            last_login_at=model.last_login_at,
        )

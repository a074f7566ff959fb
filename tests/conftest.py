import asyncio
import os
import uuid

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("SECURITY__SECRET_KEY", "test-secret-key")
os.environ.setdefault("SECURITY__BCRYPT_ROUNDS", "4")

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from backoffice.core.config import get_settings
from backoffice.db import models  # noqa: F401
from backoffice.infrastructure.database import Base, dispose_engine, enable_sqlite_savepoints, get_session, init_db
from backoffice.modules.accounts import (
    SALES_AGENT,
    SALES_ASSISTANT,
    SUPER_AGENT,
    AccountCreateInput,
    AccountService,
)

PASSWORD = "secret123"


@pytest.fixture(autouse=True)
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    enable_sqlite_savepoints(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session(engine):
    factory = async_sessionmaker(bind=engine, expire_on_commit=False)
    async with factory() as session:
        yield session


@pytest.fixture
def make_account(session):
    async def _make(role: str = SALES_AGENT, **kwargs):
        email = kwargs.pop("email", None) or f"{role}-{uuid.uuid4().hex[:8]}@example.com"
        return await AccountService.with_session(session).create_account(
            AccountCreateInput(email=email, password=PASSWORD, role=role, **kwargs)
        )

    return _make


@pytest_asyncio.fixture
async def agent(make_account):
    return await make_account(SALES_AGENT, full_name="Field Agent")


@pytest_asyncio.fixture
async def reviewer(make_account):
    return await make_account(SALES_ASSISTANT, full_name="Sales Assistant")


@pytest_asyncio.fixture
async def super_agent(make_account):
    return await make_account(SUPER_AGENT, full_name="Super Agent")


async def _seed_accounts() -> dict[str, dict[str, str]]:
    await init_db()
    seeded: dict[str, dict[str, str]] = {}
    async for db in get_session():
        service = AccountService.with_session(db)
        for key, role in (("super", SUPER_AGENT), ("assistant", SALES_ASSISTANT), ("agent", SALES_AGENT)):
            account = await service.create_account(
                AccountCreateInput(
                    email=f"{key}@example.com",
                    password=PASSWORD,
                    role=role,
                    full_name=key.title(),
                )
            )
            seeded[key] = {"id": account.id, "email": account.email}
    await dispose_engine()
    return seeded


@pytest.fixture
def api(tmp_path, monkeypatch):
    """Test client against a fresh SQLite file with three seeded accounts."""
    monkeypatch.setenv("DATABASE__URL", f"sqlite+aiosqlite:///{tmp_path / 'backoffice.db'}")
    get_settings.cache_clear()
    accounts = asyncio.run(_seed_accounts())

    from backoffice.main import create_app

    with TestClient(create_app()) as client:
        client.accounts = accounts
        yield client


@pytest.fixture
def auth_headers(api):
    def _headers(key: str) -> dict[str, str]:
        response = api.post(
            "/api/auth/login",
            json={"email": api.accounts[key]["email"], "password": PASSWORD},
        )
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['access_token']}"}

    return _headers

"""JWT helpers and authentication dependencies."""
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.core.config import get_settings
from backoffice.core.exceptions import EnvelopeError
from backoffice.interfaces.http.deps.database import get_db_session
from backoffice.modules.accounts import Account as AccountDomain
from backoffice.modules.accounts.service import AccountService
from backoffice.schemas import TokenData

security = HTTPBearer(auto_error=False)

_UNAUTHORIZED_HEADERS = {"WWW-Authenticate": "Bearer"}


def create_access_token(
    account_id: str, email: str, role: str, expires_delta: Optional[timedelta] = None
) -> str:
    settings = get_settings()
    expire_delta = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    payload = {
        "sub": account_id,
        "email": email,
        "role": role,
        "exp": datetime.now(timezone.utc) + expire_delta,
    }
    return jwt.encode(payload, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(token: str) -> TokenData:
    settings = get_settings()
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers=_UNAUTHORIZED_HEADERS,
        ) from exc

    account_id = payload.get("sub")
    email = payload.get("email")
    role = payload.get("role")
    if not all([account_id, email, role]):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers=_UNAUTHORIZED_HEADERS,
        )
    return TokenData(account_id=account_id, email=email, role=role)


async def _load_account(
    credentials: Optional[HTTPAuthorizationCredentials], db: AsyncSession
) -> AccountDomain:
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers=_UNAUTHORIZED_HEADERS,
        )
    token_data = decode_access_token(credentials.credentials)
    account = await AccountService.with_session(db).get_by_id(token_data.account_id)
    if account is None or not account.is_active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Account not found or disabled",
            headers=_UNAUTHORIZED_HEADERS,
        )
    return account


async def get_current_account(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db_session),
) -> AccountDomain:
    return await _load_account(credentials, db)


async def get_current_reviewer(account: AccountDomain = Depends(get_current_account)) -> AccountDomain:
    if not account.is_reviewer():
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Reviewer role required")
    return account


async def get_super_agent(account: AccountDomain = Depends(get_current_account)) -> AccountDomain:
    if not account.is_super_agent():
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Super agent role required")
    return account


async def get_account_manager(account: AccountDomain = Depends(get_current_account)) -> AccountDomain:
    if not account.can_manage_accounts():
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only Super Agents and HR/Finance can create users",
        )
    return account


# Variants for the validating endpoints, which report auth failures as
# {"success": false, "errors": [...]}.


async def get_enveloped_account(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db_session),
) -> AccountDomain:
    try:
        return await _load_account(credentials, db)
    except HTTPException as exc:
        raise EnvelopeError(exc.status_code, ["Unauthorized"]) from exc


async def get_enveloped_reviewer(account: AccountDomain = Depends(get_enveloped_account)) -> AccountDomain:
    if not account.is_reviewer():
        raise EnvelopeError(status.HTTP_403_FORBIDDEN, ["Insufficient permissions"])
    return account

"""Authentication endpoints."""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.core.security import create_access_token, get_current_account
from backoffice.interfaces.http.deps import get_db_session
from backoffice.modules.accounts import Account as AccountDomain
from backoffice.modules.accounts import AccountService
from backoffice.schemas import AccountLoginResponse, AccountResponse, LoginRequest

router = APIRouter()


@router.post("/login", response_model=AccountLoginResponse, summary="Email/password login")
async def login(
    payload: LoginRequest,
    db: AsyncSession = Depends(get_db_session),
):
    account_service = AccountService.with_session(db)
    account = await account_service.authenticate(payload.email, payload.password)
    if account is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid email or password")

    await account_service.set_last_login(account.id)
    await db.commit()

    token = create_access_token(account.id, account.email, account.role)
    return AccountLoginResponse(
        access_token=token,
        account_id=account.id,
        email=account.email,
        role=account.role,
        is_reviewer=account.is_reviewer(),
    )


@router.get("/me", response_model=AccountResponse)
async def current_account(account: AccountDomain = Depends(get_current_account)):
    return account

"""Wallet balance endpoints."""
from typing import List, Optional

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.core.security import get_current_account, get_enveloped_reviewer
from backoffice.interfaces.http.deps import get_db_session
from backoffice.interfaces.http.errors import EnvelopeError, read_json_body
from backoffice.modules.accounts import Account as AccountDomain
from backoffice.modules.wallets import WalletNotFoundError, WalletService, validate_topup_input
from backoffice.schemas import WalletResponse, WalletTopupResponse

router = APIRouter()


@router.get("", response_model=List[WalletResponse])
async def list_wallets(
    owner_id: Optional[str] = None,
    account: AccountDomain = Depends(get_current_account),
    db: AsyncSession = Depends(get_db_session),
):
    if not account.is_reviewer() or owner_id is None:
        owner_id = account.id
    wallets = await WalletService.with_session(db).list_wallets(owner_id)
    return [WalletResponse.model_validate(wallet) for wallet in wallets]


@router.post("/topups", response_model=WalletTopupResponse)
async def top_up_wallet(
    request: Request,
    reviewer: AccountDomain = Depends(get_enveloped_reviewer),
    db: AsyncSession = Depends(get_db_session),
):
    payload = validate_topup_input(await read_json_body(request))
    try:
        wallet = await WalletService.with_session(db).top_up(
            payload.wallet_id, payload.amount, actor_id=reviewer.id
        )
    except WalletNotFoundError as exc:
        raise EnvelopeError(status.HTTP_404_NOT_FOUND, ["Wallet not found"]) from exc
    await db.commit()
    return WalletTopupResponse(data=WalletResponse.model_validate(wallet))

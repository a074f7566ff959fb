"""Agent self-service endpoints."""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.core.security import get_current_account
from backoffice.interfaces.http.deps import get_db_session
from backoffice.modules.accounts import Account as AccountDomain
from backoffice.modules.commissions import commission_summary
from backoffice.modules.transactions import TransactionService
from backoffice.schemas import CommissionResponse, CommissionTierResponse

router = APIRouter()


@router.get("/me/commission", response_model=CommissionResponse)
async def my_commission(
    account: AccountDomain = Depends(get_current_account),
    db: AsyncSession = Depends(get_db_session),
):
    summary = await commission_summary(TransactionService.with_session(db), account.id)
    progress = summary.progress
    return CommissionResponse(
        agent_id=summary.agent_id,
        volume=summary.volume,
        rate=summary.rate,
        estimated_commission=summary.estimated_commission,
        tier=CommissionTierResponse.model_validate(summary.tier),
        next_tier=(
            CommissionTierResponse.model_validate(progress.next_tier)
            if progress is not None and progress.next_tier is not None
            else None
        ),
        progress=progress.progress if progress is not None else 100,
        remaining=progress.remaining if progress is not None else 0,
    )

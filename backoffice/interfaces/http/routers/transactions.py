"""Transaction submission and review endpoints."""
import logging
from typing import List, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.core.security import get_current_account, get_current_reviewer, get_enveloped_account
from backoffice.interfaces.http.deps import get_db_session
from backoffice.interfaces.http.errors import read_json_body
from backoffice.modules.accounts import Account as AccountDomain
from backoffice.modules.accounts import AccountService
from backoffice.modules.notifications import build_transaction_email, notify_review_outcome
from backoffice.modules.transactions import (
    InvalidTransitionError,
    ReasonRequiredError,
    TransactionNotFoundError,
    TransactionRecord,
    TransactionService,
    validate_transaction_input,
)
from backoffice.schemas import ReviewReasonRequest, TransactionResponse, TransactionSubmitResponse

logger = logging.getLogger(__name__)

router = APIRouter()


def _review_error(exc: Exception) -> HTTPException:
    if isinstance(exc, TransactionNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Transaction not found")
    if isinstance(exc, InvalidTransitionError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))


async def _queue_notification(
    background_tasks: BackgroundTasks, db: AsyncSession, record: TransactionRecord
) -> None:
    if record.agent_id is None:
        return
    agent = await AccountService.with_session(db).get_by_id(record.agent_id)
    if agent is None:
        return
    background_tasks.add_task(notify_review_outcome, build_transaction_email(record, agent))


@router.post("", response_model=TransactionSubmitResponse, status_code=status.HTTP_201_CREATED)
async def submit_transaction(
    request: Request,
    account: AccountDomain = Depends(get_enveloped_account),
    db: AsyncSession = Depends(get_db_session),
):
    payload = validate_transaction_input(await read_json_body(request))
    record = await TransactionService.with_session(db).submit(account, payload)
    await db.commit()
    return TransactionSubmitResponse(data=TransactionResponse.model_validate(record))


@router.get("", response_model=List[TransactionResponse])
async def list_transactions(
    approval_status: Optional[str] = None,
    agent_id: Optional[str] = None,
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    account: AccountDomain = Depends(get_current_account),
    db: AsyncSession = Depends(get_db_session),
):
    if not account.is_reviewer():
        agent_id = account.id
    records = await TransactionService.with_session(db).list_transactions(
        approval_status=approval_status,
        agent_id=agent_id,
        limit=limit,
        offset=offset,
    )
    return [TransactionResponse.model_validate(record) for record in records]


@router.get("/escalated", response_model=List[TransactionResponse])
async def list_escalated(
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    reviewer: AccountDomain = Depends(get_current_reviewer),
    db: AsyncSession = Depends(get_db_session),
):
    records = await TransactionService.with_session(db).list_escalated(limit, offset)
    return [TransactionResponse.model_validate(record) for record in records]


@router.get("/{transaction_id}", response_model=TransactionResponse)
async def get_transaction(
    transaction_id: str,
    account: AccountDomain = Depends(get_current_account),
    db: AsyncSession = Depends(get_db_session),
):
    try:
        record = await TransactionService.with_session(db).get(transaction_id)
    except TransactionNotFoundError as exc:
        raise _review_error(exc) from exc
    if not account.is_reviewer() and record.agent_id != account.id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Transaction not found")
    return TransactionResponse.model_validate(record)


@router.post("/{transaction_id}/approve", response_model=TransactionResponse)
async def approve_transaction(
    transaction_id: str,
    background_tasks: BackgroundTasks,
    reviewer: AccountDomain = Depends(get_current_reviewer),
    db: AsyncSession = Depends(get_db_session),
):
    try:
        record = await TransactionService.with_session(db).approve(transaction_id, reviewer)
    except (TransactionNotFoundError, InvalidTransitionError) as exc:
        raise _review_error(exc) from exc
    await db.commit()
    await _queue_notification(background_tasks, db, record)
    return TransactionResponse.model_validate(record)


@router.post("/{transaction_id}/reject", response_model=TransactionResponse)
async def reject_transaction(
    transaction_id: str,
    payload: ReviewReasonRequest,
    background_tasks: BackgroundTasks,
    reviewer: AccountDomain = Depends(get_current_reviewer),
    db: AsyncSession = Depends(get_db_session),
):
    try:
        record = await TransactionService.with_session(db).reject(transaction_id, reviewer, payload.reason)
    except (TransactionNotFoundError, InvalidTransitionError, ReasonRequiredError) as exc:
        raise _review_error(exc) from exc
    await db.commit()
    await _queue_notification(background_tasks, db, record)
    return TransactionResponse.model_validate(record)


@router.post("/{transaction_id}/escalate", response_model=TransactionResponse)
async def escalate_transaction(
    transaction_id: str,
    payload: ReviewReasonRequest,
    reviewer: AccountDomain = Depends(get_current_reviewer),
    db: AsyncSession = Depends(get_db_session),
):
    try:
        record = await TransactionService.with_session(db).escalate(transaction_id, reviewer, payload.reason)
    except (TransactionNotFoundError, InvalidTransitionError, ReasonRequiredError) as exc:
        raise _review_error(exc) from exc
    await db.commit()
    return TransactionResponse.model_validate(record)

"""Float request endpoints."""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.core.security import get_current_account, get_current_reviewer, get_enveloped_account
from backoffice.interfaces.http.deps import get_db_session
from backoffice.interfaces.http.errors import read_json_body
from backoffice.modules.accounts import Account as AccountDomain
from backoffice.modules.float_requests import (
    FloatRequestNotFoundError,
    FloatRequestService,
    FloatRequestStateError,
    validate_float_request_input,
)
from backoffice.modules.transactions import ReasonRequiredError
from backoffice.schemas import FloatApprovalResponse, FloatRequestResponse, ReviewReasonRequest

router = APIRouter()


@router.post("", response_model=FloatRequestResponse, status_code=status.HTTP_201_CREATED)
async def create_float_request(
    request: Request,
    account: AccountDomain = Depends(get_enveloped_account),
    db: AsyncSession = Depends(get_db_session),
):
    payload = validate_float_request_input(await read_json_body(request))
    record = await FloatRequestService.with_session(db).create(account, payload)
    await db.commit()
    return FloatRequestResponse.model_validate(record)


@router.get("", response_model=List[FloatRequestResponse])
async def list_float_requests(
    status_filter: Optional[str] = Query(None, alias="status"),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    account: AccountDomain = Depends(get_current_account),
    db: AsyncSession = Depends(get_db_session),
):
    records = await FloatRequestService.with_session(db).list_requests(
        account, status=status_filter, limit=limit, offset=offset
    )
    return [FloatRequestResponse.model_validate(record) for record in records]


@router.post("/{request_id}/approve", response_model=FloatApprovalResponse)
async def approve_float_request(
    request_id: str,
    reviewer: AccountDomain = Depends(get_current_reviewer),
    db: AsyncSession = Depends(get_db_session),
):
    try:
        approval = await FloatRequestService.with_session(db).approve(request_id, reviewer)
    except FloatRequestNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Float request not found") from exc
    except FloatRequestStateError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    await db.commit()
    return FloatApprovalResponse.model_validate(approval)


@router.post("/{request_id}/reject", response_model=FloatRequestResponse)
async def reject_float_request(
    request_id: str,
    payload: ReviewReasonRequest,
    reviewer: AccountDomain = Depends(get_current_reviewer),
    db: AsyncSession = Depends(get_db_session),
):
    try:
        record = await FloatRequestService.with_session(db).reject(request_id, reviewer, payload.reason)
    except FloatRequestNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Float request not found") from exc
    except FloatRequestStateError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    except ReasonRequiredError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    await db.commit()
    return FloatRequestResponse.model_validate(record)

"""Direct float allocation endpoints."""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.core.security import get_current_reviewer, get_enveloped_reviewer
from backoffice.interfaces.http.deps import get_db_session
from backoffice.interfaces.http.errors import EnvelopeError, read_json_body
from backoffice.modules.accounts import Account as AccountDomain
from backoffice.modules.allocations import AgentNotFoundError, AllocationService, validate_allocation_input
from backoffice.schemas import AllocationResponse, AllocationResultResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=AllocationResultResponse)
async def allocate_float(
    request: Request,
    allocator: AccountDomain = Depends(get_enveloped_reviewer),
    db: AsyncSession = Depends(get_db_session),
):
    payload = validate_allocation_input(await read_json_body(request))
    try:
        allocation, _wallet = await AllocationService.with_session(db).allocate(allocator, payload)
    except AgentNotFoundError as exc:
        raise EnvelopeError(status.HTTP_404_NOT_FOUND, ["Agent not found"]) from exc
    await db.commit()
    return AllocationResultResponse(data=AllocationResponse.model_validate(allocation))


@router.get("", response_model=List[AllocationResponse])
async def list_allocations(
    agent_id: Optional[str] = None,
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    reviewer: AccountDomain = Depends(get_current_reviewer),
    db: AsyncSession = Depends(get_db_session),
):
    records = await AllocationService.with_session(db).list_allocations(
        agent_id=agent_id, limit=limit, offset=offset
    )
    return [AllocationResponse.model_validate(record) for record in records]

"""Administrative endpoints for accounts, audit history and dashboard stats."""
from typing import List, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.core.security import get_account_manager, get_super_agent
from backoffice.interfaces.http.deps import get_db_session
from backoffice.modules.accounts import (
    Account as AccountDomain,
    AccountAlreadyExistsError,
    AccountCreateInput,
    AccountNotFoundError,
    AccountPermissionError,
    AccountService,
    AccountUpdateInput,
    InvalidRoleError,
    UNSET,
)
from backoffice.modules.audit import AuditService
from backoffice.modules.float_requests import FloatRequestService
from backoffice.modules.notifications import build_welcome_email, notify_account_created
from backoffice.modules.transactions import TransactionService
from backoffice.schemas import (
    AccountCreate,
    AccountResponse,
    AccountUpdate,
    AdminStatsResponse,
    AuditLogResponse,
)

router = APIRouter()


@router.get("/accounts", response_model=List[AccountResponse])
async def list_accounts(
    role: Optional[str] = None,
    admin: AccountDomain = Depends(get_super_agent),
    db: AsyncSession = Depends(get_db_session),
):
    accounts = await AccountService.with_session(db).list_accounts(role)
    return [AccountResponse.model_validate(account) for account in accounts]


@router.post("/accounts", response_model=AccountResponse, status_code=status.HTTP_201_CREATED)
async def create_account(
    payload: AccountCreate,
    background_tasks: BackgroundTasks,
    manager: AccountDomain = Depends(get_account_manager),
    db: AsyncSession = Depends(get_db_session),
):
    service = AccountService.with_session(db)
    try:
        account = await service.create_account(
            AccountCreateInput(
                email=payload.email,
                password=payload.password,
                role=payload.role,
                full_name=payload.full_name,
                phone=payload.phone,
            ),
            created_by=manager,
        )
    except AccountPermissionError as exc:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc)) from exc
    except AccountAlreadyExistsError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already registered") from exc
    except InvalidRoleError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Invalid role: {exc}") from exc

    await db.commit()
    background_tasks.add_task(notify_account_created, build_welcome_email(account))
    return AccountResponse.model_validate(account)


@router.patch("/accounts/{account_id}", response_model=AccountResponse)
async def update_account(
    account_id: str,
    payload: AccountUpdate,
    admin: AccountDomain = Depends(get_super_agent),
    db: AsyncSession = Depends(get_db_session),
):
    provided = payload.model_fields_set
    update_input = AccountUpdateInput(
        full_name=payload.full_name if "full_name" in provided else UNSET,
        phone=payload.phone if "phone" in provided else UNSET,
        is_active=payload.is_active if payload.is_active is not None else UNSET,
        role=payload.role if payload.role is not None else UNSET,
        password=payload.password if payload.password is not None else UNSET,
    )

    service = AccountService.with_session(db)
    try:
        account = await service.update_account(account_id, update_input)
    except AccountNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Account not found") from exc
    except InvalidRoleError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Invalid role: {exc}") from exc

    await db.commit()
    return AccountResponse.model_validate(account)


@router.get("/audit-logs", response_model=List[AuditLogResponse])
async def list_audit_logs(
    entity_type: Optional[str] = None,
    entity_id: Optional[str] = None,
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    admin: AccountDomain = Depends(get_super_agent),
    db: AsyncSession = Depends(get_db_session),
):
    entries = await AuditService.with_session(db).list_entries(
        entity_type=entity_type,
        entity_id=entity_id,
        limit=limit,
        offset=offset,
    )
    return [AuditLogResponse.model_validate(entry) for entry in entries]


@router.get("/stats", response_model=AdminStatsResponse)
async def admin_stats(
    admin: AccountDomain = Depends(get_super_agent),
    db: AsyncSession = Depends(get_db_session),
):
    transactions = TransactionService.with_session(db)
    return AdminStatsResponse(
        transactions_by_status=await transactions.status_counts(),
        pending_float_requests=await FloatRequestService.with_session(db).count_pending(),
        approved_volume_by_currency=await transactions.approved_volume_by_currency(),
    )

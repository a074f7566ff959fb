"""Outbound notification endpoints."""
from fastapi import APIRouter, Depends, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from backoffice.core.security import get_current_reviewer
from backoffice.modules.accounts import Account as AccountDomain
from backoffice.modules.notifications import NotificationError, TransactionEmail, send_transaction_email
from backoffice.schemas import TransactionEmailRequest, TransactionEmailResponse

router = APIRouter()


@router.post(
    "/transaction-email",
    response_model=TransactionEmailResponse,
    responses={500: {"description": "Mail provider rejected the message"}},
)
async def post_transaction_email(
    payload: TransactionEmailRequest,
    reviewer: AccountDomain = Depends(get_current_reviewer),
):
    message = TransactionEmail(
        email=payload.email,
        full_name=payload.full_name,
        transaction_type=payload.transaction_type,
        amount=payload.amount,
        currency=payload.currency,
        status=payload.status,
        transaction_id=payload.transaction_id,
        recipient_name=payload.recipient_name,
        recipient_phone=payload.recipient_phone,
    )
    try:
        message_id = await run_in_threadpool(send_transaction_email, message)
    except NotificationError as exc:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "error": str(exc)},
        )
    return TransactionEmailResponse(message_id=message_id)

"""Review outcome and onboarding notifications."""

from __future__ import annotations

import logging
from typing import Optional

from backoffice.core.config import get_settings
from backoffice.modules.accounts import Account
from backoffice.modules.transactions import TransactionRecord

from .exceptions import NotificationError
from .mailer import BrevoMailer
from .models import TransactionEmail, WelcomeEmail

logger = logging.getLogger(__name__)


def build_transaction_email(record: TransactionRecord, agent: Account) -> TransactionEmail:
    return TransactionEmail(
        email=agent.email,
        full_name=agent.display_name,
        transaction_type=record.transaction_type,
        amount=record.amount,
        currency=record.currency,
        status=record.approval_status.value,
        transaction_id=record.id,
        recipient_name=record.recipient_name,
        recipient_phone=record.recipient_phone,
    )


def send_transaction_email(message: TransactionEmail, mailer: Optional[BrevoMailer] = None) -> Optional[str]:
    return (mailer or BrevoMailer.from_settings()).send(message)


def notify_review_outcome(message: TransactionEmail, mailer: Optional[BrevoMailer] = None) -> None:
    """Best-effort delivery for background tasks; failures are only logged."""
    if not get_settings().mail.enabled:
        logger.debug("Mail disabled; skipping notification for %s", message.transaction_id)
        return
    try:
        message_id = send_transaction_email(message, mailer)
    except NotificationError as exc:
        logger.error("Notification for transaction %s failed: %s", message.transaction_id, exc)
        return
    logger.info("Notification for transaction %s queued as %s", message.transaction_id, message_id)


def build_welcome_email(account: Account) -> WelcomeEmail:
    return WelcomeEmail(email=account.email, full_name=account.display_name, role=account.role)


def notify_account_created(message: WelcomeEmail, mailer: Optional[BrevoMailer] = None) -> None:
    if not get_settings().mail.enabled:
        logger.debug("Mail disabled; skipping welcome email for %s", message.email)
        return
    try:
        message_id = (mailer or BrevoMailer.from_settings()).send_welcome(message)
    except NotificationError as exc:
        logger.error("Welcome email to %s failed: %s", message.email, exc)
        return
    logger.info("Welcome email to %s queued as %s", message.email, message_id)

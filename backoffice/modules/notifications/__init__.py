"""Outbound email notifications"""

from .exceptions import NotificationError
from .mailer import BrevoMailer
from .models import TransactionEmail, WelcomeEmail
from .rendering import (
    format_amount,
    render_html,
    render_subject,
    render_welcome_html,
    render_welcome_subject,
    status_color,
)
from .service import (
    build_transaction_email,
    build_welcome_email,
    notify_account_created,
    notify_review_outcome,
    send_transaction_email,
)

__all__ = [
    "BrevoMailer",
    "NotificationError",
    "TransactionEmail",
    "WelcomeEmail",
    "build_transaction_email",
    "build_welcome_email",
    "format_amount",
    "notify_account_created",
    "notify_review_outcome",
    "render_html",
    "render_subject",
    "render_welcome_html",
    "render_welcome_subject",
    "send_transaction_email",
    "status_color",
]

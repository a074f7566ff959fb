"""Subjects and HTML bodies for outbound emails."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from html import escape

from .models import TransactionEmail, WelcomeEmail

CURRENCY_SYMBOLS = {"USD": "$"}

STATUS_COLORS = {
    "approved": "#22c55e",
    "completed": "#22c55e",
    "rejected": "#ef4444",
    "failed": "#ef4444",
}
DEFAULT_STATUS_COLOR = "#f59e0b"


def format_amount(amount: Decimal, currency: str) -> str:
    """``$1,500.00`` for dollars, ``SSP 1,500.00`` for everything else."""
    value = Decimal(amount).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    text = f"{value:,.2f}"
    symbol = CURRENCY_SYMBOLS.get(currency)
    if symbol:
        return f"{symbol}{text}"
    return f"{currency} {text}"


def format_type(transaction_type: str) -> str:
    return transaction_type.replace("_", " ").upper()


def status_color(status: str) -> str:
    return STATUS_COLORS.get(status, DEFAULT_STATUS_COLOR)


def short_id(transaction_id: str) -> str:
    return transaction_id[:8].upper()


def render_subject(message: TransactionEmail) -> str:
    return (
        f"Transaction {message.status.upper()}: {format_type(message.transaction_type)}"
        f" - {format_amount(message.amount, message.currency)}"
    )


def _row(label: str, value: str) -> str:
    return (
        "<tr>"
        f'<td style="padding: 8px 0; font-weight: bold;">{label}:</td>'
        f'<td style="padding: 8px 0;">{value}</td>'
        "</tr>"
    )


def render_html(message: TransactionEmail, *, team_name: str) -> str:
    rows = [
        _row("Transaction ID", escape(short_id(message.transaction_id))),
        _row("Type", escape(format_type(message.transaction_type))),
        _row("Amount", escape(format_amount(message.amount, message.currency))),
    ]
    if message.recipient_name:
        rows.append(_row("Recipient", escape(message.recipient_name)))
    if message.recipient_phone:
        rows.append(_row("Phone", escape(message.recipient_phone)))
    badge = (
        f'<span style="background: {status_color(message.status)}; color: white; '
        f'padding: 4px 12px; border-radius: 4px; font-size: 12px;">{escape(message.status.upper())}</span>'
    )
    rows.append(_row("Status", badge))

    return (
        '<html><body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333;">'
        '<div style="max-width: 600px; margin: 0 auto; padding: 20px;">'
        '<h1 style="color: #1e3a5f;">Transaction Notification</h1>'
        f"<p>Dear {escape(message.full_name)},</p>"
        "<p>Your transaction has been processed. Here are the details:</p>"
        '<div style="background: #f8fafc; border-radius: 8px; padding: 20px; margin: 20px 0;">'
        f'<table style="width: 100%; border-collapse: collapse;">{"".join(rows)}</table>'
        "</div>"
        "<p>If you have any questions about this transaction, please contact your supervisor.</p>"
        f'<p style="margin-top: 30px;">Best regards,<br>The {escape(team_name)} Team</p>'
        "</div></body></html>"
    )


def format_role(role: str) -> str:
    return role.replace("_", " ").upper()


def render_welcome_subject(team_name: str) -> str:
    return f"Welcome to {team_name}"


def render_welcome_html(message: WelcomeEmail, *, team_name: str) -> str:
    team = escape(team_name)
    return (
        '<html><body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333;">'
        '<div style="max-width: 600px; margin: 0 auto; padding: 20px;">'
        f'<h1 style="color: #1e3a5f;">Welcome to {team}!</h1>'
        f"<p>Dear {escape(message.full_name)},</p>"
        "<p>Your account has been successfully created. You have been assigned the role of "
        f"<strong>{escape(format_role(message.role))}</strong>.</p>"
        "<p>You can now log in to your account using the credentials provided by your supervisor.</p>"
        '<div style="margin: 30px 0;">'
        "<p><strong>What you can do:</strong></p>"
        "<ul>"
        "<li>Process mobile money transactions</li>"
        "<li>View your transaction history</li>"
        "<li>Track your commissions</li>"
        "</ul>"
        "</div>"
        "<p>If you have any questions, please contact your supervisor.</p>"
        f'<p style="margin-top: 30px;">Best regards,<br>The {team} Team</p>'
        "</div></body></html>"
    )

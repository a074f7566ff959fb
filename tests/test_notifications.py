import json
import urllib.error
from decimal import Decimal

import pytest

from backoffice.core.config import MailSettings
from backoffice.modules.notifications import (
    BrevoMailer,
    NotificationError,
    TransactionEmail,
    WelcomeEmail,
    format_amount,
    notify_account_created,
    notify_review_outcome,
    render_html,
    render_subject,
    render_welcome_html,
    status_color,
)
from backoffice.modules.notifications import mailer as mailer_module


@pytest.fixture
def message():
    return TransactionEmail(
        email="agent@example.com",
        full_name="Deng Garang",
        transaction_type="mtn_momo",
        amount=Decimal("1500"),
        currency="USD",
        status="approved",
        transaction_id="a1b2c3d4-0000-4000-8000-000000000000",
        recipient_name="Nyandeng",
        recipient_phone="+211921234567",
    )


@pytest.fixture
def mail_settings():
    return MailSettings(enabled=True, api_key="xkeysib-test", base_url="https://mail.test/v3")


def test_format_amount():
    assert format_amount(Decimal("1500"), "USD") == "$1,500.00"
    assert format_amount(Decimal("0.5"), "SSP") == "SSP 0.50"
    assert format_amount(Decimal("1234567.891"), "KES") == "KES 1,234,567.89"


def test_status_colors():
    assert status_color("approved") == "#22c55e"
    assert status_color("completed") == "#22c55e"
    assert status_color("rejected") == "#ef4444"
    assert status_color("failed") == "#ef4444"
    assert status_color("escalated") == "#f59e0b"


def test_subject(message):
    assert render_subject(message) == "Transaction APPROVED: MTN MOMO - $1,500.00"


def test_html_body(message):
    html = render_html(message, team_name="Wonders Mobile Money")

    assert "A1B2C3D4" in html
    assert "Dear Deng Garang," in html
    assert "Nyandeng" in html
    assert "+211921234567" in html
    assert "#22c55e" in html
    assert "The Wonders Mobile Money Team" in html


def test_html_body_omits_missing_recipient(message):
    message.recipient_name = None
    message.recipient_phone = None

    html = render_html(message, team_name="Wonders Mobile Money")

    assert "Recipient:" not in html
    assert "Phone:" not in html


def test_html_body_escapes_caller_supplied_fields(message):
    message.transaction_type = "<img src=x>"
    message.currency = "<b>"
    message.transaction_id = "<script>alert(1)</script>"

    html = render_html(message, team_name="Wonders Mobile Money")

    assert "<IMG SRC=X>" not in html
    assert "&lt;IMG SRC=X&gt;" in html
    assert "<b>" not in html
    assert "&lt;b&gt; 1,500.00" in html
    assert "<SCRIPT" not in html


def test_send_posts_to_brevo(monkeypatch, message, mail_settings):
    calls = []

    def fake_post(url, payload, headers=None, timeout=30):
        calls.append((url, payload, headers, timeout))
        return 201, json.dumps({"messageId": "<msg-1@brevo>"}).encode()

    monkeypatch.setattr(mailer_module, "http_post_json", fake_post)

    message_id = BrevoMailer(mail_settings).send(message)

    assert message_id == "<msg-1@brevo>"
    url, payload, headers, timeout = calls[0]
    assert url == "https://mail.test/v3/smtp/email"
    assert headers == {"api-key": "xkeysib-test"}
    assert timeout == mail_settings.timeout_seconds
    assert payload["to"] == [{"email": "agent@example.com", "name": "Deng Garang"}]
    assert payload["sender"] == {"name": "Wonders Mobile Money", "email": "noreply@wondersmobilemoney.com"}
    assert payload["subject"] == "Transaction APPROVED: MTN MOMO - $1,500.00"


def test_send_without_api_key(message):
    with pytest.raises(NotificationError, match="API key"):
        BrevoMailer(MailSettings(api_key=None)).send(message)


def test_send_raises_on_provider_error(monkeypatch, message, mail_settings):
    monkeypatch.setattr(mailer_module, "http_post_json", lambda *args, **kwargs: (401, b'{"code":"unauthorized"}'))

    with pytest.raises(NotificationError, match="401"):
        BrevoMailer(mail_settings).send(message)


def test_send_raises_on_network_error(monkeypatch, message, mail_settings):
    def unreachable(*args, **kwargs):
        raise urllib.error.URLError("connection refused")

    monkeypatch.setattr(mailer_module, "http_post_json", unreachable)

    with pytest.raises(NotificationError, match="reach"):
        BrevoMailer(mail_settings).send(message)


def test_review_notification_swallows_failures(monkeypatch, message, mail_settings):
    monkeypatch.setenv("MAIL__ENABLED", "true")
    attempts = []

    def failing_post(url, payload, headers=None, timeout=30):
        attempts.append(url)
        return 500, b"boom"

    monkeypatch.setattr(mailer_module, "http_post_json", failing_post)

    notify_review_outcome(message, BrevoMailer(mail_settings))

    assert attempts == ["https://mail.test/v3/smtp/email"]


def test_review_notification_skipped_when_disabled(monkeypatch, message, mail_settings):
    monkeypatch.setenv("MAIL__ENABLED", "false")

    def must_not_send(*args, **kwargs):
        raise AssertionError("mail should not be sent")

    monkeypatch.setattr(mailer_module, "http_post_json", must_not_send)

    notify_review_outcome(message, BrevoMailer(mail_settings))


def test_welcome_html():
    html = render_welcome_html(
        WelcomeEmail(email="a@example.com", full_name="<Achol>", role="sales_agent"),
        team_name="Wonders Mobile Money",
    )

    assert "Welcome to Wonders Mobile Money!" in html
    assert "Dear &lt;Achol&gt;," in html
    assert "<strong>SALES AGENT</strong>" in html


def test_welcome_email_delivery(monkeypatch, mail_settings):
    monkeypatch.setenv("MAIL__ENABLED", "true")
    calls = []

    def fake_post(url, payload, headers=None, timeout=30):
        calls.append(payload)
        return 201, b'{"messageId": "<welcome-1@brevo>"}'

    monkeypatch.setattr(mailer_module, "http_post_json", fake_post)

    notify_account_created(
        WelcomeEmail(email="hr@example.com", full_name="Achol", role="hr_finance"),
        BrevoMailer(mail_settings),
    )

    assert calls[0]["to"] == [{"email": "hr@example.com", "name": "Achol"}]
    assert calls[0]["subject"] == "Welcome to Wonders Mobile Money"
    assert "HR FINANCE" in calls[0]["htmlContent"]


def test_welcome_email_failure_is_logged_not_raised(monkeypatch):
    monkeypatch.setenv("MAIL__ENABLED", "true")

    notify_account_created(
        WelcomeEmail(email="hr@example.com", full_name="Achol", role="hr_finance"),
        BrevoMailer(MailSettings(api_key=None)),
    )

"""Brevo transactional mail client."""

from __future__ import annotations

import json
import logging
import urllib.error
import urllib.request
from typing import Any, Optional

from backoffice.core.config import MailSettings, get_settings

from .exceptions import NotificationError
from .models import TransactionEmail, WelcomeEmail
from .rendering import render_html, render_subject, render_welcome_html, render_welcome_subject

logger = logging.getLogger(__name__)


def http_post_json(
    url: str,
    payload: dict[str, Any],
    headers: Optional[dict[str, str]] = None,
    timeout: int = 30,
) -> tuple[int, bytes]:
    data = json.dumps(payload).encode("utf-8")
    req_headers = {"Content-Type": "application/json", "Accept": "application/json"}
    if headers:
        req_headers.update(headers)
    req = urllib.request.Request(url, data=data, headers=req_headers, method="POST")
    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            return resp.status, resp.read()
    except urllib.error.HTTPError as exc:
        return exc.code, exc.read()


class BrevoMailer:
    def __init__(self, settings: MailSettings) -> None:
        self.settings = settings

    @classmethod
    def from_settings(cls) -> "BrevoMailer":
        return cls(get_settings().mail)

    def build_payload(self, *, to_email: str, to_name: str, subject: str, html: str) -> dict[str, Any]:
        return {
            "sender": {"name": self.settings.sender_name, "email": self.settings.sender_email},
            "to": [{"email": to_email, "name": to_name}],
            "subject": subject,
            "htmlContent": html,
        }

    def send(self, message: TransactionEmail) -> Optional[str]:
        """Deliver a transaction notice and return the provider message id."""
        logger.info("Sending transaction email to %s for %s", message.email, message.transaction_id)
        return self.deliver(
            self.build_payload(
                to_email=message.email,
                to_name=message.full_name,
                subject=render_subject(message),
                html=render_html(message, team_name=self.settings.sender_name),
            )
        )

    def send_welcome(self, message: WelcomeEmail) -> Optional[str]:
        logger.info("Sending welcome email to %s", message.email)
        return self.deliver(
            self.build_payload(
                to_email=message.email,
                to_name=message.full_name,
                subject=render_welcome_subject(self.settings.sender_name),
                html=render_welcome_html(message, team_name=self.settings.sender_name),
            )
        )

    def deliver(self, payload: dict[str, Any]) -> Optional[str]:
        if not self.settings.api_key:
            raise NotificationError("Mail API key not configured")

        url = self.settings.base_url.rstrip("/") + "/smtp/email"
        try:
            status, body = http_post_json(
                url,
                payload,
                headers={"api-key": self.settings.api_key},
                timeout=self.settings.timeout_seconds,
            )
        except (urllib.error.URLError, OSError) as exc:
            raise NotificationError(f"Failed to reach mail provider: {exc}") from exc

        if not 200 <= status < 300:
            logger.error("Mail provider error %s: %s", status, body.decode(errors="ignore"))
            raise NotificationError(f"Failed to send email: {status}")

        try:
            result = json.loads(body.decode("utf-8")) if body else {}
        except ValueError:
            result = {}
        return result.get("messageId")

"""Validation for agent float request submissions."""

from __future__ import annotations

from typing import Any

from backoffice.modules.common.validation import (
    InputValidationError,
    check_amount,
    check_currency,
    check_optional_text,
    limits,
    require_mapping,
)

from .models import URGENCY_LEVELS, FloatRequestInput


def validate_float_request_input(data: Any) -> FloatRequestInput:
    body = require_mapping(data)
    bounds = limits()
    errors: list[str] = []

    amount = check_amount(body.get("amount"), errors)
    currency = check_currency(body.get("currency"), errors)

    urgency = body.get("urgency")
    if not urgency or not isinstance(urgency, str):
        errors.append("Urgency is required")
    elif urgency not in URGENCY_LEVELS:
        errors.append(f"Invalid urgency. Must be one of: {', '.join(URGENCY_LEVELS)}")

    reason = body.get("reason")
    if not isinstance(reason, str) or not reason.strip():
        errors.append("Reason is required")
        reason = None
    elif len(reason.strip()) > bounds.max_reason_length:
        errors.append(f"Reason is too long (max {bounds.max_reason_length} characters)")
    else:
        reason = reason.strip()

    notes = check_optional_text(body.get("notes"), "Notes", bounds.max_notes_length, errors)

    if errors:
        raise InputValidationError(errors)
    return FloatRequestInput(amount=amount, currency=currency, urgency=urgency, reason=reason, notes=notes)

"""Server-side validation of direct float allocations."""

from __future__ import annotations

from typing import Any

from backoffice.modules.common.validation import (
    InputValidationError,
    check_amount,
    check_currency,
    check_optional_text,
    check_uuid,
    limits,
    require_mapping,
)

from .models import AllocationInput


def validate_allocation_input(data: Any) -> AllocationInput:
    body = require_mapping(data)
    errors: list[str] = []

    agent_id = check_uuid(body.get("agent_id"), "Agent ID", errors)
    amount = check_amount(body.get("amount"), errors)
    currency = check_currency(body.get("currency"), errors)
    notes = check_optional_text(body.get("notes"), "Notes", limits().max_notes_length, errors)

    if errors:
        raise InputValidationError(errors)
    return AllocationInput(agent_id=agent_id, amount=amount, currency=currency, notes=notes)

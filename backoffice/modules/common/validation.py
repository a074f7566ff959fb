"""Field checks shared by the submission validators.

Each ``check_*`` helper appends human readable messages to an ``errors`` list
instead of raising, so a validator can report every problem with a payload in
one response. Validators raise :class:`InputValidationError` once all fields
have been inspected.
"""

from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Mapping

from backoffice.core.config import LimitSettings, get_settings

CURRENCIES = ("USD", "SSP", "KES", "UGX")
MONEY_QUANT = Decimal("0.01")
UUID_REGEX = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE)


class InputValidationError(Exception):
    """Raised with the full list of problems found in a request body."""

    def __init__(self, errors: list[str]) -> None:
        super().__init__("; ".join(errors))
        self.errors = list(errors)


def limits() -> LimitSettings:
    return get_settings().limits


def require_mapping(data: Any) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise InputValidationError(["Invalid request body"])
    return data


def format_limit(value: Decimal) -> str:
    return format(value.normalize(), "f")


def check_amount(value: Any, errors: list[str]) -> Decimal | None:
    bounds = limits()
    if value is None:
        errors.append("Amount is required")
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        errors.append("Amount must be a valid number")
        return None
    try:
        amount = Decimal(str(value))
    except InvalidOperation:
        errors.append("Amount must be a valid number")
        return None
    if not amount.is_finite():
        errors.append("Amount must be a valid number")
        return None
    if amount < bounds.min_amount:
        errors.append(f"Amount must be at least {format_limit(bounds.min_amount)}")
        return None
    if amount > bounds.max_amount:
        errors.append(f"Amount cannot exceed {format_limit(bounds.max_amount)}")
        return None
    return amount.quantize(MONEY_QUANT, rounding=ROUND_HALF_UP)


def check_currency(value: Any, errors: list[str]) -> str | None:
    if not value or not isinstance(value, str):
        errors.append("Currency is required")
        return None
    if value not in CURRENCIES:
        errors.append(f"Invalid currency. Must be one of: {', '.join(CURRENCIES)}")
        return None
    return value


def check_uuid(value: Any, label: str, errors: list[str]) -> str | None:
    if not value or not isinstance(value, str):
        errors.append(f"{label} is required")
        return None
    if not UUID_REGEX.match(value):
        errors.append(f"Invalid {label[0].lower()}{label[1:]} format")
        return None
    return value


def check_optional_text(value: Any, label: str, max_length: int, errors: list[str]) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        errors.append(f"{label} must be a string")
        return None
    if len(value) > max_length:
        errors.append(f"{label} {'are' if label.endswith('s') else 'is'} too long (max {max_length} characters)")
        return None
    return value


def ensure_reason(reason: str | None, max_length: int | None = None) -> str | None:
    """Trim a reviewer-supplied reason; blank input yields ``None``."""
    if reason is None:
        return None
    cleaned = reason.strip()
    if not cleaned:
        return None
    if max_length is not None and len(cleaned) > max_length:
        raise InputValidationError([f"Reason is too long (max {max_length} characters)"])
    return cleaned

"""Mobile operator phone-number rules (South Sudan numbering plan)."""

from __future__ import annotations

import re
from typing import NamedTuple, Optional


class OperatorPrefix(NamedTuple):
    label: str
    local: str
    international: str


OPERATOR_PREFIXES: dict[str, OperatorPrefix] = {
    "mtn": OperatorPrefix("MTN", "092", "+21192"),
    "digitel": OperatorPrefix("Digitel", "098", "+21198"),
    "zain": OperatorPrefix("Zain", "091", "+21191"),
}
MOBILE_OPERATORS = tuple(OPERATOR_PREFIXES)

LOCAL_LENGTH = 10
INTERNATIONAL_LENGTH = 13
E164_REGEX = re.compile(r"^\+?[1-9]\d{1,14}$")
_SEPARATORS = re.compile(r"[\s-]")


def clean_phone(phone: str) -> str:
    return _SEPARATORS.sub("", phone)


def is_valid_msisdn(phone: str) -> bool:
    return bool(E164_REGEX.match(clean_phone(phone)))


def validate_phone_for_operator(phone: str, operator: str) -> Optional[str]:
    """Return an error message when ``phone`` does not belong to ``operator``."""
    prefixes = OPERATOR_PREFIXES.get(operator)
    if prefixes is None:
        return f"Invalid mobile operator: {operator}"

    cleaned = clean_phone(phone)
    mismatch = (
        f"Phone number must start with {prefixes.local} or {prefixes.international} "
        f"for {operator.upper()}"
    )
    if cleaned.startswith("+"):
        if not cleaned.startswith(prefixes.international):
            return mismatch
        if len(cleaned) != INTERNATIONAL_LENGTH:
            return "International phone number must be 13 characters"
    else:
        if not cleaned.startswith(prefixes.local):
            return mismatch
        if len(cleaned) != LOCAL_LENGTH:
            return "Local phone number must be 10 digits"
    return None


def is_phone_complete(phone: str, operator: str) -> bool:
    prefixes = OPERATOR_PREFIXES[operator]
    cleaned = clean_phone(phone)
    if cleaned.startswith("+"):
        return len(cleaned) == INTERNATIONAL_LENGTH and cleaned.startswith(prefixes.international)
    return len(cleaned) == LOCAL_LENGTH and cleaned.startswith(prefixes.local)


def format_phone_number(phone: str) -> str:
    """Group digits for display: ``+211 92 123 4567`` or ``092 123 4567``."""
    cleaned = clean_phone(phone)
    if cleaned.startswith("+"):
        if len(cleaned) > 4:
            return f"{cleaned[:4]} {cleaned[4:6]} {cleaned[6:9]} {cleaned[9:]}".strip()
        return cleaned
    if len(cleaned) > 3:
        return f"{cleaned[:3]} {cleaned[3:6]} {cleaned[6:]}".strip()
    return cleaned

"""Server-side validation of transaction submissions."""

from __future__ import annotations

from typing import Any, Mapping

from backoffice.modules.common.validation import (
    InputValidationError,
    check_amount,
    check_currency,
    check_optional_text,
    require_mapping,
)

from .models import TRANSACTION_TYPES, TransactionInput
from .phone import MOBILE_OPERATORS, is_valid_msisdn, validate_phone_for_operator

MAX_PHONE_LENGTH = 20
MAX_RECIPIENT_NAME_LENGTH = 100
MAX_DESTINATION_LENGTH = 100
MAX_NOTES_LENGTH = 500


def validate_transaction_input(data: Any) -> TransactionInput:
    """Validate a raw submission body, collecting every problem before failing."""
    body: Mapping[str, Any] = require_mapping(data)
    errors: list[str] = []

    transaction_type = body.get("transaction_type")
    if not transaction_type or not isinstance(transaction_type, str):
        errors.append("Transaction type is required")
    elif transaction_type not in TRANSACTION_TYPES:
        errors.append(f"Invalid transaction type. Must be one of: {', '.join(TRANSACTION_TYPES)}")

    amount = check_amount(body.get("amount"), errors)
    currency = check_currency(body.get("currency"), errors)

    phone = body.get("recipient_phone")
    if not phone or not isinstance(phone, str):
        errors.append("Recipient phone is required")
        phone = None
    else:
        phone = phone.strip()
        if not phone:
            errors.append("Recipient phone cannot be empty")
        elif len(phone) > MAX_PHONE_LENGTH:
            errors.append(f"Recipient phone is too long (max {MAX_PHONE_LENGTH} characters)")
        elif not is_valid_msisdn(phone):
            errors.append("Invalid phone number format")

    recipient_name = check_optional_text(
        body.get("recipient_name"), "Recipient name", MAX_RECIPIENT_NAME_LENGTH, errors
    )

    metadata = body.get("metadata")
    mobile_operator = None
    if metadata is not None:
        if not isinstance(metadata, Mapping):
            errors.append("Metadata must be an object")
            metadata = None
        else:
            notes = metadata.get("notes")
            if isinstance(notes, str) and len(notes) > MAX_NOTES_LENGTH:
                errors.append(f"Notes are too long (max {MAX_NOTES_LENGTH} characters)")
            destination = metadata.get("destination")
            if isinstance(destination, str) and len(destination) > MAX_DESTINATION_LENGTH:
                errors.append(f"Destination is too long (max {MAX_DESTINATION_LENGTH} characters)")
            operator = metadata.get("mobile_operator")
            if operator and isinstance(operator, str):
                mobile_operator = operator

    if transaction_type == "airtime":
        if not mobile_operator:
            errors.append("Mobile operator is required for airtime transactions")
        elif mobile_operator not in MOBILE_OPERATORS:
            errors.append(f"Invalid mobile operator. Must be one of: {', '.join(MOBILE_OPERATORS)}")
        elif phone:
            problem = validate_phone_for_operator(phone, mobile_operator)
            if problem:
                errors.append(problem)

    if errors:
        raise InputValidationError(errors)

    name = recipient_name.strip() if recipient_name else None
    return TransactionInput(
        transaction_type=transaction_type,
        amount=amount,
        currency=currency,
        recipient_phone=phone,
        recipient_name=name or None,
        metadata=dict(metadata or {}),
    )

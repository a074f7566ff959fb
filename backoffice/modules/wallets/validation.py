"""Server-side validation of wallet top-up requests."""

from __future__ import annotations

from typing import Any

from backoffice.modules.common.validation import (
    InputValidationError,
    check_amount,
    check_uuid,
    require_mapping,
)

from .models import WalletTopupInput


def validate_topup_input(data: Any) -> WalletTopupInput:
    body = require_mapping(data)
    errors: list[str] = []

    wallet_id = check_uuid(body.get("wallet_id"), "Wallet ID", errors)
    amount = check_amount(body.get("amount"), errors)

    if errors:
        raise InputValidationError(errors)
    return WalletTopupInput(wallet_id=wallet_id, amount=amount)

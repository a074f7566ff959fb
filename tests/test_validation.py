from decimal import Decimal

import pytest

from backoffice.modules.allocations import validate_allocation_input
from backoffice.modules.common import InputValidationError, ensure_reason
from backoffice.modules.transactions import validate_transaction_input
from backoffice.modules.transactions.phone import (
    format_phone_number,
    is_phone_complete,
    is_valid_msisdn,
    validate_phone_for_operator,
)
from backoffice.modules.wallets import validate_topup_input

AGENT_ID = "3f2b8c1e-9d4a-4f6b-8a7e-1c2d3e4f5a6b"


def _errors(validator, body):
    with pytest.raises(InputValidationError) as excinfo:
        validator(body)
    return excinfo.value.errors


@pytest.mark.parametrize("amount", [0, -5, 0.001, "-1"])
def test_allocation_rejects_non_positive_amounts(amount):
    errors = _errors(validate_allocation_input, {"agent_id": AGENT_ID, "amount": amount, "currency": "USD"})
    assert len(errors) == 1
    assert errors[0] in {"Amount must be at least 0.01", "Amount must be a valid number"}


def test_allocation_rejects_amount_above_ceiling():
    errors = _errors(validate_allocation_input, {"agent_id": AGENT_ID, "amount": 1_000_000.01, "currency": "USD"})
    assert errors == ["Amount cannot exceed 1000000"]


def test_allocation_accepts_ceiling():
    payload = validate_allocation_input({"agent_id": AGENT_ID, "amount": 1_000_000, "currency": "UGX"})
    assert payload.amount == Decimal("1000000.00")


@pytest.mark.parametrize("currency", ["EUR", "usd", "", None])
def test_allocation_rejects_unknown_currency(currency):
    errors = _errors(validate_allocation_input, {"agent_id": AGENT_ID, "amount": 10, "currency": currency})
    assert errors in (["Currency is required"], ["Invalid currency. Must be one of: USD, SSP, KES, UGX"])


def test_allocation_collects_every_error():
    errors = _errors(
        validate_allocation_input,
        {"agent_id": "not-a-uuid", "amount": True, "currency": "GBP", "notes": "x" * 501},
    )
    assert errors == [
        "Invalid agent ID format",
        "Amount must be a valid number",
        "Invalid currency. Must be one of: USD, SSP, KES, UGX",
        "Notes are too long (max 500 characters)",
    ]


@pytest.mark.parametrize("body", [None, [], "text", 42])
def test_non_object_bodies(body):
    assert _errors(validate_allocation_input, body) == ["Invalid request body"]


def test_topup_requires_wallet_uuid():
    assert _errors(validate_topup_input, {"amount": 5}) == ["Wallet ID is required"]
    assert _errors(validate_topup_input, {"wallet_id": "123", "amount": 5}) == ["Invalid wallet ID format"]


def test_topup_valid():
    payload = validate_topup_input({"wallet_id": AGENT_ID.upper(), "amount": 12.5})
    assert payload.amount == Decimal("12.50")


def test_transaction_accumulates_errors():
    errors = _errors(
        validate_transaction_input,
        {
            "transaction_type": "bank_wire",
            "amount": 2_000_000,
            "currency": "EUR",
            "recipient_phone": "abc",
            "recipient_name": "n" * 101,
            "metadata": {"notes": "z" * 501, "destination": "d" * 101},
        },
    )
    assert errors == [
        "Invalid transaction type. Must be one of: airtime, mtn_momo, digicash, m_gurush, mpesa_kenya, uganda_mobile_money",
        "Amount cannot exceed 1000000",
        "Invalid currency. Must be one of: USD, SSP, KES, UGX",
        "Invalid phone number format",
        "Recipient name is too long (max 100 characters)",
        "Notes are too long (max 500 characters)",
        "Destination is too long (max 100 characters)",
    ]


def test_transaction_missing_fields():
    errors = _errors(validate_transaction_input, {"recipient_phone": "   "})
    assert errors == [
        "Transaction type is required",
        "Amount is required",
        "Currency is required",
        "Recipient phone cannot be empty",
    ]


def test_valid_transaction_is_normalised():
    payload = validate_transaction_input(
        {
            "transaction_type": "mpesa_kenya",
            "amount": 99.999,
            "currency": "KES",
            "recipient_phone": " +254 712-345-678 ",
            "recipient_name": "  Wanjiru ",
            "metadata": {"notes": "school fees"},
        }
    )

    assert payload.amount == Decimal("100.00")
    assert payload.recipient_phone == "+254 712-345-678"
    assert payload.recipient_name == "Wanjiru"
    assert payload.metadata == {"notes": "school fees"}


def test_airtime_requires_operator():
    errors = _errors(
        validate_transaction_input,
        {"transaction_type": "airtime", "amount": 10, "currency": "SSP", "recipient_phone": "+211921234567"},
    )
    assert errors == ["Mobile operator is required for airtime transactions"]


def test_airtime_rejects_unknown_operator():
    errors = _errors(
        validate_transaction_input,
        {
            "transaction_type": "airtime",
            "amount": 10,
            "currency": "SSP",
            "recipient_phone": "+211921234567",
            "metadata": {"mobile_operator": "vivacell"},
        },
    )
    assert errors == ["Invalid mobile operator. Must be one of: mtn, digitel, zain"]


def test_airtime_phone_must_match_operator_prefix():
    errors = _errors(
        validate_transaction_input,
        {
            "transaction_type": "airtime",
            "amount": 10,
            "currency": "SSP",
            "recipient_phone": "+211981234567",
            "metadata": {"mobile_operator": "mtn"},
        },
    )
    assert errors == ["Phone number must start with 092 or +21192 for MTN"]


def test_airtime_valid_for_matching_operator():
    payload = validate_transaction_input(
        {
            "transaction_type": "airtime",
            "amount": 10,
            "currency": "SSP",
            "recipient_phone": "+211 98 123 4567",
            "metadata": {"mobile_operator": "digitel"},
        }
    )
    assert payload.metadata["mobile_operator"] == "digitel"


@pytest.mark.parametrize(
    "phone, operator, expected",
    [
        ("0921234567", "mtn", None),
        ("092123456", "mtn", "Local phone number must be 10 digits"),
        ("+2119112345678", "zain", "International phone number must be 13 characters"),
        ("0911234567", "mtn", "Phone number must start with 092 or +21192 for MTN"),
        ("+211911234567", "zain", None),
        ("0911234567", "orange", "Invalid mobile operator: orange"),
    ],
)
def test_operator_prefix_rules(phone, operator, expected):
    assert validate_phone_for_operator(phone, operator) == expected


def test_phone_helpers():
    assert is_valid_msisdn("+211 921-234-567")
    assert not is_valid_msisdn("+0123")
    assert is_phone_complete("092 123 4567", "mtn")
    assert not is_phone_complete("092 123", "mtn")
    assert format_phone_number("+211921234567") == "+211 92 123 4567"
    assert format_phone_number("0921234567") == "092 123 4567"


def test_ensure_reason():
    assert ensure_reason(None) is None
    assert ensure_reason("   ") is None
    assert ensure_reason("  ok ") == "ok"
    with pytest.raises(InputValidationError):
        ensure_reason("x" * 11, max_length=10)


def test_empty_object_reports_each_missing_field():
    assert _errors(validate_allocation_input, {}) == [
        "Agent ID is required",
        "Amount is required",
        "Currency is required",
    ]

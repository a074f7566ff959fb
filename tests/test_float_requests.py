from decimal import Decimal

import pytest

from backoffice.modules.allocations import AllocationService
from backoffice.modules.audit import AuditService
from backoffice.modules.common import InputValidationError
from backoffice.modules.float_requests import (
    FloatRequestInput,
    FloatRequestNotFoundError,
    FloatRequestService,
    FloatRequestStateError,
    FloatRequestStatus,
    validate_float_request_input,
)
from backoffice.modules.transactions import ReasonRequiredError
from backoffice.modules.wallets import WalletService


async def _request(session, agent, amount="500", currency="USD", reason="Market day stock"):
    payload = FloatRequestInput(
        amount=Decimal(amount),
        currency=currency,
        urgency="high",
        reason=reason,
    )
    return await FloatRequestService.with_session(session).create(agent, payload)


async def test_approval_opens_wallet_with_requested_amount(session, agent, reviewer):
    request = await _request(session, agent)
    assert await WalletService.with_session(session).get_wallet(agent.id, "USD") is None

    approval = await FloatRequestService.with_session(session).approve(request.id, reviewer)

    assert approval.request.status is FloatRequestStatus.APPROVED
    assert approval.request.reviewed_by == reviewer.id
    assert approval.request.reviewed_at is not None
    assert approval.wallet.owner_id == agent.id
    assert approval.wallet.currency == "USD"
    assert approval.wallet.balance == Decimal("500.00")

    stored = await WalletService.with_session(session).get_wallet(agent.id, "USD")
    assert stored.balance == Decimal("500.00")


async def test_approval_increments_existing_wallet(session, agent, reviewer):
    await WalletService.with_session(session).credit(agent.id, "SSP", Decimal("1200.50"))
    request = await _request(session, agent, amount="799.50", currency="SSP")

    approval = await FloatRequestService.with_session(session).approve(request.id, reviewer)

    assert approval.wallet.balance == Decimal("2000.00")
    wallets = await WalletService.with_session(session).list_wallets(agent.id)
    assert len(wallets) == 1


async def test_approval_writes_exactly_one_allocation(session, agent, reviewer):
    request = await _request(session, agent, reason="Restock airtime")

    await FloatRequestService.with_session(session).approve(request.id, reviewer)
    allocations = await AllocationService.with_session(session).list_allocations(float_request_id=request.id)

    assert len(allocations) == 1
    allocation = allocations[0]
    assert allocation.agent_id == agent.id
    assert allocation.allocated_by == reviewer.id
    assert allocation.amount == Decimal("500.00")
    assert allocation.notes == "Approved float request: Restock airtime"


async def test_second_approval_is_refused_without_double_credit(session, agent, reviewer, super_agent):
    request = await _request(session, agent)
    service = FloatRequestService.with_session(session)
    await service.approve(request.id, reviewer)

    with pytest.raises(FloatRequestStateError):
        await service.approve(request.id, super_agent)

    wallet = await WalletService.with_session(session).get_wallet(agent.id, "USD")
    assert wallet.balance == Decimal("500.00")
    allocations = await AllocationService.with_session(session).list_allocations(float_request_id=request.id)
    assert len(allocations) == 1


async def test_reject_requires_reason_and_records_it(session, agent, reviewer):
    request = await _request(session, agent)
    service = FloatRequestService.with_session(session)

    with pytest.raises(ReasonRequiredError):
        await service.reject(request.id, reviewer, "  ")

    rejected = await service.reject(request.id, reviewer, " Float limit reached ")
    assert rejected.status is FloatRequestStatus.REJECTED
    assert rejected.rejection_reason == "Float limit reached"
    assert await WalletService.with_session(session).get_wallet(agent.id, "USD") is None

    with pytest.raises(FloatRequestStateError):
        await service.approve(request.id, reviewer)


async def test_unknown_request(session, reviewer):
    with pytest.raises(FloatRequestNotFoundError):
        await FloatRequestService.with_session(session).approve("nope", reviewer)


async def test_agents_only_see_their_own_requests(session, agent, reviewer, make_account):
    other = await make_account()
    mine = await _request(session, agent)
    await _request(session, other)
    service = FloatRequestService.with_session(session)

    assert [item.id for item in await service.list_requests(agent)] == [mine.id]
    assert len(await service.list_requests(reviewer)) == 2
    assert await service.list_requests(reviewer, status="approved") == []
    assert await service.count_pending() == 2


async def test_approval_is_audited(session, agent, reviewer):
    request = await _request(session, agent)
    approval = await FloatRequestService.with_session(session).approve(request.id, reviewer)

    entries = await AuditService.with_session(session).list_entries(entity_type="float_request")

    assert len(entries) == 1
    assert entries[0].action == "approved"
    assert entries[0].new_values["wallet_id"] == approval.wallet.id
    assert entries[0].new_values["balance"] == "500.00"


def test_validate_float_request_input_collects_errors():
    with pytest.raises(InputValidationError) as excinfo:
        validate_float_request_input({"amount": 0, "currency": "EUR", "urgency": "asap", "reason": " "})

    assert excinfo.value.errors == [
        "Amount must be at least 0.01",
        "Invalid currency. Must be one of: USD, SSP, KES, UGX",
        "Invalid urgency. Must be one of: low, medium, high, critical",
        "Reason is required",
    ]


def test_validate_float_request_input_accepts_valid_body():
    payload = validate_float_request_input(
        {"amount": 150.255, "currency": "SSP", "urgency": "critical", "reason": " Weekend float ", "notes": "cash"}
    )

    assert payload.amount == Decimal("150.26")
    assert payload.reason == "Weekend float"
    assert payload.notes == "cash"

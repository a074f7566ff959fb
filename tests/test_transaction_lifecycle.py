from decimal import Decimal

import pytest

from backoffice.modules.audit import AuditService
from backoffice.modules.transactions import (
    ApprovalStatus,
    InvalidTransitionError,
    ReasonRequiredError,
    TransactionInput,
    TransactionNotFoundError,
    TransactionService,
    can_transition,
)
from backoffice.modules.transactions.models import TRANSITIONS, is_terminal, source_states


def test_transition_table_edges():
    assert can_transition("pending", "approved")
    assert can_transition("pending", "rejected")
    assert can_transition("pending", "escalated")
    assert can_transition("escalated", "approved")
    assert can_transition("escalated", "rejected")
    assert not can_transition("escalated", "escalated")
    assert not can_transition("escalated", "pending")


def test_no_state_leads_back_to_pending():
    assert all(ApprovalStatus.PENDING not in targets for targets in TRANSITIONS.values())
    assert source_states(ApprovalStatus.PENDING) == frozenset()


def test_terminal_states():
    assert is_terminal(ApprovalStatus.APPROVED)
    assert is_terminal(ApprovalStatus.REJECTED)
    assert not is_terminal(ApprovalStatus.ESCALATED)
    assert source_states(ApprovalStatus.APPROVED) == {ApprovalStatus.PENDING, ApprovalStatus.ESCALATED}
    assert source_states(ApprovalStatus.ESCALATED) == {ApprovalStatus.PENDING}


async def _submit(session, agent, **overrides):
    payload = TransactionInput(
        transaction_type=overrides.pop("transaction_type", "mtn_momo"),
        amount=overrides.pop("amount", Decimal("250.00")),
        currency=overrides.pop("currency", "USD"),
        recipient_phone=overrides.pop("recipient_phone", "+211921234567"),
        recipient_name=overrides.pop("recipient_name", "Akol Deng"),
    )
    return await TransactionService.with_session(session).submit(agent, payload)


async def test_submit_starts_pending(session, agent):
    record = await _submit(session, agent)

    assert record.approval_status is ApprovalStatus.PENDING
    assert record.status == "pending"
    assert record.agent_id == agent.id
    assert record.amount == Decimal("250.00")


async def test_approve_records_reviewer(session, agent, reviewer):
    record = await _submit(session, agent)
    service = TransactionService.with_session(session)

    approved = await service.approve(record.id, reviewer)

    assert approved.approval_status is ApprovalStatus.APPROVED
    assert approved.status == "approved"
    assert approved.approved_by == reviewer.id
    assert approved.approved_at is not None


async def test_reject_persists_exact_reason(session, agent, reviewer):
    record = await _submit(session, agent)
    service = TransactionService.with_session(session)

    await service.reject(record.id, reviewer, "insufficient documentation")
    stored = await service.get(record.id)

    assert stored.approval_status is ApprovalStatus.REJECTED
    assert stored.status == "rejected"
    assert stored.rejection_reason == "insufficient documentation"
    assert stored.approved_by == reviewer.id


@pytest.mark.parametrize("reason", [None, "", "   ", "\n\t"])
async def test_reject_requires_reason(session, agent, reviewer, reason):
    record = await _submit(session, agent)
    service = TransactionService.with_session(session)

    with pytest.raises(ReasonRequiredError):
        await service.reject(record.id, reviewer, reason)

    assert (await service.get(record.id)).approval_status is ApprovalStatus.PENDING


async def test_reject_trims_reason(session, agent, reviewer):
    record = await _submit(session, agent)
    rejected = await TransactionService.with_session(session).reject(record.id, reviewer, "  duplicate  ")
    assert rejected.rejection_reason == "duplicate"


async def test_escalate_then_approve(session, agent, reviewer, super_agent):
    record = await _submit(session, agent)
    service = TransactionService.with_session(session)

    escalated = await service.escalate(record.id, reviewer, "amount above branch limit")
    assert escalated.approval_status is ApprovalStatus.ESCALATED
    assert escalated.escalated_by == reviewer.id
    assert escalated.escalation_reason == "amount above branch limit"
    assert escalated.escalated_at is not None

    queue = await service.list_escalated()
    assert [item.id for item in queue] == [record.id]

    approved = await service.approve(record.id, super_agent)
    assert approved.approval_status is ApprovalStatus.APPROVED
    assert await service.list_escalated() == []


async def test_escalate_requires_reason(session, agent, reviewer):
    record = await _submit(session, agent)
    with pytest.raises(ReasonRequiredError):
        await TransactionService.with_session(session).escalate(record.id, reviewer, " ")


async def test_approved_transaction_is_final(session, agent, reviewer):
    record = await _submit(session, agent)
    service = TransactionService.with_session(session)
    await service.approve(record.id, reviewer)

    with pytest.raises(InvalidTransitionError):
        await service.approve(record.id, reviewer)
    with pytest.raises(InvalidTransitionError):
        await service.reject(record.id, reviewer, "too late")
    with pytest.raises(InvalidTransitionError):
        await service.escalate(record.id, reviewer, "too late")

    assert (await service.get(record.id)).approval_status is ApprovalStatus.APPROVED


async def test_escalated_cannot_be_escalated_again(session, agent, reviewer):
    record = await _submit(session, agent)
    service = TransactionService.with_session(session)
    await service.escalate(record.id, reviewer, "check identity")

    with pytest.raises(InvalidTransitionError) as excinfo:
        await service.escalate(record.id, reviewer, "again")
    assert excinfo.value.current == "escalated"


async def test_conditional_update_rejects_stale_source_state(session, agent, reviewer):
    record = await _submit(session, agent)
    service = TransactionService.with_session(session)
    await service.reject(record.id, reviewer, "fraud suspected")

    # A concurrent reviewer whose write still expects "pending" must not win.
    updated = await service.repository.update_status(
        record.id, expected=["pending", "escalated"], values={"approval_status": "approved"}
    )

    assert updated is None
    assert (await service.get(record.id)).approval_status is ApprovalStatus.REJECTED


async def test_unknown_transaction(session, reviewer):
    with pytest.raises(TransactionNotFoundError):
        await TransactionService.with_session(session).approve("missing-id", reviewer)


async def test_transitions_are_audited(session, agent, reviewer):
    record = await _submit(session, agent)
    service = TransactionService.with_session(session)
    await service.escalate(record.id, reviewer, "needs second look")
    await service.reject(record.id, reviewer, "insufficient documentation")

    entries = await AuditService.with_session(session).list_entries(entity_type="transaction", entity_id=record.id)

    assert [entry.action for entry in entries] == ["rejected", "escalated"]
    rejected = entries[0]
    assert rejected.old_values == {"approval_status": "escalated"}
    assert rejected.new_values["rejection_reason"] == "insufficient documentation"
    assert rejected.user_id == reviewer.id
    assert rejected.ip_address is None


async def test_audit_entries_carry_session_client_address(session, agent, reviewer):
    record = await _submit(session, agent)
    session.info["client_ip"] = "10.0.0.7"
    await TransactionService.with_session(session).approve(record.id, reviewer)

    entries = await AuditService.with_session(session).list_entries(entity_type="transaction", entity_id=record.id)

    assert [(entry.action, entry.ip_address) for entry in entries] == [("approved", "10.0.0.7")]


async def test_list_filters(session, agent, reviewer, make_account):
    other = await make_account()
    first = await _submit(session, agent)
    await _submit(session, other)
    service = TransactionService.with_session(session)
    await service.approve(first.id, reviewer)

    mine = await service.list_transactions(agent_id=agent.id)
    approved = await service.list_transactions(approval_status="approved")
    everything = await service.list_transactions(approval_status="all")

    assert [item.id for item in mine] == [first.id]
    assert [item.id for item in approved] == [first.id]
    assert len(everything) == 2


async def test_status_counts_and_volume(session, agent, reviewer):
    service = TransactionService.with_session(session)
    first = await _submit(session, agent, amount=Decimal("100.00"))
    second = await _submit(session, agent, amount=Decimal("50.50"))
    await _submit(session, agent)
    await service.approve(first.id, reviewer)
    await service.approve(second.id, reviewer)

    counts = await service.status_counts()
    volume = await service.approved_volume_by_currency()

    assert counts == {"pending": 1, "approved": 2, "rejected": 0, "escalated": 0}
    assert volume == {"USD": Decimal("150.50")}


async def test_list_returns_newest_first(session, agent):
    submitted = [await _submit(session, agent) for _ in range(3)]

    listed = await TransactionService.with_session(session).list_transactions(agent_id=agent.id)

    assert [item.id for item in listed] == [record.id for record in reversed(submitted)]

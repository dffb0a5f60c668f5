"""Unit tests for PaymentService: listings and the approval transition."""

from datetime import datetime, timedelta
from decimal import Decimal
from uuid import uuid4

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.billing import BillPayment
from app.models.enums import ApprovalStatus, PaymentStatus
from app.services.billing_service import PaymentService
from app.services.user_service import UserService


def _payment(**overrides) -> BillPayment:
    fields = dict(
        consumer_id="C-1",
        plan_name="Basic Plan",
        units_used=Decimal("10"),
        amount_paid=Decimal("50"),
        remaining_units=Decimal("90"),
        payment_status=PaymentStatus.SUCCESS,
        approval_status=ApprovalStatus.PENDING,
    )
    fields.update(overrides)
    return BillPayment(**fields)


@pytest.fixture
async def pending_payment(db_session: AsyncSession) -> BillPayment:
    payment = _payment()
    db_session.add(payment)
    await db_session.commit()
    await db_session.refresh(payment)
    return payment


@pytest.mark.asyncio
async def test_new_payment_starts_pending(pending_payment: BillPayment):
    assert pending_payment.approval_status == ApprovalStatus.PENDING


@pytest.mark.asyncio
async def test_approve(db_session: AsyncSession, pending_payment: BillPayment):
    updated = await PaymentService.set_approval_status(db_session, pending_payment.id, ApprovalStatus.APPROVED)

    assert updated.id == pending_payment.id
    assert updated.approval_status == ApprovalStatus.APPROVED
    # the business outcome never changes
    assert updated.payment_status == PaymentStatus.SUCCESS


@pytest.mark.asyncio
async def test_reject(db_session: AsyncSession, pending_payment: BillPayment):
    updated = await PaymentService.set_approval_status(db_session, pending_payment.id, ApprovalStatus.REJECTED)
    assert updated.approval_status == ApprovalStatus.REJECTED


@pytest.mark.asyncio
async def test_later_decision_overwrites_earlier_one(db_session: AsyncSession, pending_payment: BillPayment, caplog):
    """Terminal states are not guarded: approve then reject ends rejected."""
    await PaymentService.set_approval_status(db_session, pending_payment.id, ApprovalStatus.APPROVED)

    with caplog.at_level("WARNING", logger="app.services.billing_service"):
        updated = await PaymentService.set_approval_status(db_session, pending_payment.id, ApprovalStatus.REJECTED)

    assert updated.approval_status == ApprovalStatus.REJECTED
    assert "Overwriting approval decision" in caplog.text


@pytest.mark.asyncio
async def test_set_approval_status_unknown_payment(db_session: AsyncSession):
    assert await PaymentService.set_approval_status(db_session, uuid4(), ApprovalStatus.APPROVED) is None


@pytest.mark.asyncio
async def test_set_approval_status_refuses_pending_target(db_session: AsyncSession, pending_payment: BillPayment):
    with pytest.raises(ValueError):
        await PaymentService.set_approval_status(db_session, pending_payment.id, ApprovalStatus.PENDING)


@pytest.mark.asyncio
async def test_list_payments_newest_first_with_limit(db_session: AsyncSession):
    base = datetime(2026, 1, 1, 12, 0, 0)
    for i in range(5):
        db_session.add(_payment(consumer_id=f"C-{i}", transaction_date=base + timedelta(minutes=i)))
    await db_session.commit()

    payments = await PaymentService.list_payments(db_session, limit=3)

    assert [p.consumer_id for p in payments] == ["C-4", "C-3", "C-2"]


@pytest.mark.asyncio
async def test_list_payments_filters_by_approval_status(db_session: AsyncSession):
    db_session.add_all([
        _payment(consumer_id="pending-1"),
        _payment(consumer_id="approved-1", approval_status=ApprovalStatus.APPROVED),
        _payment(consumer_id="rejected-1", approval_status=ApprovalStatus.REJECTED),
        _payment(consumer_id="pending-2", payment_status=PaymentStatus.FAILURE),
    ])
    await db_session.commit()

    pending = await PaymentService.list_payments(db_session, approval_status=ApprovalStatus.PENDING)

    assert {p.consumer_id for p in pending} == {"pending-1", "pending-2"}


@pytest.mark.asyncio
async def test_list_user_payments_only_returns_own(db_session: AsyncSession):
    alice = await UserService.create_user(db_session, "alice@test.com", "secret123", "Alice")
    bob = await UserService.create_user(db_session, "bob@test.com", "secret123", "Bob")
    db_session.add_all([
        _payment(consumer_id="A-1", user_id=alice.id),
        _payment(consumer_id="B-1", user_id=bob.id),
        _payment(consumer_id="anon"),
    ])
    await db_session.commit()

    payments = await PaymentService.list_user_payments(db_session, alice.id)

    assert [p.consumer_id for p in payments] == ["A-1"]

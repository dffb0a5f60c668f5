"""Unit tests for billing and user schemas (camelCase wire format)."""

from datetime import datetime, timezone
from decimal import Decimal
from uuid import uuid4

import pytest
from pydantic import ValidationError

from app.models.enums import ApprovalStatus, PaymentStatus, UserRole
from app.schemas.auth import SignupRequest
from app.schemas.billing import BillPaymentResponse, PayBillRequest, PayBillResponse, PaymentFailureResponse
from app.schemas.user import UserResponse


def _now():
    return datetime.now(tz=timezone.utc)


def test_paybill_request_reads_camel_case():
    req = PayBillRequest.model_validate({"consumerId": "C-1", "planName": "Basic Plan", "unitsUsed": 80})
    assert req.consumer_id == "C-1"
    assert req.plan_name == "Basic Plan"
    assert req.units_used == 80


def test_paybill_request_keeps_units_untyped():
    """Numeric checks happen in the processor, not the schema."""
    req = PayBillRequest.model_validate({"consumerId": "C-1", "planName": "Basic Plan", "unitsUsed": "eighty"})
    assert req.units_used == "eighty"


def test_paybill_request_keeps_text_fields_untyped():
    req = PayBillRequest.model_validate({"consumerId": 1001, "planName": ["Basic Plan"], "unitsUsed": 5})
    assert req.consumer_id == 1001
    assert req.plan_name == ["Basic Plan"]


def test_paybill_request_all_fields_optional():
    req = PayBillRequest.model_validate({})
    assert req.consumer_id is None
    assert req.plan_name is None
    assert req.units_used is None


def test_paybill_response_dumps_camel_case():
    resp = PayBillResponse(
        payment_status=PaymentStatus.SUCCESS,
        remaining_units=20.0,
        total_amount=400.0,
        message="Payment processed successfully",
        transaction_id=uuid4(),
        transaction_date=_now(),
    )
    dumped = resp.model_dump(by_alias=True, mode="json")
    assert set(dumped) == {
        "paymentStatus", "remainingUnits", "totalAmount", "message", "transactionId", "transactionDate"
    }
    assert dumped["paymentStatus"] == "success"


def test_failure_response_defaults_to_failure():
    dumped = PaymentFailureResponse(message="nope").model_dump(by_alias=True, mode="json")
    assert dumped == {"paymentStatus": "failure", "message": "nope"}


def test_bill_payment_response_from_orm_like_object():
    pid = uuid4()

    class FakePayment:
        id = pid
        user_id = None
        consumer_id = "C-9"
        plan_name = "Basic Plan"
        units_used = Decimal("120.0000")
        amount_paid = Decimal("600.0000")
        remaining_units = Decimal("-20.0000")
        payment_status = PaymentStatus.FAILURE
        approval_status = ApprovalStatus.PENDING
        transaction_date = datetime(2026, 1, 1)
        created_at = datetime(2026, 1, 1)
        updated_at = datetime(2026, 1, 1)

    resp = BillPaymentResponse.model_validate(FakePayment())

    assert resp.id == pid
    assert resp.amount_paid == 600.0
    assert resp.remaining_units == -20.0
    dumped = resp.model_dump(by_alias=True, mode="json")
    assert dumped["approvalStatus"] == "pending"
    assert dumped["userId"] is None


def test_signup_request_normalizes_input():
    req = SignupRequest.model_validate(
        {"fullName": "  Jane Doe ", "email": "Jane@Example.COM", "password": "secret1"}
    )
    assert req.full_name == "Jane Doe"
    assert req.email == "jane@example.com"
    assert req.role is None


@pytest.mark.parametrize(
    "payload",
    [
        {"fullName": "J", "email": "j@example.com", "password": "secret1"},
        {"fullName": "Jane", "email": "not-an-email", "password": "secret1"},
        {"fullName": "Jane", "email": "j@example.com", "password": "123"},
        {"fullName": "Jane", "email": "j@example.com", "password": "secret1", "role": "superuser"},
    ],
)
def test_signup_request_rejects_invalid(payload):
    with pytest.raises(ValidationError):
        SignupRequest.model_validate(payload)


def test_user_response_hides_password():
    class FakeUser:
        id = uuid4()
        full_name = "Jane Doe"
        email = "jane@example.com"
        hashed_password = "$2b$12$..."
        role = UserRole.USER
        is_active = True
        created_at = _now()

    dumped = UserResponse.model_validate(FakeUser()).model_dump(by_alias=True)
    assert "hashedPassword" not in dumped
    assert dumped["fullName"] == "Jane Doe"

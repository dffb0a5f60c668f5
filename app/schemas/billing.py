from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from pydantic import Field

from app.models.enums import ApprovalStatus, PaymentStatus
from app.schemas.responses import CamelModel


class PayBillRequest(CamelModel):
    """
    Bill payment submission.

    Fields are untyped: presence, type, emptiness and numeric checks run
    in the bill processor and are reported as billing failures.
    """
    consumer_id: Any = Field(None, description="Meter or account reference")
    plan_name: Any = Field(None, description="Plan name, matched case-insensitively")
    units_used: Any = Field(None, description="Units consumed; must be a non-negative number")


class PayBillResponse(CamelModel):
    payment_status: PaymentStatus
    remaining_units: float
    total_amount: float
    message: str
    transaction_id: UUID
    transaction_date: datetime


class PaymentFailureResponse(CamelModel):
    """Body returned when a submission is refused before anything is stored"""
    payment_status: PaymentStatus = PaymentStatus.FAILURE
    message: str


class BillPaymentResponse(CamelModel):
    id: UUID
    user_id: Optional[UUID] = None
    consumer_id: str
    plan_name: str
    units_used: float
    amount_paid: float
    remaining_units: float
    payment_status: PaymentStatus
    approval_status: ApprovalStatus
    transaction_date: datetime
    created_at: datetime
    updated_at: datetime


class PlanResponse(CamelModel):
    name: str
    price_per_unit: float
    units_included: int
    validity_days: int
    active: bool

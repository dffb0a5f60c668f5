"""Billing Model"""

from sqlalchemy import Column, DateTime, Enum, ForeignKey, Numeric, String, Uuid
from sqlalchemy.orm import relationship

from app.models.base import BaseModel
from app.models.enums import ApprovalStatus, PaymentStatus
from app.utils.time import get_utc_now


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class BillPayment(BaseModel):
    """
    One bill payment attempt.

    amount_paid and remaining_units are derived from units_used and the
    plan at creation time and are never recomputed. payment_status is fixed
    at creation; approval_status is the only field changed afterwards.
    """
    __tablename__ = "bill_payments"

    # Submitting account; absent for anonymous submissions
    user_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    consumer_id = Column(String(255), nullable=False, index=True)
    plan_name = Column(String(100), nullable=False)

    units_used = Column(Numeric(14, 4), nullable=False)
    amount_paid = Column(Numeric(20, 4), nullable=False)
    # Signed: negative when usage exceeds the plan allowance
    remaining_units = Column(Numeric(14, 4), nullable=False)

    payment_status = Column(
        Enum(PaymentStatus, name="payment_status", values_callable=_enum_values),
        nullable=False,
    )
    approval_status = Column(
        Enum(ApprovalStatus, name="approval_status", values_callable=_enum_values),
        default=ApprovalStatus.PENDING,
        nullable=False,
        index=True,
    )

    transaction_date = Column(DateTime, default=get_utc_now, nullable=False, index=True)

    # Relationships
    user = relationship("User", back_populates="payments")

    def __repr__(self) -> str:
        return f"<BillPayment {self.consumer_id} {self.plan_name} - {self.payment_status}/{self.approval_status}>"

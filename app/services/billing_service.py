"""Billing Service - bill processing and payment approval"""

import logging
import math
from dataclasses import dataclass
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from numbers import Real
from typing import Any, List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import (
    EmptyConsumerIdError,
    InvalidUnitsError,
    MalformedFieldError,
    MissingFieldsError,
    PlanInactiveError,
    PlanNotFoundError,
    StorageError,
    UnitsTooLargeError,
)
from app.core.plans import MAX_UNITS, Plan, PlanCatalog
from app.models.billing import BillPayment
from app.models.enums import ApprovalStatus, PaymentStatus

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Payment processed successfully"

# Scale of the units and amount columns on bill_payments
QUANTUM = Decimal("0.0001")


@dataclass(frozen=True)
class BillQuote:
    """Charge and allowance figures for one plan and usage."""
    plan: Plan
    units_used: Decimal
    total_amount: Decimal
    remaining_units: Decimal
    payment_status: PaymentStatus
    message: str


@dataclass(frozen=True)
class PaymentOutcome:
    """Result of a validated payment attempt; the record has been stored."""
    payment_status: PaymentStatus
    total_amount: Decimal
    remaining_units: Decimal
    message: str
    transaction_id: UUID
    transaction_date: datetime


def _to_units(value: Any) -> Decimal:
    """
    Coerce a JSON number to Decimal at the stored scale.

    Bools, strings, non-finite and negative values are rejected, as is
    anything above MAX_UNITS. Extra decimal places are rounded half up to
    QUANTUM so the priced figures match what is stored.
    """
    if isinstance(value, bool) or not isinstance(value, (Real, Decimal)):
        raise InvalidUnitsError()
    if isinstance(value, float) and not math.isfinite(value):
        raise InvalidUnitsError()
    try:
        units = Decimal(str(value))
    except InvalidOperation:
        raise InvalidUnitsError()
    if not units.is_finite() or units < 0:
        raise InvalidUnitsError()
    if units > MAX_UNITS:
        raise UnitsTooLargeError(MAX_UNITS)
    return units.quantize(QUANTUM, rounding=ROUND_HALF_UP)


def _plain(value: Decimal) -> Decimal:
    """Drop trailing zeros so messages read 100, not 100.00"""
    normalized = value.normalize()
    return normalized.quantize(Decimal(1)) if normalized == normalized.to_integral() else normalized


class BillProcessor:
    """
    Turns a usage submission into a stored payment record.

    The plan catalog is supplied at construction and only read.
    """

    def __init__(self, catalog: PlanCatalog):
        self.catalog = catalog

    def resolve_plan(self, plan_name: str) -> Plan:
        plan = self.catalog.find_plan(plan_name)
        if plan is None:
            raise PlanNotFoundError(plan_name)
        if not plan.active:
            raise PlanInactiveError(plan_name)
        return plan

    def validate(self, consumer_id: Any, plan_name: Any, units_used: Any) -> tuple[str, Plan, Decimal]:
        """
        Run the submission checks in order; the first failure is raised.

        Returns:
            Tuple of (trimmed consumer id, resolved plan, units as Decimal)

        Raises:
            MissingFieldsError, MalformedFieldError, EmptyConsumerIdError,
            InvalidUnitsError, PlanNotFoundError, PlanInactiveError
        """
        if not consumer_id or not plan_name or units_used is None:
            raise MissingFieldsError()
        if not isinstance(consumer_id, str):
            raise MalformedFieldError("consumerId")
        if not isinstance(plan_name, str):
            raise MalformedFieldError("planName")

        consumer_id = consumer_id.strip()
        if not consumer_id:
            raise EmptyConsumerIdError()

        units = _to_units(units_used)
        plan = self.resolve_plan(plan_name)
        return consumer_id, plan, units

    @staticmethod
    def evaluate(plan: Plan, units_used: Decimal) -> BillQuote:
        """Compute charge, remaining allowance and status. Pure."""
        total_amount = (units_used * plan.price_per_unit).quantize(QUANTUM, rounding=ROUND_HALF_UP)
        # Signed on purpose: shows how far usage overran the allowance
        remaining_units = plan.units_included - units_used

        if units_used <= plan.units_included:
            status, message = PaymentStatus.SUCCESS, SUCCESS_MESSAGE
        else:
            status = PaymentStatus.FAILURE
            message = (
                f"Insufficient units. Plan includes {plan.units_included} units, "
                f"but {_plain(units_used)} units were used."
            )

        return BillQuote(
            plan=plan,
            units_used=units_used,
            total_amount=total_amount,
            remaining_units=remaining_units,
            payment_status=status,
            message=message,
        )

    async def process_payment(
        self,
        db: AsyncSession,
        consumer_id: Any,
        plan_name: Any,
        units_used: Any,
        owner_id: Optional[UUID] = None,
    ) -> PaymentOutcome:
        """
        Validate, price and store a payment attempt.

        Over-allowance usage is stored with payment_status=failure and is not
        an error. Validation failures raise before anything is written.

        Raises:
            BillingError subclasses for refused submissions
            StorageError: If the record could not be saved
        """
        consumer_id, plan, units = self.validate(consumer_id, plan_name, units_used)
        quote = self.evaluate(plan, units)

        payment = BillPayment(
            user_id=owner_id,
            consumer_id=consumer_id,
            plan_name=plan.name,
            units_used=quote.units_used,
            amount_paid=quote.total_amount,
            remaining_units=quote.remaining_units,
            payment_status=quote.payment_status,
            approval_status=ApprovalStatus.PENDING,
        )

        try:
            db.add(payment)
            await db.commit()
            await db.refresh(payment)
        except SQLAlchemyError as exc:
            await db.rollback()
            logger.error(
                "Failed to store bill payment",
                extra={"consumer_id": consumer_id, "plan_name": plan.name},
                exc_info=True,
            )
            raise StorageError() from exc

        logger.info(
            "Bill payment recorded",
            extra={
                "payment_id": str(payment.id),
                "consumer_id": consumer_id,
                "plan_name": plan.name,
                "payment_status": quote.payment_status.value,
                "anonymous": owner_id is None,
            },
        )

        return PaymentOutcome(
            payment_status=quote.payment_status,
            total_amount=quote.total_amount,
            remaining_units=quote.remaining_units,
            message=quote.message,
            transaction_id=payment.id,
            transaction_date=payment.transaction_date,
        )


class PaymentService:
    """Read paths and the approval transition for stored payments"""

    @staticmethod
    async def get_payment_by_id(db: AsyncSession, payment_id: UUID) -> Optional[BillPayment]:
        result = await db.execute(select(BillPayment).where(BillPayment.id == payment_id))
        return result.scalar_one_or_none()

    @staticmethod
    async def list_user_payments(db: AsyncSession, user_id: UUID, limit: int = 50) -> List[BillPayment]:
        """Newest first payment history of one account"""
        result = await db.execute(
            select(BillPayment)
            .where(BillPayment.user_id == user_id)
            .order_by(BillPayment.transaction_date.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    @staticmethod
    async def list_payments(
        db: AsyncSession,
        approval_status: Optional[ApprovalStatus] = None,
        limit: int = 100,
    ) -> List[BillPayment]:
        """
        Newest first payments across all accounts.

        Args:
            db: Database session
            approval_status: Only return payments in this state
            limit: Maximum number of records to return

        Returns:
            List of payments
        """
        query = select(BillPayment)
        if approval_status is not None:
            query = query.where(BillPayment.approval_status == approval_status)
        result = await db.execute(
            query.order_by(BillPayment.transaction_date.desc()).limit(limit)
        )
        return list(result.scalars().all())

    @staticmethod
    async def set_approval_status(
        db: AsyncSession,
        payment_id: UUID,
        target: ApprovalStatus,
    ) -> Optional[BillPayment]:
        """
        Move a payment to approved or rejected.

        Terminal states are not guarded: a later call replaces an earlier
        decision (last write wins). The overwrite is logged.

        Args:
            db: Database session
            payment_id: Payment ID
            target: ApprovalStatus.APPROVED or ApprovalStatus.REJECTED

        Returns:
            Updated payment or None if not found

        Raises:
            ValueError: If target is PENDING
        """
        if not target.is_terminal:
            raise ValueError("Approval target must be approved or rejected")

        payment = await PaymentService.get_payment_by_id(db, payment_id)
        if not payment:
            return None

        previous = ApprovalStatus(payment.approval_status)
        if previous.is_terminal and previous != target:
            logger.warning(
                "Overwriting approval decision",
                extra={"payment_id": str(payment_id), "from": previous.value, "to": target.value},
            )

        payment.approval_status = target
        await db.commit()
        await db.refresh(payment)

        logger.info(
            "Payment approval updated",
            extra={"payment_id": str(payment_id), "approval_status": target.value},
        )
        return payment

"""Bill Payment Endpoints"""

from typing import Any, List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import deps
from app.config import settings
from app.core.rate_limit import limiter
from app.models.enums import ApprovalStatus
from app.models.user import User
from app.schemas.billing import BillPaymentResponse, PayBillRequest, PayBillResponse, PaymentFailureResponse
from app.schemas.responses import SuccessResponse
from app.services.billing_service import BillProcessor, PaymentService

router = APIRouter()

_failure_responses = {
    status.HTTP_400_BAD_REQUEST: {"model": PaymentFailureResponse},
    status.HTTP_404_NOT_FOUND: {"model": PaymentFailureResponse},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": PaymentFailureResponse},
}


@router.post("/paybill", response_model=PayBillResponse, responses=_failure_responses)
@limiter.limit(settings.rate_limit)
async def pay_bill(
    request: Request,
    bill_in: Optional[PayBillRequest] = None,
    identity: deps.Identity = Depends(deps.get_optional_identity),
    processor: BillProcessor = Depends(deps.get_bill_processor),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """
    Submit electricity usage against a plan.

    Signing in is optional; when a valid token is sent the payment is linked
    to that account. Usage over the plan allowance is recorded with
    paymentStatus=failure and still returns 200.
    """
    bill_in = bill_in or PayBillRequest()
    outcome = await processor.process_payment(
        db,
        consumer_id=bill_in.consumer_id,
        plan_name=bill_in.plan_name,
        units_used=bill_in.units_used,
        owner_id=identity.user_id,
    )
    return PayBillResponse(
        payment_status=outcome.payment_status,
        remaining_units=float(outcome.remaining_units),
        total_amount=float(outcome.total_amount),
        message=outcome.message,
        transaction_id=outcome.transaction_id,
        transaction_date=outcome.transaction_date,
    )


@router.get("/payments", response_model=SuccessResponse[List[BillPaymentResponse]])
async def my_payments(
    current_user: User = Depends(deps.get_current_user),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """
    Payment history of the signed-in account, newest first.
    """
    payments = await PaymentService.list_user_payments(
        db, current_user.id, limit=settings.OWN_HISTORY_LIMIT
    )
    return SuccessResponse(data=[BillPaymentResponse.model_validate(p) for p in payments])


@router.get("/payments/all", response_model=SuccessResponse[List[BillPaymentResponse]])
async def all_payments(
    current_user: User = Depends(deps.require_admin),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """
    Every payment across accounts, newest first (admin only).
    """
    payments = await PaymentService.list_payments(db, limit=settings.ADMIN_LIST_LIMIT)
    return SuccessResponse(data=[BillPaymentResponse.model_validate(p) for p in payments])


@router.get("/payments/pending", response_model=SuccessResponse[List[BillPaymentResponse]])
async def pending_payments(
    current_user: User = Depends(deps.require_admin),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """
    Payments awaiting an approval decision, newest first (admin only).
    """
    payments = await PaymentService.list_payments(
        db, approval_status=ApprovalStatus.PENDING, limit=settings.ADMIN_LIST_LIMIT
    )
    return SuccessResponse(data=[BillPaymentResponse.model_validate(p) for p in payments])


async def _decide(db: AsyncSession, payment_id: UUID, target: ApprovalStatus) -> BillPaymentResponse:
    payment = await PaymentService.set_approval_status(db, payment_id, target)
    if not payment:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Payment not found"
        )
    return BillPaymentResponse.model_validate(payment)


@router.put("/payments/{payment_id}/approve", response_model=SuccessResponse[BillPaymentResponse])
async def approve_payment(
    payment_id: UUID,
    current_user: User = Depends(deps.require_admin),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """
    Approve a payment (admin only).
    """
    payment = await _decide(db, payment_id, ApprovalStatus.APPROVED)
    return SuccessResponse(data=payment, message="Payment approved successfully")


@router.put("/payments/{payment_id}/reject", response_model=SuccessResponse[BillPaymentResponse])
async def reject_payment(
    payment_id: UUID,
    current_user: User = Depends(deps.require_admin),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """
    Reject a payment (admin only).
    """
    payment = await _decide(db, payment_id, ApprovalStatus.REJECTED)
    return SuccessResponse(data=payment, message="Payment rejected successfully")

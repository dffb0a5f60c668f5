"""Models Package - Export all models for easy imports"""

from app.models.base import BaseModel
from app.models.enums import UserRole, PaymentStatus, ApprovalStatus
from app.models.user import User
from app.models.billing import BillPayment


__all__ = [
    # Base classes
    "BaseModel",

    # Enums
    "UserRole",
    "PaymentStatus",
    "ApprovalStatus",

    # User
    "User",

    # Billing
    "BillPayment",
]

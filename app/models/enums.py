"""Centralized Enum Definitions"""

import enum


# Users & Authentication
class UserRole(str, enum.Enum):
    """User roles for RBAC"""
    USER = "user"
    ADMIN = "admin"


# Billing
class PaymentStatus(str, enum.Enum):
    """Outcome of a bill payment attempt, fixed at creation"""
    SUCCESS = "success"
    FAILURE = "failure"


class ApprovalStatus(str, enum.Enum):
    """Administrative disposition of a payment record"""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

    @property
    def is_terminal(self) -> bool:
        return self is not ApprovalStatus.PENDING

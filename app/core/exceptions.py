"""Billing error taxonomy"""

from fastapi import status


class BillingError(Exception):
    """Base class. Carries the HTTP status and client-facing message."""
    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(BillingError):
    """Client supplied missing or malformed input"""
    status_code = status.HTTP_400_BAD_REQUEST


class MissingFieldsError(ValidationError):
    def __init__(self):
        super().__init__("Missing required fields: consumerId, planName, and unitsUsed are required")


class EmptyConsumerIdError(ValidationError):
    def __init__(self):
        super().__init__("Consumer ID cannot be empty")


class MalformedFieldError(ValidationError):
    def __init__(self, field: str):
        super().__init__(f"{field} must be a string")
        self.field = field


class InvalidUnitsError(ValidationError):
    def __init__(self, message: str = "Units used must be a non-negative number"):
        super().__init__(message)


class UnitsTooLargeError(InvalidUnitsError):
    def __init__(self, limit):
        super().__init__(f"Units used cannot exceed {limit}")
        self.limit = limit


class PlanInactiveError(ValidationError):
    def __init__(self, plan_name: str):
        super().__init__(f'Plan "{plan_name}" is not active')
        self.plan_name = plan_name


class ResourceNotFound(BillingError):
    status_code = status.HTTP_404_NOT_FOUND


class PlanNotFoundError(ResourceNotFound):
    def __init__(self, plan_name: str):
        super().__init__(f'Plan "{plan_name}" not found')
        self.plan_name = plan_name


class StorageError(BillingError):
    """Persistence failed; nothing was stored"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str = "Server error occurred while processing payment"):
        super().__init__(message)

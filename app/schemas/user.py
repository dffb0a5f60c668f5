"""User Pydantic Schemas"""

from datetime import datetime
from uuid import UUID

from app.models.enums import UserRole
from app.schemas.responses import CamelModel


class UserResponse(CamelModel):
    """Account as shown to its owner and to admins"""
    id: UUID
    full_name: str
    email: str
    role: UserRole
    is_active: bool
    created_at: datetime

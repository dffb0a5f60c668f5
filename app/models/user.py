"""User & Authentication Model"""

from sqlalchemy import Column, String, Boolean, Enum
from sqlalchemy.orm import relationship

from app.models.base import BaseModel
from app.models.enums import UserRole


class User(BaseModel):
    """
    Account that can sign in. Regular users submit and review their own
    payments; admins review users and approve or reject payments.
    """
    __tablename__ = "users"

    # Authentication
    email = Column(String(255), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)

    # Personal Information
    full_name = Column(String(255), nullable=False)

    # Role & Permissions (RBAC)
    role = Column(
        Enum(UserRole, name="user_role", values_callable=lambda e: [m.value for m in e]),
        default=UserRole.USER,
        nullable=False,
        index=True,
    )
    is_active = Column(Boolean, default=True, nullable=False, index=True)

    # Relationships
    payments = relationship("BillPayment", back_populates="user", passive_deletes=True)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def __repr__(self) -> str:
        return f"<User {self.email} ({self.role})>"

"""API Dependencies"""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.logging import get_logger
from app.core.plans import PlanCatalog
from app.core.security import ACCESS_TOKEN_TYPE, decode_token
from app.database import get_db
from app.models.user import User
from app.services.billing_service import BillProcessor
from app.services.user_service import UserService

logger = get_logger(__name__)

# Security scheme for bearer token
security = HTTPBearer()
optional_security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Identity:
    """Caller identity for endpoints where signing in is optional"""
    user_id: Optional[UUID] = None


ANONYMOUS = Identity()


def _user_id_from_token(token: str) -> Optional[UUID]:
    """Subject of a valid access token, or None"""
    payload = decode_token(token)
    if not payload or payload.get("type") != ACCESS_TOKEN_TYPE:
        return None
    try:
        return UUID(str(payload.get("sub")))
    except ValueError:
        return None


def _credentials_exception(detail: str = "Could not validate credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    db: AsyncSession = Depends(get_db),
    credentials: HTTPAuthorizationCredentials = Depends(security)
) -> User:
    """
    Get current authenticated user from JWT token.

    Args:
        db: Database session
        credentials: HTTP authorization credentials

    Returns:
        Current user

    Raises:
        HTTPException: If token is invalid or user not found
    """
    user_id = _user_id_from_token(credentials.credentials)
    if user_id is None:
        raise _credentials_exception()

    user = await UserService.get_user_by_id(db, user_id)
    if not user:
        raise _credentials_exception("User not found")

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Inactive user"
        )

    return user


async def require_admin(
    current_user: User = Depends(get_current_user)
) -> User:
    """
    Get current user and require the admin role.

    Raises:
        HTTPException: If user is not an admin
    """
    if not current_user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not enough permissions"
        )
    return current_user


async def get_optional_identity(
    db: AsyncSession = Depends(get_db),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(optional_security),
) -> Identity:
    """
    Resolve the caller if a usable bearer token was sent.

    Signing in is optional on these endpoints. A missing, malformed or
    expired token, or one naming an unknown or inactive account, yields the
    anonymous identity instead of an error.
    """
    if credentials is None:
        return ANONYMOUS

    user_id = _user_id_from_token(credentials.credentials)
    if user_id is None:
        logger.debug("Ignoring invalid bearer token, proceeding anonymously")
        return ANONYMOUS

    user = await UserService.get_user_by_id(db, user_id)
    if not user or not user.is_active:
        logger.debug("Token subject unknown or inactive, proceeding anonymously")
        return ANONYMOUS

    return Identity(user_id=user.id)


def get_plan_catalog(request: Request) -> PlanCatalog:
    return request.app.state.plan_catalog


def get_bill_processor(catalog: PlanCatalog = Depends(get_plan_catalog)) -> BillProcessor:
    return BillProcessor(catalog)

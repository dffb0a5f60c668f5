from datetime import timedelta
from typing import Any, List

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import deps
from app.config import settings
from app.core import security
from app.core.rate_limit import limiter
from app.models.enums import UserRole
from app.models.user import User
from app.schemas.auth import LoginRequest, SignupRequest, Token
from app.schemas.responses import SuccessResponse
from app.schemas.user import UserResponse
from app.services.user_service import UserService

router = APIRouter()


def _issue_token(user: User) -> Token:
    access_token = security.create_access_token(
        data={"sub": str(user.id), "role": user.role.value},
        expires_delta=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    )
    return Token(access_token=access_token, user=UserResponse.model_validate(user))


@router.post("/signup", response_model=SuccessResponse[Token], status_code=status.HTTP_201_CREATED)
async def signup(
    signup_in: SignupRequest,
    db: AsyncSession = Depends(deps.get_db)
) -> Any:
    """
    Create an account and sign it in.
    The admin role is only granted when ALLOW_ADMIN_SIGNUP is enabled.
    """
    role = signup_in.role or UserRole.USER
    if role == UserRole.ADMIN and not settings.ALLOW_ADMIN_SIGNUP:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin accounts cannot be created through signup",
        )

    if await UserService.get_user_by_email(db, signup_in.email):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="A user with this email already exists",
        )

    user = await UserService.create_user(
        db,
        email=signup_in.email,
        password=signup_in.password,
        full_name=signup_in.full_name,
        role=role,
    )
    if not user:
        # Lost a race with a concurrent signup for the same email
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="A user with this email already exists",
        )

    return SuccessResponse(data=_issue_token(user), message="Account created successfully")


@router.post("/login", response_model=SuccessResponse[Token])
@limiter.limit(settings.rate_limit)
async def login(
    request: Request,
    login_data: LoginRequest,
    db: AsyncSession = Depends(deps.get_db)
) -> Any:
    """
    Sign in with email and password.
    Returns a JWT access token and the account.
    """
    user = await UserService.authenticate_user(db, email=login_data.email, password=login_data.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
        )

    return SuccessResponse(data=_issue_token(user), message="Login successful")


@router.get("/me", response_model=SuccessResponse[UserResponse])
async def read_me(current_user: User = Depends(deps.get_current_user)) -> Any:
    """
    The signed-in account.
    """
    return SuccessResponse(data=UserResponse.model_validate(current_user))


@router.get("/users", response_model=SuccessResponse[List[UserResponse]])
async def list_users(
    current_user: User = Depends(deps.require_admin),
    db: AsyncSession = Depends(deps.get_db)
) -> Any:
    """
    All accounts, newest first (admin only).
    """
    users = await UserService.list_users(db, limit=settings.ADMIN_LIST_LIMIT)
    return SuccessResponse(data=[UserResponse.model_validate(u) for u in users])

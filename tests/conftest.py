"""Shared pytest fixtures for unit and integration tests."""

import os
import uuid

# Settings are read at import time, so the test environment is fixed first
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ["ENVIRONMENT"] = "test"
os.environ["DEBUG"] = "false"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["LOG_FORMAT"] = "text"

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app import models  # noqa: F401  (registers tables on Base.metadata)
from app.config import settings
from app.database import Base, get_db
from app.main import app
from app.models.enums import UserRole
from app.services.user_service import UserService

TEST_PASSWORD = "TestPassword123!"


@pytest.fixture
async def db_engine():
    """Fresh in-memory SQLite database per test."""
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def api_base() -> str:
    """Base URL for API requests."""
    return f"http://test{settings.API_V1_PREFIX}"


@pytest.fixture
async def async_client(session_factory):
    """Async HTTP client bound to the app, using the per-test database."""

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test", timeout=30.0) as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def unique_suffix() -> str:
    """Unique suffix for test data to avoid collisions."""
    return str(uuid.uuid4())[:8]


@pytest.fixture
async def registered_user(async_client: AsyncClient, api_base: str, unique_suffix: str):
    """
    Sign up a regular user and return (email, user_id, headers).
    """
    email = f"user_{unique_suffix}@test.example.com"
    resp = await async_client.post(
        f"{api_base}/auth/signup",
        json={"fullName": "Test User", "email": email, "password": TEST_PASSWORD},
    )
    assert resp.status_code == 201, resp.text
    data = resp.json()["data"]
    return {
        "email": email,
        "user_id": data["user"]["id"],
        "headers": {"Authorization": f"Bearer {data['access_token']}"},
    }


@pytest.fixture
async def admin_user(async_client: AsyncClient, api_base: str, db_session: AsyncSession, unique_suffix: str):
    """
    Create an admin directly (signup refuses the admin role) and log in.
    """
    email = f"admin_{unique_suffix}@test.example.com"
    admin = await UserService.create_user(
        db_session,
        email=email,
        password=TEST_PASSWORD,
        full_name="Site Admin",
        role=UserRole.ADMIN,
    )
    assert admin is not None

    resp = await async_client.post(
        f"{api_base}/auth/login",
        json={"email": email, "password": TEST_PASSWORD},
    )
    assert resp.status_code == 200, resp.text
    token = resp.json()["data"]["access_token"]
    return {
        "email": email,
        "user_id": str(admin.id),
        "headers": {"Authorization": f"Bearer {token}"},
    }

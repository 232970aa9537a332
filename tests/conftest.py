"""Pytest configuration and fixtures."""

import os
import sys
from collections.abc import AsyncGenerator
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any

# Disable rate limiting and keep the app off PostgreSQL in tests
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test.db")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import TokenUser
from infrastructure.database.models import Base

TEST_SECRET = "test-secret-key"


@pytest.fixture
async def engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine, None]:
    """Create a fresh SQLite file database per test."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create session factory bound to the test database."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Create a database session for repository tests."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def test_user() -> TokenUser:
    """The group owner in most tests."""
    return TokenUser(
        id="owner-uid",
        email="owner@example.com",
        display_name="Olive Owner",
    )


@pytest.fixture
def other_user() -> TokenUser:
    """A second, unrelated user."""
    return TokenUser(
        id="other-uid",
        email="other@example.com",
        display_name="Otto Other",
    )


@pytest.fixture
def auth_provider() -> JWTAuthProvider:
    """Create auth provider for testing."""
    return JWTAuthProvider(
        secret_key=TEST_SECRET,
        algorithm="HS256",
        expire_minutes=30,
        audience="",
    )


@pytest.fixture
def auth_headers(auth_provider: JWTAuthProvider, test_user: TokenUser) -> dict[str, str]:
    """Authorization headers for the owner."""
    return {"Authorization": f"Bearer {auth_provider.create_token(test_user)}"}


@pytest.fixture
def other_headers(auth_provider: JWTAuthProvider, other_user: TokenUser) -> dict[str, str]:
    """Authorization headers for the second user."""
    return {"Authorization": f"Bearer {auth_provider.create_token(other_user)}"}


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Create async test client with no dependency overrides."""
    from main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
async def api_client(
    session_factory: async_sessionmaker[AsyncSession],
    auth_provider: JWTAuthProvider,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client wired to the per-test database.

    Tokens are still validated, using the test auth provider, so requests
    must carry ``auth_headers`` or ``other_headers`` to act as a user.
    """
    from api.dependencies.auth import get_auth_provider
    from api.v1.dependencies import get_category_service, get_group_service
    from domain.services.category_service import CategoryService
    from domain.services.group_service import GroupService
    from infrastructure.database.session import get_async_session
    from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork
    from main import create_app

    app = create_app()

    def test_uow_factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(session_factory)

    category_service = CategoryService(test_uow_factory)
    group_service = GroupService(test_uow_factory, category_service=category_service)

    async def override_get_async_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_auth_provider] = lambda: auth_provider
    app.dependency_overrides[get_category_service] = lambda: category_service
    app.dependency_overrides[get_group_service] = lambda: group_service
    app.dependency_overrides[get_async_session] = override_get_async_session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()


def group_payload(**overrides: Any) -> dict[str, Any]:
    """A valid create-group request body starting a week from now."""
    payload: dict[str, Any] = {
        "name": "Sunday Trail Walkers",
        "category": "Hiking",
        "description": "Relaxed day hikes around the valley, all paces welcome.",
        "location": "North Ridge trailhead",
        "max_members": 10,
        "start_date": (datetime.utcnow() + timedelta(days=7)).isoformat(),
        "image_url": "https://example.com/hike.jpg",
    }
    payload.update(overrides)
    return payload

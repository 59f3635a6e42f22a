"""Pytest configuration and shared fixtures.

Organization:
    - Application Fixtures: FastAPI app and HTTP client
    - Database Fixtures: in-memory SQLite engine and session
    - Data Fixtures: seeded users and roles with known serials
"""

from __future__ import annotations

import os
from collections.abc import AsyncGenerator
from typing import TYPE_CHECKING

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

if TYPE_CHECKING:
    from fastapi import FastAPI
    from sqlalchemy.ext.asyncio import AsyncEngine

    from admin_service.features.roles.models import Role
    from admin_service.features.users.models import User

# Ensure tests run without external infrastructure
os.environ.setdefault("DB_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("APP_ENVIRONMENT", "test")
os.environ.setdefault("LOG_LEVEL", "DEBUG")
os.environ.setdefault("PAGINATION_DEFAULT_LIMIT", "10")
os.environ.setdefault("PAGINATION_MAX_LIMIT", "1000")


# ============================================================================
# Application Fixtures
# ============================================================================


@pytest.fixture
async def app(db_session: AsyncSession) -> FastAPI:
    """FastAPI application whose request sessions are the test session.

    Example:
        async def test_endpoint(app):
            assert app.title == "RBAC Admin API"
    """
    from admin_service.app.main import create_app
    from admin_service.core.dependencies.database import get_db_session

    application = create_app()

    async def override_session() -> AsyncGenerator[AsyncSession]:
        yield db_session

    application.dependency_overrides[get_db_session] = override_session
    return application


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """HTTPX client bound to the app through the ASGI transport.

    Example:
        async def test_list(client):
            response = await client.get("/api/v1/users")
            assert response.status_code == 200
    """
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine]:
    """Async engine on a single shared in-memory SQLite connection."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
async def db_session(db_engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Session over freshly created tables, dropped again after the test."""
    from admin_service.core.database import Base

    # Register every mapped table on Base.metadata.
    from admin_service.features.roles import models as _role_models  # noqa: F401
    from admin_service.features.users import models as _user_models  # noqa: F401

    async with db_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        try:
            yield session
        finally:
            await session.rollback()

    async with db_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


# ============================================================================
# Data Fixtures
# ============================================================================


@pytest.fixture
async def users(db_session: AsyncSession) -> list[User]:
    """Seven users with serials 10..70; every other one is disabled.

    SQLite has no identity sequences, so serials are assigned explicitly.
    Returned newest first, the order listings present them in.
    """
    from admin_service.features.users.models import User
    from admin_service.features.users.repository import get_user_repository

    names = ["Ada", "Grace", "Alan", "Edsger", "Barbara", "Donald", "Frances"]
    created = await get_user_repository().create_many(
        db_session,
        [
            User(
                serial_id=serial,
                first_name=name,
                last_name=f"Tester {index}",
                email=f"{name.lower()}@example.com",
                disabled=index % 2 == 1,
            )
            for index, (serial, name) in enumerate(zip(range(10, 80, 10), names, strict=True))
        ],
    )
    await db_session.commit()
    return sorted(created, key=lambda user: user.serial_id, reverse=True)


@pytest.fixture
async def roles(db_session: AsyncSession) -> list[Role]:
    """Three roles with serials 1..3, returned newest first."""
    from admin_service.features.roles.models import Role
    from admin_service.features.roles.repository import get_role_repository

    created = await get_role_repository().create_many(
        db_session,
        [
            Role(serial_id=1, name="admin", description="Full access", system=True),
            Role(serial_id=2, name="viewer", description="Read only", auto_assign=True),
            Role(serial_id=3, name="auditor", description="Reads audit logs"),
        ],
    )
    await db_session.commit()
    return sorted(created, key=lambda role: role.serial_id, reverse=True)

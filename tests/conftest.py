"""Pytest configuration and fixtures."""

import os

# Cheap bcrypt cost and a throwaway database for the whole test run
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from dataclasses import dataclass
from typing import Any, AsyncGenerator

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.core.deps import get_db
from app.core.security import create_session_token, get_password_hash
from app.db import models_registry  # noqa: F401 - Import to register models
from app.db.base import Base
from app.main import app
from app.models.session import Session
from app.models.user import User

# Test database URL (in-memory SQLite)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

ROOT_ADMIN_ROLES = {
    "admin": {"name": "Root Admin", "groups": {"root": "Root"}},
    "account": {"name": "Root Admin"},
}
SALES_ADMIN_ROLES = {"admin": {"name": "Sales Admin", "groups": {"sales": "Sales"}}}
ACCOUNT_ROLES = {"account": {"name": "Account Holder"}}


@dataclass
class Caller:
    """A stored user with an open session and its auth headers."""

    user: User
    session: Session
    headers: dict[str, str]


async def make_user(
    db: AsyncSession,
    username: str,
    email: str,
    password: str = "secret",
    roles: dict[str, Any] | None = None,
    is_active: bool = True,
) -> User:
    """Insert a user directly into the test database."""
    user = User(
        username=username,
        email=email,
        password_hash=get_password_hash(password),
        is_active=is_active,
        roles=roles or {},
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


async def make_caller(db: AsyncSession, user: User) -> Caller:
    """Open a session for a user and build its bearer headers."""
    session = Session(user_id=user.id)
    db.add(session)
    await db.commit()
    await db.refresh(session)
    token = create_session_token(user.id, session.id)
    return Caller(
        user=user,
        session=session,
        headers={"Authorization": f"Bearer {token}"},
    )


@pytest_asyncio.fixture(scope="function")
async def test_engine():
    """Create test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        future=True,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session."""
    async_session_maker = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    async with async_session_maker() as session:
        yield session


@pytest_asyncio.fixture(scope="function")
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create test HTTP client with overridden dependencies."""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture(scope="function")
async def root_admin(db_session: AsyncSession) -> Caller:
    """Admin in the root group, logged in."""
    user = await make_user(
        db_session, "root", "root@example.com", roles=ROOT_ADMIN_ROLES
    )
    return await make_caller(db_session, user)


@pytest_asyncio.fixture(scope="function")
async def sales_admin(db_session: AsyncSession) -> Caller:
    """Admin outside the root group, logged in."""
    user = await make_user(
        db_session, "salesadmin", "sales@example.com", roles=SALES_ADMIN_ROLES
    )
    return await make_caller(db_session, user)


@pytest_asyncio.fixture(scope="function")
async def account_user(db_session: AsyncSession) -> Caller:
    """Plain account holder, logged in."""
    user = await make_user(
        db_session,
        "ren",
        "ren@example.com",
        password="renpassword",
        roles=ACCOUNT_ROLES,
    )
    return await make_caller(db_session, user)


@pytest_asyncio.fixture(scope="function")
async def sample_users(db_session: AsyncSession) -> list[User]:
    """Create a handful of users for listing tests."""
    return [
        await make_user(db_session, "Darren", "darren@example.com", roles=ACCOUNT_ROLES),
        await make_user(db_session, "renata", "renata@example.com", roles=SALES_ADMIN_ROLES),
        await make_user(db_session, "bob", "bob@example.com", roles=ACCOUNT_ROLES, is_active=False),
        await make_user(db_session, "alice", "alice@example.com"),
    ]

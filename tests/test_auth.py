"""Tests for authentication endpoints."""

import pytest
from httpx import AsyncClient
from sqlalchemy.exc import SQLAlchemyError

from app.core.security import create_access_token, create_session_token
from app.services.session_service import SessionService

from tests.conftest import Caller, make_user

LOGIN_URL = "/api/v1/login"
LOGOUT_URL = "/api/v1/logout"


@pytest.mark.asyncio
async def test_login_success(client: AsyncClient, account_user: Caller):
    """Test successful login."""
    response = await client.post(
        LOGIN_URL,
        json={"username": "ren", "password": "renpassword"},
    )

    assert response.status_code == 200
    data = response.json()
    assert len(data["token"]) > 0
    assert data["user"]["id"] == account_user.user.id
    assert data["user"]["roles"] == account_user.user.roles
    assert data["session"]["userId"] == account_user.user.id


@pytest.mark.asyncio
async def test_login_with_email(client: AsyncClient, account_user: Caller):
    """Email login is case-insensitive."""
    response = await client.post(
        LOGIN_URL,
        json={"username": "REN@example.com", "password": "renpassword"},
    )

    assert response.status_code == 200


@pytest.mark.asyncio
async def test_login_token_authenticates(client: AsyncClient, account_user: Caller):
    """The returned token opens the self-service endpoints."""
    response = await client.post(
        LOGIN_URL,
        json={"username": "ren", "password": "renpassword"},
    )
    token = response.json()["token"]

    response = await client.get(
        "/api/v1/users/my",
        headers={"Authorization": f"Bearer {token}"},
    )

    assert response.status_code == 200
    assert response.json()["username"] == "ren"


@pytest.mark.asyncio
async def test_login_invalid_password(client: AsyncClient, account_user: Caller):
    """Test login with wrong password."""
    response = await client.post(
        LOGIN_URL,
        json={"username": "ren", "password": "wrongpassword"},
    )

    assert response.status_code == 401
    assert response.json()["message"] == "Invalid username or password."


@pytest.mark.asyncio
async def test_login_nonexistent_user(client: AsyncClient):
    """Test login with non-existent user."""
    response = await client.post(
        LOGIN_URL,
        json={"username": "nonexistent", "password": "password"},
    )

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_login_inactive_user(client: AsyncClient, db_session):
    """Inactive users cannot log in."""
    await make_user(
        db_session, "dormant", "dormant@example.com", password="pw", is_active=False
    )

    response = await client.post(
        LOGIN_URL,
        json={"username": "dormant", "password": "pw"},
    )

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_login_missing_fields(client: AsyncClient):
    """Test login with missing fields."""
    response = await client.post(
        LOGIN_URL,
        json={"username": "ren"},
    )

    assert response.status_code == 422  # Validation error


@pytest.mark.asyncio
async def test_logout(client: AsyncClient, account_user: Caller):
    """Logout removes the session and the token stops working."""
    response = await client.delete(LOGOUT_URL, headers=account_user.headers)

    assert response.status_code == 200
    assert "success" in response.json()["message"].lower()

    response = await client.delete(LOGOUT_URL, headers=account_user.headers)
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_logout_unauthorized(client: AsyncClient):
    """Test logout without auth."""
    response = await client.delete(LOGOUT_URL)

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_logout_session_not_found(
    client: AsyncClient, account_user: Caller, monkeypatch
):
    """Nothing removed means the session was not found."""

    async def remove_nothing(self, session_id: str, user_id: str) -> int:
        return 0

    monkeypatch.setattr(SessionService, "remove_by_credentials", remove_nothing)

    response = await client.delete(LOGOUT_URL, headers=account_user.headers)

    assert response.status_code == 404
    assert "session not found" in response.json()["message"].lower()


@pytest.mark.asyncio
async def test_logout_store_error(
    client: AsyncClient, account_user: Caller, monkeypatch
):
    """Remove failure surfaces as an internal error."""

    async def remove_failed(self, session_id: str, user_id: str) -> int:
        raise SQLAlchemyError("remove failed")

    monkeypatch.setattr(SessionService, "remove_by_credentials", remove_failed)

    response = await client.delete(LOGOUT_URL, headers=account_user.headers)

    assert response.status_code == 500


@pytest.mark.asyncio
async def test_logout_keeps_other_sessions(
    client: AsyncClient, account_user: Caller
):
    """Only the presented session is removed."""
    response = await client.post(
        LOGIN_URL,
        json={"username": "ren", "password": "renpassword"},
    )
    other_token = response.json()["token"]

    response = await client.delete(LOGOUT_URL, headers=account_user.headers)
    assert response.status_code == 200

    response = await client.get(
        "/api/v1/users/my",
        headers={"Authorization": f"Bearer {other_token}"},
    )
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_token_without_session_rejected(
    client: AsyncClient, account_user: Caller
):
    """Tokens must name a session."""
    token = create_access_token(data={"sub": account_user.user.id})

    response = await client.get(
        "/api/v1/users/my",
        headers={"Authorization": f"Bearer {token}"},
    )

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_token_for_other_users_session_rejected(
    client: AsyncClient, account_user: Caller, root_admin: Caller
):
    """A session only authenticates the user it belongs to."""
    token = create_session_token(root_admin.user.id, account_user.session.id)

    response = await client.get(
        "/api/v1/users",
        headers={"Authorization": f"Bearer {token}"},
    )

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_garbage_token_rejected(client: AsyncClient):
    """Unsigned tokens are rejected."""
    response = await client.get(
        "/api/v1/users/my",
        headers={"Authorization": "Bearer not-a-token"},
    )

    assert response.status_code == 401

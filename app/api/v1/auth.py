"""Authentication API endpoints."""

from fastapi import APIRouter, HTTPException, status

from app.core.deps import Credentials, DBSession, Sessions
from app.core.exceptions import NotFoundError
from app.schemas.auth import LoginResponse, UserLogin
from app.schemas.user import MessageResponse
from app.services.auth_service import AuthService

router = APIRouter()


@router.post("/login", response_model=LoginResponse)
async def login(
    credentials: UserLogin,
    db: DBSession,
) -> LoginResponse:
    """
    Log in and open a session.

    - **username**: Username or email
    - **password**: User password
    """
    auth_service = AuthService(db)
    result = await auth_service.login(credentials.username, credentials.password)

    if not result:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password.",
        )

    return result


@router.delete("/logout", response_model=MessageResponse)
async def logout(
    auth: Credentials,
    sessions: Sessions,
) -> MessageResponse:
    """End the caller's current session."""
    count = await sessions.remove_by_credentials(auth.session.id, auth.user.id)

    if count == 0:
        raise NotFoundError("Session not found.")

    return MessageResponse(message="Success.")

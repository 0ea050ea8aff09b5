"""FastAPI dependencies for dependency injection."""

from dataclasses import dataclass
from typing import Annotated, AsyncGenerator, Callable

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import decode_access_token
from app.db.session import async_session_maker
from app.models.session import Session
from app.models.user import User
from app.services.session_service import SessionService
from app.services.user_service import UserService

# Security scheme
security = HTTPBearer(auto_error=False)

PERMISSION_DENIED = "Permission denied to this resource."


@dataclass
class AuthCredentials:
    """Authenticated caller: the user and the session it presented."""

    user: User
    session: Session


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Get database session."""
    async with async_session_maker() as session:
        try:
            yield session
        finally:
            await session.close()


def get_user_service(db: Annotated[AsyncSession, Depends(get_db)]) -> UserService:
    """Get user service bound to the request's database session."""
    return UserService(db)


def get_session_service(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> SessionService:
    """Get session service bound to the request's database session."""
    return SessionService(db)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_credentials(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    users: Annotated[UserService, Depends(get_user_service)],
    sessions: Annotated[SessionService, Depends(get_session_service)],
) -> AuthCredentials:
    """Resolve the bearer token to a live session and an active user."""
    if not credentials:
        raise _unauthorized("Not authenticated")

    payload = decode_access_token(credentials.credentials)
    if not payload:
        raise _unauthorized("Invalid or expired token")

    user_id = payload.get("sub")
    session_id = payload.get("sid")
    if not user_id or not session_id:
        raise _unauthorized("Invalid token payload")

    session = await sessions.find_by_credentials(session_id, user_id)
    if not session:
        raise _unauthorized("Session not found")

    user = await users.get_by_id(user_id)
    if not user or not user.is_active:
        raise _unauthorized("User not found or inactive")

    return AuthCredentials(user=user, session=session)


def require_roles(*roles: str) -> Callable:
    """Guard: the caller must hold at least one of the given roles."""

    async def check_roles(
        auth: Annotated[AuthCredentials, Depends(get_credentials)],
    ) -> AuthCredentials:
        if not auth.user.has_role(*roles):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=PERMISSION_DENIED,
            )
        return auth

    return check_roles


def require_admin_group(group: str) -> Callable:
    """Guard: the caller's admin role must belong to the given group."""

    async def check_group(
        auth: Annotated[AuthCredentials, Depends(get_credentials)],
    ) -> AuthCredentials:
        if not auth.user.in_admin_group(group):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=PERMISSION_DENIED,
            )
        return auth

    return check_group


# Ordered guard chains; the first failing guard ends the request
ROOT_ADMIN_GUARDS = [
    Depends(require_roles("admin")),
    Depends(require_admin_group("root")),
]
ACCOUNT_GUARDS = [Depends(require_roles("account", "admin"))]

# Type aliases for cleaner dependency injection
DBSession = Annotated[AsyncSession, Depends(get_db)]
Credentials = Annotated[AuthCredentials, Depends(get_credentials)]
Users = Annotated[UserService, Depends(get_user_service)]
Sessions = Annotated[SessionService, Depends(get_session_service)]

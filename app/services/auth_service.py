"""Auth service for login."""

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import create_session_token
from app.schemas.auth import LoginResponse, LoginUser, SessionDTO
from app.services.session_service import SessionService
from app.services.user_service import UserService


class AuthService:
    """Authentication service."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.user_service = UserService(db)
        self.session_service = SessionService(db)

    async def login(self, username: str, password: str) -> LoginResponse | None:
        """Authenticate user, open a session and return its bearer token."""
        user = await self.user_service.authenticate(username, password)
        if not user:
            return None

        session = await self.session_service.create_session(user.id)
        token = create_session_token(user.id, session.id)
        return LoginResponse(
            user=LoginUser.model_validate(user),
            session=SessionDTO.model_validate(session),
            token=token,
        )

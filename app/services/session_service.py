"""Session service for login sessions."""

from loguru import logger
from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.session import Session
from app.schemas.auth import SessionDTO
from app.services.base_service import BaseService


class SessionService(BaseService[Session]):
    """Login session service."""

    dto = SessionDTO

    def __init__(self, db: AsyncSession):
        super().__init__(db, Session)

    async def create_session(self, user_id: str) -> Session:
        """Open a new session for a user."""
        session = await self.create(Session(user_id=user_id))
        logger.info(f"Session created for user: {user_id}")
        return session

    async def find_by_credentials(
        self, session_id: str, user_id: str
    ) -> Session | None:
        """Get the session matching both session id and user id."""
        return await self.find_one(
            Session.id == session_id,
            Session.user_id == user_id,
        )

    async def remove_by_credentials(self, session_id: str, user_id: str) -> int:
        """Delete the session matching the caller's credentials."""
        result = await self.db.execute(
            delete(Session).where(
                Session.id == session_id,
                Session.user_id == user_id,
            )
        )
        await self.db.commit()
        count = result.rowcount or 0
        if count:
            logger.info(f"Session removed for user: {user_id}")
        return count

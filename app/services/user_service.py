"""User service for account management."""

import asyncio
from typing import Any

from loguru import logger
from sqlalchemy import delete, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import (
    EMAIL_IN_USE,
    USERNAME_IN_USE,
    ConflictError,
    PasswordHashError,
)
from app.core.security import get_password_hash, verify_password
from app.models.session import Session
from app.models.user import User
from app.schemas.paging import PagedResponse
from app.schemas.user import UserDTO, UserQueryParams
from app.services.base_service import BaseService

# Projection used by every self-service endpoint
SELF_FIELDS = "username email"


class UserService(BaseService[User]):
    """User service for the account directory."""

    dto = UserDTO

    def __init__(self, db: AsyncSession):
        super().__init__(db, User)

    async def get_by_username(self, username: str) -> User | None:
        """Get user by exact username."""
        return await self.find_one(User.username == username)

    async def get_by_email(self, email: str) -> User | None:
        """Get user by email, case-insensitively."""
        return await self.find_one(User.email == email.lower())

    async def authenticate(self, username: str, password: str) -> User | None:
        """Authenticate an active user by username (or email) and password."""
        if "@" in username:
            user = await self.get_by_email(username)
        else:
            user = await self.get_by_username(username)

        if not user or not user.is_active:
            return None
        if not await asyncio.to_thread(verify_password, password, user.password_hash):
            return None
        return user

    async def list_users(self, params: UserQueryParams) -> PagedResponse:
        """Get a page of users matching the listing filters."""
        conditions = []
        if params.username:
            conditions.append(User.username.icontains(params.username, autoescape=True))
        if params.is_active is not None:
            conditions.append(User.is_active == params.is_active)
        if params.role:
            # role is token shaped, so it is safe inside a JSON path
            conditions.append(
                func.json_type(User.roles, f"$.{params.role}").is_not(None)
            )

        return await self.paged_find(
            conditions,
            params.fields,
            params.sort,
            params.limit,
            params.page,
        )

    async def ensure_available(
        self,
        username: str,
        email: str,
        exclude_id: str | None = None,
    ) -> None:
        """Reject a username or email held by another user.

        The username is checked first; the email check only runs when the
        username is free.
        """
        others = [User.id != exclude_id] if exclude_id is not None else []

        if await self.find_one(User.username == username, *others):
            logger.info(f"Username conflict for '{username}'")
            raise ConflictError(USERNAME_IN_USE)

        if await self.find_one(User.email == email.lower(), *others):
            logger.info(f"Email conflict for '{email.lower()}'")
            raise ConflictError(EMAIL_IN_USE)

    async def generate_password_hash(self, password: str) -> str:
        """Hash a plaintext password off the event loop."""
        try:
            return await asyncio.to_thread(get_password_hash, password)
        except Exception as exc:
            logger.error(f"Password hashing failed: {exc}")
            raise PasswordHashError() from exc

    async def create_user(
        self,
        username: str,
        password: str,
        email: str,
        roles: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Create new user and return its document."""
        password_hash = await self.generate_password_hash(password)
        user = User(
            username=username,
            email=email.lower(),
            password_hash=password_hash,
            is_active=True,
            roles=roles or {},
        )
        user = await self.create(user)
        logger.info(f"User created: {user.id} ({user.username})")
        return self.to_document(user)

    async def update_user(
        self,
        user_id: str,
        values: dict[str, Any],
        fields: set[str] | None = None,
    ) -> dict[str, Any] | None:
        """Update a user's fields. Deactivation revokes the user's sessions."""
        if "email" in values:
            values = {**values, "email": values["email"].lower()}
        if values.get("is_active") is False:
            await self.db.execute(delete(Session).where(Session.user_id == user_id))

        document = await self.find_by_id_and_update(user_id, values, fields)
        if document is not None:
            logger.info(f"User updated: {user_id}")
        return document

    async def set_password(
        self,
        user_id: str,
        password: str,
        fields: set[str] | None = None,
    ) -> dict[str, Any] | None:
        """Hash and store a new password."""
        password_hash = await self.generate_password_hash(password)
        document = await self.find_by_id_and_update(
            user_id, {"password_hash": password_hash}, fields
        )
        if document is not None:
            logger.info(f"Password changed for user: {user_id}")
        return document

    async def remove_user(self, user_id: str) -> int:
        """Delete a user together with its sessions."""
        await self.db.execute(delete(Session).where(Session.user_id == user_id))
        count = await self.find_by_id_and_remove(user_id)
        if count:
            logger.info(f"User deleted: {user_id}")
        return count

    async def _commit(self) -> None:
        try:
            await self.db.commit()
        except IntegrityError as exc:
            await self.db.rollback()
            detail = str(exc.orig).lower()
            if "username" in detail:
                raise ConflictError(USERNAME_IN_USE) from exc
            if "email" in detail:
                raise ConflictError(EMAIL_IN_USE) from exc
            raise

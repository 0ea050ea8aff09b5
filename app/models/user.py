"""User model for the account directory."""

import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, Boolean, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class User(Base):
    """User database model.

    ``roles`` maps a role name to its metadata, for example
    ``{"admin": {"name": "Root Admin", "groups": {"root": "Root"}}}``.
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    username: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(255))
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    roles: Mapped[dict[str, Any]] = mapped_column(JSON, default=dict)
    time_created: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
    )

    def has_role(self, *roles: str) -> bool:
        """Return True if the user holds any of the given roles."""
        return any(role in (self.roles or {}) for role in roles)

    def in_admin_group(self, group: str) -> bool:
        """Return True if the user's admin role belongs to the given group."""
        admin = (self.roles or {}).get("admin") or {}
        return group in (admin.get("groups") or {})

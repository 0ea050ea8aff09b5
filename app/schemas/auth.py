"""Authentication schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class UserLogin(BaseModel):
    """Login request schema."""

    username: str = Field(..., min_length=1, description="Username or email")
    password: str = Field(..., min_length=1, description="User password")


class SessionDTO(BaseModel):
    """Session response schema."""

    id: str
    user_id: str = Field(..., alias="userId")
    time_created: datetime | None = Field(None, alias="timeCreated")

    model_config = {"populate_by_name": True, "from_attributes": True}


class LoginUser(BaseModel):
    """Authenticated user summary returned by login."""

    id: str
    username: str
    email: str
    roles: dict[str, Any] = {}

    model_config = {"from_attributes": True}


class LoginResponse(BaseModel):
    """Login response schema."""

    user: LoginUser
    session: SessionDTO
    token: str = Field(..., description="Bearer token bound to the session")


class ChangePassword(BaseModel):
    """Change password request schema."""

    password: str = Field(..., min_length=1, description="New password")

"""User schemas for API request/response."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, EmailStr, Field

USERNAME_PATTERN = r"^[a-zA-Z0-9_]+$"


class UserCreate(BaseModel):
    """User creation schema."""

    username: str = Field(..., pattern=USERNAME_PATTERN)
    password: str = Field(..., min_length=1)
    email: EmailStr


class UserUpdate(BaseModel):
    """Admin user update schema."""

    is_active: bool = Field(..., alias="isActive")
    username: str = Field(..., pattern=USERNAME_PATTERN)
    email: EmailStr

    model_config = {"populate_by_name": True}


class UserSelfUpdate(BaseModel):
    """Self update schema; activation and roles are not editable here."""

    username: str = Field(..., pattern=USERNAME_PATTERN)
    email: EmailStr


class UserDTO(BaseModel):
    """User document schema. Never carries the password hash."""

    id: str
    username: str
    email: str
    is_active: bool = Field(True, alias="isActive")
    roles: dict[str, Any] = {}
    time_created: datetime | None = Field(None, alias="timeCreated")

    model_config = {"populate_by_name": True, "from_attributes": True}


class UserQueryParams(BaseModel):
    """User listing query parameters schema."""

    username: str | None = Field(None, pattern=USERNAME_PATTERN)
    is_active: bool | None = Field(None, alias="isActive")
    role: str | None = Field(None, pattern=USERNAME_PATTERN)
    fields: str | None = None
    sort: str | None = None
    limit: int = Field(20, ge=1)
    page: int = Field(1, ge=1)

    model_config = {"populate_by_name": True}


class MessageResponse(BaseModel):
    """Plain message response schema."""

    message: str

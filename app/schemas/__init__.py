"""Pydantic schemas for API request/response validation."""

from app.schemas.auth import ChangePassword, LoginResponse, LoginUser, SessionDTO, UserLogin
from app.schemas.paging import ItemInfo, PageInfo, PagedResponse
from app.schemas.user import (
    MessageResponse,
    UserCreate,
    UserDTO,
    UserQueryParams,
    UserSelfUpdate,
    UserUpdate,
)

__all__ = [
    # Auth
    "ChangePassword",
    "LoginResponse",
    "LoginUser",
    "SessionDTO",
    "UserLogin",
    # Paging
    "ItemInfo",
    "PageInfo",
    "PagedResponse",
    # User
    "MessageResponse",
    "UserCreate",
    "UserDTO",
    "UserQueryParams",
    "UserSelfUpdate",
    "UserUpdate",
]

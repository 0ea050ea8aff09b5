"""Service layer for business logic."""

from app.services.auth_service import AuthService
from app.services.session_service import SessionService
from app.services.user_service import UserService

__all__ = [
    "AuthService",
    "SessionService",
    "UserService",
]

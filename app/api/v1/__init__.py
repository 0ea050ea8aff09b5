"""API v1 router initialization."""

from fastapi import APIRouter

from app.api.v1.auth import router as auth_router
from app.api.v1.users import router as users_router

router = APIRouter()

router.include_router(auth_router, tags=["Auth"])
router.include_router(users_router, prefix="/users", tags=["Users"])

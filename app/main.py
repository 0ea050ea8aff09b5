"""
Account Directory API - FastAPI Application

Main entry point for the FastAPI application.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api import router as api_router
from app.core.config import get_settings
from app.core.exceptions import AccountError
from app.db import models_registry  # noqa: F401 - Import to register models
from app.db.base import Base
from app.db.session import engine

settings = get_settings()

ROOT_ADMIN_ROLES = {
    "admin": {"name": "Root Admin", "groups": {"root": "Root"}},
    "account": {"name": "Root Admin"},
}


async def init_database() -> None:
    """Initialize database tables."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database initialized")


async def init_root_admin() -> None:
    """Create the default root admin if not exists."""
    from app.db.session import async_session_maker
    from app.services.user_service import UserService

    async with async_session_maker() as db:
        user_service = UserService(db)
        existing = await user_service.get_by_username(settings.root_admin_username)
        if not existing:
            await user_service.create_user(
                username=settings.root_admin_username,
                password=settings.root_admin_password,
                email=settings.root_admin_email,
                roles=ROOT_ADMIN_ROLES,
            )
            logger.info("Default root admin created")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    logger.info("Starting Account Directory API...")

    await init_database()
    await init_root_admin()

    logger.info(f"Account Directory API started on port {settings.port}")

    yield

    # Shutdown
    logger.info("Shutting down Account Directory API...")
    await engine.dispose()
    logger.info("Account Directory API stopped")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Account Directory API - user administration and sessions",
    lifespan=lifespan,
    docs_url="/swagger" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)


@app.exception_handler(AccountError)
async def account_error_handler(request: Request, exc: AccountError) -> JSONResponse:
    """Render domain errors as ``{"message": ...}``."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc!r}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.message},
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Render HTTP errors as ``{"message": ...}``."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(SQLAlchemyError)
async def store_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Store failures surface as a generic internal error."""
    logger.exception(f"{request.method} {request.url.path} store error: {exc}")
    return JSONResponse(
        status_code=500,
        content={"message": AccountError.default_message},
    )


# Exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Global exception handler."""
    logger.exception(f"Unhandled exception: {exc}")
    return JSONResponse(
        status_code=500,
        content={"message": AccountError.default_message},
    )


# Include API router
app.include_router(api_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        workers=settings.workers,
    )

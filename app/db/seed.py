"""Database seeder for development accounts.

Run from the project root:
  python -m app.db.seed
"""

import asyncio

from loguru import logger

from app.db import models_registry  # noqa: F401 - Import to register models
from app.db.base import Base
from app.db.session import async_session_maker, engine
from app.services.user_service import UserService

SEED_USERS = [
    {
        "username": "root",
        "email": "root@localhost.local",
        "password": "root",
        "roles": {
            "admin": {"name": "Root Admin", "groups": {"root": "Root"}},
            "account": {"name": "Root Admin"},
        },
    },
    {
        "username": "operator",
        "email": "operator@localhost.local",
        "password": "operator123",
        "roles": {
            "admin": {"name": "Operator", "groups": {"sales": "Sales"}},
        },
    },
    {
        "username": "viewer",
        "email": "viewer@localhost.local",
        "password": "viewer123",
        "roles": {"account": {"name": "Viewer"}},
    },
]


async def create_tables():
    """Create all tables."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Tables created")


async def seed_users():
    """Seed users, skipping usernames that already exist."""
    created = 0
    async with async_session_maker() as db:
        user_service = UserService(db)
        for data in SEED_USERS:
            existing = await user_service.get_by_username(data["username"])
            if existing:
                continue
            await user_service.create_user(
                username=data["username"],
                password=data["password"],
                email=data["email"],
                roles=data["roles"],
            )
            created += 1
    logger.info(f"Seeded {created} users")


async def main():
    await create_tables()
    await seed_users()
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())

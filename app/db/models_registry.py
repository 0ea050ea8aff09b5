"""
Model registry.

Import all models here to ensure they are registered with SQLAlchemy metadata
before ``Base.metadata.create_all`` runs.
"""

from app.db.base import Base
from app.models.session import Session
from app.models.user import User

__all__ = [
    "Base",
    "Session",
    "User",
]

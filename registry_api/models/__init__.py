"""SQLAlchemy models."""

from registry_api.models.base import Base, BaseModel
from registry_api.models.organization import Organization
from registry_api.models.user import User

__all__ = [
    "Base",
    "BaseModel",
    "Organization",
    "User",
]

"""FastAPI dependencies wiring services to the request scope."""
from functools import partial

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from registry_api.core.database import get_db
from registry_api.core.security import PasswordHasher, hash_password
from registry_api.services.org_service import OrganizationService
from registry_api.services.user_service import UserService


def get_password_hasher(request: Request) -> PasswordHasher:
    """Credential hasher used on user write paths.

    The work factor comes from the application's own Settings. Override
    through ``app.dependency_overrides`` to substitute the hasher.
    """
    return partial(hash_password, rounds=request.app.state.settings.bcrypt_rounds)


def get_organization_service(db: AsyncSession = Depends(get_db)) -> OrganizationService:
    return OrganizationService(db)


def get_user_service(
    db: AsyncSession = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> UserService:
    return UserService(db, hasher=hasher)

"""User service for user CRUD with credential hashing."""
import logging

from fastapi import HTTPException, status
from sqlalchemy import delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from registry_api.core.security import PasswordHasher, hash_password
from registry_api.core.structured_logging import log_json
from registry_api.models.user import User
from registry_api.schemas.user import UserRequest

logger = logging.getLogger(__name__)


class UserService:
    """Service for user management operations."""

    def __init__(self, db: AsyncSession, hasher: PasswordHasher = hash_password):
        """Initialize user service.

        Args:
            db: Database session
            hasher: One-way password hash function
        """
        self.db = db
        self.hasher = hasher

    async def _hash(self, password: str) -> str:
        # bcrypt is CPU bound; keep it off the event loop.
        return await run_in_threadpool(self.hasher, password)

    async def create_user(self, data: UserRequest) -> User:
        """Hash the supplied password and insert the user.

        Args:
            data: Validated user attributes with plaintext password

        Returns:
            Created User instance
        """
        row = data.to_row(await self._hash(data.password))
        result = await self.db.execute(insert(User).values(**row).returning(User))
        user = result.scalar_one()
        await self.db.commit()

        log_json(logger, logging.INFO, "user.create", user_id=user.id)
        return user

    async def list_users(self) -> list[User]:
        """List all users ordered by id."""
        result = await self.db.execute(select(User).order_by(User.id))
        return list(result.scalars().all())

    async def get_user(self, user_id: int) -> User:
        """Get a specific user by ID.

        Raises:
            HTTPException: 404 if user not found
        """
        result = await self.db.execute(select(User).where(User.id == user_id))
        user = result.scalar_one_or_none()
        if not user:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="User not found"
            )
        return user

    async def update_user(self, user_id: int, data: UserRequest) -> User:
        """Replace every attribute of a user, re-hashing the password.

        The password is hashed again even when unchanged; bcrypt salts
        differ so the stored hash changes on every update.

        Raises:
            HTTPException: 404 if user not found
        """
        row = data.to_row(await self._hash(data.password))
        result = await self.db.execute(
            update(User).where(User.id == user_id).values(**row).returning(User)
        )
        user = result.scalar_one_or_none()
        if not user:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="User not found"
            )

        await self.db.commit()

        log_json(logger, logging.INFO, "user.update", user_id=user_id)
        return user

    async def delete_user(self, user_id: int) -> None:
        """Delete a user. Deleting a missing id is not an error."""
        result = await self.db.execute(delete(User).where(User.id == user_id))
        await self.db.commit()

        log_json(
            logger,
            logging.INFO,
            "user.delete",
            user_id=user_id,
            deleted=result.rowcount > 0,
        )

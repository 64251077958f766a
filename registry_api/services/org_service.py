"""Organization service: one parameterized statement per operation."""
import logging

from fastapi import HTTPException, status
from sqlalchemy import delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from registry_api.core.structured_logging import log_json
from registry_api.models.organization import Organization
from registry_api.schemas.organization import OrganizationRequest

logger = logging.getLogger(__name__)


class OrganizationService:
    """Service for creating and managing organizations."""

    def __init__(self, db: AsyncSession):
        """Initialize organization service.

        Args:
            db: Database session
        """
        self.db = db

    async def create(self, data: OrganizationRequest) -> Organization:
        """Insert an organization and return the stored row.

        Args:
            data: Validated organization attributes

        Returns:
            Created Organization instance, including its generated id
        """
        result = await self.db.execute(
            insert(Organization).values(**data.model_dump()).returning(Organization)
        )
        organization = result.scalar_one()
        await self.db.commit()

        log_json(logger, logging.INFO, "organization.create", org_id=organization.id)
        return organization

    async def list_organizations(self) -> list[Organization]:
        """Return every organization ordered by id."""
        result = await self.db.execute(select(Organization).order_by(Organization.id))
        return list(result.scalars().all())

    async def get_by_id(self, org_id: int) -> Organization:
        """Get organization by ID.

        Args:
            org_id: Organization ID

        Returns:
            Organization instance

        Raises:
            HTTPException: 404 if organization not found
        """
        result = await self.db.execute(
            select(Organization).where(Organization.id == org_id)
        )
        organization = result.scalar_one_or_none()

        if not organization:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Organization not found"
            )

        return organization

    async def update(self, org_id: int, data: OrganizationRequest) -> Organization:
        """Replace every attribute of an organization.

        Args:
            org_id: Organization ID
            data: Full attribute set; omitted optional fields become null

        Returns:
            Updated Organization instance

        Raises:
            HTTPException: 404 if organization not found
        """
        result = await self.db.execute(
            update(Organization)
            .where(Organization.id == org_id)
            .values(**data.model_dump())
            .returning(Organization)
        )
        organization = result.scalar_one_or_none()

        if not organization:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Organization not found"
            )

        await self.db.commit()

        log_json(logger, logging.INFO, "organization.update", org_id=org_id)
        return organization

    async def delete(self, org_id: int) -> None:
        """Delete an organization. Deleting a missing id is not an error."""
        result = await self.db.execute(
            delete(Organization).where(Organization.id == org_id)
        )
        await self.db.commit()

        log_json(
            logger,
            logging.INFO,
            "organization.delete",
            org_id=org_id,
            deleted=result.rowcount > 0,
        )

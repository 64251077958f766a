"""Pydantic schemas for organization endpoints."""

from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, EmailStr, Field, PlainSerializer, field_validator

# Kept as Decimal in Python; written as a JSON number.
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class OrganizationRequest(BaseModel):
    """Request schema for creating or replacing an organization.

    Used for POST /organizations and PUT /organizations/{org_id}. PUT is a
    full replace: an omitted optional field is written as null.
    """

    model_config = ConfigDict(extra="ignore")

    org_name: str = Field(..., min_length=1, max_length=255, description="Organization display name")
    type: str = Field(..., min_length=1, max_length=100, description="Organization type")
    industry: str = Field(..., min_length=1, max_length=100, description="Industry sector")
    address: str | None = Field(None, description="Postal address")
    poc_name: str = Field(..., min_length=1, max_length=255, description="Point of contact name")
    poc_email: EmailStr = Field(..., description="Point of contact email")
    price_per_unit: Decimal = Field(
        ..., ge=0, max_digits=12, decimal_places=2, description="Price charged per unit"
    )

    @field_validator("org_name")
    @classmethod
    def org_name_not_blank(cls, v: str) -> str:
        """Validate that name is not whitespace only."""
        if not v.strip():
            raise ValueError("Organization name cannot be empty")
        return v.strip()


class OrganizationResponse(BaseModel):
    """Response schema for organization endpoints."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="Organization identifier")
    org_name: str | None = None
    type: str | None = None
    industry: str | None = None
    address: str | None = None
    poc_name: str | None = None
    poc_email: str | None = None
    price_per_unit: Money | None = None

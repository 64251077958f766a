"""Pydantic schemas for user endpoints."""
from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from registry_api.core.security import BCRYPT_MAX_PASSWORD_BYTES


class UserRequest(BaseModel):
    """Request schema for creating or replacing a user.

    Used for POST /users and PUT /users/{user_id}. The plaintext credential
    arrives in the ``password_hash`` field and is hashed before storage.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str = Field(..., min_length=1, max_length=255, description="Full name")
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(
        ...,
        alias="password_hash",
        min_length=8,
        max_length=72,
        description="Plaintext password; stored only as a bcrypt hash",
    )
    role: str = Field(..., min_length=1, max_length=50, description="User role")
    dob: Optional[date] = Field(None, description="Date of birth")
    address: Optional[str] = None
    phone_number: Optional[str] = Field(None, max_length=50)
    location: Optional[str] = Field(None, max_length=255)
    client_id: Optional[int] = Field(None, description="Identifier of the owning client")
    client_type: Optional[str] = Field(None, max_length=50)
    registered_device_no: Optional[str] = Field(None, max_length=100)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, v: str) -> str:
        # bcrypt input is capped in bytes, not characters
        if len(v.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES:
            raise ValueError(f"Password must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes")
        return v

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Name cannot be empty")
        return v.strip()

    def to_row(self, password_hash: str) -> dict:
        """Column values for the statement, with the hash in place of the plaintext."""
        row = self.model_dump(exclude={"password"})
        row["password_hash"] = password_hash
        return row


class UserResponse(BaseModel):
    """Response schema for user information.

    The stored credential hash is never serialized.
    """

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="User identifier")
    name: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None
    dob: Optional[date] = None
    address: Optional[str] = None
    phone_number: Optional[str] = None
    location: Optional[str] = None
    client_id: Optional[int] = None
    client_type: Optional[str] = None
    registered_device_no: Optional[str] = None

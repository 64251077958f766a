"""Error response schemas."""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ErrorResponse(BaseModel):
    """Standard error response schema.

    Used for all error responses (4xx, 5xx) across the API.
    """

    error: str = Field(
        ...,
        description="Error type identifier",
        examples=["not_found", "validation_error", "storage_error"],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
        examples=["Organization not found", "A storage error occurred"],
    )
    details: Optional[list[dict]] = Field(
        None,
        description="Field level validation errors",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {"error": "not_found", "message": "User not found"},
                {
                    "error": "validation_error",
                    "message": "Request validation failed",
                    "details": [
                        {
                            "field": "body.poc_email",
                            "message": "value is not a valid email address",
                            "type": "value_error",
                        }
                    ],
                },
            ]
        }
    )

"""
Postboard Backend — Pydantic Request/Response Schemas
=======================================================

What:  Pydantic models defining the API contract of the posts endpoints.
How:   FastAPI uses these models to validate request bodies, serialize
       responses, and generate the OpenAPI document.
When:  Validated on every request (input) and serialized on every response (output).

Field naming:
    Python attributes are snake_case; the JSON contract is camelCase
    (imageUrl, createdAt). Requests may use either spelling.
"""

import uuid
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import (
    AnyUrl,
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError as PydanticValidationError,
    field_validator,
)
from pydantic.alias_generators import to_camel

_url_adapter = TypeAdapter(AnyUrl)


class CamelModel(BaseModel):
    """Base for models exposed with camelCase JSON keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class PostInput(CamelModel):
    """
    What:  Full post payload for POST /api/posts and PUT /api/posts/{id}.
    Why:   Updates are full replacements, so both endpoints share one schema.

    Example:
        {
            "author": "John Doe",
            "title": "My First Post",
            "description": "This is a sample post description.",
            "imageUrl": "https://example.com/image.jpg",
            "createdAt": "2023-01-01T00:00:00.000Z"
        }
    """

    author: str = Field(min_length=1, description="The author of the post", examples=["John Doe"])
    title: str = Field(min_length=1, description="The title of the post", examples=["My First Post"])
    description: str = Field(
        min_length=1,
        description="The content of the post",
        examples=["This is a sample post description."],
    )
    image_url: str = Field(
        description="The URL of the post's image",
        examples=["https://example.com/image.jpg"],
    )
    created_at: Optional[datetime] = Field(
        default=None,
        description="When the post was created (ISO 8601). Defaults to now on create.",
        examples=["2023-01-01T00:00:00.000Z"],
    )

    @field_validator("image_url")
    @classmethod
    def validate_image_url(cls, v: str) -> str:
        """Must parse as an absolute URL; the original string is kept as-is."""
        try:
            _url_adapter.validate_python(v)
        except PydanticValidationError:
            raise ValueError("Invalid url")
        return v

    @field_validator("created_at")
    @classmethod
    def ensure_timezone(cls, v: Optional[datetime]) -> Optional[datetime]:
        """Naive timestamps are taken as UTC."""
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class PostResponse(CamelModel):
    """
    What:  Full representation of a stored post.
    Who:   Returned by GET /api/posts (as array items) and GET /api/posts/{id},
           and embedded in the update and delete acknowledgements.
    """

    id: uuid.UUID = Field(description="Unique post identifier (UUID)")
    author: str
    title: str
    description: str
    image_url: str
    created_at: datetime = Field(description="When the post was created (ISO 8601)")
    updated_at: datetime = Field(description="When the post was last written (ISO 8601)")


class PostCreatedResponse(CamelModel):
    message: str = Field(default="Post has been created")
    id: uuid.UUID = Field(description="Identifier assigned to the new post")


class PostUpdatedResponse(CamelModel):
    message: str = Field(default="Post updated successfully")
    post: PostResponse


class PostDeletedResponse(CamelModel):
    message: str = Field(default="Post deleted successfully")
    deleted_post: PostResponse


# ══════════════════════════════════════════════════════════════════════════
# Error Response Models — Consistent error format across all endpoints
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response format for all API errors.

    Fields:
        error: Machine-readable error code (e.g., "validation_error", "not_found")
        message: Human-readable description
        details: Optional extra context (e.g., which field failed validation)
        request_id: Correlation ID for tracing this error in server logs
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class FieldError(BaseModel):
    field: str = Field(description="The field that caused the validation error")
    message: str = Field(description="The validation error message")


class ValidationErrorResponse(ErrorResponse):
    """
    Returned with HTTP 400 when the request body fails the post schema.

    Example:
        {
            "error": "validation_error",
            "message": "Request validation failed",
            "errors": [{"field": "imageUrl", "message": "Value error, Invalid url"}],
            "request_id": "a1b2c3d4"
        }
    """
    errors: List[FieldError] = Field(default_factory=list)


class HealthResponse(BaseModel):
    """Health check response showing service and database status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")

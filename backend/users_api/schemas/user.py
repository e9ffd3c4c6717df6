"""
Users API - Pydantic Request/Response Schemas
==============================================

What:  Pydantic models defining the HTTP contract for /api/users.
How:   FastAPI validates request bodies against the request models, serializes
       User dataclasses through UserResponse, and generates OpenAPI docs.

Why request fields are Optional:
    Required-field checking belongs to the store, which reports every missing
    field as a 400 ValidationError. If the schema marked them required,
    FastAPI would reject a missing name with its own 422 before the store ran,
    and create and update would disagree on how a missing field is reported.
    The schema only guarantees that a field, when present, is a string.
"""

from typing import Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models - What clients send
# ══════════════════════════════════════════════════════════════════════════


class UserCreate(BaseModel):
    """Body of POST /api/users. Both fields must end up non-empty."""

    name: Optional[str] = Field(default=None, description="Display name (required)")
    email: Optional[str] = Field(default=None, description="Email address (required)")


class UserUpdate(BaseModel):
    """
    Body of PUT /api/users/{id}.

    Omitted (or null) fields keep their current value. A field that is sent
    must be non-empty.
    """

    name: Optional[str] = Field(default=None, description="New display name")
    email: Optional[str] = Field(default=None, description="New email address")


# ══════════════════════════════════════════════════════════════════════════
# Response Models - What the API returns
# ══════════════════════════════════════════════════════════════════════════


class UserResponse(BaseModel):
    """Wire representation of one user."""

    id: int = Field(description="Store-assigned identifier")
    name: str = Field(description="Display name")
    email: str = Field(description="Email address")

    model_config = {"from_attributes": True}


class ErrorResponse(BaseModel):
    """
    Standardized error body for all API errors.

    Example:
        {
            "error": "validation_error",
            "message": "Missing or empty required field(s): name",
            "details": {"fields": ["name"]},
            "request_id": "3f2a9c1d"
        }
    """

    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Returned by GET /health for liveness probes."""

    status: str = Field(description="Overall service status")
    version: str = Field(description="Application version")
    user_count: int = Field(description="Users currently held by the store")
    uptime_seconds: float = Field(description="Seconds since service started")

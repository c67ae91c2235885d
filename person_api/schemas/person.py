"""
Person API - Pydantic Request/Response Schemas
===============================================

What:  Pydantic models defining the JSON contract of the /persons resource.
How:   FastAPI uses these models to validate request bodies, serialize responses,
       and generate the OpenAPI documentation.
Who:   Used by route handlers as body types and response models.

Wire format:
    {"id": 1, "firstname": "Max", "lastname": "Mustermann",
     "email": "max@example.com", "createdAt": "2024-01-15T12:00:00Z"}

    `id` and `createdAt` are server-owned: PersonPayload has no such fields,
    and unknown fields in a request body are ignored.
"""

import time
from datetime import datetime
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class PersonPayload(BaseModel):
    """
    What:  Client representation of a person.
    Who:   Body of POST /persons (create) and PUT /persons/{id} (update).
    """
    firstname: str = Field(description="First name (required)")
    lastname: str = Field(description="Last name (required)")
    email: Optional[str] = Field(default=None, description="Email address (optional)")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class PersonResponse(BaseModel):
    """
    What:  Full representation of a stored person.
    Who:   Returned by every /persons endpoint that answers with a person or a list.
    """
    id: int = Field(description="Server-generated identifier")
    firstname: str
    lastname: str
    email: Optional[str] = None
    created_at: Optional[datetime] = Field(
        default=None,
        validation_alias=AliasChoices("created_at", "createdAt"),
        serialization_alias="createdAt",
        description="When the person was first saved (ISO 8601)",
    )

    model_config = ConfigDict(from_attributes=True)


# ══════════════════════════════════════════════════════════════════════════
# Error Response Models
# ══════════════════════════════════════════════════════════════════════════


def _now_millis() -> int:
    return int(time.time() * 1000)


class ErrorResponse(BaseModel):
    """
    What:  Body of the 404 answer for an unknown person id.

    Example:
        {
            "status": 404,
            "message": "Person not found with id: 42",
            "timestamp": 1705320000000
        }
    """
    status: int = Field(description="HTTP status code")
    message: str = Field(description="Human-readable error description")
    timestamp: int = Field(
        default_factory=_now_millis,
        description="Milliseconds since epoch when the error was built",
    )

    model_config = ConfigDict(frozen=True)


class HealthResponse(BaseModel):
    """Health check response showing service and database status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")

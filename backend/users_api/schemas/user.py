"""User Schemas: create payload and public user representation.

Invariants:
    - CreateUser accepts exactly two string fields; no length/format checks
    - Unknown keys in the create payload are ignored
    - UserResponse mirrors the stored row (id, name, email, created_at)

Design Decisions:
    - strict=True on CreateUser: numbers are not coerced into names or emails,
      so {"name": 1} is malformed input rather than a user named "1"
    - from_attributes on UserResponse: built straight from the ORM row
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CreateUser(BaseModel):
    """Body of POST /users."""
    model_config = ConfigDict(strict=True, extra="ignore")

    name: str
    email: str


class UserResponse(BaseModel):
    """Public-facing user data."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    created_at: datetime | None = None


class MetricsResponse(BaseModel):
    """Body of GET /metrics."""
    requests: int = Field(ge=0)
    error: int = Field(ge=0)

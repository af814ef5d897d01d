"""Profile Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - name: 1-50 chars, stripped, non-empty; description <= 500; phone <= 20
    - email (optional) must look like an address
    - address is required on create and optional on update; never returned
    - ProfileFields re-validates the merged record on update

Design Decisions:
    - field_validator for side-effect-free transforms (strip) — keeps models pure
    - ProfileUpdate keeps every field optional; explicit nulls are caught by
      re-validating the merged record against ProfileFields
"""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

EMAIL_PATTERN = r"^[^\s@<>()\[\]\\,;:\"]+@([A-Za-z0-9-]+\.)+[A-Za-z]{2,}$"


def _strip_name(v: str | None) -> str | None:
    if v is None:
        return v
    v = v.strip()
    if not v:
        raise ValueError("Please add a profile name")
    return v


class ProfileFields(BaseModel):
    """Persisted, constrained profile fields."""
    name: str = Field(min_length=1, max_length=50)
    description: str = Field(min_length=1, max_length=500)
    phone: str = Field(min_length=1, max_length=20)
    email: str | None = Field(None, pattern=EMAIL_PATTERN, max_length=320)
    account_number: str | None = Field(None, max_length=34)
    bank_name: str | None = Field(None, max_length=100)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return _strip_name(v)


class ProfileCreate(ProfileFields):
    """Profile creation — address is consumed by geocoding."""
    address: str = Field(min_length=1, max_length=500)


class ProfileUpdate(BaseModel):
    """Partial profile update."""
    name: str | None = Field(None, min_length=1, max_length=50)
    description: str | None = Field(None, min_length=1, max_length=500)
    phone: str | None = Field(None, min_length=1, max_length=20)
    email: str | None = Field(None, pattern=EMAIL_PATTERN, max_length=320)
    account_number: str | None = Field(None, max_length=34)
    bank_name: str | None = Field(None, max_length=100)
    address: str | None = Field(None, min_length=1, max_length=500)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str | None) -> str | None:
        return _strip_name(v)


class Location(BaseModel):
    """GeoJSON point plus locality parts from the geocoder."""
    type: Literal["Point"] = "Point"
    coordinates: list[float]
    formatted_address: str | None = None
    street: str | None = None
    city: str | None = None
    state: str | None = None
    zipcode: str | None = None
    country: str | None = None


class ProfileResponse(BaseModel):
    """Public profile data."""
    id: UUID
    name: str
    slug: str | None = None
    description: str
    phone: str
    email: str | None = None
    location: Location | None = None
    photo: str = "no-photo.jpg"
    user_id: UUID
    created_at: datetime


class ProfileSummary(BaseModel):
    """Projection embedded in task responses."""
    id: UUID
    name: str
    description: str


PROFILE_QUERY_FIELDS = {
    "name": str,
    "slug": str,
    "description": str,
    "phone": str,
    "email": str,
    "photo": str,
    "user_id": UUID,
    "created_at": datetime.fromisoformat,
}

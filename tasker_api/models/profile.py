"""Profile ORM — a user's public service profile.

Invariants:
    - name is unique; slug mirrors name at last save
    - address is NOT a column: it is consumed by geocoding and dropped
    - location is a GeoJSON point; longitude/latitude are copied out of it
      into indexed columns for geospatial lookups
    - account_number / bank_name are stored but never serialized

Design Decisions:
    - location kept as JSON (point + locality parts) alongside indexed lon/lat
    - tasks.profile_id cascades at DB level as a backstop to the explicit cascade rule
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, Float, DateTime, JSON, Index
from sqlalchemy.orm import Mapped, mapped_column, validates
from sqlalchemy.dialects.postgresql import UUID

from tasker_api.db.base import Base


class Profile(Base):
    """Profile aggregate — parent of tasks."""
    __tablename__ = "profiles"
    __table_args__ = (
        Index("ix_profiles_lon_lat", "longitude", "latitude"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    slug: Mapped[str | None] = mapped_column(String(80), nullable=True, index=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    phone: Mapped[str] = mapped_column(String(20), nullable=False)
    email: Mapped[str | None] = mapped_column(String(320), nullable=True)
    account_number: Mapped[str | None] = mapped_column(String(34), nullable=True)
    bank_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    location: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    longitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    latitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    photo: Mapped[str] = mapped_column(
        String(200), nullable=False, default="no-photo.jpg",
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), nullable=False, index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    @validates("location")
    def _copy_coordinates(self, key, value):
        coordinates = (value or {}).get("coordinates") or [None, None]
        self.longitude, self.latitude = coordinates[0], coordinates[1]
        return value

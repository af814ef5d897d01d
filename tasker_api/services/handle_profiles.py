"""Profile Handlers — create, list, get, update, delete profiles.

Invariants:
    - Lifecycle stages (slug, geocode) run BEFORE the store write; a geocoder
      failure leaves nothing persisted
    - address is consumed by the geocode stage and never reaches the store
    - Update/delete pass the Authorization Gate before any mutation
    - Delete runs the cascade (tasks of the profile) immediately before removing
      the profile; both writes are committed together
    - Payments are never touched by the cascade
"""

import logging
from uuid import UUID

from tasker_api.core.advanced_query import QuerySpec
from tasker_api.core.authorization import Requester, ensure_authorized
from tasker_api.core.profile_lifecycle import apply_location, apply_slug, needs_geocoding
from tasker_api.core.repository_protocols import Geocoder, Store
from tasker_api.schemas.profile import (
    ProfileCreate, ProfileFields, ProfileResponse, ProfileUpdate,
)
from tasker_api.services.resource_helpers import (
    envelope, list_with_query, load_or_404, revalidate, serialize,
)

logger = logging.getLogger(__name__)


async def cascade_profile_delete(store: Store, profile_id: UUID) -> int:
    """Delete every task of the profile. Zero matches is a successful no-op."""
    return await store.tasks.delete_where(profile_id=profile_id)


class ProfileHandlers:
    """Profile controller over an injected store and geocoder."""

    def __init__(self, store: Store, geocoder: Geocoder):
        self.store = store
        self.geocoder = geocoder

    async def run_lifecycle(self, fields: dict) -> dict:
        """Slug stage, then geocode stage when an address is present."""
        staged = apply_slug(fields)
        if needs_geocoding(staged):
            results = await self.geocoder.geocode(staged["address"])
            return apply_location(staged, results)
        staged.pop("address", None)
        return staged

    async def create_profile(self, requester: Requester, payload: ProfileCreate) -> dict:
        fields = {**payload.model_dump(), "user_id": requester.id}
        staged = await self.run_lifecycle(fields)
        record = await self.store.profiles.create(staged)
        await self.store.commit()
        logger.info(
            f"Profile {record['id']} created",
            extra={"request_user": str(requester.id), "resource_id": str(record["id"])},
        )
        return envelope(serialize(ProfileResponse, record))

    async def list_profiles(self, spec: QuerySpec) -> dict:
        return await list_with_query(self.store.profiles, spec, ProfileResponse)

    async def get_profile(self, profile_id: UUID) -> dict:
        record = await load_or_404(self.store.profiles, profile_id, "Profile")
        return envelope(serialize(ProfileResponse, record))

    async def update_profile(
        self, requester: Requester, profile_id: UUID, payload: ProfileUpdate,
    ) -> dict:
        current = await load_or_404(self.store.profiles, profile_id, "Profile")
        ensure_authorized(
            requester, current["user_id"],
            action="update", resource_type="Profile", resource_id=profile_id,
        )

        changes = payload.model_dump(exclude_unset=True)
        address = changes.pop("address", None)
        changes = revalidate(ProfileFields, current, changes)
        changes.setdefault("name", current["name"])
        if address:
            changes["address"] = address

        staged = await self.run_lifecycle(changes)
        record = await self.store.profiles.update(profile_id, staged)
        await self.store.commit()
        return envelope(serialize(ProfileResponse, record))

    async def delete_profile(self, requester: Requester, profile_id: UUID) -> dict:
        current = await load_or_404(self.store.profiles, profile_id, "Profile")
        ensure_authorized(
            requester, current["user_id"],
            action="delete", resource_type="Profile", resource_id=profile_id,
        )

        removed_tasks = await cascade_profile_delete(self.store, profile_id)
        await self.store.profiles.delete(profile_id)
        await self.store.commit()
        logger.info(
            f"Profile {profile_id} deleted",
            extra={
                "request_user": str(requester.id),
                "resource_id": str(profile_id),
                "cascade_count": removed_tasks,
            },
        )
        return envelope({})

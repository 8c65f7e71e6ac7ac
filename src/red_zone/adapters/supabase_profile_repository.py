"""Supabase-backed profile repository."""

import asyncio
from dataclasses import dataclass

import httpx
from supabase import Client, PostgrestAPIError

from red_zone.domain.errors import StoreError
from red_zone.domain.zones import DEFAULT_ZONE_NAME, Profile
from red_zone.services.bootstrap import ProfileRepository


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for user profiles."""

    client: Client
    table: str = "redzone_user"

    async def get_profile(self, user_id: str) -> Profile | None:
        """Return the user's profile, if present."""
        try:
            response = await asyncio.to_thread(self._select_profile, user_id)
        except (PostgrestAPIError, httpx.HTTPError) as exc:
            raise StoreError(f"Failed to load profile: {exc}") from exc
        if not response.data:
            return None
        row = response.data[0]
        return Profile(
            user_id=row["user_id"],
            default_duration=int(row["default_duration"]),
            default_interval=int(row["default_interval"]),
            is_active=bool(row.get("is_active", True)),
        )

    async def put_profile(self, profile: Profile) -> None:
        """Insert or replace the user's profile row."""
        try:
            await asyncio.to_thread(self._upsert_profile, profile)
        except (PostgrestAPIError, httpx.HTTPError) as exc:
            raise StoreError(f"Failed to save profile: {exc}") from exc

    def _select_profile(self, user_id: str):  # type: ignore[no-untyped-def]
        return (
            self.client.table(self.table)
            .select("user_id, default_duration, default_interval, is_active")
            .eq("user_id", user_id)
            .eq("zone_name", DEFAULT_ZONE_NAME)
            .limit(1)
            .execute()
        )

    def _upsert_profile(self, profile: Profile) -> None:
        self.client.table(self.table).upsert(
            {
                "user_id": profile.user_id,
                "zone_name": DEFAULT_ZONE_NAME,
                "default_duration": profile.default_duration,
                "default_interval": profile.default_interval,
                "is_active": profile.is_active,
            },
            on_conflict="user_id,zone_name",
        ).execute()

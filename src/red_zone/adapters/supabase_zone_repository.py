"""Supabase-backed zone repository."""

import asyncio
from dataclasses import dataclass

import httpx
from supabase import Client, PostgrestAPIError

from red_zone.domain.errors import StoreError
from red_zone.domain.zones import DEFAULT_ZONE_NAME, ZoneRange
from red_zone.services.zones import ZoneRepository


def user_key(user_id: str) -> str:
    """Return the partition key for a user's default zone group."""
    return f"{user_id}-{DEFAULT_ZONE_NAME}"


@dataclass
class SupabaseZoneRepository(ZoneRepository):
    """Supabase implementation for zones keyed by user and begin date."""

    client: Client
    table: str = "redzone_zone"
    floor_date: str = "2000-01-01"

    async def list_zones(self, user_id: str) -> list[ZoneRange]:
        """Return zones after the floor date ordered by begin date."""
        try:
            response = await asyncio.to_thread(self._select_zones, user_id)
        except (PostgrestAPIError, httpx.HTTPError) as exc:
            raise StoreError(f"Failed to load zones: {exc}") from exc
        return [
            ZoneRange(
                begin_date=row["begin_date"],
                end_date=row["end_date"],
                is_active=bool(row.get("is_active", True)),
            )
            for row in response.data or []
        ]

    async def upsert_zone(self, user_id: str, begin_date: str, end_date: str) -> None:
        """Insert a zone or overwrite the end date of an existing one."""
        try:
            await asyncio.to_thread(self._upsert_zone, user_id, begin_date, end_date)
        except (PostgrestAPIError, httpx.HTTPError) as exc:
            raise StoreError(f"Failed to save zone: {exc}") from exc

    def _select_zones(self, user_id: str):  # type: ignore[no-untyped-def]
        return (
            self.client.table(self.table)
            .select("begin_date, end_date, is_active")
            .eq("user_key", user_key(user_id))
            .gt("begin_date", self.floor_date)
            .order("begin_date")
            .execute()
        )

    def _upsert_zone(self, user_id: str, begin_date: str, end_date: str) -> None:
        self.client.table(self.table).upsert(
            {
                "user_key": user_key(user_id),
                "begin_date": begin_date,
                "end_date": end_date,
                "is_active": True,
            },
            on_conflict="user_key,begin_date",
        ).execute()

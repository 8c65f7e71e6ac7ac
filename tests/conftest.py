"""Shared test fixtures."""

import asyncio
from dataclasses import dataclass, field
from datetime import date

import pytest

from red_zone.adapters.amazon_date_parser import AmazonDateParser
from red_zone.config import Settings
from red_zone.containers import AppContainer
from red_zone.domain.errors import StoreError
from red_zone.domain.zones import Profile, ZoneRange
from red_zone.services.bootstrap import ProfileRepository, SessionBootstrap
from red_zone.services.intents import IntentRouter
from red_zone.services.turns import TurnHandler
from red_zone.services.zones import ZoneRepository, ZoneService

TODAY = date(2024, 3, 20)


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """In-memory profile repository for tests.

    ``wait_for`` holds ``get_profile`` until the event is set, which lets a
    test force the zone read to finish first.
    """

    profiles: dict[str, Profile] = field(default_factory=dict)
    puts: list[Profile] = field(default_factory=list)
    fail_reads: bool = False
    fail_writes: bool = False
    wait_for: asyncio.Event | None = None
    done: asyncio.Event | None = None

    async def get_profile(self, user_id: str) -> Profile | None:
        if self.wait_for is not None:
            await self.wait_for.wait()
        if self.fail_reads:
            raise StoreError("profile read failed")
        profile = self.profiles.get(user_id)
        if self.done is not None:
            self.done.set()
        return profile

    async def put_profile(self, profile: Profile) -> None:
        if self.fail_writes:
            raise StoreError("profile write failed")
        self.profiles[profile.user_id] = profile
        self.puts.append(profile)


@dataclass
class InMemoryZoneRepository(ZoneRepository):
    """In-memory zone repository keyed by user and begin date."""

    zones: dict[str, dict[str, ZoneRange]] = field(default_factory=dict)
    writes: list[tuple[str, str, str]] = field(default_factory=list)
    reads: int = 0
    fail_reads: bool = False
    fail_writes: bool = False
    wait_for: asyncio.Event | None = None
    done: asyncio.Event | None = None

    async def list_zones(self, user_id: str) -> list[ZoneRange]:
        self.reads += 1
        if self.wait_for is not None:
            await self.wait_for.wait()
        if self.fail_reads:
            raise StoreError("zone read failed")
        stored = self.zones.get(user_id, {})
        if self.done is not None:
            self.done.set()
        return [stored[key] for key in sorted(stored)]

    async def upsert_zone(self, user_id: str, begin_date: str, end_date: str) -> None:
        if self.fail_writes:
            raise StoreError("zone write failed")
        self.writes.append((user_id, begin_date, end_date))
        self.zones.setdefault(user_id, {})[begin_date] = ZoneRange(
            begin_date=begin_date, end_date=end_date
        )


def build_turn_handler(
    profile_repository: InMemoryProfileRepository,
    zone_repository: InMemoryZoneRepository,
    *,
    nearest_zone_search: bool = False,
    zone_update_detection: bool = False,
) -> TurnHandler:
    """Wire a turn handler around in-memory stores."""
    zone_service = ZoneService(
        repository=zone_repository,
        date_parser=AmazonDateParser(today=lambda: TODAY),
        nearest_zone_search=nearest_zone_search,
        zone_update_detection=zone_update_detection,
    )
    return TurnHandler(
        bootstrap=SessionBootstrap(profile_repository, zone_repository),
        router=IntentRouter(zone_service),
        zone_service=zone_service,
    )


def skill_event(  # noqa: PLR0913
    request_type: str = "LaunchRequest",
    *,
    user_id: str = "amzn1.ask.account.user-1",
    session_id: str = "amzn1.echo-api.session.abc",
    request_id: str = "amzn1.echo-api.request.1",
    new: bool = True,
    attributes: dict[str, object] | None = None,
    intent: str | None = None,
    slots: dict[str, str | None] | None = None,
) -> dict[str, object]:
    """Return an inbound event payload as the platform sends it."""
    request: dict[str, object] = {
        "type": request_type,
        "requestId": request_id,
        "timestamp": "2024-03-20T10:00:00Z",
    }
    if intent is not None:
        request["intent"] = {
            "name": intent,
            "slots": {
                name: {"name": name, "value": value}
                for name, value in (slots or {}).items()
            },
        }
    return {
        "version": "1.0",
        "session": {"new": new, "sessionId": session_id, "attributes": attributes},
        "context": {"System": {"user": {"userId": user_id}}},
        "request": request,
    }


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
    )


@pytest.fixture
def profile_repository() -> InMemoryProfileRepository:
    return InMemoryProfileRepository()


@pytest.fixture
def zone_repository() -> InMemoryZoneRepository:
    return InMemoryZoneRepository()


@pytest.fixture
def container(
    settings: Settings,
    profile_repository: InMemoryProfileRepository,
    zone_repository: InMemoryZoneRepository,
) -> AppContainer:
    turn_handler = build_turn_handler(profile_repository, zone_repository)

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        session_bootstrap=turn_handler.bootstrap,
        zone_service=turn_handler.zone_service,
        intent_router=turn_handler.router,
        turn_handler=turn_handler,
        close_resources=close_resources,
    )

"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from red_zone.adapters.amazon_date_parser import AmazonDateParser
from red_zone.adapters.supabase_profile_repository import SupabaseProfileRepository
from red_zone.adapters.supabase_zone_repository import SupabaseZoneRepository
from red_zone.config import Settings
from red_zone.services.bootstrap import SessionBootstrap
from red_zone.services.intents import IntentRouter
from red_zone.services.turns import TurnHandler
from red_zone.services.zones import ZoneService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    session_bootstrap: SessionBootstrap
    zone_service: ZoneService
    intent_router: IntentRouter
    turn_handler: TurnHandler
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    profile_repository = SupabaseProfileRepository(
        supabase_client, table=resolved_settings.profile_table
    )
    zone_repository = SupabaseZoneRepository(
        supabase_client,
        table=resolved_settings.zone_table,
        floor_date=resolved_settings.zone_floor_date,
    )
    session_bootstrap = SessionBootstrap(
        profile_repository=profile_repository,
        zone_repository=zone_repository,
        default_duration=resolved_settings.default_duration,
        default_interval=resolved_settings.default_interval,
    )
    zone_service = ZoneService(
        repository=zone_repository,
        date_parser=AmazonDateParser(),
        nearest_zone_search=resolved_settings.nearest_zone_search,
        zone_update_detection=resolved_settings.zone_update_detection,
    )
    intent_router = IntentRouter(zone_service)
    turn_handler = TurnHandler(
        bootstrap=session_bootstrap,
        router=intent_router,
        zone_service=zone_service,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=resolved_settings,
        session_bootstrap=session_bootstrap,
        zone_service=zone_service,
        intent_router=intent_router,
        turn_handler=turn_handler,
        close_resources=close_resources,
    )

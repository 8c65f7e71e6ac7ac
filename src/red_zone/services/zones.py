"""Zone business logic: adding ranges and answering date queries."""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Protocol

from red_zone.app_logging import short_id
from red_zone.domain.dates import (
    format_day_date,
    parse_date,
    project_end_date,
    range_length_days,
)
from red_zone.domain.zones import AddZoneResult, DateWindow, SessionState, ZoneRange
from red_zone.services.responses import Reply

logger = logging.getLogger(__name__)

WELCOME_TITLE = "Welcome"
SESSION_END_TITLE = "Session Ended"


class ZoneRepository(Protocol):
    """Persistence interface for a user's zones."""

    async def list_zones(self, user_id: str) -> list[ZoneRange]:
        """Return the user's stored zones ordered by begin date."""

    async def upsert_zone(self, user_id: str, begin_date: str, end_date: str) -> None:
        """Insert a zone or overwrite the one with the same begin date."""


class DatePhraseParser(Protocol):
    """Turns a relative or absolute date phrase into a concrete window."""

    def parse(self, phrase: str) -> DateWindow:
        """Return the window the phrase refers to."""


def resolve_end_date(
    begin_date: str,
    end_date: str | None,
    duration: int | None,
    default_duration: int,
) -> str:
    """Pick the explicit end date, else project one from a duration."""
    if end_date:
        return parse_date(end_date).isoformat()
    days = duration if duration is not None else default_duration
    return project_end_date(begin_date, days)


def distance_to_range(zone: ZoneRange, target: date) -> int:
    """Return days from ``target`` to the zone, zero when inside it."""
    begin = parse_date(zone.begin_date)
    end = parse_date(zone.end_date)
    if begin <= target <= end:
        return 0
    return min(abs((begin - target).days), abs((end - target).days))


def closest_range(ranges: list[ZoneRange], target: date) -> ZoneRange | None:
    """Return the stored zone nearest to ``target``.

    Ties go to the zone with the earliest begin date.
    """
    if not ranges:
        return None
    return min(
        ranges,
        key=lambda zone: (distance_to_range(zone, target), parse_date(zone.begin_date)),
    )


def describe_added_zone(result: AddZoneResult) -> str:
    """Return the spoken confirmation for an added or updated zone."""
    from_day = format_day_date(result.begin_date)
    to_day = format_day_date(result.end_date)
    if result.is_new:
        return (
            f"You have added a new zone from {from_day} to {to_day} "
            f"which is a duration of {result.length_days} days"
        )
    return (
        f"You have updated the {from_day} zone to end {to_day} "
        f"which now has a duration of {result.length_days} days"
    )


def describe_window(window: DateWindow) -> str:
    """Echo back the window the user asked about."""
    text = f"You asked about {format_day_date(window.start_date)}"
    if not window.is_single_day:
        text += f" to {format_day_date(window.end_date)}"
    return text


@dataclass
class ZoneService:
    """Domain operations on a user's zones."""

    repository: ZoneRepository
    date_parser: DatePhraseParser
    nearest_zone_search: bool = False
    zone_update_detection: bool = False

    async def add_range(
        self,
        state: SessionState,
        begin_date: str,
        end_date: str | None = None,
        duration: int | None = None,
    ) -> AddZoneResult:
        """Store a zone and return what was stored."""
        if state.default_duration is None:
            raise RuntimeError("Session state used before bootstrap finished")
        begin = parse_date(begin_date).isoformat()
        resolved_end = resolve_end_date(
            begin, end_date, duration, state.default_duration
        )
        is_new = self._is_new(state, begin)
        logger.info(
            "Upserting zone user=%s begin=%s end=%s new=%s",
            short_id(state.user_id),
            begin,
            resolved_end,
            is_new,
        )
        await self.repository.upsert_zone(state.user_id, begin, resolved_end)
        state.upsert_range(ZoneRange(begin_date=begin, end_date=resolved_end))
        return AddZoneResult(
            begin_date=begin,
            end_date=resolved_end,
            is_new=is_new,
            length_days=range_length_days(begin, resolved_end),
        )

    async def add_range_reply(  # noqa: PLR0913
        self,
        state: SessionState,
        title: str,
        begin_date: str,
        end_date: str | None = None,
        duration: int | None = None,
    ) -> Reply:
        """Add a zone and return the confirmation reply."""
        result = await self.add_range(state, begin_date, end_date, duration)
        return Reply(title=title, text=describe_added_zone(result))

    def find_nearest_range(self, state: SessionState, target_phrase: str) -> str:
        """Answer a date query for the user."""
        window = self.date_parser.parse(target_phrase)
        logger.info(
            "Date query session=%s start=%s end=%s",
            short_id(state.session_id),
            window.start_date,
            window.end_date,
        )
        if not self.nearest_zone_search:
            return describe_window(window)
        zone = closest_range(state.ranges or [], window.start_date)
        if zone is None:
            return f"{describe_window(window)}. You have no zones yet"
        return (
            f"Your closest zone to {format_day_date(window.start_date)} runs from "
            f"{format_day_date(zone.begin_date)} to {format_day_date(zone.end_date)}"
        )

    def welcome_reply(self, state: SessionState) -> Reply:
        """Return the launch greeting."""
        logger.info(
            "Welcome user=%s zones=%d",
            short_id(state.user_id),
            len(state.ranges or []),
        )
        return Reply(
            title=WELCOME_TITLE,
            text="Welcome to Red Zone, your next zone begins on ...",
            reprompt="",
        )

    def session_end_reply(self) -> Reply:
        """Return the goodbye reply and drop session attributes."""
        return Reply(
            title=SESSION_END_TITLE,
            text="Thank you for using Red Zone. Have a nice day!",
            clear_session=True,
        )

    def _is_new(self, state: SessionState, begin_date: str) -> bool:
        # TODO: detect overlapping zones, not only a matching begin date.
        if not self.zone_update_detection:
            return True
        return all(zone.begin_date != begin_date for zone in state.ranges or [])

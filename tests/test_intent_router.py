"""Tests for intent dispatch."""

import asyncio

import pytest

from red_zone.adapters.amazon_date_parser import AmazonDateParser
from red_zone.domain.errors import MissingParameterError, UnknownIntentError
from red_zone.domain.zones import SessionState, TurnContext
from red_zone.services.intents import (
    REQUIRED_SLOTS,
    Intent,
    IntentRouter,
    resolve_intent,
)
from red_zone.services.zones import ZoneService
from tests.conftest import TODAY, InMemoryZoneRepository


def _router(repository: InMemoryZoneRepository) -> IntentRouter:
    return IntentRouter(
        ZoneService(repository, AmazonDateParser(today=lambda: TODAY))
    )


def _context(intent: str, slots: dict[str, str | None] | None = None) -> TurnContext:
    state = SessionState(
        session_id="session-1",
        user_id="user-1",
        default_duration=4,
        default_interval=28,
        ranges=[],
    )
    return TurnContext(
        request_id="request-1", state=state, intent_name=intent, slots=slots or {}
    )


def test_every_intent_has_a_handler_and_slot_list() -> None:
    router = _router(InMemoryZoneRepository())

    assert set(router.handlers()) == set(Intent)
    assert set(REQUIRED_SLOTS) == set(Intent)


def test_unknown_intent_is_rejected() -> None:
    with pytest.raises(UnknownIntentError):
        resolve_intent("Foo")
    with pytest.raises(UnknownIntentError):
        asyncio.run(_router(InMemoryZoneRepository()).dispatch(_context("Foo")))


def test_add_zone_with_explicit_dates() -> None:
    repository = InMemoryZoneRepository()

    reply = asyncio.run(
        _router(repository).dispatch(
            _context("AddZone", {"BeginDate": "2024-03-10", "EndDate": "2024-03-14"})
        )
    )

    assert reply.title == "AddZone"
    assert "a duration of 4 days" in reply.text
    assert "added a new zone" in reply.text
    assert reply.should_end_session is True
    assert reply.reprompt is None


def test_add_zone_by_begin_date_uses_default_duration() -> None:
    repository = InMemoryZoneRepository()

    asyncio.run(
        _router(repository).dispatch(
            _context("AddZoneByBeginDate", {"BeginDate": "2024-01-01"})
        )
    )

    assert repository.writes == [("user-1", "2024-01-01", "2024-01-05")]


def test_add_zone_by_begin_date_and_duration() -> None:
    repository = InMemoryZoneRepository()

    reply = asyncio.run(
        _router(repository).dispatch(
            _context(
                "AddZoneByBeginDateAndDuration",
                {"BeginDate": "2024-01-01", "Duration": "6"},
            )
        )
    )

    assert repository.writes == [("user-1", "2024-01-01", "2024-01-07")]
    assert "a duration of 6 days" in reply.text


@pytest.mark.parametrize("duration", [None, "", "   ", "four", "-2"])
def test_missing_or_bad_duration_skips_store(duration: str | None) -> None:
    repository = InMemoryZoneRepository()
    context = _context(
        "AddZoneByBeginDateAndDuration",
        {"BeginDate": "2024-01-01", "Duration": duration},
    )

    with pytest.raises(MissingParameterError) as excinfo:
        asyncio.run(_router(repository).dispatch(context))

    assert excinfo.value.slot_name == "Duration"
    assert repository.writes == []


def test_missing_begin_date_is_reported_first() -> None:
    with pytest.raises(MissingParameterError) as excinfo:
        asyncio.run(
            _router(InMemoryZoneRepository()).dispatch(
                _context("AddZone", {"EndDate": "2024-03-14"})
            )
        )

    assert excinfo.value.slot_name == "BeginDate"


def test_closest_zone_by_date_echoes_query() -> None:
    reply = asyncio.run(
        _router(InMemoryZoneRepository()).dispatch(
            _context("GetClosestZoneByDate", {"TargetDate": "2024-01-01"})
        )
    )

    assert reply.text == "You asked about Monday 2024-01-01"


def test_help_routes_to_welcome() -> None:
    reply = asyncio.run(
        _router(InMemoryZoneRepository()).dispatch(_context("AMAZON.HelpIntent"))
    )

    assert reply.title == "Welcome"


@pytest.mark.parametrize("intent", ["AMAZON.CancelIntent", "AMAZON.StopIntent"])
def test_cancel_and_stop_end_session(intent: str) -> None:
    reply = asyncio.run(_router(InMemoryZoneRepository()).dispatch(_context(intent)))

    assert reply.title == "Session Ended"
    assert reply.clear_session is True


def test_zero_duration_is_accepted() -> None:
    repository = InMemoryZoneRepository()

    reply = asyncio.run(
        _router(repository).dispatch(
            _context(
                "AddZoneByBeginDateAndDuration",
                {"BeginDate": "2024-01-01", "Duration": "0"},
            )
        )
    )

    assert repository.writes == [("user-1", "2024-01-01", "2024-01-01")]
    assert "a duration of 0 days" in reply.text

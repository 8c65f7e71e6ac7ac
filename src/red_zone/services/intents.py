"""Intent dispatch for structured utterances."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import StrEnum

from red_zone.app_logging import short_id
from red_zone.domain.errors import MissingParameterError, UnknownIntentError
from red_zone.domain.zones import TurnContext
from red_zone.services.responses import Reply
from red_zone.services.zones import ZoneService

logger = logging.getLogger(__name__)


class Intent(StrEnum):
    """Intents the skill understands."""

    ADD_ZONE = "AddZone"
    ADD_ZONE_BY_BEGIN_DATE = "AddZoneByBeginDate"
    ADD_ZONE_BY_BEGIN_DATE_AND_DURATION = "AddZoneByBeginDateAndDuration"
    GET_CLOSEST_ZONE_BY_DATE = "GetClosestZoneByDate"
    HELP = "AMAZON.HelpIntent"
    CANCEL = "AMAZON.CancelIntent"
    STOP = "AMAZON.StopIntent"


REQUIRED_SLOTS: dict[Intent, tuple[str, ...]] = {
    Intent.ADD_ZONE: ("BeginDate", "EndDate"),
    Intent.ADD_ZONE_BY_BEGIN_DATE: ("BeginDate",),
    Intent.ADD_ZONE_BY_BEGIN_DATE_AND_DURATION: ("BeginDate", "Duration"),
    Intent.GET_CLOSEST_ZONE_BY_DATE: ("TargetDate",),
    Intent.HELP: (),
    Intent.CANCEL: (),
    Intent.STOP: (),
}

IntentHandler = Callable[[TurnContext, dict[str, str]], Awaitable[Reply]]


def resolve_intent(name: str | None) -> Intent:
    """Return the intent for a name or raise UnknownIntentError."""
    try:
        return Intent(name)
    except ValueError as exc:
        raise UnknownIntentError(str(name)) from exc


def require_slots(intent: Intent, slots: dict[str, str | None]) -> dict[str, str]:
    """Return the required slot values, failing on the first missing one."""
    values: dict[str, str] = {}
    for slot_name in REQUIRED_SLOTS[intent]:
        value = slots.get(slot_name)
        if value is None or not value.strip():
            raise MissingParameterError(intent.value, slot_name)
        values[slot_name] = value.strip()
    return values


def parse_duration(intent: Intent, raw: str) -> int:
    """Return a non-negative day count from the Duration slot."""
    try:
        days = int(raw)
    except ValueError as exc:
        raise MissingParameterError(intent.value, "Duration") from exc
    if days < 0:
        raise MissingParameterError(intent.value, "Duration")
    return days


@dataclass
class IntentRouter:
    """Maps intents to zone operations."""

    zone_service: ZoneService

    def handlers(self) -> dict[Intent, IntentHandler]:
        """Return the dispatch table."""
        return {
            Intent.ADD_ZONE: self._add_zone,
            Intent.ADD_ZONE_BY_BEGIN_DATE: self._add_zone_by_begin_date,
            Intent.ADD_ZONE_BY_BEGIN_DATE_AND_DURATION: (
                self._add_zone_by_begin_date_and_duration
            ),
            Intent.GET_CLOSEST_ZONE_BY_DATE: self._get_closest_zone_by_date,
            Intent.HELP: self._welcome,
            Intent.CANCEL: self._end_session,
            Intent.STOP: self._end_session,
        }

    async def dispatch(self, context: TurnContext) -> Reply:
        """Validate slots and run the handler for the turn's intent."""
        intent = resolve_intent(context.intent_name)
        logger.info(
            "Dispatching intent=%s session=%s request=%s",
            intent,
            short_id(context.state.session_id),
            short_id(context.request_id),
        )
        slots = require_slots(intent, context.slots)
        return await self.handlers()[intent](context, slots)

    async def _add_zone(self, context: TurnContext, slots: dict[str, str]) -> Reply:
        return await self.zone_service.add_range_reply(
            context.state,
            Intent.ADD_ZONE.value,
            begin_date=slots["BeginDate"],
            end_date=slots["EndDate"],
        )

    async def _add_zone_by_begin_date(
        self, context: TurnContext, slots: dict[str, str]
    ) -> Reply:
        return await self.zone_service.add_range_reply(
            context.state,
            Intent.ADD_ZONE_BY_BEGIN_DATE.value,
            begin_date=slots["BeginDate"],
        )

    async def _add_zone_by_begin_date_and_duration(
        self, context: TurnContext, slots: dict[str, str]
    ) -> Reply:
        intent = Intent.ADD_ZONE_BY_BEGIN_DATE_AND_DURATION
        return await self.zone_service.add_range_reply(
            context.state,
            intent.value,
            begin_date=slots["BeginDate"],
            duration=parse_duration(intent, slots["Duration"]),
        )

    async def _get_closest_zone_by_date(
        self, context: TurnContext, slots: dict[str, str]
    ) -> Reply:
        text = self.zone_service.find_nearest_range(context.state, slots["TargetDate"])
        return Reply(title=Intent.GET_CLOSEST_ZONE_BY_DATE.value, text=text)

    async def _welcome(self, context: TurnContext, slots: dict[str, str]) -> Reply:
        return self.zone_service.welcome_reply(context.state)

    async def _end_session(self, context: TurnContext, slots: dict[str, str]) -> Reply:
        return self.zone_service.session_end_reply()

"""Turn pipeline: bootstrap, request routing and reply rendering."""

import logging
from dataclasses import dataclass
from enum import StrEnum

from red_zone.app_logging import short_id
from red_zone.domain.errors import MissingParameterError, UnknownRequestTypeError
from red_zone.domain.zones import SessionState, TurnContext
from red_zone.services.bootstrap import SessionBootstrap
from red_zone.services.intents import IntentRouter
from red_zone.services.responses import RESPONSE_VERSION, Reply, render_reply
from red_zone.services.zones import ZoneService

logger = logging.getLogger(__name__)


class RequestType(StrEnum):
    """Request types delivered by the voice platform."""

    LAUNCH = "LaunchRequest"
    INTENT = "IntentRequest"
    SESSION_ENDED = "SessionEndedRequest"


@dataclass(frozen=True)
class TurnRequest:
    """The parts of an inbound event the pipeline reads."""

    request_type: str
    request_id: str
    session_id: str
    user_id: str
    is_new_session: bool = False
    attributes: dict[str, object] | None = None
    intent_name: str | None = None
    slots: dict[str, str | None] | None = None

    @property
    def needs_bootstrap(self) -> bool:
        """Return True when the session carries no loaded state."""
        return (
            self.is_new_session
            or not self.attributes
            or not self.attributes.get("sessionId")
        )


def missing_parameter_reply(error: MissingParameterError) -> Reply:
    """Ask the user to retry a turn that lacked a slot."""
    return Reply(
        title=error.intent_name,
        text=f"I didn't catch the {_spoken_slot(error.slot_name)}. Please try again.",
        reprompt="Please try again.",
        should_end_session=False,
    )


def _spoken_slot(slot_name: str) -> str:
    words: list[str] = []
    for char in slot_name:
        if char.isupper() and words:
            words.append(" ")
        words.append(char.lower())
    return "".join(words)


@dataclass
class TurnHandler:
    """Runs one inbound event through to the outbound envelope."""

    bootstrap: SessionBootstrap
    router: IntentRouter
    zone_service: ZoneService

    async def handle(self, request: TurnRequest) -> dict[str, object]:
        """Process one turn; errors other than missing slots propagate."""
        logger.info(
            "Turn user=%s session=%s request=%s new=%s attributes.sessionId=%s",
            short_id(request.user_id),
            short_id(request.session_id),
            short_id(request.request_id),
            request.is_new_session,
            short_id(str((request.attributes or {}).get("sessionId", ""))),
        )
        state = await self._load_state(request)
        context = TurnContext(
            request_id=request.request_id,
            state=state,
            intent_name=request.intent_name,
            slots=dict(request.slots or {}),
        )
        request_type = self._request_type(request.request_type)
        if request_type is RequestType.SESSION_ENDED:
            logger.info(
                "Session ended user=%s session=%s",
                short_id(state.user_id),
                short_id(state.session_id),
            )
            return {"version": RESPONSE_VERSION, "response": {}}
        if request_type is RequestType.LAUNCH:
            reply = self.zone_service.welcome_reply(state)
        else:
            try:
                reply = await self.router.dispatch(context)
            except MissingParameterError as exc:
                logger.warning("Missing slot: %s", exc)
                reply = missing_parameter_reply(exc)
        return render_reply(reply, state.to_attributes())

    async def _load_state(self, request: TurnRequest) -> SessionState:
        if not request.needs_bootstrap:
            try:
                carried = SessionState.from_attributes(request.attributes or {})
            except (KeyError, TypeError, ValueError):
                logger.warning(
                    "Unreadable session attributes session=%s, reloading",
                    short_id(request.session_id),
                )
            else:
                if carried.is_ready:
                    return carried
        logger.info(
            "Session started session=%s request=%s",
            short_id(request.session_id),
            short_id(request.request_id),
        )
        result = await self.bootstrap.load(request.session_id, request.user_id)
        return result.state

    @staticmethod
    def _request_type(raw: str) -> RequestType:
        try:
            return RequestType(raw)
        except ValueError as exc:
            raise UnknownRequestTypeError(raw) from exc

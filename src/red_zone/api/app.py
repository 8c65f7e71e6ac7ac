"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from red_zone.api.alexa_models import SkillEvent
from red_zone.app_logging import configure_logging
from red_zone.containers import AppContainer
from red_zone.domain.errors import RedZoneError
from red_zone.services.turns import TurnRequest


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(RedZoneError)
    async def turn_failed(request: Request, exc: RedZoneError) -> JSONResponse:
        logger.error("Turn aborted: %s: %s", exc.kind, exc)
        return JSONResponse(
            status_code=500, content={"status": "error", "error": exc.kind}
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/alexa/skill")
    async def skill(event: SkillEvent, request: Request) -> dict[str, object]:
        """Handle one conversation turn."""
        state_container: AppContainer = request.app.state.container
        return await state_container.turn_handler.handle(_turn_request(event))

    return app


def _turn_request(event: SkillEvent) -> TurnRequest:
    """Flatten the inbound event into what the pipeline reads."""
    intent = event.request.intent
    return TurnRequest(
        request_type=event.request.type,
        request_id=event.request.request_id,
        session_id=event.session.session_id,
        user_id=event.user_id(),
        is_new_session=event.session.new,
        attributes=event.session.attributes,
        intent_name=intent.name if intent else None,
        slots=event.slot_values(),
    )

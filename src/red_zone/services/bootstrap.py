"""Loads a user's profile and zones before the first intent of a session."""

import asyncio
import logging
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Protocol

from red_zone.app_logging import short_id
from red_zone.domain.zones import (
    DEFAULT_DURATION,
    DEFAULT_INTERVAL,
    Profile,
    SessionState,
)
from red_zone.services.zones import ZoneRepository

logger = logging.getLogger(__name__)


class ProfileRepository(Protocol):
    """Persistence interface for user profiles."""

    async def get_profile(self, user_id: str) -> Profile | None:
        """Return the user's profile, if present."""

    async def put_profile(self, profile: Profile) -> None:
        """Insert or replace the user's profile."""


class BootstrapStage(StrEnum):
    """Stages a session passes through while loading."""

    FRESH = "FRESH"
    LOADING = "LOADING"
    PROFILE_MISSING = "PROFILE_MISSING"
    PROVISIONING = "PROVISIONING"
    READY = "READY"


@dataclass
class BootstrapResult:
    """A ready session plus the stages it went through."""

    state: SessionState
    stages: list[BootstrapStage] = field(default_factory=list)

    @property
    def provisioned(self) -> bool:
        return BootstrapStage.PROVISIONING in self.stages


@dataclass
class SessionBootstrap:
    """Builds session state for a fresh conversation."""

    profile_repository: ProfileRepository
    zone_repository: ZoneRepository
    default_duration: int = DEFAULT_DURATION
    default_interval: int = DEFAULT_INTERVAL

    async def load(self, session_id: str, user_id: str) -> BootstrapResult:
        """Read profile and zones concurrently and join them.

        Store errors propagate; nothing is kept for the next turn.
        """
        result = BootstrapResult(state=SessionState(session_id, user_id))
        self._advance(result, BootstrapStage.FRESH)
        self._advance(result, BootstrapStage.LOADING)
        profile, zones = await asyncio.gather(
            self.profile_repository.get_profile(user_id),
            self.zone_repository.list_zones(user_id),
        )
        state = result.state
        if profile is None:
            self._advance(result, BootstrapStage.PROFILE_MISSING)
            self._advance(result, BootstrapStage.PROVISIONING)
            profile = Profile(
                user_id=user_id,
                default_duration=self.default_duration,
                default_interval=self.default_interval,
            )
            await self.profile_repository.put_profile(profile)
            state.apply_profile(profile)
            state.ranges = []
        else:
            state.apply_profile(profile)
            state.ranges = list(zones)
        self._advance(result, BootstrapStage.READY)
        return result

    @staticmethod
    def _advance(result: BootstrapResult, stage: BootstrapStage) -> None:
        result.stages.append(stage)
        logger.info(
            "Session bootstrap %s user=%s session=%s",
            stage,
            short_id(result.state.user_id),
            short_id(result.state.session_id),
        )

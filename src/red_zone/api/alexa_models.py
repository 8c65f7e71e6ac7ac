"""Pydantic models for inbound skill events."""

from pydantic import BaseModel, ConfigDict, Field


class SkillUser(BaseModel):
    """User identity payload."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(alias="userId")


class SkillSystem(BaseModel):
    """System context payload."""

    user: SkillUser


class SkillContext(BaseModel):
    """Event context payload."""

    system: SkillSystem = Field(alias="System")


class SkillSession(BaseModel):
    """Session payload."""

    model_config = ConfigDict(populate_by_name=True)

    new: bool = False
    session_id: str = Field(alias="sessionId")
    attributes: dict[str, object] | None = None


class SkillSlot(BaseModel):
    """A single slot in an intent."""

    name: str | None = None
    value: str | None = None


class SkillIntent(BaseModel):
    """Intent payload."""

    name: str
    slots: dict[str, SkillSlot] | None = None


class SkillRequest(BaseModel):
    """Request payload."""

    model_config = ConfigDict(populate_by_name=True)

    type: str
    request_id: str = Field(alias="requestId")
    timestamp: str | None = None
    intent: SkillIntent | None = None


class SkillEvent(BaseModel):
    """Inbound event from the voice platform."""

    version: str | None = None
    session: SkillSession
    context: SkillContext
    request: SkillRequest

    def user_id(self) -> str:
        """Return the caller identity."""
        return self.context.system.user.user_id

    def slot_values(self) -> dict[str, str | None]:
        """Return slot values keyed by slot name."""
        if self.request.intent is None or not self.request.intent.slots:
            return {}
        return {name: slot.value for name, slot in self.request.intent.slots.items()}

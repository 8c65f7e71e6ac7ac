"""Domain models for zones, profiles and session state."""

from dataclasses import dataclass, field
from datetime import date

DEFAULT_ZONE_NAME = "default"
DEFAULT_DURATION = 4
DEFAULT_INTERVAL = 28


@dataclass(frozen=True)
class ZoneRange:
    """A tracked date range, identified by user and begin date."""

    begin_date: str
    end_date: str
    is_active: bool = True

    def to_attributes(self) -> dict[str, str]:
        """Return the session-attribute form of the range."""
        return {"beginDate": self.begin_date, "endDate": self.end_date}

    @classmethod
    def from_attributes(cls, raw: dict[str, object]) -> "ZoneRange":
        """Build a range from session attributes."""
        return cls(begin_date=str(raw["beginDate"]), end_date=str(raw["endDate"]))


@dataclass(frozen=True)
class Profile:
    """Per-user zone defaults."""

    user_id: str
    default_duration: int = DEFAULT_DURATION
    default_interval: int = DEFAULT_INTERVAL
    is_active: bool = True


@dataclass(frozen=True)
class DateWindow:
    """A concrete window produced from a date phrase."""

    start_date: date
    end_date: date

    @property
    def is_single_day(self) -> bool:
        return self.start_date == self.end_date


@dataclass(frozen=True)
class AddZoneResult:
    """Outcome of adding or updating a zone."""

    begin_date: str
    end_date: str
    is_new: bool
    length_days: int


@dataclass
class SessionState:
    """Per-conversation state carried between turns.

    ``default_duration`` and ``ranges`` stay ``None`` while the bootstrap
    reads are outstanding.
    """

    session_id: str
    user_id: str
    default_duration: int | None = None
    default_interval: int | None = None
    ranges: list[ZoneRange] | None = None

    @property
    def is_ready(self) -> bool:
        """Return True once both bootstrap reads have landed."""
        return self.default_duration is not None and self.ranges is not None

    def apply_profile(self, profile: Profile) -> None:
        """Copy profile defaults onto the session."""
        self.default_duration = profile.default_duration
        self.default_interval = profile.default_interval

    def upsert_range(self, zone: ZoneRange) -> None:
        """Replace the range with the same begin date or add it in order."""
        ranges = [r for r in self.ranges or [] if r.begin_date != zone.begin_date]
        ranges.append(zone)
        self.ranges = sorted(ranges, key=lambda r: r.begin_date)

    def to_attributes(self) -> dict[str, object]:
        """Return the outbound session-attribute payload."""
        return {
            "sessionId": self.session_id,
            "userId": self.user_id,
            "defaultDuration": self.default_duration,
            "defaultInterval": self.default_interval,
            "userZones": (
                None
                if self.ranges is None
                else [zone.to_attributes() for zone in self.ranges]
            ),
        }

    @classmethod
    def from_attributes(cls, raw: dict[str, object]) -> "SessionState":
        """Rebuild state from attributes carried by a later turn."""
        zones = raw.get("userZones")
        duration = raw.get("defaultDuration")
        interval = raw.get("defaultInterval")
        return cls(
            session_id=str(raw["sessionId"]),
            user_id=str(raw["userId"]),
            default_duration=int(duration) if duration is not None else None,
            default_interval=int(interval) if interval is not None else None,
            ranges=(
                [ZoneRange.from_attributes(zone) for zone in zones]
                if isinstance(zones, list)
                else None
            ),
        )


@dataclass
class TurnContext:
    """Everything one turn needs, passed explicitly through the pipeline."""

    request_id: str
    state: SessionState
    intent_name: str | None = None
    slots: dict[str, str | None] = field(default_factory=dict)

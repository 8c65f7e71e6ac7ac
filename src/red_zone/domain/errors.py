"""Error taxonomy for a conversation turn."""


class RedZoneError(Exception):
    """Base error for a failed turn."""

    kind = "RedZoneError"


class MissingParameterError(RedZoneError):
    """A required slot was absent or unusable."""

    kind = "MissingParameter"

    def __init__(self, intent_name: str, slot_name: str) -> None:
        super().__init__(f"Intent {intent_name} is missing slot {slot_name}")
        self.intent_name = intent_name
        self.slot_name = slot_name


class UnknownIntentError(RedZoneError):
    """The intent name is not one the skill handles."""

    kind = "UnknownIntent"

    def __init__(self, intent_name: str) -> None:
        super().__init__(f"Invalid intent '{intent_name}'")
        self.intent_name = intent_name


class UnknownRequestTypeError(RedZoneError):
    """The request type is not Launch, Intent or SessionEnded."""

    kind = "UnknownRequestType"

    def __init__(self, request_type: str) -> None:
        super().__init__(f"Unknown request type '{request_type}'")
        self.request_type = request_type


class StoreError(RedZoneError):
    """A profile or zone read/write failed."""

    kind = "StoreError"


class DateFormatError(RedZoneError, ValueError):
    """A date value could not be parsed."""

    kind = "FormatError"

    def __init__(self, value: object) -> None:
        super().__init__(f"Malformed date value: {value!r}")
        self.value = value

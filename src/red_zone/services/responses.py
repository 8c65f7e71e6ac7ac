"""Outbound reply envelope construction."""

from dataclasses import dataclass

RESPONSE_VERSION = "1.0"


@dataclass(frozen=True)
class Reply:
    """What the assistant says back for one turn.

    A ``reprompt`` of ``None`` means the turn ends silently when the user
    does not answer.
    """

    title: str
    text: str
    reprompt: str | None = None
    should_end_session: bool = True
    clear_session: bool = False


def build_speechlet_response(
    title: str, output: str, reprompt_text: str | None, should_end_session: bool
) -> dict[str, object]:
    """Return the speech, card and reprompt block of a response."""
    return {
        "outputSpeech": {"type": "PlainText", "text": output},
        "card": {
            "type": "Simple",
            "title": f"SessionSpeechlet - {title}",
            "content": f"SessionSpeechlet - {output}",
        },
        "reprompt": {"outputSpeech": {"type": "PlainText", "text": reprompt_text}},
        "shouldEndSession": should_end_session,
    }


def build_response(
    session_attributes: dict[str, object], speechlet_response: dict[str, object]
) -> dict[str, object]:
    """Wrap a speechlet response into the outbound envelope."""
    return {
        "version": RESPONSE_VERSION,
        "sessionAttributes": session_attributes,
        "response": speechlet_response,
    }


def render_reply(
    reply: Reply, session_attributes: dict[str, object]
) -> dict[str, object]:
    """Return the outbound envelope for a reply."""
    attributes = {} if reply.clear_session else session_attributes
    return build_response(
        attributes,
        build_speechlet_response(
            reply.title, reply.text, reply.reprompt, reply.should_end_session
        ),
    )

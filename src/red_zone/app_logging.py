"""Logging configuration helpers."""

import logging

_ID_TAIL = 10


def configure_logging() -> None:
    """Configure application logging with a single stream handler."""
    logger = logging.getLogger("red_zone")
    logger.setLevel(logging.INFO)
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s: %(name)s: %(message)s")
    )
    logger.addHandler(handler)
    logger.propagate = False


def short_id(value: str | None) -> str:
    """Return the last characters of an identifier for log lines."""
    if not value:
        return "not set"
    return value[-_ID_TAIL:]

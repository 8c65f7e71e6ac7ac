"""ASGI entrypoint for the Red Zone API."""

from red_zone.api.app import create_app
from red_zone.containers import build_container

app = create_app(build_container())

"""ASGI entrypoint for the scoreboard API."""

from volleyball_scoreboard.api.app import create_app
from volleyball_scoreboard.containers import build_container

app = create_app(build_container())

"""Tests for container wiring."""

import asyncio

from volleyball_scoreboard.adapters.vmix_client import HttpxVMixClient
from volleyball_scoreboard.config import Settings, parse_disabled_inputs
from volleyball_scoreboard.containers import build_container


def test_build_container_creates_services(settings) -> None:
    container = build_container(settings)
    assert isinstance(container.overlay_transport, HttpxVMixClient)
    assert container.overlay_transport.base_url == "http://localhost:8088/api"
    assert container.session_service.coordinator is container.coordinator
    asyncio.run(container.close_resources())


def test_disabled_inputs_are_skipped() -> None:
    settings = Settings(
        operator_token="token",
        overlay_disabled_inputs="lineup, set5Score",
        overlay_enabled=False,
    )
    container = build_container(settings)

    disabled = {
        item.key for item in container.broadcast_service.inputs if not item.enabled
    }

    assert disabled == {"lineup", "set5Score"}
    assert container.broadcast_service.enabled is False
    asyncio.run(container.close_resources())


def test_parse_disabled_inputs() -> None:
    assert parse_disabled_inputs(None) == set()
    assert parse_disabled_inputs(" currentScore ,, lineup") == {
        "currentScore",
        "lineup",
    }

"""Tests for the vMix HTTP adapter."""

import asyncio

import httpx

from volleyball_scoreboard.adapters.vmix_client import (
    HttpxVMixClient,
    build_command,
)
from volleyball_scoreboard.domain.overlay import FieldCategory


def _client(handler) -> HttpxVMixClient:
    transport = httpx.MockTransport(handler)
    return HttpxVMixClient(
        base_url="http://vmix:8088/api",
        http_client=httpx.AsyncClient(transport=transport),
    )


def test_build_command_per_category() -> None:
    assert build_command("Score", "TeamA", "Lions", FieldCategory.TEXT) == {
        "Function": "SetText",
        "Input": "Score",
        "SelectedName": "TeamA.Text",
        "Value": "Lions",
    }
    assert build_command("Score", "ColorA", "#112233", FieldCategory.FILL)[
        "SelectedName"
    ] == "ColorA.Fill.Color"
    assert build_command("Score", "TeamA", "#fff", FieldCategory.TEXT_COLOR)[
        "Function"
    ] == "SetTextColour"
    assert build_command("Lineup", "TeamALogo", "a.png", FieldCategory.IMAGE)[
        "SelectedName"
    ] == "TeamALogo.Source"
    assert build_command("Score", "PointA", "On", FieldCategory.VISIBILITY) == {
        "Function": "SetTextVisibleOn",
        "Input": "Score",
        "SelectedName": "PointA.Text",
    }
    assert (
        build_command("Score", "PointA.Text", "Off", FieldCategory.VISIBILITY)[
            "Function"
        ]
        == "SetTextVisibleOff"
    )


def test_send_field_update_uses_query_params() -> None:
    seen: list[httpx.URL] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.url)
        return httpx.Response(200, text="Function completed successfully.")

    client = _client(handler)

    accepted = asyncio.run(
        client.send_field_update("CurrentScore", "ScoreASet", "12", FieldCategory.TEXT)
    )

    assert accepted is True
    assert seen[0].path == "/api"
    assert seen[0].params["Function"] == "SetText"
    assert seen[0].params["Input"] == "CurrentScore"
    assert seen[0].params["SelectedName"] == "ScoreASet.Text"
    assert seen[0].params["Value"] == "12"


def test_send_failure_is_reported_not_raised() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500)

    client = _client(handler)

    accepted = asyncio.run(
        client.send_field_update("CurrentScore", "ColorA", "#000", FieldCategory.FILL)
    )

    assert accepted is False


def test_connection_error_is_reported_not_raised() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    client = _client(handler)

    assert asyncio.run(client.test_connection()) is False


def test_overlay_in_and_out() -> None:
    functions: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        functions.append(request.url.params.get("Function", ""))
        return httpx.Response(200)

    client = _client(handler)

    assert asyncio.run(client.test_connection()) is True
    asyncio.run(client.show_overlay(1, "CurrentScore"))
    asyncio.run(client.hide_overlay(1))
    asyncio.run(client.close())

    assert functions == ["", "OverlayInput1In", "OverlayInput1Out"]

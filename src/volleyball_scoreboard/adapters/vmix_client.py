"""vMix HTTP API client adapter."""

import logging
from dataclasses import dataclass
from typing import Protocol

import httpx

from volleyball_scoreboard.domain.overlay import VISIBLE, FieldCategory

logger = logging.getLogger(__name__)

CONNECTION_TIMEOUT_SECONDS = 3.0

_FIELD_SUFFIXES = {
    FieldCategory.TEXT: ".Text",
    FieldCategory.FILL: ".Fill.Color",
    FieldCategory.TEXT_COLOR: ".Text",
    FieldCategory.IMAGE: ".Source",
    FieldCategory.VISIBILITY: ".Text",
}

_FUNCTIONS = {
    FieldCategory.TEXT: "SetText",
    FieldCategory.FILL: "SetColor",
    FieldCategory.TEXT_COLOR: "SetTextColour",
    FieldCategory.IMAGE: "SetImage",
}


class OverlayTransport(Protocol):
    """Interface for pushing field updates to the overlay system."""

    async def send_field_update(
        self,
        input_identifier: str,
        field_identifier: str,
        value: str,
        category: FieldCategory,
    ) -> bool:
        """Send one field update and report whether it was accepted."""

    async def test_connection(self) -> bool:
        """Return True when the overlay system answers."""

    async def close(self) -> None:
        """Release transport resources."""


def selected_name(field_identifier: str, category: FieldCategory) -> str:
    """Return the vMix ``SelectedName`` for a field, adding the category suffix."""
    suffix = _FIELD_SUFFIXES[category]
    if field_identifier.endswith(suffix):
        return field_identifier
    return f"{field_identifier}{suffix}"


def build_command(
    input_identifier: str,
    field_identifier: str,
    value: str,
    category: FieldCategory,
) -> dict[str, str]:
    """Return the query parameters of a vMix API call for a field update."""
    name = selected_name(field_identifier, category)
    if category == FieldCategory.VISIBILITY:
        function = "SetTextVisibleOn" if value == VISIBLE else "SetTextVisibleOff"
        return {"Function": function, "Input": input_identifier, "SelectedName": name}
    return {
        "Function": _FUNCTIONS[category],
        "Input": input_identifier,
        "SelectedName": name,
        "Value": value,
    }


@dataclass
class HttpxVMixClient(OverlayTransport):
    """vMix client implemented with httpx."""

    base_url: str
    http_client: httpx.AsyncClient
    timeout_seconds: float = 5.0

    @classmethod
    def create(
        cls, host: str, port: int, timeout_seconds: float = 5.0
    ) -> "HttpxVMixClient":
        """Create a vMix client with a managed httpx session."""
        return cls(
            base_url=f"http://{host}:{port}/api",
            http_client=httpx.AsyncClient(),
            timeout_seconds=timeout_seconds,
        )

    async def send_command(self, function: str, **params: str) -> bool:
        """Call a vMix API function; failures are logged and reported as False."""
        query = {"Function": function, **params}
        try:
            response = await self.http_client.get(
                self.base_url, params=query, timeout=self.timeout_seconds
            )
            response.raise_for_status()
        except httpx.HTTPError as exc:
            logger.warning(
                "vMix command failed",
                extra={"function": function, "error": str(exc)},
            )
            return False
        return True

    async def send_field_update(
        self,
        input_identifier: str,
        field_identifier: str,
        value: str,
        category: FieldCategory,
    ) -> bool:
        """Send a single field update."""
        params = build_command(input_identifier, field_identifier, value, category)
        function = params.pop("Function")
        return await self.send_command(function, **params)

    async def test_connection(self) -> bool:
        """Ping the API root."""
        try:
            response = await self.http_client.get(
                self.base_url, timeout=CONNECTION_TIMEOUT_SECONDS
            )
            response.raise_for_status()
        except httpx.HTTPError as exc:
            logger.warning("vMix is unreachable", extra={"error": str(exc)})
            return False
        return True

    async def show_overlay(self, overlay: int, input_identifier: str) -> bool:
        """Bring an input into the given overlay channel."""
        return await self.send_command(
            f"OverlayInput{overlay}In", Input=input_identifier
        )

    async def hide_overlay(self, overlay: int) -> bool:
        """Take the given overlay channel off air."""
        return await self.send_command(f"OverlayInput{overlay}Out")

    async def close(self) -> None:
        """Close the underlying HTTP client session."""
        await self.http_client.aclose()

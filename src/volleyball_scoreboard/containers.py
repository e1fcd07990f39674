"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from volleyball_scoreboard.adapters.vmix_client import (
    HttpxVMixClient,
    OverlayTransport,
)
from volleyball_scoreboard.config import Settings, parse_disabled_inputs
from volleyball_scoreboard.domain.overlay import default_overlay_inputs
from volleyball_scoreboard.services.broadcast import BroadcastService
from volleyball_scoreboard.services.coordinator import MatchCoordinator
from volleyball_scoreboard.services.overlay_fields import OverlayFieldComputer
from volleyball_scoreboard.services.sessions import SessionService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    overlay_transport: OverlayTransport
    coordinator: MatchCoordinator
    session_service: SessionService
    broadcast_service: BroadcastService
    close_resources: Callable[[], Awaitable[None]]


def wire_container(settings: Settings, transport: OverlayTransport) -> AppContainer:
    """Connect the services around an overlay transport."""
    coordinator = MatchCoordinator()
    session_service = SessionService(coordinator)
    broadcast_service = BroadcastService(
        transport=transport,
        inputs=default_overlay_inputs(
            parse_disabled_inputs(settings.overlay_disabled_inputs)
        ),
        field_computer=OverlayFieldComputer(logo_base_url=settings.logo_base_url),
        enabled=settings.overlay_enabled,
    )
    unsubscribe = coordinator.subscribe(broadcast_service.handle_update)

    async def close_resources() -> None:
        unsubscribe()
        await broadcast_service.aclose()
        coordinator.clear()
        await transport.close()

    return AppContainer(
        settings=settings,
        overlay_transport=transport,
        coordinator=coordinator,
        session_service=session_service,
        broadcast_service=broadcast_service,
        close_resources=close_resources,
    )


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    transport = HttpxVMixClient.create(
        host=resolved_settings.vmix_host,
        port=resolved_settings.vmix_port,
        timeout_seconds=resolved_settings.vmix_timeout_seconds,
    )
    return wire_container(resolved_settings, transport)

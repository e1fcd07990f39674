"""Diffed, ordered pushes of match state to the broadcast overlay."""

import asyncio
import logging
from dataclasses import dataclass, field

from volleyball_scoreboard.adapters.vmix_client import OverlayTransport
from volleyball_scoreboard.domain.match import Match
from volleyball_scoreboard.domain.overlay import (
    FieldCategory,
    FieldCommand,
    OverlayInput,
    category_rank,
    default_overlay_inputs,
)
from volleyball_scoreboard.services.coordinator import MatchUpdate
from volleyball_scoreboard.services.overlay_fields import OverlayFieldComputer

logger = logging.getLogger(__name__)

BaselineKey = tuple[str, str, FieldCategory]


@dataclass
class PushReport:
    """Outcome of one push to the overlay."""

    sent: list[FieldCommand] = field(default_factory=list)
    failed: list[FieldCommand] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


@dataclass
class BroadcastService:
    """Sends only changed overlay fields, text before colours before visibility.

    The baseline remembers the last value accepted by the overlay for each
    field. A field whose send fails keeps its old baseline and is retried on
    the next push.
    """

    transport: OverlayTransport
    inputs: tuple[OverlayInput, ...] = field(default_factory=default_overlay_inputs)
    field_computer: OverlayFieldComputer = field(default_factory=OverlayFieldComputer)
    enabled: bool = True
    _baseline: dict[BaselineKey, str] = field(default_factory=dict)
    _pending: Match | None = None
    _worker: asyncio.Task | None = None

    def plan(self, match: Match) -> list[FieldCommand]:
        """Return the commands needed to bring the overlay up to date."""
        commands = [
            command
            for overlay_input in self.inputs
            for command in self.field_computer.commands_for(match, overlay_input)
            if self._baseline.get(command.key) != command.value
        ]
        return sorted(commands, key=lambda command: category_rank(command.category))

    async def push(self, match: Match) -> PushReport:
        """Send the planned commands one at a time. Never raises."""
        report = PushReport()
        if not self.enabled:
            return report
        for command in self.plan(match):
            try:
                accepted = await self.transport.send_field_update(
                    command.input_identifier,
                    command.field_identifier,
                    command.value,
                    command.category,
                )
            except Exception:
                logger.exception(
                    "Overlay field update raised",
                    extra={
                        "input": command.input_identifier,
                        "field": command.field_identifier,
                    },
                )
                accepted = False
            if accepted:
                self._baseline[command.key] = command.value
                report.sent.append(command)
            else:
                report.failed.append(command)
        if report.failed:
            logger.warning(
                "Overlay push incomplete",
                extra={"sent": len(report.sent), "failed": len(report.failed)},
            )
        return report

    def reset(self) -> None:
        """Forget the baseline so the next push resends every field."""
        self._baseline.clear()

    async def resync(self, match: Match) -> PushReport:
        """Force a full resend of the match."""
        self.reset()
        return await self.push(match)

    def handle_update(self, update: MatchUpdate) -> None:
        """Coordinator listener: schedule a push without blocking the caller."""
        if update.replaced:
            self.reset()
        self._pending = update.match
        if not self.enabled:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning("No running event loop, overlay push deferred")
            return
        if self._worker is None or self._worker.done():
            self._worker = loop.create_task(self._drain())

    async def _drain(self) -> None:
        # Only the newest snapshot matters; intermediate ones are skipped.
        while self._pending is not None:
            match = self._pending
            self._pending = None
            await self.push(match)

    async def aclose(self) -> None:
        """Wait for an in-flight push to finish."""
        if self._worker is not None and not self._worker.done():
            await self._worker
        self._worker = None

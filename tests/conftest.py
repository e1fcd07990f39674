"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import UTC, datetime, timedelta

import pytest

from volleyball_scoreboard.adapters.vmix_client import OverlayTransport
from volleyball_scoreboard.config import Settings
from volleyball_scoreboard.containers import AppContainer, wire_container
from volleyball_scoreboard.domain.match import (
    Match,
    SetRecord,
    SetStatus,
    Team,
    new_match,
)
from volleyball_scoreboard.domain.overlay import FieldCategory

START = datetime(2025, 5, 17, 18, 0, tzinfo=UTC)


@dataclass
class FixedClock:
    """Clock that only moves when told to."""

    now: datetime = START

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@dataclass
class RecordingOverlayTransport(OverlayTransport):
    """Fake overlay transport that records every field update."""

    sent: list[tuple[str, str, str, FieldCategory]] = field(default_factory=list)
    rejected_fields: set[str] = field(default_factory=set)
    broken_fields: set[str] = field(default_factory=set)
    reachable: bool = True
    closed: bool = False

    async def send_field_update(
        self,
        input_identifier: str,
        field_identifier: str,
        value: str,
        category: FieldCategory,
    ) -> bool:
        if field_identifier in self.broken_fields:
            raise ConnectionError("overlay unreachable")
        if field_identifier in self.rejected_fields:
            return False
        self.sent.append((input_identifier, field_identifier, value, category))
        return True

    async def test_connection(self) -> bool:
        return self.reachable

    async def close(self) -> None:
        self.closed = True


def make_match(  # noqa: PLR0913
    score_a: int = 0,
    score_b: int = 0,
    set_number: int = 1,
    status: SetStatus = SetStatus.IN_PROGRESS,
    serving_team: str = "A",
    sets: tuple[SetRecord, ...] = (),
) -> Match:
    """Build a match with the given current set."""
    return replace(
        new_match(START),
        match_id="match-1",
        team_a=Team(name="Lions", color="#112233"),
        team_b=Team(name="Tigers", color="#445566"),
        sets=sets,
        current_set=SetRecord(
            set_number=set_number,
            score_a=score_a,
            score_b=score_b,
            status=status,
            serving_team=serving_team,
            start_time=START if status != SetStatus.PENDING else None,
        ),
    )


def completed(
    set_number: int, score_a: int, score_b: int, minutes: int = 20
) -> SetRecord:
    """Build a completed set that lasted the given number of minutes."""
    return SetRecord(
        set_number=set_number,
        score_a=score_a,
        score_b=score_b,
        status=SetStatus.COMPLETED,
        serving_team="A" if score_a > score_b else "B",
        start_time=START,
        end_time=START + timedelta(minutes=minutes),
    )


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def settings() -> Settings:
    return Settings(operator_token="operator-token")


@pytest.fixture
def transport() -> RecordingOverlayTransport:
    return RecordingOverlayTransport()


@pytest.fixture
def container(
    settings: Settings,
    transport: RecordingOverlayTransport,
    clock: FixedClock,
) -> AppContainer:
    wired = wire_container(settings, transport)
    wired.coordinator.clock = clock
    wired.session_service.clock = clock
    return wired

"""Domain models for a volleyball match."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from typing import Literal
from uuid import uuid4

TeamSide = Literal["A", "B"]

TEAM_SIDES: tuple[TeamSide, TeamSide] = ("A", "B")
MAX_SETS = 5
COURT_PLAYERS = 6
MAX_LIBEROS = 2


class SetStatus(StrEnum):
    """Lifecycle of a single set."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


@dataclass(frozen=True)
class Player:
    """A rostered player."""

    number: int
    name: str
    position: str | None = None
    is_starter: bool = False
    number_on_card: str | None = None

    @property
    def card_number(self) -> str:
        """Number printed on the lineup card, falling back to the shirt number."""
        if self.number_on_card:
            return self.number_on_card
        return str(self.number) if self.number else ""


@dataclass(frozen=True)
class Team:
    """A team as shown on the scoreboard.

    ``starting_lineup_order`` holds roster indexes: the first six are the
    players on court at the first serve, the next two are the liberos.
    """

    name: str
    color: str
    coach: str | None = None
    logo: str | None = None
    city: str | None = None
    text_color: str | None = None
    libero_color: str | None = None
    roster: tuple[Player, ...] = ()
    starting_lineup_order: tuple[int, ...] = ()

    def starting_lineup(self) -> tuple[Player, ...]:
        """Starters in lineup order, court players first and liberos last.

        Indexes that point outside the roster or at a non-starter are skipped.
        Starters missing from the order are appended in roster order.
        """
        ordered = [
            self.roster[index]
            for index in self.starting_lineup_order
            if 0 <= index < len(self.roster) and self.roster[index].is_starter
        ]
        listed = set(self.starting_lineup_order)
        ordered.extend(
            player
            for index, player in enumerate(self.roster)
            if player.is_starter and index not in listed
        )
        return tuple(ordered[: COURT_PLAYERS + MAX_LIBEROS])

    def liberos(self) -> tuple[Player, ...]:
        return self.starting_lineup()[COURT_PLAYERS:]


@dataclass(frozen=True)
class Officials:
    """Referees and table officials named for the match."""

    referee1: str = ""
    referee2: str = ""
    line_judge1: str = ""
    line_judge2: str = ""
    scorer: str = ""


@dataclass(frozen=True)
class TeamStatistics:
    """Per-team rally statistics."""

    attack: int = 0
    block: int = 0
    serve: int = 0
    opponent_errors: int = 0


@dataclass(frozen=True)
class Statistics:
    """Optional statistics block carried along with the match."""

    enabled: bool = False
    team_a: TeamStatistics = field(default_factory=TeamStatistics)
    team_b: TeamStatistics = field(default_factory=TeamStatistics)


@dataclass(frozen=True)
class SetRecord:
    """One set, either the current one or a completed one."""

    set_number: int
    score_a: int = 0
    score_b: int = 0
    status: SetStatus = SetStatus.PENDING
    serving_team: TeamSide = "A"
    start_time: datetime | None = None
    end_time: datetime | None = None

    def score_of(self, team: TeamSide) -> int:
        """Return the score of the given side."""
        return self.score_a if team == "A" else self.score_b

    @property
    def is_completed(self) -> bool:
        return self.status == SetStatus.COMPLETED

    @property
    def duration_minutes(self) -> int | None:
        """Whole minutes between start and end, if both are known."""
        if self.start_time is None or self.end_time is None:
            return None
        if self.end_time < self.start_time:
            return None
        return int((self.end_time - self.start_time).total_seconds() // 60)


@dataclass(frozen=True)
class Match:
    """Aggregate root holding the full state of one match."""

    match_id: str
    team_a: Team
    team_b: Team
    current_set: SetRecord
    created_at: datetime
    updated_at: datetime
    sets: tuple[SetRecord, ...] = ()
    statistics: Statistics | None = None
    tournament: str = ""
    tournament_subtitle: str = ""
    venue: str = ""
    location: str = ""
    match_date: str = ""
    officials: Officials = field(default_factory=Officials)

    def completed_sets(self) -> tuple[SetRecord, ...]:
        """Return completed sets ordered by set number."""
        return tuple(
            sorted(
                (record for record in self.sets if record.is_completed),
                key=lambda record: record.set_number,
            )
        )


def new_match(now: datetime) -> Match:
    """Create a blank match with default teams and set 1 pending."""
    return Match(
        match_id=uuid4().hex,
        team_a=Team(name="Team A", color="#3498db"),
        team_b=Team(name="Team B", color="#e74c3c"),
        current_set=SetRecord(set_number=1),
        statistics=Statistics(),
        created_at=now,
        updated_at=now,
    )

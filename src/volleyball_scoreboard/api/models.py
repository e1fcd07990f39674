"""Pydantic models for the match JSON exchanged with clients."""

from dataclasses import asdict
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from volleyball_scoreboard.domain.match import (
    MAX_SETS,
    Match,
    Officials,
    Player,
    SetRecord,
    SetStatus,
    Statistics,
    Team,
    TeamStatistics,
)
from volleyball_scoreboard.domain.rules import (
    MatchStatus,
    is_match_finished,
    match_status,
)


class ApiModel(BaseModel):
    """Base model using camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PlayerModel(ApiModel):
    """Roster entry payload."""

    number: int = Field(ge=0)
    name: str
    position: str | None = None
    is_starter: bool = False
    number_on_card: str | None = None

    @classmethod
    def from_domain(cls, player: Player) -> "PlayerModel":
        return cls(**asdict(player))

    def to_domain(self) -> Player:
        return Player(**self.model_dump())


class TeamModel(ApiModel):
    """Team payload."""

    name: str
    color: str
    coach: str | None = None
    logo: str | None = None
    city: str | None = None
    text_color: str | None = None
    libero_color: str | None = None
    roster: list[PlayerModel] = Field(default_factory=list)
    starting_lineup_order: list[int] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, team: Team) -> "TeamModel":
        return cls(
            name=team.name,
            color=team.color,
            coach=team.coach,
            logo=team.logo,
            city=team.city,
            text_color=team.text_color,
            libero_color=team.libero_color,
            roster=[PlayerModel.from_domain(player) for player in team.roster],
            starting_lineup_order=list(team.starting_lineup_order),
        )

    def to_domain(self) -> Team:
        return Team(
            name=self.name,
            color=self.color,
            coach=self.coach,
            logo=self.logo,
            city=self.city,
            text_color=self.text_color,
            libero_color=self.libero_color,
            roster=tuple(player.to_domain() for player in self.roster),
            starting_lineup_order=tuple(self.starting_lineup_order),
        )


class OfficialsModel(ApiModel):
    """Match officials payload."""

    referee1: str = ""
    referee2: str = ""
    line_judge1: str = ""
    line_judge2: str = ""
    scorer: str = ""

    @classmethod
    def from_domain(cls, officials: Officials) -> "OfficialsModel":
        return cls(**asdict(officials))

    def to_domain(self) -> Officials:
        return Officials(**self.model_dump())


class TeamStatisticsModel(ApiModel):
    """Per-team statistics payload."""

    attack: int = 0
    block: int = 0
    serve: int = 0
    opponent_errors: int = 0


class StatisticsModel(ApiModel):
    """Statistics payload."""

    enabled: bool = False
    team_a: TeamStatisticsModel = Field(default_factory=TeamStatisticsModel)
    team_b: TeamStatisticsModel = Field(default_factory=TeamStatisticsModel)

    @classmethod
    def from_domain(cls, statistics: Statistics) -> "StatisticsModel":
        return cls(
            enabled=statistics.enabled,
            team_a=TeamStatisticsModel(**asdict(statistics.team_a)),
            team_b=TeamStatisticsModel(**asdict(statistics.team_b)),
        )

    def to_domain(self) -> Statistics:
        return Statistics(
            enabled=self.enabled,
            team_a=TeamStatistics(**self.team_a.model_dump()),
            team_b=TeamStatistics(**self.team_b.model_dump()),
        )


class SetModel(ApiModel):
    """Set payload, used for both the current and completed sets."""

    set_number: int = Field(ge=1, le=MAX_SETS)
    score_a: int = Field(default=0, ge=0)
    score_b: int = Field(default=0, ge=0)
    status: SetStatus = SetStatus.PENDING
    serving_team: Literal["A", "B"] = "A"
    start_time: datetime | None = None
    end_time: datetime | None = None

    @classmethod
    def from_domain(cls, record: SetRecord) -> "SetModel":
        return cls(
            set_number=record.set_number,
            score_a=record.score_a,
            score_b=record.score_b,
            status=record.status,
            serving_team=record.serving_team,
            start_time=record.start_time,
            end_time=record.end_time,
        )

    def to_domain(self) -> SetRecord:
        return SetRecord(
            set_number=self.set_number,
            score_a=self.score_a,
            score_b=self.score_b,
            status=self.status,
            serving_team=self.serving_team,
            start_time=self.start_time,
            end_time=self.end_time,
        )


class MatchModel(ApiModel):
    """Full match payload, as served to clients and accepted back for undo."""

    match_id: str
    team_a: TeamModel
    team_b: TeamModel
    sets: list[SetModel] = Field(default_factory=list)
    current_set: SetModel
    statistics: StatisticsModel | None = None
    tournament: str = ""
    tournament_subtitle: str = ""
    venue: str = ""
    location: str = ""
    match_date: str = ""
    officials: OfficialsModel = Field(default_factory=OfficialsModel)
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, match: Match) -> "MatchModel":
        return cls(
            match_id=match.match_id,
            team_a=TeamModel.from_domain(match.team_a),
            team_b=TeamModel.from_domain(match.team_b),
            sets=[SetModel.from_domain(record) for record in match.sets],
            current_set=SetModel.from_domain(match.current_set),
            statistics=(
                StatisticsModel.from_domain(match.statistics)
                if match.statistics is not None
                else None
            ),
            tournament=match.tournament,
            tournament_subtitle=match.tournament_subtitle,
            venue=match.venue,
            location=match.location,
            match_date=match.match_date,
            officials=OfficialsModel.from_domain(match.officials),
            created_at=match.created_at,
            updated_at=match.updated_at,
        )

    def to_domain(self) -> Match:
        return Match(
            match_id=self.match_id,
            team_a=self.team_a.to_domain(),
            team_b=self.team_b.to_domain(),
            sets=tuple(
                sorted(
                    (record.to_domain() for record in self.sets),
                    key=lambda record: record.set_number,
                )
            ),
            current_set=self.current_set.to_domain(),
            statistics=(
                self.statistics.to_domain() if self.statistics is not None else None
            ),
            tournament=self.tournament,
            tournament_subtitle=self.tournament_subtitle,
            venue=self.venue,
            location=self.location,
            match_date=self.match_date,
            officials=self.officials.to_domain(),
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


class LoadMatchRequest(MatchModel):
    """Match supplied by the operator. Unlike an undo snapshot it is checked."""

    @model_validator(mode="after")
    def check_sets(self) -> "LoadMatchRequest":
        numbers = [record.set_number for record in self.sets]
        if any(record.status != SetStatus.COMPLETED for record in self.sets):
            raise ValueError("Only completed sets belong in the sets list")
        if len(numbers) != len(set(numbers)):
            raise ValueError("Set numbers must be unique")
        current = self.current_set
        if current.status == SetStatus.COMPLETED:
            raise ValueError("The current set cannot be completed")
        last = max(numbers, default=0)
        if current.set_number > last:
            return self
        decided = is_match_finished(record.to_domain() for record in self.sets)
        if decided and current.status == SetStatus.PENDING:
            return self
        raise ValueError(
            f"Current set {current.set_number} must come after completed set {last}"
        )


class SetballModel(ApiModel):
    is_setball: bool
    team: Literal["A", "B"] | None = None


class MatchballModel(ApiModel):
    is_matchball: bool
    team: Literal["A", "B"] | None = None


class StatusModel(ApiModel):
    """Derived match status shown by every client."""

    setball: SetballModel
    matchball: MatchballModel
    can_finish_set: bool
    sets_won_a: int
    sets_won_b: int
    winner: Literal["A", "B"] | None = None

    @classmethod
    def from_domain(cls, status: MatchStatus) -> "StatusModel":
        return cls(
            setball=SetballModel(
                is_setball=status.setball.is_setball, team=status.setball.team
            ),
            matchball=MatchballModel(
                is_matchball=status.matchball.is_matchball,
                team=status.matchball.team,
            ),
            can_finish_set=status.can_finish_set,
            sets_won_a=status.sets_won_a,
            sets_won_b=status.sets_won_b,
            winner=status.winner,
        )


class ScoreRequest(ApiModel):
    team: str
    delta: int


class ServeRequest(ApiModel):
    team: str


class UndoRequest(ApiModel):
    match: MatchModel


class SetCorrectionRequest(ApiModel):
    score_a: int
    score_b: int
    start_time: datetime | None = None
    end_time: datetime | None = None


def match_response(match: Match) -> dict[str, object]:
    """Success body carrying the match and its derived status."""
    return {
        "success": True,
        "match": MatchModel.from_domain(match).model_dump(mode="json", by_alias=True),
        "status": StatusModel.from_domain(match_status(match)).model_dump(
            mode="json", by_alias=True
        ),
    }

"""Domain models for the broadcast overlay inputs and field commands."""

from dataclasses import dataclass, replace
from enum import StrEnum

from volleyball_scoreboard.domain.match import (
    COURT_PLAYERS,
    MAX_LIBEROS,
    MAX_SETS,
    TeamSide,
)


class FieldCategory(StrEnum):
    """Kinds of overlay field updates."""

    TEXT = "text"
    FILL = "fill"
    TEXT_COLOR = "text_color"
    IMAGE = "image"
    VISIBILITY = "visibility"


# Send order within one push: content before styling, visibility last.
CATEGORY_ORDER: tuple[FieldCategory, ...] = (
    FieldCategory.TEXT,
    FieldCategory.FILL,
    FieldCategory.TEXT_COLOR,
    FieldCategory.IMAGE,
    FieldCategory.VISIBILITY,
)

VISIBLE = "On"
HIDDEN = "Off"

# Player rows on the full roster template.
ROSTER_SIZE = 14


@dataclass(frozen=True)
class FieldCommand:
    """A single field update to send to the overlay system."""

    input_identifier: str
    field_identifier: str
    value: str
    category: FieldCategory

    @property
    def key(self) -> tuple[str, str, FieldCategory]:
        return (self.input_identifier, self.field_identifier, self.category)


@dataclass(frozen=True)
class OverlayField:
    """Binding of a match value (``source``) to an overlay field."""

    source: str
    field_identifier: str
    category: FieldCategory = FieldCategory.TEXT
    enabled: bool = True


@dataclass(frozen=True)
class OverlayInput:
    """An overlay input (title template) and the fields it exposes.

    ``through_set`` limits per-set values to sets up to that number, for the
    "score after set N" inputs.
    """

    key: str
    input_identifier: str
    fields: tuple[OverlayField, ...]
    enabled: bool = True
    through_set: int | None = None


def category_rank(category: FieldCategory) -> int:
    """Position of the category in the send order."""
    return CATEGORY_ORDER.index(category)


def _current_score_input() -> OverlayInput:
    return OverlayInput(
        key="currentScore",
        input_identifier="CurrentScore",
        fields=(
            OverlayField("team_a.name", "TeamA"),
            OverlayField("team_b.name", "TeamB"),
            OverlayField("current.score_a", "ScoreASet"),
            OverlayField("current.score_b", "ScoreBSet"),
            OverlayField("sets_won.a", "ScoreASets"),
            OverlayField("sets_won.b", "ScoreBSets"),
            OverlayField("team_a.color", "ColorA", FieldCategory.FILL),
            OverlayField("team_b.color", "ColorB", FieldCategory.FILL),
            OverlayField("team_a.text_color", "TeamA", FieldCategory.TEXT_COLOR),
            OverlayField("team_b.text_color", "TeamB", FieldCategory.TEXT_COLOR),
            OverlayField("serving.a", "PointA", FieldCategory.VISIBILITY),
            OverlayField("serving.b", "PointB", FieldCategory.VISIBILITY),
        ),
    )


def _set_score_input(set_number: int) -> OverlayInput:
    fields = [
        OverlayField("team_a.name", "TeamA"),
        OverlayField("team_b.name", "TeamB"),
        OverlayField("sets_won.a", "ScoreASets"),
        OverlayField("sets_won.b", "ScoreBSets"),
    ]
    for number in range(1, set_number + 1):
        fields.extend(
            (
                OverlayField(f"set{number}.duration", f"Set{number}Duration"),
                OverlayField(f"set{number}.score_a", f"Set{number}ScoreA"),
                OverlayField(f"set{number}.score_b", f"Set{number}ScoreB"),
            )
        )
    return OverlayInput(
        key=f"set{set_number}Score",
        input_identifier=f"Set{set_number}Score",
        fields=tuple(fields),
        through_set=set_number,
    )


def _lineup_input() -> OverlayInput:
    return OverlayInput(
        key="lineup",
        input_identifier="Lineup",
        fields=(
            OverlayField("tournament", "Title"),
            OverlayField("tournament_subtitle", "Subtitle"),
            OverlayField("team_a.name", "TeamAName"),
            OverlayField("team_a.city", "TeamACity"),
            OverlayField("team_b.name", "TeamBName"),
            OverlayField("team_b.city", "TeamBCity"),
            OverlayField("match_date", "MatchDate"),
            OverlayField("venue", "VenueLine1"),
            OverlayField("location", "VenueLine2"),
            OverlayField("team_a.logo", "TeamALogo", FieldCategory.IMAGE),
            OverlayField("team_b.logo", "TeamBLogo", FieldCategory.IMAGE),
        ),
    )


def _team_header_fields(prefix: str) -> list[OverlayField]:
    return [
        OverlayField("tournament", "Title"),
        OverlayField("tournament_subtitle", "Subtitle"),
        OverlayField(f"{prefix}.name", "TeamName"),
        OverlayField(f"{prefix}.city", "TeamCity"),
        OverlayField(f"{prefix}.logo", "TeamLogo", FieldCategory.IMAGE),
    ]


def _roster_input(side: TeamSide) -> OverlayInput:
    prefix = f"team_{side.lower()}"
    fields = _team_header_fields(prefix)
    for number in range(1, ROSTER_SIZE + 1):
        source = f"{prefix}.player{number}"
        fields.extend(
            (
                OverlayField(f"{source}.number", f"Player{number}Number"),
                OverlayField(f"{source}.name", f"Player{number}Name"),
            )
        )
    return OverlayInput(
        key=f"rosterTeam{side}",
        input_identifier=f"RosterTeam{side}",
        fields=tuple(fields),
    )


def _starting_lineup_input(side: TeamSide) -> OverlayInput:
    prefix = f"team_{side.lower()}"
    fields = _team_header_fields(prefix)
    for number in range(1, COURT_PLAYERS + 1):
        source = f"{prefix}.lineup{number}"
        fields.extend(
            (
                OverlayField(f"{source}.number", f"Player{number}Number"),
                OverlayField(f"{source}.name", f"Player{number}Name"),
                OverlayField(f"{source}.card", f"Player{number}NumberOnCard"),
            )
        )
    for number in range(1, MAX_LIBEROS + 1):
        source = f"{prefix}.libero{number}"
        fields.extend(
            (
                OverlayField(f"{source}.number", f"Libero{number}Number"),
                OverlayField(f"{source}.name", f"Libero{number}Name"),
                OverlayField(f"{source}.card", f"Libero{number}NumberOnCard"),
                OverlayField(
                    f"{prefix}.libero_color",
                    f"Libero{number}Background",
                    FieldCategory.FILL,
                ),
                OverlayField(
                    f"{prefix}.libero_color",
                    f"Libero{number}BackgroundOnCard",
                    FieldCategory.FILL,
                ),
            )
        )
    return OverlayInput(
        key=f"startingLineupTeam{side}",
        input_identifier=f"StartingLineupTeam{side}",
        fields=tuple(fields),
    )


def _referee1_input() -> OverlayInput:
    return OverlayInput(
        key="referee1",
        input_identifier="Referee1",
        fields=(
            OverlayField("officials.referee1", "Name"),
            OverlayField("officials.referee1_position", "Position"),
        ),
    )


def _referee2_input() -> OverlayInput:
    return OverlayInput(
        key="referee2",
        input_identifier="Referee2",
        fields=(
            OverlayField("officials.referee1", "Referee1Name"),
            OverlayField("officials.referee2", "Referee2Name"),
        ),
    )


def default_overlay_inputs(
    disabled: set[str] | None = None,
) -> tuple[OverlayInput, ...]:
    """Return the standard overlay inputs, optionally disabling some by key."""
    inputs = (
        _current_score_input(),
        *(_set_score_input(number) for number in range(1, MAX_SETS + 1)),
        _lineup_input(),
        _roster_input("A"),
        _roster_input("B"),
        _starting_lineup_input("A"),
        _starting_lineup_input("B"),
        _referee1_input(),
        _referee2_input(),
    )
    if not disabled:
        return inputs
    return tuple(replace(item, enabled=item.key not in disabled) for item in inputs)

"""Compute overlay field values from a match snapshot."""

from dataclasses import dataclass

from volleyball_scoreboard.domain.match import (
    COURT_PLAYERS,
    MAX_LIBEROS,
    MAX_SETS,
    Match,
    Player,
    SetRecord,
    Team,
)
from volleyball_scoreboard.domain.overlay import (
    HIDDEN,
    ROSTER_SIZE,
    VISIBLE,
    FieldCommand,
    OverlayInput,
)
from volleyball_scoreboard.domain.rules import sets_won

DEFAULT_TEXT_COLOR = "#ffffff"
REFEREE1_POSITION = "First referee"
_LOGO_PREFIX = "logos/"


def normalize_color(value: str | None, default: str = "") -> str:
    """Return a ``#rrggbb`` style colour, adding the leading hash if missing."""
    cleaned = (value or "").strip()
    if not cleaned:
        return default
    if not cleaned.startswith("#"):
        cleaned = f"#{cleaned}"
    return cleaned.lower()


def resolve_logo(logo: str | None, base_url: str | None) -> str:
    """Resolve a team logo reference to something the overlay can load.

    Relative ``logos/<file>`` references are served from ``base_url`` when one
    is configured; anything else is passed through untouched.
    """
    if not logo:
        return ""
    if base_url and logo.startswith(_LOGO_PREFIX):
        filename = logo[len(_LOGO_PREFIX) :]
        return f"{base_url.rstrip('/')}/logos/{filename}"
    return logo


def _format_duration(record: SetRecord | None) -> str:
    if record is None:
        return ""
    minutes = record.duration_minutes
    if minutes is None or minutes <= 0:
        return ""
    return str(minutes)


def _player_values(source: str, player: Player | None) -> dict[str, str]:
    if player is None:
        return {f"{source}.number": "", f"{source}.name": "", f"{source}.card": ""}
    return {
        f"{source}.number": str(player.number) if player.number else "",
        f"{source}.name": player.name,
        f"{source}.card": player.card_number,
    }


def _at(players: tuple[Player, ...], index: int) -> Player | None:
    return players[index] if index < len(players) else None


@dataclass(frozen=True)
class OverlayFieldComputer:
    """Deterministic mapping from a match to overlay source values."""

    logo_base_url: str | None = None

    def source_values(
        self, match: Match, through_set: int | None = None
    ) -> dict[str, str]:
        """Return every source value for the match.

        When ``through_set`` is given, set totals only count completed sets up
        to that number and later sets are left blank.
        """
        limit = through_set or MAX_SETS
        completed = {
            record.set_number: record
            for record in match.completed_sets()
            if record.set_number <= limit
        }
        current = match.current_set
        values: dict[str, str] = {
            "current.score_a": str(current.score_a),
            "current.score_b": str(current.score_b),
            "sets_won.a": str(sets_won(completed.values(), "A")),
            "sets_won.b": str(sets_won(completed.values(), "B")),
            "serving.a": VISIBLE if current.serving_team == "A" else HIDDEN,
            "serving.b": VISIBLE if current.serving_team == "B" else HIDDEN,
            "tournament": match.tournament,
            "tournament_subtitle": match.tournament_subtitle,
            "venue": match.venue,
            "location": match.location,
            "match_date": match.match_date,
            "officials.referee1": match.officials.referee1,
            "officials.referee1_position": REFEREE1_POSITION,
            "officials.referee2": match.officials.referee2,
        }
        values.update(self._team_values("team_a", match.team_a))
        values.update(self._team_values("team_b", match.team_b))
        for number in range(1, MAX_SETS + 1):
            record = completed.get(number)
            values[f"set{number}.score_a"] = str(record.score_a) if record else ""
            values[f"set{number}.score_b"] = str(record.score_b) if record else ""
            values[f"set{number}.duration"] = _format_duration(record)
        return values

    def commands_for(
        self, match: Match, overlay_input: OverlayInput
    ) -> list[FieldCommand]:
        """Build one command per enabled field of the input, in declared order."""
        if not overlay_input.enabled:
            return []
        values = self.source_values(match, overlay_input.through_set)
        return [
            FieldCommand(
                input_identifier=overlay_input.input_identifier,
                field_identifier=field.field_identifier,
                value=values.get(field.source, ""),
                category=field.category,
            )
            for field in overlay_input.fields
            if field.enabled
        ]

    def _team_values(self, prefix: str, team: Team) -> dict[str, str]:
        values = {
            f"{prefix}.name": team.name,
            f"{prefix}.city": team.city or "",
            f"{prefix}.color": normalize_color(team.color),
            f"{prefix}.text_color": normalize_color(
                team.text_color, DEFAULT_TEXT_COLOR
            ),
            f"{prefix}.libero_color": normalize_color(team.libero_color or team.color),
            f"{prefix}.logo": resolve_logo(team.logo, self.logo_base_url),
        }
        for index in range(ROSTER_SIZE):
            values.update(
                _player_values(f"{prefix}.player{index + 1}", _at(team.roster, index))
            )
        lineup = team.starting_lineup()
        for index in range(COURT_PLAYERS):
            values.update(
                _player_values(f"{prefix}.lineup{index + 1}", _at(lineup, index))
            )
        liberos = team.liberos()
        for index in range(MAX_LIBEROS):
            values.update(
                _player_values(f"{prefix}.libero{index + 1}", _at(liberos, index))
            )
        return values
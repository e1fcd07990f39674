"""Tests for overlay field value computation."""

from dataclasses import replace

from volleyball_scoreboard.domain.match import Officials, Player, SetStatus, Team
from volleyball_scoreboard.domain.overlay import (
    FieldCategory,
    default_overlay_inputs,
)
from volleyball_scoreboard.services.overlay_fields import (
    OverlayFieldComputer,
    normalize_color,
    resolve_logo,
)
from tests.conftest import completed, make_match


def _input(key: str):
    return next(item for item in default_overlay_inputs() if item.key == key)


def test_normalize_color() -> None:
    assert normalize_color("3498DB") == "#3498db"
    assert normalize_color("#e74c3c") == "#e74c3c"
    assert normalize_color(None, "#ffffff") == "#ffffff"
    assert normalize_color("  ") == ""


def test_resolve_logo() -> None:
    assert resolve_logo("logos/lions.png", "http://10.0.0.5:3000/") == (
        "http://10.0.0.5:3000/logos/lions.png"
    )
    assert resolve_logo("logos/lions.png", None) == "logos/lions.png"
    assert resolve_logo("https://cdn/lions.png", "http://x") == "https://cdn/lions.png"
    assert resolve_logo(None, "http://x") == ""


def test_current_score_values() -> None:
    match = make_match(
        score_a=12,
        score_b=9,
        set_number=2,
        serving_team="B",
        sets=(completed(1, 25, 20),),
    )

    commands = OverlayFieldComputer().commands_for(match, _input("currentScore"))
    values = {(c.field_identifier, c.category): c.value for c in commands}

    assert values[("TeamA", FieldCategory.TEXT)] == "Lions"
    assert values[("ScoreASet", FieldCategory.TEXT)] == "12"
    assert values[("ScoreBSet", FieldCategory.TEXT)] == "9"
    assert values[("ScoreASets", FieldCategory.TEXT)] == "1"
    assert values[("ScoreBSets", FieldCategory.TEXT)] == "0"
    assert values[("ColorA", FieldCategory.FILL)] == "#112233"
    assert values[("TeamA", FieldCategory.TEXT_COLOR)] == "#ffffff"
    assert values[("PointA", FieldCategory.VISIBILITY)] == "Off"
    assert values[("PointB", FieldCategory.VISIBILITY)] == "On"


def test_set_score_input_only_counts_sets_up_to_its_number() -> None:
    match = make_match(
        set_number=3,
        status=SetStatus.PENDING,
        sets=(completed(1, 25, 20, minutes=22), completed(2, 18, 25, minutes=0)),
    )
    computer = OverlayFieldComputer()

    after_first = {
        c.field_identifier: c.value
        for c in computer.commands_for(match, _input("set1Score"))
    }
    after_third = {
        c.field_identifier: c.value
        for c in computer.commands_for(match, _input("set3Score"))
    }

    assert after_first["ScoreASets"] == "1"
    assert after_first["ScoreBSets"] == "0"
    assert after_first["Set1Duration"] == "22"
    assert "Set2ScoreA" not in after_first
    assert after_third["ScoreBSets"] == "1"
    assert after_third["Set2ScoreB"] == "25"
    assert after_third["Set2Duration"] == ""
    assert after_third["Set3ScoreA"] == ""
    assert after_third["Set3Duration"] == ""


def test_lineup_values_resolve_logos() -> None:
    match = replace(
        make_match(),
        team_a=Team(name="Lions", color="#112233", logo="logos/a.png", city="Oslo"),
        tournament="Cup",
        venue="Main Hall",
        location="Oslo",
        match_date="17.05.2025",
    )

    commands = OverlayFieldComputer(logo_base_url="http://host").commands_for(
        match, _input("lineup")
    )
    values = {c.field_identifier: c.value for c in commands}

    assert values["Title"] == "Cup"
    assert values["TeamACity"] == "Oslo"
    assert values["TeamALogo"] == "http://host/logos/a.png"
    assert values["TeamBLogo"] == ""
    assert values["VenueLine1"] == "Main Hall"
    assert values["MatchDate"] == "17.05.2025"


def test_disabled_input_yields_no_commands() -> None:
    inputs = default_overlay_inputs({"lineup"})
    lineup = next(item for item in inputs if item.key == "lineup")

    assert lineup.enabled is False
    assert OverlayFieldComputer().commands_for(make_match(), lineup) == []


def _team_with_roster() -> Team:
    roster = tuple(
        Player(number=number, name=f"Player {number}", is_starter=number <= 8)
        for number in range(1, 13)
    )
    roster = (
        *roster[:7],
        replace(roster[7], number_on_card="L2"),
        *roster[8:],
    )
    return Team(
        name="Lions",
        color="#112233",
        libero_color="FFCC00",
        roster=roster,
        # Roster indexes: six court players, then the two liberos.
        starting_lineup_order=(5, 4, 3, 2, 1, 0, 6, 7),
    )


def test_roster_values() -> None:
    match = replace(make_match(), team_a=_team_with_roster(), tournament="Cup")

    commands = OverlayFieldComputer().commands_for(match, _input("rosterTeamA"))
    values = {c.field_identifier: c.value for c in commands}

    assert commands[0].input_identifier == "RosterTeamA"
    assert values["Title"] == "Cup"
    assert values["TeamName"] == "Lions"
    assert values["Player1Number"] == "1"
    assert values["Player12Name"] == "Player 12"
    assert values["Player13Number"] == ""
    assert values["Player14Name"] == ""


def test_starting_lineup_values() -> None:
    match = replace(make_match(), team_a=_team_with_roster())

    commands = OverlayFieldComputer().commands_for(
        match, _input("startingLineupTeamA")
    )
    values = {c.field_identifier: c.value for c in commands}
    fills = {
        c.field_identifier: c.value
        for c in commands
        if c.category == FieldCategory.FILL
    }

    assert values["Player1Number"] == "6"
    assert values["Player6Name"] == "Player 1"
    assert values["Player1NumberOnCard"] == "6"
    assert values["Libero1Number"] == "7"
    assert values["Libero2Name"] == "Player 8"
    assert values["Libero2NumberOnCard"] == "L2"
    assert fills == {
        "Libero1Background": "#ffcc00",
        "Libero1BackgroundOnCard": "#ffcc00",
        "Libero2Background": "#ffcc00",
        "Libero2BackgroundOnCard": "#ffcc00",
    }


def test_starting_lineup_without_order_uses_roster_starters() -> None:
    team = Team(
        name="Tigers",
        color="445566",
        roster=(
            Player(number=9, name="Bench"),
            Player(number=3, name="Setter", is_starter=True),
            Player(number=11, name="Opposite", is_starter=True),
        ),
    )
    match = replace(make_match(), team_b=team)

    commands = OverlayFieldComputer().commands_for(
        match, _input("startingLineupTeamB")
    )
    values = {c.field_identifier: c.value for c in commands}

    assert values["Player1Name"] == "Setter"
    assert values["Player2Number"] == "11"
    assert values["Player3Name"] == ""
    assert values["Libero1Name"] == ""
    assert values["Libero1Background"] == "#445566"


def test_starting_lineup_skips_stale_indexes() -> None:
    team = Team(
        name="Lions",
        color="#112233",
        roster=(
            Player(number=1, name="Starter", is_starter=True),
            Player(number=2, name="Bench"),
        ),
        starting_lineup_order=(7, 1, 0),
    )

    assert [player.name for player in team.starting_lineup()] == ["Starter"]
    assert team.liberos() == ()


def test_referee_values() -> None:
    match = replace(
        make_match(), officials=Officials(referee1="Anna Berg", referee2="Ola Dahl")
    )
    computer = OverlayFieldComputer()

    single = computer.commands_for(match, _input("referee1"))
    both = computer.commands_for(match, _input("referee2"))

    assert [(c.field_identifier, c.value) for c in single] == [
        ("Name", "Anna Berg"),
        ("Position", "First referee"),
    ]
    assert [(c.field_identifier, c.value) for c in both] == [
        ("Referee1Name", "Anna Berg"),
        ("Referee2Name", "Ola Dahl"),
    ]

"""Tests for the shared volleyball rules."""

import pytest

from volleyball_scoreboard.domain.match import SetStatus
from volleyball_scoreboard.domain.rules import (
    MatchballInfo,
    SetballInfo,
    can_finish_set,
    match_status,
    match_winner,
    matchball_info,
    setball_info,
)
from tests.conftest import completed, make_match


@pytest.mark.parametrize(
    ("score_a", "score_b", "expected"),
    [
        (25, 23, True),
        (25, 24, False),
        (24, 22, False),
        (26, 24, True),
        (30, 28, True),
        (28, 30, True),
        (27, 26, False),
        (25, 25, False),
        (10, 25, True),
    ],
)
def test_can_finish_regular_sets(score_a: int, score_b: int, expected: bool) -> None:
    for set_number in range(1, 5):
        assert can_finish_set(score_a, score_b, set_number) is expected


@pytest.mark.parametrize(
    ("score_a", "score_b", "expected"),
    [
        (15, 13, True),
        (15, 14, False),
        (16, 14, True),
        (14, 12, False),
        (25, 24, False),
    ],
)
def test_can_finish_deciding_set(score_a: int, score_b: int, expected: bool) -> None:
    assert can_finish_set(score_a, score_b, 5) is expected


def test_setball_examples() -> None:
    assert setball_info(24, 24, 1) == SetballInfo(is_setball=False)
    assert setball_info(25, 24, 1) == SetballInfo(is_setball=True, team="A")
    assert setball_info(24, 23, 1) == SetballInfo(is_setball=True, team="A")
    assert setball_info(12, 14, 5) == SetballInfo(is_setball=True, team="B")
    assert setball_info(23, 20, 1) == SetballInfo(is_setball=False)


def test_matchball_needs_setball_and_two_wins() -> None:
    two_wins_a = (completed(1, 25, 20), completed(2, 25, 18))

    assert matchball_info(two_wins_a, 3, 24, 20) == MatchballInfo(
        is_matchball=True, team="A"
    )
    assert matchball_info(two_wins_a, 3, 20, 10) == MatchballInfo(is_matchball=False)
    assert matchball_info(two_wins_a, 3, 20, 24) == MatchballInfo(is_matchball=False)


def test_matchball_false_with_one_win() -> None:
    one_win = (completed(1, 25, 20),)

    assert matchball_info(one_win, 2, 24, 10) == MatchballInfo(is_matchball=False)


def test_matchball_in_deciding_set() -> None:
    sets = (
        completed(1, 25, 20),
        completed(2, 20, 25),
        completed(3, 25, 22),
        completed(4, 23, 25),
    )

    assert matchball_info(sets, 5, 10, 14) == MatchballInfo(
        is_matchball=True, team="B"
    )


def test_match_status_bundles_derived_state() -> None:
    match = make_match(
        score_a=24,
        score_b=22,
        set_number=3,
        sets=(completed(1, 25, 20), completed(2, 25, 18)),
    )

    status = match_status(match)

    assert status.setball.team == "A"
    assert status.matchball.is_matchball is True
    assert status.can_finish_set is False
    assert (status.sets_won_a, status.sets_won_b) == (2, 0)
    assert status.winner is None


def test_match_winner_after_three_sets() -> None:
    sets = (completed(1, 25, 20), completed(2, 25, 18), completed(3, 25, 10))

    assert match_winner(sets) == "A"


def test_pending_sets_do_not_count_as_wins() -> None:
    match = make_match(status=SetStatus.PENDING, set_number=2)

    assert match_status(match).sets_won_a == 0

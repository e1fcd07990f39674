"""Volleyball scoring rules.

Every surface (operator API, remote API, remote panel, overlay fields) derives
setball, matchball and finish eligibility from this module only.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from volleyball_scoreboard.domain.match import (
    MAX_SETS,
    Match,
    SetRecord,
    TeamSide,
)

SETS_TO_WIN = 3


@dataclass(frozen=True)
class SetballInfo:
    """Whether a team is one point from winning the set."""

    is_setball: bool
    team: TeamSide | None = None


@dataclass(frozen=True)
class MatchballInfo:
    """Whether a team is one point from winning the match."""

    is_matchball: bool
    team: TeamSide | None = None


@dataclass(frozen=True)
class MatchStatus:
    """Derived state of a match, shared by every surface."""

    setball: SetballInfo
    matchball: MatchballInfo
    can_finish_set: bool
    sets_won_a: int
    sets_won_b: int
    winner: TeamSide | None


def finish_threshold(set_number: int) -> int:
    """Points needed to win a set (15 in the deciding set, 25 otherwise)."""
    return 15 if set_number == MAX_SETS else 25


def can_finish_set(score_a: int, score_b: int, set_number: int) -> bool:
    """Return True when the set can be closed with this score."""
    threshold = finish_threshold(set_number)
    tie_threshold = threshold - 1
    high = max(score_a, score_b)
    low = min(score_a, score_b)
    margin = high - low
    if high >= threshold and margin >= 2:
        return True
    return low >= tie_threshold and margin >= 2


def setball_info(score_a: int, score_b: int, set_number: int) -> SetballInfo:
    """Return which team, if any, is on setball."""
    threshold = finish_threshold(set_number) - 1
    if max(score_a, score_b) >= threshold and score_a != score_b:
        return SetballInfo(is_setball=True, team="A" if score_a > score_b else "B")
    return SetballInfo(is_setball=False)


def set_winner(record: SetRecord) -> TeamSide | None:
    """Return the side with more points in the set, if any."""
    if record.score_a > record.score_b:
        return "A"
    if record.score_b > record.score_a:
        return "B"
    return None


def sets_won(sets: Iterable[SetRecord], team: TeamSide) -> int:
    """Count completed sets won by the team."""
    return sum(
        1 for record in sets if record.is_completed and set_winner(record) == team
    )


def matchball_info(
    sets: Iterable[SetRecord], set_number: int, score_a: int, score_b: int
) -> MatchballInfo:
    """Return which team, if any, is on matchball."""
    completed = list(sets)
    wins = {"A": sets_won(completed, "A"), "B": sets_won(completed, "B")}
    if SETS_TO_WIN - 1 not in wins.values():
        return MatchballInfo(is_matchball=False)
    setball = setball_info(score_a, score_b, set_number)
    if setball.team is not None and wins[setball.team] == SETS_TO_WIN - 1:
        return MatchballInfo(is_matchball=True, team=setball.team)
    return MatchballInfo(is_matchball=False)


def match_winner(sets: Iterable[SetRecord]) -> TeamSide | None:
    """Return the side that has won three sets, if any."""
    completed = list(sets)
    if sets_won(completed, "A") >= SETS_TO_WIN:
        return "A"
    if sets_won(completed, "B") >= SETS_TO_WIN:
        return "B"
    return None


def is_match_finished(sets: Iterable[SetRecord]) -> bool:
    return match_winner(sets) is not None


def match_status(match: Match) -> MatchStatus:
    """Compute every derived flag for the match's current state."""
    current = match.current_set
    completed = match.completed_sets()
    return MatchStatus(
        setball=setball_info(current.score_a, current.score_b, current.set_number),
        matchball=matchball_info(
            completed, current.set_number, current.score_a, current.score_b
        ),
        can_finish_set=can_finish_set(
            current.score_a, current.score_b, current.set_number
        ),
        sets_won_a=sets_won(completed, "A"),
        sets_won_b=sets_won(completed, "B"),
        winner=match_winner(completed),
    )

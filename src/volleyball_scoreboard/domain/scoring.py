"""Match transitions: scoring, serve and set lifecycle.

Each function takes a match and returns a new one. Rejected transitions raise
a ``MatchRuleError`` subclass and leave the input untouched.
"""

from dataclasses import replace
from datetime import datetime

from volleyball_scoreboard.domain.errors import (
    InvalidSetCorrectionError,
    InvalidTeamError,
    MatchFinishedError,
    SetAlreadyStartedError,
    SetNotFinishableError,
    SetNotInProgressError,
)
from volleyball_scoreboard.domain.match import (
    MAX_SETS,
    TEAM_SIDES,
    Match,
    SetRecord,
    SetStatus,
    TeamSide,
)
from volleyball_scoreboard.domain.rules import (
    can_finish_set,
    finish_threshold,
    is_match_finished,
    set_winner,
)


def ensure_team(team: str) -> TeamSide:
    """Validate a team parameter coming from a caller."""
    if team not in TEAM_SIDES:
        raise InvalidTeamError(f"Invalid team {team!r}, expected 'A' or 'B'")
    return team  # type: ignore[return-value]


def change_score(match: Match, team: str, delta: int) -> Match:
    """Add ``delta`` points to a team; a scoring team takes the serve."""
    side = ensure_team(team)
    current = _require_in_progress(match)
    new_score = max(0, current.score_of(side) + delta)
    updated = (
        replace(current, score_a=new_score)
        if side == "A"
        else replace(current, score_b=new_score)
    )
    if delta > 0:
        updated = replace(updated, serving_team=side)
    return replace(match, current_set=updated)


def change_serving_team(match: Match, team: str) -> Match:
    """Give the serve to a team. Returns the same match if nothing changes."""
    side = ensure_team(team)
    current = _require_in_progress(match)
    if current.serving_team == side:
        return match
    return replace(match, current_set=replace(current, serving_team=side))


def start_set(match: Match, now: datetime) -> Match:
    """Move the pending current set into play."""
    current = match.current_set
    if is_match_finished(match.sets):
        raise MatchFinishedError("The match is already decided")
    if current.status != SetStatus.PENDING:
        raise SetAlreadyStartedError(
            f"Set {current.set_number} is already {current.status.value}"
        )
    started = replace(
        current,
        score_a=0,
        score_b=0,
        status=SetStatus.IN_PROGRESS,
        start_time=now,
        end_time=None,
    )
    return replace(match, current_set=started)


def finish_set(match: Match, now: datetime) -> Match:
    """Close the current set and prepare the next one."""
    current = _require_in_progress(match)
    if not can_finish_set(current.score_a, current.score_b, current.set_number):
        threshold = finish_threshold(current.set_number)
        raise SetNotFinishableError(
            f"Set {current.set_number} cannot be finished at "
            f"{current.score_a}-{current.score_b}: a team needs {threshold} "
            "points and a two-point lead"
        )
    completed = replace(current, status=SetStatus.COMPLETED, end_time=now)
    winner = set_winner(completed) or current.serving_team
    # The deciding set leaves a blank set 5 behind; start_set rejects it.
    next_set = SetRecord(
        set_number=min(current.set_number + 1, MAX_SETS),
        serving_team=winner,
        status=SetStatus.PENDING,
    )
    return replace(
        match,
        sets=_ordered((*match.sets, completed)),
        current_set=next_set,
    )


def correct_set(  # noqa: PLR0913
    match: Match,
    set_number: int,
    score_a: int,
    score_b: int,
    start_time: datetime | None = None,
    end_time: datetime | None = None,
) -> Match:
    """Overwrite the score, and optionally the times, of a set.

    Only the current set or a completed set can be corrected. Times left as
    ``None`` keep their stored value; edited times must not run backwards or
    overlap the neighbouring sets.
    """
    if score_a < 0 or score_b < 0:
        raise InvalidSetCorrectionError("Scores cannot be negative")
    record = next((item for item in match.sets if item.set_number == set_number), None)
    is_current = record is None and set_number == match.current_set.set_number
    if is_current:
        record = match.current_set
    elif record is None:
        raise InvalidSetCorrectionError(f"Set {set_number} not found")
    elif record.is_completed and not can_finish_set(score_a, score_b, set_number):
        raise InvalidSetCorrectionError(
            f"{score_a}-{score_b} is not a valid final score for set {set_number}"
        )

    corrected = replace(record, score_a=score_a, score_b=score_b)
    if start_time is not None or end_time is not None:
        corrected = _retimed(corrected, start_time, end_time)
        _check_no_overlap(match, corrected)

    if is_current:
        return replace(match, current_set=corrected)
    return replace(
        match,
        sets=tuple(corrected if item is record else item for item in match.sets),
    )


def reopen_last_set(match: Match) -> Match:
    """Put the most recently completed set back into play.

    The set keeps its scores and start time; its end time is cleared and the
    duration is only known again after the next finish.
    """
    current = match.current_set
    if current.status != SetStatus.PENDING or current.score_a or current.score_b:
        raise InvalidSetCorrectionError(
            "A set can only be reopened before the next one starts"
        )
    completed = [record for record in match.sets if record.is_completed]
    if not completed:
        raise InvalidSetCorrectionError("There is no completed set to reopen")
    last = max(completed, key=lambda record: record.set_number)
    remaining = tuple(record for record in match.sets if record is not last)
    reopened = replace(last, status=SetStatus.IN_PROGRESS, end_time=None)
    return replace(match, sets=remaining, current_set=reopened)


def _require_in_progress(match: Match) -> SetRecord:
    current = match.current_set
    if current.status != SetStatus.IN_PROGRESS:
        raise SetNotInProgressError(f"Set {current.set_number} is not in progress")
    return current


def _ordered(sets: tuple[SetRecord, ...]) -> tuple[SetRecord, ...]:
    return tuple(sorted(sets, key=lambda record: record.set_number))


def _retimed(
    record: SetRecord, start_time: datetime | None, end_time: datetime | None
) -> SetRecord:
    number = record.set_number
    if record.status == SetStatus.PENDING:
        raise InvalidSetCorrectionError(f"Set {number} has not started yet")
    if end_time is not None and not record.is_completed:
        raise InvalidSetCorrectionError(
            f"Set {number} has no end time until it is finished"
        )
    updated = replace(
        record,
        start_time=start_time if start_time is not None else record.start_time,
        end_time=end_time if end_time is not None else record.end_time,
    )
    if (
        updated.start_time is not None
        and updated.end_time is not None
        and updated.end_time < updated.start_time
    ):
        raise InvalidSetCorrectionError(f"Set {number} cannot end before it starts")
    return updated


def _check_no_overlap(match: Match, record: SetRecord) -> None:
    by_number = {match.current_set.set_number: match.current_set}
    by_number.update((item.set_number, item) for item in match.sets)
    number = record.set_number
    previous = by_number.get(number - 1)
    following = by_number.get(number + 1)
    if (
        previous is not None
        and previous.end_time is not None
        and record.start_time is not None
        and record.start_time < previous.end_time
    ):
        raise InvalidSetCorrectionError(
            f"Set {number} cannot start before set {number - 1} ended"
        )
    if (
        following is not None
        and following.start_time is not None
        and record.end_time is not None
        and record.end_time > following.start_time
    ):
        raise InvalidSetCorrectionError(
            f"Set {number} cannot end after set {number + 1} started"
        )

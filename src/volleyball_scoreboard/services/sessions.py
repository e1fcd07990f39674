"""Remote-control access sessions and the operations they allow."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import uuid4

from volleyball_scoreboard.domain import scoring
from volleyball_scoreboard.domain.errors import SessionInvalidError
from volleyball_scoreboard.domain.match import Match
from volleyball_scoreboard.domain.sessions import AccessSession
from volleyball_scoreboard.services.coordinator import MatchCoordinator

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class SessionService:
    """Issues access tokens and runs remote mutations on their behalf."""

    coordinator: MatchCoordinator
    clock: Callable[[], datetime] = _utc_now
    current_session_id: str | None = None
    _sessions: dict[str, AccessSession] = field(default_factory=dict)

    def create_session(self) -> AccessSession:
        """Create a new session; older sessions stay valid until they expire."""
        session = AccessSession(id=uuid4().hex, created_at=self.clock())
        self._sessions[session.id] = session
        self.current_session_id = session.id
        logger.info("Remote session created", extra={"session_id": session.id})
        return session

    def validate(self, session_id: str) -> AccessSession:
        """Return the session or raise ``SessionInvalidError``.

        Expired sessions are dropped on the way.
        """
        session = self._sessions.get(session_id)
        if session is None:
            raise SessionInvalidError("Invalid or expired session")
        if not session.is_valid(self.clock()):
            self._evict(session_id)
            raise SessionInvalidError("Invalid or expired session")
        return session

    def revoke(self, session_id: str) -> bool:
        """Drop a session. Returns False if it was not known."""
        if session_id not in self._sessions:
            return False
        self._evict(session_id)
        logger.info("Remote session revoked", extra={"session_id": session_id})
        return True

    def active_count(self) -> int:
        """Number of valid sessions. Expired ones are dropped first."""
        now = self.clock()
        expired = [
            session_id
            for session_id, session in self._sessions.items()
            if not session.is_valid(now)
        ]
        for session_id in expired:
            self._evict(session_id)
        return len(self._sessions)

    def get_match(self, session_id: str) -> Match:
        self.validate(session_id)
        return self.coordinator.require()

    def change_score(self, session_id: str, team: str, delta: int) -> Match:
        self.validate(session_id)
        return self.coordinator.apply(
            lambda match, _now: scoring.change_score(match, team, delta)
        )

    def change_serving_team(self, session_id: str, team: str) -> Match:
        self.validate(session_id)
        return self.coordinator.apply(
            lambda match, _now: scoring.change_serving_team(match, team)
        )

    def start_set(self, session_id: str) -> Match:
        self.validate(session_id)
        return self.coordinator.apply(scoring.start_set)

    def finish_set(self, session_id: str) -> Match:
        """Finish the current set; eligibility is checked here, not trusted."""
        self.validate(session_id)
        return self.coordinator.apply(scoring.finish_set)

    def undo(self, session_id: str, snapshot: Match) -> Match:
        """Restore the snapshot the client took before its last action."""
        self.validate(session_id)
        return self.coordinator.restore(snapshot)

    def _evict(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)
        if self.current_session_id == session_id:
            self.current_session_id = None

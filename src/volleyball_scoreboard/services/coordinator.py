"""Single authoritative holder of the current match."""

import dataclasses
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Literal

from volleyball_scoreboard.domain.errors import MatchNotLoadedError
from volleyball_scoreboard.domain.match import Match

logger = logging.getLogger(__name__)

UpdateReason = Literal["apply", "restore", "replace"]
Mutation = Callable[[Match, datetime], Match]


@dataclass(frozen=True)
class MatchUpdate:
    """Notification sent to listeners after the match changes."""

    match: Match
    reason: UpdateReason

    @property
    def replaced(self) -> bool:
        return self.reason == "replace"


Listener = Callable[[MatchUpdate], None]


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class MatchCoordinator:
    """Owns the current match and fans changes out to listeners.

    Every mutation runs synchronously on the event loop, so a request never
    observes a half-applied update. Concurrent writers resolve as last write
    wins.
    """

    clock: Callable[[], datetime] = _utc_now
    _match: Match | None = None
    _listeners: list[Listener] = field(default_factory=list)

    @property
    def current(self) -> Match | None:
        return self._match

    def require(self) -> Match:
        """Return the loaded match or raise ``MatchNotLoadedError``."""
        if self._match is None:
            raise MatchNotLoadedError("No match is loaded")
        return self._match

    def apply(self, mutation: Mutation) -> Match:
        """Run a domain transition against the current match and publish it.

        If the transition raises, the held match is left as it was. A
        transition that returns the match unchanged is a no-op: ``updated_at``
        keeps its value and listeners are not notified.
        """
        match = self.require()
        now = self.clock()
        updated = mutation(match, now)
        if updated is match:
            return match
        updated = dataclasses.replace(updated, updated_at=now)
        self._match = updated
        self._publish(MatchUpdate(updated, "apply"))
        return updated

    def restore(self, snapshot: Match) -> Match:
        """Install a client-held snapshot verbatim (undo)."""
        self.require()
        self._match = snapshot
        self._publish(MatchUpdate(snapshot, "restore"))
        return snapshot

    def replace(self, match: Match) -> Match:
        """Swap in a different match wholesale."""
        self._match = match
        logger.info("Match loaded", extra={"match_id": match.match_id})
        self._publish(MatchUpdate(match, "replace"))
        return match

    def clear(self) -> None:
        self._match = None

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener and return a callable that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _publish(self, update: MatchUpdate) -> None:
        for listener in list(self._listeners):
            try:
                listener(update)
            except Exception:
                logger.exception(
                    "Match listener failed", extra={"reason": update.reason}
                )

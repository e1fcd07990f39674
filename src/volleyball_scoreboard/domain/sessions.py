"""Domain models for remote-control access sessions."""

from dataclasses import dataclass
from datetime import datetime, timedelta

SESSION_TTL = timedelta(hours=24)


@dataclass(frozen=True)
class AccessSession:
    """A time-boxed token granting a remote client control of the match."""

    id: str
    created_at: datetime

    @property
    def expires_at(self) -> datetime:
        return self.created_at + SESSION_TTL

    def is_valid(self, now: datetime) -> bool:
        """Return True while the session is younger than the TTL."""
        return now - self.created_at < SESSION_TTL

"""Error types raised by the match core."""


class MatchRuleError(ValueError):
    """A requested transition violates the match rules."""


class InvalidTeamError(MatchRuleError):
    """The team parameter is not A or B."""


class SetNotInProgressError(MatchRuleError):
    """The current set must be in progress for this action."""


class SetAlreadyStartedError(MatchRuleError):
    """The current set has already been started or finished."""


class SetNotFinishableError(MatchRuleError):
    """The current score does not allow finishing the set."""


class MatchFinishedError(MatchRuleError):
    """A team has already won the match."""


class InvalidSetCorrectionError(MatchRuleError):
    """A set correction or reopen request is not allowed."""


class MatchNotLoadedError(LookupError):
    """No match is currently loaded."""


class SessionInvalidError(PermissionError):
    """The remote session is unknown or expired."""

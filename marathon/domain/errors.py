"""Error taxonomy shared by the progression engine and the plan lifecycle."""


class PlanError(Exception):
    """Base class for plan related failures."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidParameter(PlanError):
    """Plan parameters, a restart day or a day result failed validation."""


class NotFound(PlanError):
    """A referenced plan, day entry or user does not exist."""


class AccessDenied(PlanError):
    """The plan belongs to another user."""


class InconsistentState(PlanError):
    """Stored day entries violate the one-entry-per-day invariant."""

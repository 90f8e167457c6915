"""
Exception taxonomy for the prescription engine.

Every error raised by powerpro derives from PowerProError.  Errors caused
by bad caller input or bad configuration also derive from ValueError so
that generic callers can keep catching ValueError.
"""


class PowerProError(Exception):
    """Base class for all powerpro errors."""


class InvalidParamsError(PowerProError, ValueError):
    """Raised when parameters or configuration fail validation."""


class UnknownTypeError(InvalidParamsError):
    """Raised when a serialized payload lacks a usable discriminator."""


class TypeNotRegisteredError(PowerProError, KeyError):
    """Raised when a factory has no constructor for a discriminator."""

    def __init__(self, type_name: str, family: str = "type") -> None:
        self.type_name = type_name
        self.family = family
        super().__init__(type_name)

    def __str__(self) -> str:
        return f"{self.family} not registered: {self.type_name!r}"


# ---------------------------------------------------------------------------
# Field-range errors
# ---------------------------------------------------------------------------


class NegativeWeightError(InvalidParamsError):
    pass


class InvalidIncrementError(InvalidParamsError):
    pass


class InvalidRoundingDirectionError(InvalidParamsError):
    pass


class TargetRepsInvalidError(InvalidParamsError):
    pass


class TargetRPEInvalidError(InvalidParamsError):
    pass


class PercentageInvalidError(InvalidParamsError):
    pass


# ---------------------------------------------------------------------------
# Evaluation errors
# ---------------------------------------------------------------------------


class MaxNotFoundError(PowerProError):
    """No max of the requested type exists for the user and lift."""


class ReferenceSetNotFoundError(PowerProError):
    """The referenced set has not been logged in this session yet."""


class RPEChartRequiredError(PowerProError):
    """An RPE-based strategy was evaluated without any RPE chart."""


class RPEEntryNotFoundError(PowerProError, KeyError):
    """The RPE chart has no entry for the requested (reps, rpe) pair."""

    def __init__(self, reps: int, rpe: float) -> None:
        self.reps = reps
        self.rpe = rpe
        super().__init__(reps, rpe)

    def __str__(self) -> str:
        return f"no RPE chart entry for {self.reps} reps at RPE {self.rpe}"


class SessionIdRequiredError(InvalidParamsError):
    """A session-relative strategy was evaluated without a session id."""


class SessionLookupRequiredError(PowerProError):
    """A session-relative strategy has no session lookup injected."""


class LookupFailedError(PowerProError):
    """An injected lookup raised while being queried."""

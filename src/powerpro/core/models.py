"""
Shared data models for the prescription engine.

Enumerations are plain string literals (matching their wire values) and
records are dataclasses, as elsewhere in the package.
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Literal, Protocol

MaxType = Literal["ONE_RM", "TRAINING_MAX"]
ReferenceType = Literal["ONE_RM", "TRAINING_MAX", "E1RM"]
TriggerType = Literal["AFTER_SET", "AFTER_SESSION", "AFTER_WEEK", "AFTER_CYCLE", "ON_FAILURE"]

ONE_RM = "ONE_RM"
TRAINING_MAX = "TRAINING_MAX"
E1RM = "E1RM"

MAX_TYPES: tuple[str, ...] = (ONE_RM, TRAINING_MAX)
REFERENCE_TYPES: tuple[str, ...] = (ONE_RM, TRAINING_MAX, E1RM)

AFTER_SET = "AFTER_SET"
AFTER_SESSION = "AFTER_SESSION"
AFTER_WEEK = "AFTER_WEEK"
AFTER_CYCLE = "AFTER_CYCLE"
ON_FAILURE = "ON_FAILURE"

TRIGGER_TYPES: tuple[str, ...] = (AFTER_SET, AFTER_SESSION, AFTER_WEEK, AFTER_CYCLE, ON_FAILURE)


# =============================================================================
# EXTERNAL LOOKUP RESULTS
# =============================================================================


@dataclass(frozen=True)
class MaxValue:
    """A user's current max for one lift and max type."""

    value: float
    effective_date: date | None = None


@dataclass(frozen=True)
class LoggedSetResult:
    """A set already logged in the current session."""

    weight: float
    reps: int
    rpe: float | None = None


class MaxLookup(Protocol):
    def get_current_max(self, user_id: str, lift_id: str, max_type: str) -> MaxValue | None:
        ...


class SessionLookup(Protocol):
    def get_logged_set_by_index(
        self, session_id: str, lift_id: str, index: int
    ) -> LoggedSetResult | None:
        ...


# =============================================================================
# SET GENERATION
# =============================================================================


@dataclass(frozen=True)
class GeneratedSet:
    """One prescribed set."""

    set_number: int  # 1-based
    weight: float
    target_reps: int
    is_work_set: bool = True
    is_provisional: bool = False  # True while the total set count is unknown


@dataclass(frozen=True)
class TerminationContext:
    """Running totals of a variable-count exercise after the latest logged set."""

    set_number: int = 0
    total_sets: int = 0
    total_reps: int = 0
    last_reps: int = 0
    last_rpe: float | None = None
    target_reps: int = 0


def now_timestamp() -> datetime:
    """Current local time truncated to whole seconds."""
    return datetime.now().replace(microsecond=0)

"""
Base types for set schemes.

A SetScheme expands a base weight into concrete sets.  Fixed-count
schemes return every set up front.  Variable-count schemes (MRS,
FatigueDrop, TotalReps) return a single provisional first set and then
decide set by set, from what was actually logged, whether to continue.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, ClassVar

from ..config import DEFAULT_WORK_SET_THRESHOLD
from ..errors import InvalidParamsError
from ..models import GeneratedSet, TerminationContext
from .termination import TerminationCondition

FIXED = "FIXED"
AMRAP = "AMRAP"
GREYSKULL = "GREYSKULL"
REP_RANGE = "REP_RANGE"
RAMP = "RAMP"
MRS = "MRS"
FATIGUE_DROP = "FATIGUE_DROP"
TOTAL_REPS = "TOTAL_REPS"

EXERCISE_COMPLETE = "Exercise complete"
MAX_SETS_REACHED = "Maximum sets reached (safety limit)"


@dataclass(frozen=True)
class SetGenerationContext:
    work_set_threshold: float = DEFAULT_WORK_SET_THRESHOLD  # % of base weight


@dataclass(frozen=True)
class NextSetDecision:
    """Outcome of asking a variable scheme for the next set."""

    next_set: GeneratedSet | None
    should_continue: bool
    termination_reason: str = ""


def require_positive_int(value: int, name: str, minimum: int = 1) -> None:
    if value < minimum:
        raise InvalidParamsError(f"{name} must be >= {minimum}, got {value}")


class SetScheme(ABC):
    """Interface shared by every set scheme variant."""

    type_name: ClassVar[str]

    @abstractmethod
    def generate_sets(self, base_weight: float, ctx: SetGenerationContext) -> list[GeneratedSet]:
        """Return the sets to prescribe for *base_weight*."""

    @abstractmethod
    def validate(self) -> None:
        """Raise InvalidParamsError if the configuration is invalid."""

    @abstractmethod
    def to_dict(self) -> dict[str, Any]:
        """Serialize to a camelCase dict including the ``type`` discriminator."""

    def is_variable_count(self) -> bool:
        return False


class VariableSetScheme(SetScheme):
    """A scheme whose set count is decided at runtime from logged performance."""

    def is_variable_count(self) -> bool:
        return True

    @abstractmethod
    def termination_condition(self) -> TerminationCondition:
        """The primary stop condition (total reps or RPE threshold)."""

    @abstractmethod
    def generate_next_set(
        self,
        ctx: SetGenerationContext,
        history: list[GeneratedSet],
        term_ctx: TerminationContext,
    ) -> tuple[GeneratedSet | None, bool]:
        """Return (next set, True) to continue or (None, False) to stop."""

    @abstractmethod
    def termination_reason(self, term_ctx: TerminationContext, history: list[GeneratedSet]) -> str:
        """Human-readable reason for stopping."""

    @abstractmethod
    def per_set_target_reps(self) -> int:
        """Rep target used for rep-failure checks."""

    def decide_next_set(
        self,
        ctx: SetGenerationContext,
        history: list[GeneratedSet],
        term_ctx: TerminationContext,
    ) -> NextSetDecision:
        next_set, should_continue = self.generate_next_set(ctx, history, term_ctx)
        if should_continue:
            return NextSetDecision(next_set=next_set, should_continue=True)
        return NextSetDecision(
            next_set=None,
            should_continue=False,
            termination_reason=self.termination_reason(term_ctx, history),
        )

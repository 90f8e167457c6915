"""
Total-reps scheme: accumulate a rep total in as many sets as it takes.

Unlike MRS there is no per-set minimum; a set of any size counts.
"""

from dataclasses import dataclass
from typing import Any, ClassVar

from ..config import TOTAL_REPS_DEFAULT_MAX_SETS, TOTAL_REPS_DEFAULT_SUGGESTED_REPS
from ..factory import require
from ..models import GeneratedSet, TerminationContext
from .base import (
    EXERCISE_COMPLETE,
    MAX_SETS_REACHED,
    TOTAL_REPS,
    SetGenerationContext,
    VariableSetScheme,
    require_positive_int,
)
from .termination import TerminationCondition, TotalRepsReached


@dataclass
class TotalRepsScheme(VariableSetScheme):
    type_name: ClassVar[str] = TOTAL_REPS

    target_total_reps: int
    suggested_reps: int = TOTAL_REPS_DEFAULT_SUGGESTED_REPS
    max_sets: int = TOTAL_REPS_DEFAULT_MAX_SETS

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        require_positive_int(self.target_total_reps, "target total reps")
        require_positive_int(self.suggested_reps, "suggested reps")
        require_positive_int(self.max_sets, "max sets")

    def generate_sets(self, base_weight: float, ctx: SetGenerationContext) -> list[GeneratedSet]:
        self.validate()
        return [
            GeneratedSet(
                set_number=1,
                weight=base_weight,
                target_reps=self.suggested_reps,
                is_provisional=True,
            )
        ]

    def termination_condition(self) -> TerminationCondition:
        return TotalRepsReached(self.target_total_reps)

    def per_set_target_reps(self) -> int:
        return self.suggested_reps

    def generate_next_set(
        self,
        ctx: SetGenerationContext,
        history: list[GeneratedSet],
        term_ctx: TerminationContext,
    ) -> tuple[GeneratedSet | None, bool]:
        if self.termination_condition().should_terminate(term_ctx):
            return None, False
        if term_ctx.total_sets >= self.max_sets:
            return None, False
        if not history:
            return None, False
        return (
            GeneratedSet(
                set_number=term_ctx.total_sets + 1,
                weight=history[0].weight,
                target_reps=self.suggested_reps,
                is_provisional=True,
            ),
            True,
        )

    def termination_reason(self, term_ctx: TerminationContext, history: list[GeneratedSet]) -> str:
        if term_ctx.total_reps >= self.target_total_reps:
            return f"Target total reps reached ({term_ctx.total_reps}/{self.target_total_reps})"
        if term_ctx.total_sets >= self.max_sets:
            return MAX_SETS_REACHED
        return EXERCISE_COMPLETE

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type_name,
            "targetTotalReps": self.target_total_reps,
            "suggestedReps": self.suggested_reps,
            "maxSets": self.max_sets,
        }

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "TotalRepsScheme":
        return cls(
            target_total_reps=int(require(payload, "targetTotalReps")),
            suggested_reps=int(payload.get("suggestedReps") or TOTAL_REPS_DEFAULT_SUGGESTED_REPS),
            max_sets=int(payload.get("maxSets") or TOTAL_REPS_DEFAULT_MAX_SETS),
        )

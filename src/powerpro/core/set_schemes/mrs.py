"""
Max-rep sets (MRS): repeat sets at one weight until a rep total is reached.

Every set targets at least min_reps_per_set.  The exercise stops when the
total reaches the target, when a set falls below the minimum, or when the
set cap is hit.

Example:
    target 25, min 3, logged [10, 8, 6, 4] → 28 reps, target reached
"""

import logging
from dataclasses import dataclass
from typing import Any, ClassVar

from ..config import MRS_DEFAULT_MAX_SETS
from ..errors import InvalidParamsError
from ..factory import require
from ..models import GeneratedSet, TerminationContext
from .base import (
    EXERCISE_COMPLETE,
    MAX_SETS_REACHED,
    MRS,
    SetGenerationContext,
    VariableSetScheme,
    require_positive_int,
)
from .termination import TerminationCondition, TotalRepsReached

logger = logging.getLogger(__name__)


@dataclass
class MRSScheme(VariableSetScheme):
    type_name: ClassVar[str] = MRS

    target_total_reps: int
    min_reps_per_set: int
    max_reps_per_set: int = 0  # advisory ceiling; 0 = none
    num_sets: int = MRS_DEFAULT_MAX_SETS  # safety cap

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        require_positive_int(self.target_total_reps, "target total reps")
        require_positive_int(self.min_reps_per_set, "min reps per set")
        if self.target_total_reps < self.min_reps_per_set:
            raise InvalidParamsError(
                f"target total reps ({self.target_total_reps}) must be >= "
                f"min reps per set ({self.min_reps_per_set})"
            )
        if self.max_reps_per_set and self.max_reps_per_set < self.min_reps_per_set:
            raise InvalidParamsError(
                f"max reps per set ({self.max_reps_per_set}) must be >= "
                f"min reps per set ({self.min_reps_per_set})"
            )
        require_positive_int(self.num_sets, "num sets")

    def generate_sets(self, base_weight: float, ctx: SetGenerationContext) -> list[GeneratedSet]:
        self.validate()
        return [
            GeneratedSet(
                set_number=1,
                weight=base_weight,
                target_reps=self.min_reps_per_set,
                is_provisional=True,
            )
        ]

    def termination_condition(self) -> TerminationCondition:
        return TotalRepsReached(self.target_total_reps)

    def per_set_target_reps(self) -> int:
        return self.min_reps_per_set

    def _failed_minimum(self, term_ctx: TerminationContext) -> bool:
        return term_ctx.total_sets > 0 and term_ctx.last_reps < self.min_reps_per_set

    def generate_next_set(
        self,
        ctx: SetGenerationContext,
        history: list[GeneratedSet],
        term_ctx: TerminationContext,
    ) -> tuple[GeneratedSet | None, bool]:
        if self.termination_condition().should_terminate(term_ctx):
            return None, False
        if self._failed_minimum(term_ctx):
            return None, False
        if term_ctx.total_sets >= self.num_sets:
            return None, False
        if not history:
            return None, False

        next_set = GeneratedSet(
            set_number=term_ctx.total_sets + 1,
            weight=history[0].weight,
            target_reps=self.min_reps_per_set,
            is_provisional=True,
        )
        logger.debug("mrs: %d/%d reps, next set %d", term_ctx.total_reps,
                     self.target_total_reps, next_set.set_number)
        return next_set, True

    def termination_reason(self, term_ctx: TerminationContext, history: list[GeneratedSet]) -> str:
        if term_ctx.total_reps >= self.target_total_reps:
            return f"Target total reps reached ({term_ctx.total_reps}/{self.target_total_reps})"
        if self._failed_minimum(term_ctx):
            return f"Failed to hit minimum reps ({term_ctx.last_reps}/{self.min_reps_per_set})"
        if term_ctx.total_sets >= self.num_sets:
            return MAX_SETS_REACHED
        return EXERCISE_COMPLETE

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type_name,
            "targetTotalReps": self.target_total_reps,
            "minRepsPerSet": self.min_reps_per_set,
            "maxRepsPerSet": self.max_reps_per_set,
            "numSets": self.num_sets,
        }

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "MRSScheme":
        return cls(
            target_total_reps=int(require(payload, "targetTotalReps")),
            min_reps_per_set=int(require(payload, "minRepsPerSet")),
            max_reps_per_set=int(payload.get("maxRepsPerSet") or 0),
            num_sets=int(payload.get("numSets") or MRS_DEFAULT_MAX_SETS),
        )

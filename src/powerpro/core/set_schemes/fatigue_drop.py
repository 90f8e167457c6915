"""
Fatigue drop sets: keep dropping the weight until RPE reaches a ceiling.

Each next set is the previous weight × (1 − drop_percent), rounded down
to the rounding increment.

Example:
    300, drop 5% → 285 → 270 → 255 ... until a set is logged at stop RPE
"""

import logging
from dataclasses import dataclass
from typing import Any, ClassVar

from ..config import (
    DEFAULT_ROUNDING_INCREMENT,
    FATIGUE_DROP_DEFAULT_MAX_SETS,
    MAX_LOGGED_RPE,
    MIN_LOGGED_RPE,
)
from ..errors import InvalidParamsError
from ..factory import require
from ..models import GeneratedSet, TerminationContext
from ..rounding import round_weight_down
from .base import (
    EXERCISE_COMPLETE,
    FATIGUE_DROP,
    MAX_SETS_REACHED,
    SetGenerationContext,
    VariableSetScheme,
    require_positive_int,
)
from .termination import RPEThreshold, TerminationCondition

logger = logging.getLogger(__name__)

WEIGHT_DROPPED_TO_ZERO = "Weight dropped to zero"


@dataclass
class FatigueDrop(VariableSetScheme):
    type_name: ClassVar[str] = FATIGUE_DROP

    reps: int
    start_rpe: float
    stop_rpe: float
    drop_percent: float  # fraction, 0-1
    max_sets: int = FATIGUE_DROP_DEFAULT_MAX_SETS
    rounding_increment: float = DEFAULT_ROUNDING_INCREMENT

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        require_positive_int(self.reps, "reps")
        for name, rpe in (("start RPE", self.start_rpe), ("stop RPE", self.stop_rpe)):
            if not MIN_LOGGED_RPE <= rpe <= MAX_LOGGED_RPE:
                raise InvalidParamsError(f"{name} must be between 1 and 10, got {rpe}")
        if self.stop_rpe <= self.start_rpe:
            raise InvalidParamsError(
                f"stop RPE ({self.stop_rpe}) must be greater than start RPE ({self.start_rpe})"
            )
        if not 0.0 <= self.drop_percent <= 1.0:
            raise InvalidParamsError(
                f"drop percent must be between 0 and 1, got {self.drop_percent}"
            )
        require_positive_int(self.max_sets, "max sets")
        if self.rounding_increment <= 0:
            raise InvalidParamsError(
                f"rounding increment must be positive, got {self.rounding_increment}"
            )

    def generate_sets(self, base_weight: float, ctx: SetGenerationContext) -> list[GeneratedSet]:
        self.validate()
        return [
            GeneratedSet(set_number=1, weight=base_weight, target_reps=self.reps, is_provisional=True)
        ]

    def termination_condition(self) -> TerminationCondition:
        return RPEThreshold(self.stop_rpe)

    def per_set_target_reps(self) -> int:
        return self.reps

    def next_weight(self, last_weight: float) -> float:
        return round_weight_down(last_weight * (1 - self.drop_percent), self.rounding_increment)

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

        weight = self.next_weight(history[-1].weight)
        if weight <= 0:
            return None, False

        logger.debug("fatigue_drop: %.1f -> %.1f", history[-1].weight, weight)
        return (
            GeneratedSet(
                set_number=term_ctx.total_sets + 1,
                weight=weight,
                target_reps=self.reps,
                is_provisional=True,
            ),
            True,
        )

    def termination_reason(self, term_ctx: TerminationContext, history: list[GeneratedSet]) -> str:
        if term_ctx.last_rpe is not None and term_ctx.last_rpe >= self.stop_rpe:
            return f"Target RPE reached ({term_ctx.last_rpe:.1f}/{self.stop_rpe:.1f})"
        if history and self.next_weight(history[-1].weight) <= 0:
            return WEIGHT_DROPPED_TO_ZERO
        if term_ctx.total_sets >= self.max_sets:
            return MAX_SETS_REACHED
        return EXERCISE_COMPLETE

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type_name,
            "reps": self.reps,
            "startRpe": self.start_rpe,
            "stopRpe": self.stop_rpe,
            "dropPercent": self.drop_percent,
            "maxSets": self.max_sets,
            "roundingIncrement": self.rounding_increment,
        }

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "FatigueDrop":
        return cls(
            reps=int(require(payload, "reps")),
            start_rpe=float(require(payload, "startRpe")),
            stop_rpe=float(require(payload, "stopRpe")),
            drop_percent=float(require(payload, "dropPercent")),
            max_sets=int(payload.get("maxSets") or FATIGUE_DROP_DEFAULT_MAX_SETS),
            rounding_increment=float(payload.get("roundingIncrement") or DEFAULT_ROUNDING_INCREMENT),
        )

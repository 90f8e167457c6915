"""
GreySkull LP progression, evaluated after the AMRAP set.

    reps < min_reps                      → deload by deload_percent
    min_reps <= reps < double_threshold  → +weight_increment
    reps >= double_threshold             → +2 × weight_increment

Example (135, +2.5, min 5, double 10):
    3 reps → 121.5, 7 reps → 137.5, 10 reps → 140.0
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, ClassVar

from ..config import (
    GREYSKULL_ACCESSORY_INCREMENT,
    GREYSKULL_DEFAULT_DELOAD,
    GREYSKULL_MAIN_INCREMENT,
)
from ..errors import InvalidParamsError
from ..factory import require
from ..models import AFTER_SET, TRAINING_MAX
from .base import (
    GREYSKULL_PROGRESSION,
    Progression,
    ProgressionContext,
    ProgressionResult,
    applied,
    not_applied,
)


@dataclass
class GreySkullProgression(Progression):
    type_name: ClassVar[str] = GREYSKULL_PROGRESSION

    id: str
    name: str
    weight_increment: float
    min_reps: int
    double_threshold: int
    deload_percent: float
    max_type: str

    def __post_init__(self) -> None:
        self.validate()

    def trigger_type(self) -> str:
        return AFTER_SET

    def validate(self) -> None:
        self.validate_identity()
        if self.weight_increment <= 0:
            raise InvalidParamsError("weightIncrement must be positive")
        if self.min_reps < 1:
            raise InvalidParamsError("minReps must be at least 1")
        if self.double_threshold <= self.min_reps:
            raise InvalidParamsError("doubleThreshold must be greater than minReps")
        if not 0 < self.deload_percent <= 1:
            raise InvalidParamsError(
                "deloadPercent must be between 0 (exclusive) and 1 (inclusive)"
            )

    def _evaluate(self, ctx: ProgressionContext, now: datetime) -> ProgressionResult:
        event = ctx.trigger_event
        if not event.is_amrap:
            return not_applied(ctx, now, "set is not marked as AMRAP")
        if event.reps_performed is None:
            return not_applied(ctx, now, "reps performed not provided")

        reps = event.reps_performed
        if reps < self.min_reps:
            return applied(ctx, now, -ctx.current_value * self.deload_percent)
        if reps >= self.double_threshold:
            return applied(ctx, now, self.weight_increment * 2)
        return applied(ctx, now, self.weight_increment)

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.identity_dict(),
            "weightIncrement": self.weight_increment,
            "minReps": self.min_reps,
            "doubleThreshold": self.double_threshold,
            "deloadPercent": self.deload_percent,
        }

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "GreySkullProgression":
        return cls(
            id=require(payload, "id"),
            name=require(payload, "name"),
            weight_increment=float(require(payload, "weightIncrement")),
            min_reps=int(require(payload, "minReps")),
            double_threshold=int(require(payload, "doubleThreshold")),
            deload_percent=float(require(payload, "deloadPercent")),
            max_type=require(payload, "maxType"),
        )


def greyskull_main_lift(
    id: str,
    name: str,
    weight_increment: float = GREYSKULL_MAIN_INCREMENT,
    max_type: str = TRAINING_MAX,
) -> GreySkullProgression:
    """Main lifts: 5+ reps to progress, 10+ to double up."""
    return GreySkullProgression(id, name, weight_increment, 5, 10, GREYSKULL_DEFAULT_DELOAD, max_type)


def greyskull_accessory(
    id: str,
    name: str,
    weight_increment: float = GREYSKULL_ACCESSORY_INCREMENT,
    max_type: str = TRAINING_MAX,
) -> GreySkullProgression:
    """Accessories: 10+ reps to progress, 15+ to double up."""
    return GreySkullProgression(id, name, weight_increment, 10, 15, GREYSKULL_DEFAULT_DELOAD, max_type)

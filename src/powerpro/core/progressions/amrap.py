"""
AMRAP-threshold progression: the more reps on the AMRAP set, the bigger the jump.

Thresholds are sorted by min_reps ascending; the highest one met applies.

Example (thresholds 5→+5, 8→+10):
    7 reps → +5, 9 reps → +10, 3 reps → not applied
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, ClassVar

from ..errors import InvalidParamsError
from ..factory import require
from ..models import AFTER_SET
from .base import (
    AMRAP_PROGRESSION,
    Progression,
    ProgressionContext,
    ProgressionResult,
    applied,
    not_applied,
)


@dataclass(frozen=True)
class RepsThreshold:
    min_reps: int
    increment: float


@dataclass
class AMRAPProgression(Progression):
    type_name: ClassVar[str] = AMRAP_PROGRESSION

    id: str
    name: str
    max_type: str
    thresholds: list[RepsThreshold] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.validate()

    def trigger_type(self) -> str:
        return AFTER_SET

    def validate(self) -> None:
        self.validate_identity()
        if not self.thresholds:
            raise InvalidParamsError("at least one threshold is required")
        for i, t in enumerate(self.thresholds):
            if t.min_reps < 0:
                raise InvalidParamsError(f"threshold[{i}].minReps must be non-negative")
            if t.increment <= 0:
                raise InvalidParamsError(f"threshold[{i}].increment must be positive")
            if i > 0 and t.min_reps <= self.thresholds[i - 1].min_reps:
                raise InvalidParamsError("thresholds must be sorted by minReps ascending")

    def _evaluate(self, ctx: ProgressionContext, now: datetime) -> ProgressionResult:
        event = ctx.trigger_event
        if not event.is_amrap:
            return not_applied(ctx, now, "set is not marked as AMRAP")
        if event.reps_performed is None:
            return not_applied(ctx, now, "reps performed not provided")

        reps = event.reps_performed
        for t in reversed(self.thresholds):
            if reps >= t.min_reps:
                return applied(ctx, now, t.increment)
        return not_applied(
            ctx, now,
            f"no threshold met: reps={reps}, minimum required={self.thresholds[0].min_reps}",
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.identity_dict(),
            "triggerType": AFTER_SET,
            "thresholds": [{"minReps": t.min_reps, "increment": t.increment} for t in self.thresholds],
        }

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "AMRAPProgression":
        trigger = payload.get("triggerType", AFTER_SET)
        if trigger != AFTER_SET:
            raise InvalidParamsError("AMRAP progression requires AFTER_SET trigger type")
        return cls(
            id=require(payload, "id"),
            name=require(payload, "name"),
            max_type=require(payload, "maxType"),
            thresholds=[
                RepsThreshold(int(require(t, "minReps")), float(require(t, "increment")))
                for t in require(payload, "thresholds")
            ],
        )

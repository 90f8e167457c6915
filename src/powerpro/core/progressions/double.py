"""
Double progression: grow reps up to a ceiling, then add weight.

Typical with rep-range schemes such as 3x8-12.  The lifter adds reps each
session at the same weight; once a set reaches the ceiling (the event's
max_reps) the weight goes up and the scheme drops back to the bottom of
the range.  Resetting the reps is the set scheme's job; this progression
only decides the weight jump.

Example (increment 5, ceiling 12):
    12 reps → +5, 13 reps → +5, 11 reps → not applied
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, ClassVar

from ..errors import InvalidParamsError
from ..factory import require
from ..models import AFTER_SET
from .base import (
    DOUBLE_PROGRESSION,
    Progression,
    ProgressionContext,
    ProgressionResult,
    applied,
    not_applied,
    validate_trigger_type,
)


@dataclass
class DoubleProgression(Progression):
    type_name: ClassVar[str] = DOUBLE_PROGRESSION

    id: str
    name: str
    weight_increment: float
    max_type: str
    trigger: str = AFTER_SET

    def __post_init__(self) -> None:
        self.validate()

    def trigger_type(self) -> str:
        return self.trigger

    def validate(self) -> None:
        self.validate_identity()
        if self.weight_increment <= 0:
            raise InvalidParamsError(
                f"weight increment must be positive, got {self.weight_increment}"
            )
        validate_trigger_type(self.trigger)
        if self.trigger != AFTER_SET:
            raise InvalidParamsError("double progression requires AFTER_SET trigger type")

    def _evaluate(self, ctx: ProgressionContext, now: datetime) -> ProgressionResult:
        event = ctx.trigger_event
        if event.reps_performed is None:
            return not_applied(ctx, now, "reps performed not provided")
        if event.max_reps is None:
            return not_applied(ctx, now, "max reps (ceiling) not provided")

        if event.reps_performed >= event.max_reps:
            return applied(ctx, now, self.weight_increment)
        return not_applied(
            ctx, now,
            f"rep ceiling not reached: performed {event.reps_performed}, need {event.max_reps}",
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.identity_dict(),
            "weightIncrement": self.weight_increment,
            "triggerType": self.trigger,
        }

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "DoubleProgression":
        return cls(
            id=require(payload, "id"),
            name=require(payload, "name"),
            weight_increment=float(require(payload, "weightIncrement")),
            max_type=require(payload, "maxType"),
            trigger=payload.get("triggerType", AFTER_SET),
        )

"""Linear progression: add a fixed increment after every session or week."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, ClassVar

from ..errors import InvalidParamsError
from ..factory import require
from ..models import AFTER_SESSION, AFTER_WEEK
from .base import (
    LINEAR_PROGRESSION,
    Progression,
    ProgressionContext,
    ProgressionResult,
    applied,
    not_applied,
    validate_trigger_type,
)


@dataclass
class LinearProgression(Progression):
    """
    +increment per trigger.

    With an AFTER_SESSION trigger the lift must be among the lifts performed
    in that session (an empty list means "unknown" and allows the increment).
    """

    type_name: ClassVar[str] = LINEAR_PROGRESSION

    id: str
    name: str
    increment: float
    max_type: str
    trigger: str = AFTER_SESSION

    def __post_init__(self) -> None:
        self.validate()

    def trigger_type(self) -> str:
        return self.trigger

    def validate(self) -> None:
        self.validate_identity()
        if self.increment <= 0:
            raise InvalidParamsError(f"increment must be positive, got {self.increment}")
        validate_trigger_type(self.trigger)
        if self.trigger not in (AFTER_SESSION, AFTER_WEEK):
            raise InvalidParamsError(
                "linear progression only supports AFTER_SESSION and AFTER_WEEK triggers"
            )

    def _evaluate(self, ctx: ProgressionContext, now: datetime) -> ProgressionResult:
        performed = ctx.trigger_event.lifts_performed
        if self.trigger == AFTER_SESSION and performed and ctx.lift_id not in performed:
            return not_applied(ctx, now, f"lift {ctx.lift_id} was not performed in this session")
        return applied(ctx, now, self.increment)

    def to_dict(self) -> dict[str, Any]:
        return {**self.identity_dict(), "increment": self.increment, "triggerType": self.trigger}

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "LinearProgression":
        return cls(
            id=require(payload, "id"),
            name=require(payload, "name"),
            increment=float(require(payload, "increment")),
            max_type=require(payload, "maxType"),
            trigger=require(payload, "triggerType"),
        )

"""
Deload on failure: cut the max after N consecutive failed sessions.

The consecutive-failure count comes from the trigger event (the caller
reads it from the FailureCounter).

Example:
    threshold 3, 10% deload, TM 200, 3 failures → 180
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, ClassVar

from ..errors import InvalidParamsError
from ..factory import optional_bool, require
from ..models import ON_FAILURE
from .base import (
    DELOAD_ON_FAILURE,
    Progression,
    ProgressionContext,
    ProgressionResult,
    applied,
    not_applied,
)

DELOAD_PERCENT = "percent"
DELOAD_FIXED = "fixed"


@dataclass
class DeloadOnFailure(Progression):
    type_name: ClassVar[str] = DELOAD_ON_FAILURE

    id: str
    name: str
    failure_threshold: int
    deload_type: str
    max_type: str
    deload_percent: float = 0.0
    deload_amount: float = 0.0
    reset_on_deload: bool = True

    def __post_init__(self) -> None:
        self.validate()

    def trigger_type(self) -> str:
        return ON_FAILURE

    def validate(self) -> None:
        self.validate_identity()
        if self.failure_threshold < 1:
            raise InvalidParamsError("failureThreshold must be at least 1")
        if self.deload_type == DELOAD_PERCENT:
            if not 0 < self.deload_percent <= 1:
                raise InvalidParamsError(
                    "deloadPercent must be between 0 (exclusive) and 1 (inclusive)"
                )
        elif self.deload_type == DELOAD_FIXED:
            if self.deload_amount <= 0:
                raise InvalidParamsError("deloadAmount must be positive for fixed deload type")
        else:
            raise InvalidParamsError(
                f"deloadType must be 'percent' or 'fixed', got {self.deload_type!r}"
            )

    def should_reset_failure_counter(self) -> bool:
        return self.reset_on_deload

    def _evaluate(self, ctx: ProgressionContext, now: datetime) -> ProgressionResult:
        failures = ctx.trigger_event.consecutive_failures
        if failures is None:
            return not_applied(ctx, now, "consecutiveFailures not provided in trigger event")
        if failures < self.failure_threshold:
            return not_applied(
                ctx, now,
                f"failure threshold not met: {failures} consecutive failures, "
                f"threshold is {self.failure_threshold}",
            )

        if self.deload_type == DELOAD_PERCENT:
            amount = ctx.current_value * self.deload_percent
        else:
            amount = self.deload_amount
        return applied(ctx, now, -amount)

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.identity_dict(),
            "failureThreshold": self.failure_threshold,
            "deloadType": self.deload_type,
            "deloadPercent": self.deload_percent,
            "deloadAmount": self.deload_amount,
            "resetOnDeload": self.reset_on_deload,
        }

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "DeloadOnFailure":
        return cls(
            id=require(payload, "id"),
            name=require(payload, "name"),
            failure_threshold=int(require(payload, "failureThreshold")),
            deload_type=require(payload, "deloadType"),
            max_type=require(payload, "maxType"),
            deload_percent=float(payload.get("deloadPercent") or 0.0),
            deload_amount=float(payload.get("deloadAmount") or 0.0),
            reset_on_deload=optional_bool(payload, "resetOnDeload", True),
        )

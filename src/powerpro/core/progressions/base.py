"""
Base types for progressions.

A progression reacts to a trigger event (after a set, session, week or
cycle, or on failure) by computing a new max value for one lift.  A
mismatched trigger or max type is not an error: the result comes back
with applied=False and a reason.  An invalid context raises.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, ClassVar

from ..errors import InvalidParamsError
from ..models import MAX_TYPES, TRIGGER_TYPES, now_timestamp

logger = logging.getLogger(__name__)

LINEAR_PROGRESSION = "LINEAR_PROGRESSION"
CYCLE_PROGRESSION = "CYCLE_PROGRESSION"
AMRAP_PROGRESSION = "AMRAP_PROGRESSION"
DELOAD_ON_FAILURE = "DELOAD_ON_FAILURE"
STAGE_PROGRESSION = "STAGE_PROGRESSION"
GREYSKULL_PROGRESSION = "GREYSKULL_PROGRESSION"
DOUBLE_PROGRESSION = "DOUBLE_PROGRESSION"


def validate_max_type(max_type: str) -> None:
    if not max_type:
        raise InvalidParamsError("max type is required")
    if max_type not in MAX_TYPES:
        raise InvalidParamsError(f"unknown max type: {max_type}")


def validate_trigger_type(trigger_type: str) -> None:
    if not trigger_type:
        raise InvalidParamsError("trigger type is required")
    if trigger_type not in TRIGGER_TYPES:
        raise InvalidParamsError(f"unknown trigger type: {trigger_type}")


@dataclass
class TriggerEvent:
    """What just happened in training; optional fields depend on the trigger."""

    type: str
    timestamp: datetime = field(default_factory=now_timestamp)
    session_id: str | None = None
    week_number: int | None = None
    cycle_iteration: int | None = None
    day_slug: str | None = None
    lifts_performed: list[str] = field(default_factory=list)
    reps_performed: int | None = None
    max_reps: int | None = None
    is_amrap: bool = False
    set_weight: float | None = None
    consecutive_failures: int | None = None

    def validate(self) -> None:
        validate_trigger_type(self.type)
        if self.timestamp is None:
            raise InvalidParamsError("trigger timestamp is required")


@dataclass
class ProgressionContext:
    user_id: str
    lift_id: str
    max_type: str
    current_value: float
    trigger_event: TriggerEvent

    def validate(self) -> None:
        if not self.user_id:
            raise InvalidParamsError("user id is required")
        if not self.lift_id:
            raise InvalidParamsError("lift id is required")
        validate_max_type(self.max_type)
        if self.current_value <= 0:
            raise InvalidParamsError(f"current value must be positive, got {self.current_value}")
        if self.trigger_event is None:
            raise InvalidParamsError("trigger event is required")
        try:
            self.trigger_event.validate()
        except InvalidParamsError as exc:
            raise InvalidParamsError(f"invalid trigger event: {exc}") from exc


@dataclass
class ProgressionResult:
    applied: bool
    previous_value: float
    new_value: float
    delta: float
    lift_id: str
    max_type: str
    applied_at: datetime
    reason: str = ""


def not_applied(ctx: ProgressionContext, now: datetime, reason: str) -> ProgressionResult:
    return ProgressionResult(
        applied=False,
        previous_value=ctx.current_value,
        new_value=ctx.current_value,
        delta=0.0,
        lift_id=ctx.lift_id,
        max_type=ctx.max_type,
        applied_at=now,
        reason=reason,
    )


def applied(ctx: ProgressionContext, now: datetime, delta: float) -> ProgressionResult:
    """Apply *delta* to the current value; the new value never drops below zero."""
    new_value = ctx.current_value + delta
    if new_value < 0:
        new_value = 0.0
        delta = -ctx.current_value
    return ProgressionResult(
        applied=True,
        previous_value=ctx.current_value,
        new_value=new_value,
        delta=delta,
        lift_id=ctx.lift_id,
        max_type=ctx.max_type,
        applied_at=now,
    )


class Progression(ABC):
    """
    Interface shared by every progression variant.

    Subclasses implement trigger_type() and _evaluate(); apply() handles
    context validation and the trigger / max type checks common to all.
    """

    type_name: ClassVar[str]

    id: str
    name: str
    max_type: str

    @abstractmethod
    def trigger_type(self) -> str:
        ...

    @abstractmethod
    def validate(self) -> None:
        ...

    @abstractmethod
    def to_dict(self) -> dict[str, Any]:
        ...

    @abstractmethod
    def _evaluate(self, ctx: ProgressionContext, now: datetime) -> ProgressionResult:
        ...

    def validate_identity(self) -> None:
        if not self.id:
            raise InvalidParamsError(f"{self.type_name}: id is required")
        if not self.name:
            raise InvalidParamsError(f"{self.type_name}: name is required")
        validate_max_type(self.max_type)

    def should_reset_failure_counter(self) -> bool:
        return False

    def precheck(self, ctx: ProgressionContext) -> tuple[datetime, ProgressionResult | None]:
        """
        Validate *ctx* and run the trigger / max type checks.

        Returns:
            (timestamp, None) when the progression should be evaluated, or
            (timestamp, not-applied result) when it should not

        Raises:
            InvalidParamsError: If the context is invalid
        """
        ctx.validate()
        now = now_timestamp()

        expected = self.trigger_type()
        if ctx.trigger_event.type != expected:
            return now, not_applied(
                ctx, now, f"trigger type mismatch: expected {expected}, got {ctx.trigger_event.type}"
            )
        if ctx.max_type != self.max_type:
            return now, not_applied(
                ctx, now, f"max type mismatch: expected {self.max_type}, got {ctx.max_type}"
            )
        return now, None

    def apply(self, ctx: ProgressionContext) -> ProgressionResult:
        """Evaluate the progression for one trigger event."""
        now, skipped = self.precheck(ctx)
        result = skipped if skipped is not None else self._evaluate(ctx, now)
        logger.debug(
            "%s %s/%s: applied=%s %.2f -> %.2f %s",
            self.type_name, ctx.user_id, ctx.lift_id, result.applied,
            result.previous_value, result.new_value, result.reason,
        )
        return result

    def identity_dict(self) -> dict[str, Any]:
        return {"type": self.type_name, "id": self.id, "name": self.name, "maxType": self.max_type}

"""Cycle progression: add an increment once per completed cycle (5/3/1 style)."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, ClassVar

from ..errors import InvalidParamsError
from ..factory import require
from ..models import AFTER_CYCLE
from .base import CYCLE_PROGRESSION, Progression, ProgressionContext, ProgressionResult, applied


@dataclass
class CycleProgression(Progression):
    type_name: ClassVar[str] = CYCLE_PROGRESSION

    id: str
    name: str
    increment: float
    max_type: str

    def __post_init__(self) -> None:
        self.validate()

    def trigger_type(self) -> str:
        return AFTER_CYCLE

    def validate(self) -> None:
        self.validate_identity()
        if self.increment <= 0:
            raise InvalidParamsError(f"increment must be positive, got {self.increment}")

    def _evaluate(self, ctx: ProgressionContext, now: datetime) -> ProgressionResult:
        return applied(ctx, now, self.increment)

    def apply_with_override(
        self, ctx: ProgressionContext, override_increment: float | None = None
    ) -> ProgressionResult:
        """Apply with a one-off increment in place of the configured one."""
        if override_increment is None:
            return self.apply(ctx)
        if override_increment <= 0:
            raise InvalidParamsError(f"increment must be positive, got {override_increment}")
        now, skipped = self.precheck(ctx)
        if skipped is not None:
            return skipped
        return applied(ctx, now, override_increment)

    def to_dict(self) -> dict[str, Any]:
        return {**self.identity_dict(), "increment": self.increment}

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "CycleProgression":
        return cls(
            id=require(payload, "id"),
            name=require(payload, "name"),
            increment=float(require(payload, "increment")),
            max_type=require(payload, "maxType"),
        )

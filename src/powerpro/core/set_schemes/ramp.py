"""
Ramp set scheme: warm-up and work sets at increasing percentages of base.

Steps at or above the work-set threshold are marked as work sets.  The
scheme's own threshold wins; without one, the generation context's
threshold (default 80% of base) applies.  Ramp weights are not rounded.
"""

from dataclasses import dataclass, field
from typing import Any, ClassVar

from ..errors import InvalidParamsError
from ..factory import require
from ..models import GeneratedSet
from .base import RAMP, SetGenerationContext, SetScheme


@dataclass(frozen=True)
class RampStep:
    percentage: float
    reps: int


@dataclass
class Ramp(SetScheme):
    type_name: ClassVar[str] = RAMP

    steps: list[RampStep] = field(default_factory=list)
    work_set_threshold: float | None = None

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        if not self.steps:
            raise InvalidParamsError("ramp needs at least one step")
        if self.work_set_threshold is not None and not 0 < self.work_set_threshold <= 100:
            raise InvalidParamsError(
                f"work set threshold must be in (0, 100], got {self.work_set_threshold}"
            )
        for i, step in enumerate(self.steps, start=1):
            if step.percentage <= 0:
                raise InvalidParamsError(f"step {i} percentage must be > 0, got {step.percentage}")
            if step.reps < 1:
                raise InvalidParamsError(f"step {i} reps must be >= 1, got {step.reps}")

    def generate_sets(self, base_weight: float, ctx: SetGenerationContext) -> list[GeneratedSet]:
        self.validate()
        threshold = (
            self.work_set_threshold if self.work_set_threshold is not None else ctx.work_set_threshold
        )
        return [
            GeneratedSet(
                set_number=i,
                weight=base_weight * step.percentage / 100.0,
                target_reps=step.reps,
                is_work_set=step.percentage >= threshold,
            )
            for i, step in enumerate(self.steps, start=1)
        ]

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "type": self.type_name,
            "steps": [{"percentage": s.percentage, "reps": s.reps} for s in self.steps],
        }
        if self.work_set_threshold is not None:
            data["workSetThreshold"] = self.work_set_threshold
        return data

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "Ramp":
        steps = [
            RampStep(percentage=float(require(s, "percentage")), reps=int(require(s, "reps")))
            for s in require(payload, "steps")
        ]
        threshold = payload.get("workSetThreshold")
        return cls(steps=steps, work_set_threshold=float(threshold) if threshold else None)

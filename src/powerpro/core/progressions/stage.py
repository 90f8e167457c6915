"""
Stage progression (GZCLP style): step down through set/rep stages on failure.

Each failure moves to the next stage at the same weight.  Failing the last
stage either resets to stage 0 (optionally deloading the max) or, without
reset_on_exhaustion, asks for manual intervention.

The stage index is the only mutable state: apply() advances it in place.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, ClassVar

from ..config import GZCLP_T1_DELOAD
from ..errors import InvalidParamsError
from ..factory import optional_bool, require
from ..models import ON_FAILURE, TRAINING_MAX
from ..set_schemes import AMRAPScheme, Fixed, SetScheme
from .base import (
    STAGE_PROGRESSION,
    Progression,
    ProgressionContext,
    ProgressionResult,
    applied,
    not_applied,
)


@dataclass(frozen=True)
class Stage:
    name: str
    sets: int
    reps: int
    is_amrap: bool = False
    min_volume: int = 1

    def __post_init__(self) -> None:
        if not self.name:
            raise InvalidParamsError("stage name is required")
        if self.sets < 1:
            raise InvalidParamsError("stage sets must be at least 1")
        if self.reps < 1:
            raise InvalidParamsError("stage reps must be at least 1")
        if self.min_volume < 1:
            raise InvalidParamsError("stage minVolume must be at least 1")

    def to_set_scheme(self) -> SetScheme:
        if self.is_amrap:
            return AMRAPScheme(sets=self.sets, min_reps=self.reps)
        return Fixed(sets=self.sets, reps=self.reps)


@dataclass
class StageProgression(Progression):
    type_name: ClassVar[str] = STAGE_PROGRESSION

    id: str
    name: str
    stages: list[Stage] = field(default_factory=list)
    current_stage: int = 0
    reset_on_exhaustion: bool = True
    deload_on_reset: bool = False
    deload_percent: float = 0.0
    max_type: str = TRAINING_MAX

    def __post_init__(self) -> None:
        self.validate()

    def trigger_type(self) -> str:
        return ON_FAILURE

    def validate(self) -> None:
        self.validate_identity()
        if len(self.stages) < 2:
            raise InvalidParamsError("at least 2 stages are required")
        if not 0 <= self.current_stage < len(self.stages):
            raise InvalidParamsError(
                f"currentStage must be between 0 and {len(self.stages) - 1}"
            )
        if self.deload_on_reset:
            if not self.reset_on_exhaustion:
                raise InvalidParamsError("deloadOnReset requires resetOnExhaustion to be true")
            if not 0 < self.deload_percent <= 1:
                raise InvalidParamsError(
                    "deloadPercent must be between 0 (exclusive) and 1 (inclusive)"
                )

    def should_reset_failure_counter(self) -> bool:
        return True

    # Stage helpers

    def stage_count(self) -> int:
        return len(self.stages)

    def is_at_last_stage(self) -> bool:
        return self.current_stage == len(self.stages) - 1

    def current(self) -> Stage:
        return self.stages[self.current_stage]

    def current_set_scheme(self) -> SetScheme:
        return self.current().to_set_scheme()

    def set_current_stage(self, stage: int) -> None:
        if not 0 <= stage < len(self.stages):
            raise InvalidParamsError(
                f"stage index {stage} out of bounds [0, {len(self.stages)})"
            )
        self.current_stage = stage

    def _evaluate(self, ctx: ProgressionContext, now: datetime) -> ProgressionResult:
        if not self.is_at_last_stage():
            self.current_stage += 1
            return applied(ctx, now, 0.0)

        if not self.reset_on_exhaustion:
            return not_applied(ctx, now, "all stages exhausted; manual intervention required")

        self.current_stage = 0
        delta = -ctx.current_value * self.deload_percent if self.deload_on_reset else 0.0
        return applied(ctx, now, delta)

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.identity_dict(),
            "stages": [
                {
                    "name": s.name,
                    "sets": s.sets,
                    "reps": s.reps,
                    "isAmrap": s.is_amrap,
                    "minVolume": s.min_volume,
                }
                for s in self.stages
            ],
            "currentStage": self.current_stage,
            "resetOnExhaustion": self.reset_on_exhaustion,
            "deloadOnReset": self.deload_on_reset,
            "deloadPercent": self.deload_percent,
        }

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "StageProgression":
        stages = [
            Stage(
                name=require(s, "name"),
                sets=int(require(s, "sets")),
                reps=int(require(s, "reps")),
                is_amrap=optional_bool(s, "isAmrap", False),
                min_volume=int(s.get("minVolume") or 1),
            )
            for s in require(payload, "stages")
        ]
        return cls(
            id=require(payload, "id"),
            name=require(payload, "name"),
            stages=stages,
            current_stage=int(payload.get("currentStage", 0)),
            reset_on_exhaustion=optional_bool(payload, "resetOnExhaustion", True),
            deload_on_reset=optional_bool(payload, "deloadOnReset", False),
            deload_percent=float(payload.get("deloadPercent") or 0.0),
            max_type=require(payload, "maxType"),
        )


# =============================================================================
# GZCLP PRESETS
# =============================================================================


def gzclp_t1(id: str, name: str) -> StageProgression:
    """T1: 5x3+ → 6x2+ → 10x1+, then reset with a 15% deload."""
    return StageProgression(
        id=id,
        name=name,
        stages=[
            Stage("5x3+", sets=5, reps=3, is_amrap=True, min_volume=15),
            Stage("6x2+", sets=6, reps=2, is_amrap=True, min_volume=12),
            Stage("10x1+", sets=10, reps=1, is_amrap=True, min_volume=10),
        ],
        reset_on_exhaustion=True,
        deload_on_reset=True,
        deload_percent=GZCLP_T1_DELOAD,
        max_type=TRAINING_MAX,
    )


def gzclp_t1_modified(id: str, name: str) -> StageProgression:
    """Modified T1: 3x5+ → 4x3+ → 5x2+, then reset with a 15% deload."""
    return StageProgression(
        id=id,
        name=name,
        stages=[
            Stage("3x5+", sets=3, reps=5, is_amrap=True, min_volume=15),
            Stage("4x3+", sets=4, reps=3, is_amrap=True, min_volume=12),
            Stage("5x2+", sets=5, reps=2, is_amrap=True, min_volume=10),
        ],
        reset_on_exhaustion=True,
        deload_on_reset=True,
        deload_percent=GZCLP_T1_DELOAD,
        max_type=TRAINING_MAX,
    )


def gzclp_t2(id: str, name: str) -> StageProgression:
    """T2: 3x10 → 3x8 → 3x6, then reset without a deload."""
    return StageProgression(
        id=id,
        name=name,
        stages=[
            Stage("3x10", sets=3, reps=10, min_volume=30),
            Stage("3x8", sets=3, reps=8, min_volume=24),
            Stage("3x6", sets=3, reps=6, min_volume=18),
        ],
        reset_on_exhaustion=True,
        deload_on_reset=False,
        max_type=TRAINING_MAX,
    )

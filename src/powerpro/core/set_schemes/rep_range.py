"""Rep range sets, e.g. 3x8-12: prescribed at the bottom of the range."""

from dataclasses import dataclass
from typing import Any, ClassVar

from ..errors import InvalidParamsError
from ..factory import require
from ..models import GeneratedSet
from .base import REP_RANGE, SetGenerationContext, SetScheme, require_positive_int


@dataclass
class RepRange(SetScheme):
    type_name: ClassVar[str] = REP_RANGE

    sets: int
    min_reps: int
    max_reps: int

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        require_positive_int(self.sets, "sets")
        require_positive_int(self.min_reps, "min reps")
        if self.max_reps < self.min_reps:
            raise InvalidParamsError(
                f"max reps ({self.max_reps}) must be >= min reps ({self.min_reps})"
            )

    def generate_sets(self, base_weight: float, ctx: SetGenerationContext) -> list[GeneratedSet]:
        self.validate()
        return [
            GeneratedSet(set_number=i, weight=base_weight, target_reps=self.min_reps)
            for i in range(1, self.sets + 1)
        ]

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type_name,
            "sets": self.sets,
            "minReps": self.min_reps,
            "maxReps": self.max_reps,
        }

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "RepRange":
        return cls(
            sets=int(require(payload, "sets")),
            min_reps=int(require(payload, "minReps")),
            max_reps=int(require(payload, "maxReps")),
        )

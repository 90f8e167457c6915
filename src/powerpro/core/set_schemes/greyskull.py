"""
GreySkull LP set scheme: fixed sets followed by AMRAP sets at one weight.

Example:
    2x5 + 1x5+ → sets 1-2 target 5, set 3 targets at least 5
"""

from dataclasses import dataclass
from typing import Any, ClassVar

from ..errors import InvalidParamsError
from ..factory import require
from ..models import GeneratedSet
from .base import GREYSKULL, SetGenerationContext, SetScheme, require_positive_int


@dataclass
class GreySkullScheme(SetScheme):
    type_name: ClassVar[str] = GREYSKULL

    fixed_sets: int
    fixed_reps: int
    amrap_sets: int
    min_amrap_reps: int

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        if self.fixed_sets < 0:
            raise InvalidParamsError(f"fixed sets must be >= 0, got {self.fixed_sets}")
        if self.fixed_sets > 0:
            require_positive_int(self.fixed_reps, "fixed reps")
        require_positive_int(self.amrap_sets, "AMRAP sets")
        require_positive_int(self.min_amrap_reps, "min AMRAP reps")

    def generate_sets(self, base_weight: float, ctx: SetGenerationContext) -> list[GeneratedSet]:
        self.validate()
        sets = [
            GeneratedSet(set_number=i, weight=base_weight, target_reps=self.fixed_reps)
            for i in range(1, self.fixed_sets + 1)
        ]
        for i in range(self.amrap_sets):
            sets.append(
                GeneratedSet(
                    set_number=self.fixed_sets + i + 1,
                    weight=base_weight,
                    target_reps=self.min_amrap_reps,
                )
            )
        return sets

    def total_sets(self) -> int:
        return self.fixed_sets + self.amrap_sets

    def is_amrap_set(self, set_number: int) -> bool:
        return self.fixed_sets < set_number <= self.total_sets()

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type_name,
            "fixedSets": self.fixed_sets,
            "fixedReps": self.fixed_reps,
            "amrapSets": self.amrap_sets,
            "minAmrapReps": self.min_amrap_reps,
        }

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "GreySkullScheme":
        return cls(
            fixed_sets=int(payload.get("fixedSets", 0)),
            fixed_reps=int(payload.get("fixedReps", 0)),
            amrap_sets=int(require(payload, "amrapSets")),
            min_amrap_reps=int(require(payload, "minAmrapReps")),
        )

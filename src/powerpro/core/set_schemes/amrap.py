"""As-many-reps-as-possible sets; the rep target is a minimum."""

from dataclasses import dataclass
from typing import Any, ClassVar

from ..factory import require
from ..models import GeneratedSet
from .base import AMRAP, SetGenerationContext, SetScheme, require_positive_int


@dataclass
class AMRAPScheme(SetScheme):
    type_name: ClassVar[str] = AMRAP

    sets: int
    min_reps: int

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        require_positive_int(self.sets, "sets")
        require_positive_int(self.min_reps, "min reps")

    def generate_sets(self, base_weight: float, ctx: SetGenerationContext) -> list[GeneratedSet]:
        self.validate()
        return [
            GeneratedSet(set_number=i, weight=base_weight, target_reps=self.min_reps)
            for i in range(1, self.sets + 1)
        ]

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type_name, "sets": self.sets, "minReps": self.min_reps}

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "AMRAPScheme":
        return cls(sets=int(require(payload, "sets")), min_reps=int(require(payload, "minReps")))

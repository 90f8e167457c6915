"""Fixed sets × reps, e.g. 5x5."""

from dataclasses import dataclass
from typing import Any, ClassVar

from ..factory import require
from ..models import GeneratedSet
from .base import FIXED, SetGenerationContext, SetScheme, require_positive_int


@dataclass
class Fixed(SetScheme):
    type_name: ClassVar[str] = FIXED

    sets: int
    reps: int

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        require_positive_int(self.sets, "sets")
        require_positive_int(self.reps, "reps")

    def generate_sets(self, base_weight: float, ctx: SetGenerationContext) -> list[GeneratedSet]:
        self.validate()
        return [
            GeneratedSet(set_number=i, weight=base_weight, target_reps=self.reps)
            for i in range(1, self.sets + 1)
        ]

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type_name, "sets": self.sets, "reps": self.reps}

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "Fixed":
        return cls(sets=int(require(payload, "sets")), reps=int(require(payload, "reps")))

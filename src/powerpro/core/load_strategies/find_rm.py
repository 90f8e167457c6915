"""Find-RM load strategy: the lifter works up to a rep max and picks the weight."""

from dataclasses import dataclass
from typing import Any, ClassVar

from ..factory import require
from ..rpe_chart import validate_target_reps
from .base import FIND_RM, LoadCalculationParams, LoadStrategy


@dataclass
class FindRM(LoadStrategy):
    type_name: ClassVar[str] = FIND_RM

    target_reps: int

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        validate_target_reps(self.target_reps)

    def calculate_load(self, params: LoadCalculationParams) -> float:
        params.validate()
        self.validate()
        # No prescribed weight; 0 means "user decides"
        return 0.0

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type_name, "targetReps": self.target_reps}

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "FindRM":
        return cls(target_reps=int(require(payload, "targetReps")))

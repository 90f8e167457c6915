"""
Reusable termination conditions for variable-count set schemes.

Each condition answers one question about a TerminationContext.  They are
serializable with a ``type`` discriminator so schemes and programs can
store them as data.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, ClassVar

from ..config import MAX_LOGGED_RPE, MIN_LOGGED_RPE
from ..errors import InvalidParamsError
from ..factory import PolymorphicFactory, require
from ..models import TerminationContext

RPE_THRESHOLD = "RPE_THRESHOLD"
REP_FAILURE = "REP_FAILURE"
MAX_SETS = "MAX_SETS"
TOTAL_REPS_REACHED = "TOTAL_REPS"


class TerminationCondition(ABC):
    type_name: ClassVar[str]

    @abstractmethod
    def should_terminate(self, ctx: TerminationContext) -> bool:
        ...

    @abstractmethod
    def validate(self) -> None:
        ...

    @abstractmethod
    def to_dict(self) -> dict[str, Any]:
        ...


@dataclass
class RPEThreshold(TerminationCondition):
    """Stop once the last set's RPE reaches the threshold."""

    type_name: ClassVar[str] = RPE_THRESHOLD

    threshold: float

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        if not MIN_LOGGED_RPE <= self.threshold <= MAX_LOGGED_RPE:
            raise InvalidParamsError(
                f"RPE threshold must be between 1 and 10, got {self.threshold}"
            )

    def should_terminate(self, ctx: TerminationContext) -> bool:
        if ctx.last_rpe is None:
            return False
        return ctx.last_rpe >= self.threshold

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type_name, "threshold": self.threshold}

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "RPEThreshold":
        return cls(threshold=float(require(payload, "threshold")))


@dataclass
class RepFailure(TerminationCondition):
    """Stop when the last set fell short of its rep target."""

    type_name: ClassVar[str] = REP_FAILURE

    def validate(self) -> None:
        pass

    def should_terminate(self, ctx: TerminationContext) -> bool:
        return ctx.last_reps < ctx.target_reps

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type_name}

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "RepFailure":
        return cls()


@dataclass
class MaxSets(TerminationCondition):
    type_name: ClassVar[str] = MAX_SETS

    max_sets: int

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        if self.max_sets < 1:
            raise InvalidParamsError(f"max sets must be >= 1, got {self.max_sets}")

    def should_terminate(self, ctx: TerminationContext) -> bool:
        return ctx.total_sets >= self.max_sets

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type_name, "max": self.max_sets}

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "MaxSets":
        return cls(max_sets=int(require(payload, "max")))


@dataclass
class TotalRepsReached(TerminationCondition):
    type_name: ClassVar[str] = TOTAL_REPS_REACHED

    target: int

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        if self.target < 1:
            raise InvalidParamsError(f"total reps target must be >= 1, got {self.target}")

    def should_terminate(self, ctx: TerminationContext) -> bool:
        return ctx.total_reps >= self.target

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type_name, "target": self.target}

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "TotalRepsReached":
        return cls(target=int(require(payload, "target")))


def new_termination_factory() -> PolymorphicFactory[TerminationCondition]:
    factory: PolymorphicFactory[TerminationCondition] = PolymorphicFactory("termination condition")
    for cls in (RPEThreshold, RepFailure, MaxSets, TotalRepsReached):
        factory.register(cls.type_name, cls.from_dict)
    return factory


TERMINATION_FACTORY: PolymorphicFactory[TerminationCondition] = new_termination_factory()

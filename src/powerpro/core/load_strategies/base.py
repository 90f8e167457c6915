"""
Base types for load strategies.

A LoadStrategy turns (user, lift, program position) into a concrete
weight.  Strategies are plain dataclasses holding only persisted
configuration; lookups they depend on (max lookup, session lookup, RPE
chart) are injected after construction and take no part in equality or
serialization.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, ClassVar

from ..errors import (
    InvalidIncrementError,
    InvalidParamsError,
    LookupFailedError,
    MaxNotFoundError,
    PercentageInvalidError,
    PowerProError,
)
from ..lookups import LookupContext
from ..models import MaxLookup, SessionLookup
from ..rounding import (
    normalize_rounding_direction,
    normalize_rounding_increment,
    round_weight,
    validate_rounding_direction,
)
from ..rpe_chart import RPEChart

PERCENT_OF = "PERCENT_OF"
RPE_TARGET = "RPE_TARGET"
FIND_RM = "FIND_RM"
RELATIVE_TO = "RELATIVE_TO"
TAPER = "TAPER"


@dataclass
class LoadCalculationParams:
    """
    Inputs for one load calculation.

    session_id is needed by RelativeTo, days_out by Taper; other strategies
    ignore both.
    """

    user_id: str
    lift_id: str
    lookup_context: LookupContext | None = None
    session_id: str | None = None
    days_out: int | None = None

    def validate(self) -> None:
        if not self.user_id:
            raise InvalidParamsError("user id is required")
        if not self.lift_id:
            raise InvalidParamsError("lift id is required")

    @classmethod
    def from_context(
        cls,
        user_id: str,
        lift_id: str,
        lookup_context: LookupContext | None = None,
        context: dict[str, Any] | None = None,
    ) -> "LoadCalculationParams":
        """Build params from a legacy {"sessionID": ..., "daysOut": ...} mapping."""
        context = context or {}
        session_id = context.get("sessionID", context.get("session_id"))
        days_out = _days_out_from_json(context.get("daysOut", context.get("days_out")))
        return cls(
            user_id=user_id,
            lift_id=lift_id,
            lookup_context=lookup_context,
            session_id=str(session_id) if session_id is not None else None,
            days_out=days_out,
        )

    def effective_percentage(self, base_percentage: float) -> float:
        if self.lookup_context is None:
            return base_percentage
        return self.lookup_context.apply_modifiers(base_percentage)


def _days_out_from_json(value: Any) -> int | None:
    """JSON numbers may arrive as floats; 10.0 is accepted, 10.5 and booleans are not."""
    if value is None:
        return None
    if isinstance(value, bool):
        raise InvalidParamsError(f"daysOut must be a number, got {value!r}")
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if not isinstance(value, int):
        raise InvalidParamsError(f"daysOut must be a whole number, got {value!r}")
    return value


class LoadStrategy(ABC):
    """Interface shared by every load strategy variant."""

    type_name: ClassVar[str]

    @abstractmethod
    def calculate_load(self, params: LoadCalculationParams) -> float:
        """Return the prescribed weight, already rounded."""

    @abstractmethod
    def validate(self) -> None:
        """Raise InvalidParamsError if the configuration is invalid."""

    @abstractmethod
    def to_dict(self) -> dict[str, Any]:
        """Serialize to a camelCase dict including the ``type`` discriminator."""

    # Dependency injection; strategies that need none ignore these.

    def set_max_lookup(self, lookup: MaxLookup | None) -> None:
        pass

    def set_session_lookup(self, lookup: SessionLookup | None) -> None:
        pass

    def set_rpe_chart(self, chart: RPEChart | None) -> None:
        pass


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------


def validate_percentage(percentage: float) -> None:
    """Percentages must be positive; values above 100 are allowed."""
    if percentage <= 0:
        raise PercentageInvalidError(f"percentage must be positive, got {percentage}")


def validate_rounding(increment: float, direction: str) -> None:
    if increment <= 0:
        raise InvalidIncrementError(f"rounding increment must be positive, got {increment}")
    validate_rounding_direction(direction)


def rounding_from_dict(payload: dict[str, Any]) -> tuple[float, str]:
    return (
        normalize_rounding_increment(payload.get("roundingIncrement")),
        normalize_rounding_direction(payload.get("roundingDirection")),
    )


def rounding_to_dict(increment: float, direction: str) -> dict[str, Any]:
    return {"roundingIncrement": increment, "roundingDirection": direction}


def apply_rounding(weight: float, increment: float, direction: str) -> float:
    return round_weight(weight, increment, direction)


def lookup_max(
    max_lookup: MaxLookup | None, user_id: str, lift_id: str, max_type: str
) -> float:
    """
    Fetch the current max value through the injected lookup.

    Raises:
        InvalidParamsError: If no lookup is configured
        MaxNotFoundError: If the user has no such max
        LookupFailedError: If the lookup itself raised
    """
    if max_lookup is None:
        raise InvalidParamsError("max lookup not configured")
    try:
        current = max_lookup.get_current_max(user_id, lift_id, max_type)
    except PowerProError:
        raise
    except Exception as exc:
        raise LookupFailedError(f"failed to lookup max: {exc}") from exc
    if current is None:
        raise MaxNotFoundError(f"no {max_type} found for user {user_id}, lift {lift_id}")
    return current.value



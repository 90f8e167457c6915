"""Percentage-of-max load strategy."""

import logging
from dataclasses import dataclass, field
from typing import Any, ClassVar

from ..config import DEFAULT_ROUNDING_DIRECTION, DEFAULT_ROUNDING_INCREMENT
from ..errors import InvalidParamsError
from ..factory import require
from ..models import REFERENCE_TYPES, MaxLookup
from .base import (
    PERCENT_OF,
    LoadCalculationParams,
    LoadStrategy,
    apply_rounding,
    lookup_max,
    rounding_from_dict,
    rounding_to_dict,
    validate_percentage,
    validate_rounding,
)

logger = logging.getLogger(__name__)


@dataclass
class PercentOf(LoadStrategy):
    """
    Weight = reference max × effective percentage / 100, rounded.

    The effective percentage is the configured one after the lookup
    context's weekly and daily modifiers.

    Example:
        Training max 315, 85% → 267.75 → 270 (nearest 5)
    """

    type_name: ClassVar[str] = PERCENT_OF

    reference_type: str
    percentage: float
    rounding_increment: float = DEFAULT_ROUNDING_INCREMENT
    rounding_direction: str = DEFAULT_ROUNDING_DIRECTION
    max_lookup: MaxLookup | None = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        if self.reference_type not in REFERENCE_TYPES:
            raise InvalidParamsError(
                f"invalid reference type {self.reference_type!r}; "
                f"expected one of {', '.join(REFERENCE_TYPES)}"
            )
        validate_percentage(self.percentage)
        validate_rounding(self.rounding_increment, self.rounding_direction)

    def set_max_lookup(self, lookup: MaxLookup | None) -> None:
        self.max_lookup = lookup

    def calculate_load(self, params: LoadCalculationParams) -> float:
        params.validate()
        self.validate()

        max_value = lookup_max(self.max_lookup, params.user_id, params.lift_id, self.reference_type)
        pct = params.effective_percentage(self.percentage)
        load = apply_rounding(max_value * pct / 100.0, self.rounding_increment, self.rounding_direction)
        logger.debug(
            "percent_of %s: %s %.1f x %.2f%% -> %.1f",
            params.lift_id, self.reference_type, max_value, pct, load,
        )
        return load

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type_name,
            "referenceType": self.reference_type,
            "percentage": self.percentage,
            **rounding_to_dict(self.rounding_increment, self.rounding_direction),
        }

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "PercentOf":
        increment, direction = rounding_from_dict(payload)
        return cls(
            reference_type=require(payload, "referenceType"),
            percentage=float(require(payload, "percentage")),
            rounding_increment=increment,
            rounding_direction=direction,
        )

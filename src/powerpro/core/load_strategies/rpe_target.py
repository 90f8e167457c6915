"""RPE-target load strategy: weight from 1RM and the RPE chart."""

import logging
from dataclasses import dataclass, field
from typing import Any, ClassVar

from ..config import DEFAULT_ROUNDING_DIRECTION, DEFAULT_ROUNDING_INCREMENT
from ..errors import RPEChartRequiredError
from ..factory import require
from ..models import ONE_RM, MaxLookup
from ..rpe_chart import RPEChart, validate_target_reps, validate_target_rpe
from .base import (
    RPE_TARGET,
    LoadCalculationParams,
    LoadStrategy,
    apply_rounding,
    lookup_max,
    rounding_from_dict,
    rounding_to_dict,
    validate_rounding,
)

logger = logging.getLogger(__name__)


@dataclass
class RPETarget(LoadStrategy):
    """
    Weight = 1RM × chart(target_reps, target_rpe), rounded.

    The chart in the lookup context wins over the injected chart.

    Example:
        1RM 400, 5 reps @ 8 → 400 × 0.77 = 308 → 310
    """

    type_name: ClassVar[str] = RPE_TARGET

    target_reps: int
    target_rpe: float
    rounding_increment: float = DEFAULT_ROUNDING_INCREMENT
    rounding_direction: str = DEFAULT_ROUNDING_DIRECTION
    max_lookup: MaxLookup | None = field(default=None, compare=False, repr=False)
    rpe_chart: RPEChart | None = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        validate_target_reps(self.target_reps)
        validate_target_rpe(self.target_rpe)
        validate_rounding(self.rounding_increment, self.rounding_direction)

    def set_max_lookup(self, lookup: MaxLookup | None) -> None:
        self.max_lookup = lookup

    def set_rpe_chart(self, chart: RPEChart | None) -> None:
        self.rpe_chart = chart

    def _resolve_chart(self, params: LoadCalculationParams) -> RPEChart:
        ctx = params.lookup_context
        if ctx is not None and ctx.rpe_chart is not None:
            return ctx.rpe_chart
        if self.rpe_chart is not None:
            return self.rpe_chart
        raise RPEChartRequiredError("RPE_TARGET requires an RPE chart")

    def calculate_load(self, params: LoadCalculationParams) -> float:
        params.validate()
        self.validate()

        chart = self._resolve_chart(params)
        one_rm = lookup_max(self.max_lookup, params.user_id, params.lift_id, ONE_RM)
        pct = chart.get_percentage(self.target_reps, self.target_rpe)
        load = apply_rounding(one_rm * pct, self.rounding_increment, self.rounding_direction)
        logger.debug(
            "rpe_target %s: %d @ %.1f of %.1f -> %.1f",
            params.lift_id, self.target_reps, self.target_rpe, one_rm, load,
        )
        return load

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type_name,
            "targetReps": self.target_reps,
            "targetRpe": self.target_rpe,
            **rounding_to_dict(self.rounding_increment, self.rounding_direction),
        }

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "RPETarget":
        increment, direction = rounding_from_dict(payload)
        return cls(
            target_reps=int(require(payload, "targetReps")),
            target_rpe=float(require(payload, "targetRpe")),
            rounding_increment=increment,
            rounding_direction=direction,
        )

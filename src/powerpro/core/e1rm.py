"""
Estimated one-rep max from a sub-maximal set.

E1RM = weight / chart_percentage(reps, rpe), always rounded to the nearest
2.5 regardless of any user rounding preference.

Example:
    365 x 1 @ RPE 8 → 365 / 0.91 = 401.1 → 400.0
"""

import logging

from .config import E1RM_ROUNDING_INCREMENT, MAX_CHART_RPE, MAX_TARGET_REPS, MIN_CHART_RPE, MIN_TARGET_REPS
from .errors import InvalidParamsError, TargetRepsInvalidError, TargetRPEInvalidError
from .rounding import round_weight_nearest
from .rpe_chart import RPEChart, default_rpe_chart

logger = logging.getLogger(__name__)


class E1RMCalculator:
    """Inverts an RPE chart to estimate a one-rep max."""

    def __init__(self, chart: RPEChart | None = None):
        self.chart = chart if chart is not None else default_rpe_chart()

    def calculate(self, weight: float, reps: int, rpe: float) -> float:
        """
        Estimate 1RM from a logged set.

        Args:
            weight: Weight lifted, must be > 0
            reps: Reps performed, 1-12
            rpe: RPE of the set, 7.0-10.0

        Returns:
            Estimated 1RM rounded to the nearest 2.5

        Raises:
            InvalidParamsError: If any input is out of range
            RPEEntryNotFoundError: If the chart has no entry for (reps, rpe)
        """
        if weight <= 0:
            raise InvalidParamsError(f"weight must be positive, got {weight}")
        if not MIN_TARGET_REPS <= reps <= MAX_TARGET_REPS:
            raise TargetRepsInvalidError(
                f"reps must be between {MIN_TARGET_REPS} and {MAX_TARGET_REPS}, got {reps}"
            )
        if not MIN_CHART_RPE <= rpe <= MAX_CHART_RPE:
            raise TargetRPEInvalidError(
                f"RPE must be between {MIN_CHART_RPE} and {MAX_CHART_RPE}, got {rpe}"
            )

        pct = self.chart.get_percentage(reps, rpe)
        if pct <= 0:
            raise InvalidParamsError(f"chart percentage for {reps} @ {rpe} is zero")

        e1rm = round_weight_nearest(weight / pct, E1RM_ROUNDING_INCREMENT)
        logger.debug("e1rm %s x %d @ %.1f -> %.1f", weight, reps, rpe, e1rm)
        return e1rm


def calculate_e1rm(weight: float, reps: int, rpe: float, chart: RPEChart | None = None) -> float:
    return E1RMCalculator(chart).calculate(weight, reps, rpe)

"""
Taper decorator: scales a wrapped strategy's load by days to competition.

The curve is a list of (threshold_days, multiplier) tiers in ascending
threshold order.  The first tier whose threshold exceeds days_out applies;
beyond the last tier the multiplier is 1.0.

Example (default curve):
    base 300, 10 days out → tier (14, 0.6) → 180
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, ClassVar

from ..engine.config_loader import taper_curve_tiers
from ..errors import InvalidParamsError
from ..factory import optional_bool, require
from ..models import MaxLookup, SessionLookup
from ..rpe_chart import RPEChart
from .base import TAPER, LoadCalculationParams, LoadStrategy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TaperTier:
    threshold_days: int
    multiplier: float

    def __post_init__(self) -> None:
        if self.threshold_days <= 0:
            raise InvalidParamsError(
                f"taper threshold must be positive, got {self.threshold_days}"
            )
        if not 0.0 <= self.multiplier <= 1.0:
            raise InvalidParamsError(
                f"taper multiplier must be between 0 and 1, got {self.multiplier}"
            )


def default_taper_curve() -> list[TaperTier]:
    return [TaperTier(days, mult) for days, mult in taper_curve_tiers()]


def validate_taper_curve(curve: list[TaperTier]) -> None:
    for prev, cur in zip(curve, curve[1:]):
        if cur.threshold_days <= prev.threshold_days:
            raise InvalidParamsError(
                "taper curve thresholds must be strictly ascending "
                f"({prev.threshold_days} then {cur.threshold_days})"
            )


def taper_multiplier(curve: list[TaperTier], days_out: int) -> float:
    """Return the multiplier for *days_out* (negative values clamp to 0)."""
    days_out = max(days_out, 0)
    for tier in curve:
        if days_out < tier.threshold_days:
            return tier.multiplier
    return 1.0


@dataclass
class Taper(LoadStrategy):
    """
    Wraps another strategy and reduces its load as competition approaches.

    An empty taper_curve means the default curve.  With maintain_intensity
    the wrapped load passes through unchanged; the volume reduction is left
    to the set scheme.
    """

    type_name: ClassVar[str] = TAPER

    base_strategy: LoadStrategy
    taper_curve: list[TaperTier] = field(default_factory=list)
    maintain_intensity: bool = False

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        if self.base_strategy is None:
            raise InvalidParamsError("TAPER requires a base strategy")
        self.base_strategy.validate()
        validate_taper_curve(self.taper_curve)

    def effective_curve(self) -> list[TaperTier]:
        return self.taper_curve if self.taper_curve else default_taper_curve()

    def calculate_load(self, params: LoadCalculationParams) -> float:
        params.validate()
        self.validate()

        base_load = self.base_strategy.calculate_load(params)
        if params.days_out is None or self.maintain_intensity:
            return base_load

        multiplier = taper_multiplier(self.effective_curve(), params.days_out)
        load = base_load * multiplier
        logger.debug(
            "taper %s: %d days out, %.1f x %.2f -> %.1f",
            params.lift_id, params.days_out, base_load, multiplier, load,
        )
        return load

    # Injected dependencies belong to the wrapped strategy

    def set_max_lookup(self, lookup: MaxLookup | None) -> None:
        self.base_strategy.set_max_lookup(lookup)

    def set_session_lookup(self, lookup: SessionLookup | None) -> None:
        self.base_strategy.set_session_lookup(lookup)

    def set_rpe_chart(self, chart: RPEChart | None) -> None:
        self.base_strategy.set_rpe_chart(chart)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type_name,
            "baseStrategy": self.base_strategy.to_dict(),
            "taperCurve": [
                {"thresholdDays": t.threshold_days, "multiplier": t.multiplier}
                for t in self.taper_curve
            ],
            "maintainIntensity": self.maintain_intensity,
        }

    @classmethod
    def from_dict(
        cls,
        payload: dict[str, Any],
        build_strategy: Callable[[dict[str, Any]], LoadStrategy],
    ) -> "Taper":
        """Build a Taper; *build_strategy* deserializes the nested base strategy."""
        base = build_strategy(require(payload, "baseStrategy"))
        curve = [
            TaperTier(int(require(t, "thresholdDays")), float(require(t, "multiplier")))
            for t in payload.get("taperCurve") or []
        ]
        return cls(
            base_strategy=base,
            taper_curve=curve,
            maintain_intensity=optional_bool(payload, "maintainIntensity", False),
        )

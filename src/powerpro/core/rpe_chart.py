"""
RPE chart: (target reps, target RPE) → fraction of one-rep max.

The chart covers 1-12 reps at RPE 7.0-10.0 in half steps.  Lookups are
exact; there is no interpolation between entries.
"""

from dataclasses import dataclass, field

from .config import MAX_TARGET_REPS, MIN_TARGET_REPS, VALID_RPE_VALUES
from .errors import (
    InvalidParamsError,
    PercentageInvalidError,
    RPEEntryNotFoundError,
    TargetRepsInvalidError,
    TargetRPEInvalidError,
)


def validate_target_reps(reps: int) -> int:
    if not MIN_TARGET_REPS <= reps <= MAX_TARGET_REPS:
        raise TargetRepsInvalidError(
            f"target reps must be between {MIN_TARGET_REPS} and {MAX_TARGET_REPS}, got {reps}"
        )
    return reps


def validate_target_rpe(rpe: float) -> float:
    if float(rpe) not in VALID_RPE_VALUES:
        raise TargetRPEInvalidError(
            f"target RPE must be 7.0-10.0 in 0.5 steps, got {rpe}"
        )
    return float(rpe)


@dataclass(frozen=True)
class RPEChartEntry:
    target_reps: int
    target_rpe: float
    percentage: float  # fraction of 1RM, 0-1

    def __post_init__(self) -> None:
        validate_target_reps(self.target_reps)
        validate_target_rpe(self.target_rpe)
        if not 0.0 <= self.percentage <= 1.0:
            raise PercentageInvalidError(
                f"chart percentage must be between 0 and 1, got {self.percentage}"
            )


@dataclass
class RPEChart:
    """Validated set of chart entries, indexed by (reps, rpe)."""

    entries: list[RPEChartEntry]
    _index: dict[tuple[int, float], float] = field(
        init=False, repr=False, compare=False, default_factory=dict
    )

    def __post_init__(self) -> None:
        if not self.entries:
            raise InvalidParamsError("RPE chart must have at least one entry")
        for e in self.entries:
            key = (e.target_reps, float(e.target_rpe))
            if key in self._index:
                raise InvalidParamsError(
                    f"duplicate RPE chart entry for {e.target_reps} reps at RPE {e.target_rpe}"
                )
            self._index[key] = e.percentage

    def get_percentage(self, target_reps: int, target_rpe: float) -> float:
        """
        Return the fraction of 1RM for an exact (reps, rpe) pair.

        Raises:
            RPEEntryNotFoundError: If the chart has no such entry
        """
        try:
            return self._index[(target_reps, float(target_rpe))]
        except KeyError:
            raise RPEEntryNotFoundError(target_reps, target_rpe) from None

    def has_entry(self, target_reps: int, target_rpe: float) -> bool:
        return (target_reps, float(target_rpe)) in self._index

    def __len__(self) -> int:
        return len(self.entries)

    @classmethod
    def from_rows(cls, rows: dict[float, tuple[float, ...] | list[float]]) -> "RPEChart":
        """Build a chart from {rpe: [pct for 1 rep, pct for 2 reps, ...]}."""
        entries = [
            RPEChartEntry(target_reps=i + 1, target_rpe=float(rpe), percentage=float(pct))
            for rpe, pcts in rows.items()
            for i, pct in enumerate(pcts)
        ]
        return cls(entries)


def default_rpe_chart() -> RPEChart:
    """Return the standard chart, honouring any model.yaml override."""
    from .engine.config_loader import rpe_chart_rows

    return RPEChart.from_rows(rpe_chart_rows())

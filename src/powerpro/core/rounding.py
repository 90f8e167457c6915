"""
Weight rounding to plate increments.

A raw computed weight is rounded to a multiple of the rounding increment
in one of three directions: NEAREST, DOWN or UP.
"""

import math
from dataclasses import dataclass

from .config import DEFAULT_ROUNDING_DIRECTION, DEFAULT_ROUNDING_INCREMENT, ROUNDING_DIRECTIONS
from .errors import InvalidIncrementError, InvalidRoundingDirectionError, NegativeWeightError

NEAREST = "NEAREST"
DOWN = "DOWN"
UP = "UP"


def validate_rounding_direction(direction: str) -> str:
    """Return *direction* unchanged if valid, else raise InvalidRoundingDirectionError."""
    if direction not in ROUNDING_DIRECTIONS:
        valid = ", ".join(ROUNDING_DIRECTIONS)
        raise InvalidRoundingDirectionError(
            f"invalid rounding direction: {direction!r}. Valid: {valid}"
        )
    return direction


def normalize_rounding_increment(increment: float | None) -> float:
    """A missing, zero or negative increment means "use the default"."""
    if increment is None or increment <= 0:
        return DEFAULT_ROUNDING_INCREMENT
    return float(increment)


def normalize_rounding_direction(direction: str | None) -> str:
    if not direction:
        return DEFAULT_ROUNDING_DIRECTION
    return validate_rounding_direction(direction)


def _round_half_up(x: float) -> float:
    # Python's round() is banker's rounding; weights need halves rounded up
    return math.floor(x + 0.5)


def round_weight(weight: float, increment: float, direction: str) -> float:
    """
    Round a weight to a multiple of *increment*.

    Args:
        weight: Raw weight, must be >= 0
        increment: Plate increment, must be > 0
        direction: NEAREST, DOWN or UP

    Returns:
        Rounded weight (0.0 for a zero weight)

    Raises:
        NegativeWeightError, InvalidIncrementError, InvalidRoundingDirectionError
    """
    if weight < 0:
        raise NegativeWeightError(f"weight cannot be negative, got {weight}")
    if increment <= 0:
        raise InvalidIncrementError(f"rounding increment must be positive, got {increment}")
    validate_rounding_direction(direction)

    if weight == 0:
        return 0.0

    steps = weight / increment
    if direction == DOWN:
        rounded = math.floor(steps)
    elif direction == UP:
        rounded = math.ceil(steps)
    else:
        rounded = _round_half_up(steps)
    return float(rounded * increment)


def round_weight_nearest(weight: float, increment: float) -> float:
    return round_weight(weight, increment, NEAREST)


def round_weight_down(weight: float, increment: float) -> float:
    return round_weight(weight, increment, DOWN)


def round_weight_up(weight: float, increment: float) -> float:
    return round_weight(weight, increment, UP)


@dataclass(frozen=True)
class RoundingConfig:
    """Rounding settings carried by a strategy; zero/empty fields mean defaults."""

    increment: float = DEFAULT_ROUNDING_INCREMENT
    direction: str = DEFAULT_ROUNDING_DIRECTION

    def __post_init__(self) -> None:
        if self.increment <= 0:
            raise InvalidIncrementError(
                f"rounding increment must be positive, got {self.increment}"
            )
        validate_rounding_direction(self.direction)

    @classmethod
    def from_values(cls, increment: float | None, direction: str | None) -> "RoundingConfig":
        return cls(
            increment=normalize_rounding_increment(increment),
            direction=normalize_rounding_direction(direction),
        )

    def apply(self, weight: float) -> float:
        return round_weight(weight, self.increment, self.direction)

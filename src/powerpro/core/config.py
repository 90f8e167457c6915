"""
Configuration constants for the prescription engine.

All adjustable defaults are centralized here.  Values that users may want
to override (RPE chart, taper curve) are also read from model.yaml through
core/engine/config_loader.py; the constants below are the fallback.
"""

from typing import Final

# =============================================================================
# ROUNDING
# =============================================================================

DEFAULT_ROUNDING_INCREMENT: Final[float] = 5.0
DEFAULT_ROUNDING_DIRECTION: Final[str] = "NEAREST"
ROUNDING_DIRECTIONS: Final[tuple[str, ...]] = ("NEAREST", "DOWN", "UP")

# E1RM results are always rounded to the nearest 2.5, regardless of user settings
E1RM_ROUNDING_INCREMENT: Final[float] = 2.5

# =============================================================================
# RPE / REP BOUNDS
# =============================================================================

MIN_TARGET_REPS: Final[int] = 1
MAX_TARGET_REPS: Final[int] = 12

MIN_CHART_RPE: Final[float] = 7.0
MAX_CHART_RPE: Final[float] = 10.0
VALID_RPE_VALUES: Final[tuple[float, ...]] = (7.0, 7.5, 8.0, 8.5, 9.0, 9.5, 10.0)

# RPE as logged during variable-count schemes uses the full 1-10 scale
MIN_LOGGED_RPE: Final[float] = 1.0
MAX_LOGGED_RPE: Final[float] = 10.0

# =============================================================================
# DEFAULT RPE CHART
# =============================================================================

# Percentage of 1RM per RPE, indexed by reps 1..12
DEFAULT_RPE_CHART: Final[dict[float, tuple[float, ...]]] = {
    10.0: (1.00, 0.95, 0.92, 0.88, 0.82, 0.80, 0.74, 0.71, 0.68, 0.66, 0.64, 0.62),
    9.5: (0.975, 0.93, 0.905, 0.85, 0.81, 0.77, 0.725, 0.695, 0.67, 0.65, 0.63, 0.61),
    9.0: (0.95, 0.91, 0.89, 0.82, 0.80, 0.74, 0.71, 0.68, 0.66, 0.64, 0.62, 0.60),
    8.5: (0.93, 0.895, 0.855, 0.81, 0.785, 0.725, 0.695, 0.67, 0.65, 0.63, 0.61, 0.59),
    8.0: (0.91, 0.88, 0.82, 0.80, 0.77, 0.71, 0.68, 0.66, 0.64, 0.62, 0.60, 0.58),
    7.5: (0.895, 0.85, 0.81, 0.77, 0.755, 0.695, 0.67, 0.65, 0.63, 0.61, 0.59, 0.57),
    7.0: (0.88, 0.82, 0.80, 0.74, 0.74, 0.68, 0.66, 0.64, 0.62, 0.60, 0.58, 0.56),
}

# =============================================================================
# TAPER
# =============================================================================

# (threshold_days, multiplier): first tier with days_out < threshold applies
DEFAULT_TAPER_CURVE: Final[tuple[tuple[int, float], ...]] = (
    (7, 0.5),
    (14, 0.6),
    (21, 0.7),
    (28, 0.8),
    (35, 0.9),
)

# =============================================================================
# SET SCHEMES
# =============================================================================

DEFAULT_WORK_SET_THRESHOLD: Final[float] = 80.0  # % of base weight

MRS_DEFAULT_MAX_SETS: Final[int] = 10
FATIGUE_DROP_DEFAULT_MAX_SETS: Final[int] = 10
TOTAL_REPS_DEFAULT_MAX_SETS: Final[int] = 20
TOTAL_REPS_DEFAULT_SUGGESTED_REPS: Final[int] = 10

# =============================================================================
# PROGRESSIONS
# =============================================================================

GREYSKULL_MAIN_INCREMENT: Final[float] = 5.0
GREYSKULL_ACCESSORY_INCREMENT: Final[float] = 2.5
GREYSKULL_DEFAULT_DELOAD: Final[float] = 0.10

GZCLP_T1_DELOAD: Final[float] = 0.15

# Sentinel returned by LookupContext.get_reps_for_set when no per-set rep target exists
UNKNOWN_REPS: Final[int] = -1

MAX_LOOKUP_NAME_LENGTH: Final[int] = 100

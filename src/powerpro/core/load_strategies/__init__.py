"""Load strategies: how heavy each prescribed set should be."""

from .base import LoadCalculationParams, LoadStrategy
from .find_rm import FindRM
from .percent_of import PercentOf
from .relative_to import RelativeTo
from .rpe_target import RPETarget
from .taper import Taper, TaperTier, default_taper_curve
from .registry import (
    LOAD_STRATEGY_FACTORY,
    load_strategy_from_dict,
    load_strategy_from_json,
    load_strategy_to_dict,
    load_strategy_to_json,
    new_load_strategy_factory,
)

__all__ = [
    "LoadCalculationParams",
    "LoadStrategy",
    "FindRM",
    "PercentOf",
    "RelativeTo",
    "RPETarget",
    "Taper",
    "TaperTier",
    "default_taper_curve",
    "LOAD_STRATEGY_FACTORY",
    "load_strategy_from_dict",
    "load_strategy_from_json",
    "load_strategy_to_dict",
    "load_strategy_to_json",
    "new_load_strategy_factory",
]

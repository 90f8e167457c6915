"""Progressions: how a lift's max changes in response to training events."""

from .amrap import AMRAPProgression, RepsThreshold
from .base import Progression, ProgressionContext, ProgressionResult, TriggerEvent
from .cycle import CycleProgression
from .deload_on_failure import DeloadOnFailure
from .double import DoubleProgression
from .greyskull import GreySkullProgression, greyskull_accessory, greyskull_main_lift
from .linear import LinearProgression
from .stage import Stage, StageProgression, gzclp_t1, gzclp_t1_modified, gzclp_t2
from .registry import (
    PROGRESSION_FACTORY,
    new_progression_factory,
    progression_from_dict,
    progression_from_json,
    progression_to_dict,
    progression_to_json,
)

__all__ = [
    "AMRAPProgression",
    "RepsThreshold",
    "Progression",
    "ProgressionContext",
    "ProgressionResult",
    "TriggerEvent",
    "CycleProgression",
    "DeloadOnFailure",
    "DoubleProgression",
    "GreySkullProgression",
    "greyskull_accessory",
    "greyskull_main_lift",
    "LinearProgression",
    "Stage",
    "StageProgression",
    "gzclp_t1",
    "gzclp_t1_modified",
    "gzclp_t2",
    "PROGRESSION_FACTORY",
    "new_progression_factory",
    "progression_from_dict",
    "progression_from_json",
    "progression_to_dict",
    "progression_to_json",
]

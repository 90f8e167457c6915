"""Set schemes: how many sets, how many reps, and when to stop."""

from .amrap import AMRAPScheme
from .base import NextSetDecision, SetGenerationContext, SetScheme, VariableSetScheme
from .fatigue_drop import FatigueDrop
from .fixed import Fixed
from .greyskull import GreySkullScheme
from .mrs import MRSScheme
from .ramp import Ramp, RampStep
from .rep_range import RepRange
from .total_reps import TotalRepsScheme
from .termination import (
    TERMINATION_FACTORY,
    MaxSets,
    RepFailure,
    RPEThreshold,
    TerminationCondition,
    TotalRepsReached,
)
from .tracking import next_set_from_log, termination_context_from_log
from .registry import (
    SET_SCHEME_FACTORY,
    new_set_scheme_factory,
    set_scheme_from_dict,
    set_scheme_from_json,
    set_scheme_to_dict,
    set_scheme_to_json,
)

__all__ = [
    "AMRAPScheme",
    "FatigueDrop",
    "Fixed",
    "GreySkullScheme",
    "MRSScheme",
    "Ramp",
    "RampStep",
    "RepRange",
    "TotalRepsScheme",
    "NextSetDecision",
    "SetGenerationContext",
    "SetScheme",
    "VariableSetScheme",
    "TERMINATION_FACTORY",
    "MaxSets",
    "RepFailure",
    "RPEThreshold",
    "TerminationCondition",
    "TotalRepsReached",
    "next_set_from_log",
    "termination_context_from_log",
    "SET_SCHEME_FACTORY",
    "new_set_scheme_factory",
    "set_scheme_from_dict",
    "set_scheme_from_json",
    "set_scheme_to_dict",
    "set_scheme_to_json",
]

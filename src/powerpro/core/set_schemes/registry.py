"""
Set scheme registry.

All built-in set schemes are registered on SET_SCHEME_FACTORY.  Use
set_scheme_from_dict() / set_scheme_from_json() to rebuild a scheme from
stored data.
"""

import json
from typing import Any

from ..factory import PolymorphicFactory
from .amrap import AMRAPScheme
from .base import SetScheme
from .fatigue_drop import FatigueDrop
from .fixed import Fixed
from .greyskull import GreySkullScheme
from .mrs import MRSScheme
from .ramp import Ramp
from .rep_range import RepRange
from .total_reps import TotalRepsScheme

_BUILTIN_SCHEMES: tuple[type[SetScheme], ...] = (
    Fixed,
    AMRAPScheme,
    GreySkullScheme,
    RepRange,
    Ramp,
    MRSScheme,
    FatigueDrop,
    TotalRepsScheme,
)


def new_set_scheme_factory() -> PolymorphicFactory[SetScheme]:
    """Return a factory with every built-in set scheme registered."""
    factory: PolymorphicFactory[SetScheme] = PolymorphicFactory("set scheme")
    for cls in _BUILTIN_SCHEMES:
        factory.register(cls.type_name, cls.from_dict)
    return factory


SET_SCHEME_FACTORY: PolymorphicFactory[SetScheme] = new_set_scheme_factory()


def set_scheme_from_dict(payload: dict[str, Any]) -> SetScheme:
    return SET_SCHEME_FACTORY.create_from_dict(payload)


def set_scheme_from_json(text: str | bytes) -> SetScheme:
    return SET_SCHEME_FACTORY.create_from_json(text)


def set_scheme_to_dict(scheme: SetScheme) -> dict[str, Any]:
    return scheme.to_dict()


def set_scheme_to_json(scheme: SetScheme) -> str:
    return json.dumps(scheme.to_dict())

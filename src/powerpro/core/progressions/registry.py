"""
Progression registry.

All built-in progressions are registered on PROGRESSION_FACTORY.  Use
progression_from_dict() / progression_from_json() to rebuild a
progression from stored data.
"""

import json
from typing import Any

from ..factory import PolymorphicFactory
from .amrap import AMRAPProgression
from .base import Progression
from .cycle import CycleProgression
from .deload_on_failure import DeloadOnFailure
from .double import DoubleProgression
from .greyskull import GreySkullProgression
from .linear import LinearProgression
from .stage import StageProgression

_BUILTIN_PROGRESSIONS: tuple[type[Progression], ...] = (
    LinearProgression,
    CycleProgression,
    AMRAPProgression,
    DeloadOnFailure,
    StageProgression,
    GreySkullProgression,
    DoubleProgression,
)


def new_progression_factory() -> PolymorphicFactory[Progression]:
    """Return a factory with every built-in progression registered."""
    factory: PolymorphicFactory[Progression] = PolymorphicFactory("progression")
    for cls in _BUILTIN_PROGRESSIONS:
        factory.register(cls.type_name, cls.from_dict)
    return factory


PROGRESSION_FACTORY: PolymorphicFactory[Progression] = new_progression_factory()


def progression_from_dict(payload: dict[str, Any]) -> Progression:
    return PROGRESSION_FACTORY.create_from_dict(payload)


def progression_from_json(text: str | bytes) -> Progression:
    return PROGRESSION_FACTORY.create_from_json(text)


def progression_to_dict(progression: Progression) -> dict[str, Any]:
    return progression.to_dict()


def progression_to_json(progression: Progression) -> str:
    return json.dumps(progression.to_dict())

"""
Load strategy registry.

All built-in load strategies are registered on LOAD_STRATEGY_FACTORY.  Use
load_strategy_from_dict() / load_strategy_from_json() to rebuild a
strategy from stored data.  Taper's nested base strategy is rebuilt
through the same factory, so any registered strategy can be tapered.
"""

import json
from typing import Any

from ..factory import PolymorphicFactory
from .base import LoadStrategy
from .find_rm import FindRM
from .percent_of import PercentOf
from .relative_to import RelativeTo
from .rpe_target import RPETarget
from .taper import Taper


def new_load_strategy_factory() -> PolymorphicFactory[LoadStrategy]:
    """Return a factory with every built-in load strategy registered."""
    factory: PolymorphicFactory[LoadStrategy] = PolymorphicFactory("load strategy")
    factory.register(PercentOf.type_name, PercentOf.from_dict)
    factory.register(RPETarget.type_name, RPETarget.from_dict)
    factory.register(FindRM.type_name, FindRM.from_dict)
    factory.register(RelativeTo.type_name, RelativeTo.from_dict)
    factory.register(
        Taper.type_name,
        lambda payload: Taper.from_dict(payload, factory.create_from_dict),
    )
    return factory


LOAD_STRATEGY_FACTORY: PolymorphicFactory[LoadStrategy] = new_load_strategy_factory()


def load_strategy_from_dict(payload: dict[str, Any]) -> LoadStrategy:
    return LOAD_STRATEGY_FACTORY.create_from_dict(payload)


def load_strategy_from_json(text: str | bytes) -> LoadStrategy:
    return LOAD_STRATEGY_FACTORY.create_from_json(text)


def load_strategy_to_dict(strategy: LoadStrategy) -> dict[str, Any]:
    return strategy.to_dict()


def load_strategy_to_json(strategy: LoadStrategy) -> str:
    return json.dumps(strategy.to_dict())

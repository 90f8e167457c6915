"""
Discriminator-keyed factory shared by the three strategy families.

Each family (load strategies, set schemes, progressions) owns one
PolymorphicFactory.  A serialized variant is a JSON object whose ``type``
field selects the constructor; the constructor receives the whole object.
"""

import json
import logging
from collections.abc import Callable
from typing import Any, Generic, TypeVar

from .errors import InvalidParamsError, PowerProError, TypeNotRegisteredError, UnknownTypeError

logger = logging.getLogger(__name__)

T = TypeVar("T")

TYPE_KEY = "type"


class PolymorphicFactory(Generic[T]):
    """Registry of constructors keyed by the ``type`` discriminator."""

    def __init__(self, family: str):
        self.family = family
        self._constructors: dict[str, Callable[[dict[str, Any]], T]] = {}

    def register(self, type_name: str, constructor: Callable[[dict[str, Any]], T]) -> None:
        """Register (or replace) the constructor for *type_name*."""
        if not type_name:
            raise InvalidParamsError(f"{self.family}: type name is required")
        self._constructors[type_name] = constructor

    def is_registered(self, type_name: str) -> bool:
        return type_name in self._constructors

    def registered_types(self) -> list[str]:
        return sorted(self._constructors)

    def create(self, type_name: str, payload: dict[str, Any]) -> T:
        """
        Build a variant from its payload.

        Raises:
            TypeNotRegisteredError: If no constructor is registered for type_name
            InvalidParamsError: If the payload is malformed
        """
        constructor = self._constructors.get(type_name)
        if constructor is None:
            raise TypeNotRegisteredError(type_name, self.family)
        logger.debug("%s: creating %s", self.family, type_name)
        try:
            return constructor(payload)
        except PowerProError:
            raise
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            raise InvalidParamsError(f"{self.family} {type_name}: invalid payload: {exc}") from exc

    def create_from_dict(self, payload: dict[str, Any]) -> T:
        """Read only the discriminator first, then dispatch on it."""
        if not isinstance(payload, dict):
            raise UnknownTypeError(f"{self.family}: expected an object, got {type(payload).__name__}")
        type_name = payload.get(TYPE_KEY)
        if not isinstance(type_name, str) or not type_name:
            raise UnknownTypeError(f"{self.family}: payload has no {TYPE_KEY!r} field")
        return self.create(type_name, payload)

    def create_from_json(self, text: str | bytes) -> T:
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as exc:
            raise InvalidParamsError(f"{self.family}: invalid JSON: {exc}") from exc
        return self.create_from_dict(payload)


# ---------------------------------------------------------------------------
# Payload helpers for variant constructors
# ---------------------------------------------------------------------------


def require(payload: dict[str, Any], key: str) -> Any:
    """Return payload[key] or raise InvalidParamsError naming the missing field."""
    if key not in payload or payload[key] is None:
        type_name = payload.get(TYPE_KEY, "payload")
        raise InvalidParamsError(f"{type_name}: missing required field {key!r}")
    return payload[key]


def optional_bool(payload: dict[str, Any], key: str, default: bool) -> bool:
    """Return a JSON boolean flag; strings like "false" are rejected, not coerced."""
    value = payload.get(key)
    if value is None:
        return default
    if not isinstance(value, bool):
        type_name = payload.get(TYPE_KEY, "payload")
        raise InvalidParamsError(f"{type_name}: {key!r} must be true or false, got {value!r}")
    return value

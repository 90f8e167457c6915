"""Load relative to a set already logged in the same session."""

import logging
from dataclasses import dataclass, field
from typing import Any, ClassVar

from ..config import DEFAULT_ROUNDING_DIRECTION, DEFAULT_ROUNDING_INCREMENT
from ..errors import (
    InvalidParamsError,
    LookupFailedError,
    PowerProError,
    ReferenceSetNotFoundError,
    SessionIdRequiredError,
    SessionLookupRequiredError,
)
from ..factory import require
from ..models import SessionLookup
from .base import (
    RELATIVE_TO,
    LoadCalculationParams,
    LoadStrategy,
    apply_rounding,
    rounding_from_dict,
    rounding_to_dict,
    validate_percentage,
    validate_rounding,
)

logger = logging.getLogger(__name__)


@dataclass
class RelativeTo(LoadStrategy):
    """
    Weight = weight of logged set #reference_set_index × percentage / 100.

    Typical use: back-off sets at 90% of the day's top single.
    reference_set_index is 0-based.
    """

    type_name: ClassVar[str] = RELATIVE_TO

    reference_set_index: int
    percentage: float
    rounding_increment: float = DEFAULT_ROUNDING_INCREMENT
    rounding_direction: str = DEFAULT_ROUNDING_DIRECTION
    session_lookup: SessionLookup | None = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        if self.reference_set_index < 0:
            raise InvalidParamsError(
                f"reference set index must be >= 0, got {self.reference_set_index}"
            )
        validate_percentage(self.percentage)
        validate_rounding(self.rounding_increment, self.rounding_direction)

    def set_session_lookup(self, lookup: SessionLookup | None) -> None:
        self.session_lookup = lookup

    def calculate_load(self, params: LoadCalculationParams) -> float:
        params.validate()
        self.validate()

        if self.session_lookup is None:
            raise SessionLookupRequiredError("RELATIVE_TO requires a session lookup")
        if not params.session_id:
            raise SessionIdRequiredError("RELATIVE_TO requires a session id")

        try:
            logged = self.session_lookup.get_logged_set_by_index(
                params.session_id, params.lift_id, self.reference_set_index
            )
        except PowerProError:
            raise
        except Exception as exc:
            raise LookupFailedError(f"failed to lookup logged set: {exc}") from exc

        if logged is None:
            raise ReferenceSetNotFoundError(
                f"set {self.reference_set_index} of {params.lift_id} not logged "
                f"in session {params.session_id}"
            )

        load = apply_rounding(
            logged.weight * self.percentage / 100.0, self.rounding_increment, self.rounding_direction
        )
        logger.debug(
            "relative_to %s: set %d at %.1f x %.1f%% -> %.1f",
            params.lift_id, self.reference_set_index, logged.weight, self.percentage, load,
        )
        return load

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type_name,
            "referenceSetIndex": self.reference_set_index,
            "percentage": self.percentage,
            **rounding_to_dict(self.rounding_increment, self.rounding_direction),
        }

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "RelativeTo":
        increment, direction = rounding_from_dict(payload)
        return cls(
            reference_set_index=int(require(payload, "referenceSetIndex")),
            percentage=float(require(payload, "percentage")),
            rounding_increment=increment,
            rounding_direction=direction,
        )

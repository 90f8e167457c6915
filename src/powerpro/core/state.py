"""
Per-user mutable training state.

FailureCounter tracks consecutive failures of one lift under one
progression.  UserProgramState is a user's position in a program (week,
day, cycle, rotation); advance_state() moves it forward one training day
and never mutates its input.
"""

import logging
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime

from .errors import InvalidParamsError
from .models import now_timestamp

logger = logging.getLogger(__name__)


def _require_id(value: str, name: str) -> str:
    if not value or not value.strip():
        raise InvalidParamsError(f"{name} is required")
    return value.strip()


# =============================================================================
# FAILURE COUNTER
# =============================================================================


@dataclass
class FailureCounter:
    """Consecutive failures for a (user, lift, progression) key."""

    user_id: str
    lift_id: str
    progression_id: str
    consecutive_failures: int = 0
    last_failure_at: datetime | None = None
    last_success_at: datetime | None = None
    created_at: datetime = field(default_factory=now_timestamp)
    updated_at: datetime = field(default_factory=now_timestamp)
    id: str = field(default_factory=lambda: uuid.uuid4().hex)

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        _require_id(self.user_id, "failure counter user_id")
        _require_id(self.lift_id, "failure counter lift_id")
        _require_id(self.progression_id, "failure counter progression_id")
        if self.consecutive_failures < 0:
            raise InvalidParamsError("consecutive failures cannot be negative")

    @classmethod
    def create(cls, user_id: str, lift_id: str, progression_id: str) -> "FailureCounter":
        return cls(
            user_id=_require_id(user_id, "failure counter user_id"),
            lift_id=_require_id(lift_id, "failure counter lift_id"),
            progression_id=_require_id(progression_id, "failure counter progression_id"),
        )

    @property
    def key(self) -> tuple[str, str, str]:
        return (self.user_id, self.lift_id, self.progression_id)

    def increment_failure(self, now: datetime | None = None) -> int:
        """Record a failure and return the new consecutive count."""
        now = now or now_timestamp()
        self.consecutive_failures += 1
        self.last_failure_at = now
        self.updated_at = now
        logger.debug("failure counter %s: %d", self.key, self.consecutive_failures)
        return self.consecutive_failures

    def reset_on_success(self, now: datetime | None = None) -> None:
        now = now or now_timestamp()
        self.consecutive_failures = 0
        self.last_success_at = now
        self.updated_at = now

    def reset(self, now: datetime | None = None) -> None:
        """Zero the count after a deload without recording a success."""
        self.consecutive_failures = 0
        self.updated_at = now or now_timestamp()

    def has_failures(self) -> bool:
        return self.consecutive_failures > 0

    def meets_threshold(self, threshold: int) -> bool:
        return self.consecutive_failures >= threshold


# =============================================================================
# PROGRAM POSITION
# =============================================================================


@dataclass
class UserProgramState:
    user_id: str
    program_id: str
    current_week: int = 1
    current_cycle_iteration: int = 1
    current_day_index: int | None = None  # None until the first day is completed
    rotation_position: int = 0
    cycles_since_start: int = 0
    enrolled_at: datetime = field(default_factory=now_timestamp)
    updated_at: datetime = field(default_factory=now_timestamp)
    id: str = field(default_factory=lambda: uuid.uuid4().hex)

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        _require_id(self.user_id, "user_id")
        _require_id(self.program_id, "program_id")
        if self.current_week < 1:
            raise InvalidParamsError("current week must be at least 1")
        if self.current_cycle_iteration < 1:
            raise InvalidParamsError("current cycle iteration must be at least 1")
        if self.current_day_index is not None and self.current_day_index < 0:
            raise InvalidParamsError("current day index cannot be negative")
        if self.rotation_position < 0:
            raise InvalidParamsError("rotation position cannot be negative")
        if self.cycles_since_start < 0:
            raise InvalidParamsError("cycles since start cannot be negative")

    @classmethod
    def enroll(cls, user_id: str, program_id: str) -> "UserProgramState":
        return cls(user_id=_require_id(user_id, "user_id"), program_id=_require_id(program_id, "program_id"))


@dataclass(frozen=True)
class AdvancementResult:
    new_state: UserProgramState
    week_completed: bool
    cycle_completed: bool


def advance_state(
    state: UserProgramState,
    days_in_current_week: int,
    cycle_length_weeks: int,
    rotation_length: int | None = None,
) -> AdvancementResult:
    """
    Move *state* forward by one completed training day.

    Day index wraps into the next week; week wraps into the next cycle.
    When *rotation_length* is given, the rotation position advances by one
    (modulo the length) each time a cycle completes.

    Raises:
        InvalidParamsError: If days_in_current_week or cycle_length_weeks < 1
    """
    if days_in_current_week < 1:
        raise InvalidParamsError("days_in_current_week must be at least 1")
    if cycle_length_weeks < 1:
        raise InvalidParamsError("cycle_length_weeks must be at least 1")
    if rotation_length is not None and rotation_length < 1:
        raise InvalidParamsError("rotation_length must be at least 1")

    day = (state.current_day_index or 0) + 1
    week = state.current_week
    cycle = state.current_cycle_iteration
    cycles_since_start = state.cycles_since_start
    rotation = state.rotation_position
    week_completed = False
    cycle_completed = False

    if day >= days_in_current_week:
        day = 0
        week += 1
        week_completed = True
        if week > cycle_length_weeks:
            week = 1
            cycle += 1
            cycles_since_start += 1
            cycle_completed = True
            if rotation_length is not None:
                rotation = (rotation + 1) % rotation_length

    new_state = replace(
        state,
        current_week=week,
        current_cycle_iteration=cycle,
        current_day_index=day,
        rotation_position=rotation,
        cycles_since_start=cycles_since_start,
        updated_at=now_timestamp(),
    )
    logger.debug(
        "advance %s/%s: week %d day %d cycle %d",
        state.user_id, state.program_id, week, day, cycle,
    )
    return AdvancementResult(new_state, week_completed, cycle_completed)

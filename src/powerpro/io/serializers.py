"""
JSON serialization for engine state records.

Handles conversion between dataclasses and JSON-compatible dicts for the
records the state store persists (maxes, logged sets, failure counters,
program state) and for trigger events and progression results.  Strategy,
set scheme and progression configuration serialize through their own
to_dict() / registry functions.
"""

import re
from datetime import date, datetime
from pathlib import Path
from typing import Any

from ..core.errors import InvalidParamsError
from ..core.load_strategies import LoadStrategy, load_strategy_from_json
from ..core.models import TRIGGER_TYPES, LoggedSetResult, MaxValue
from ..core.progressions import Progression, progression_from_json
from ..core.progressions.base import ProgressionResult, TriggerEvent
from ..core.set_schemes import SetScheme, set_scheme_from_json
from ..core.state import FailureCounter, UserProgramState


class ValidationError(InvalidParamsError):
    """Raised when persisted or user-entered data fails validation."""

    pass


def validate_date(date_str: str) -> str:
    """
    Validate a YYYY-MM-DD date string.

    Raises:
        ValidationError: If date format is invalid
    """
    if not re.match(r"^\d{4}-\d{2}-\d{2}$", date_str):
        raise ValidationError(f"Invalid date format: {date_str}. Expected YYYY-MM-DD")

    try:
        datetime.strptime(date_str, "%Y-%m-%d")
    except ValueError as e:
        raise ValidationError(f"Invalid date: {date_str}") from e

    return date_str


def validate_non_negative(value: int | float, name: str) -> int | float:
    if value < 0:
        raise ValidationError(f"{name} must be non-negative, got {value}")
    return value


def validate_positive(value: int | float, name: str) -> int | float:
    if value <= 0:
        raise ValidationError(f"{name} must be positive, got {value}")
    return value


def _dt_to_str(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def _str_to_dt(value: str | None, name: str) -> datetime | None:
    if value is None:
        return None
    try:
        return datetime.fromisoformat(value)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid timestamp for {name}: {value!r}") from e


def _required(data: dict[str, Any], key: str) -> Any:
    try:
        return data[key]
    except KeyError:
        raise ValidationError(f"Missing field: {key}") from None


def _json_bool(data: dict[str, Any], key: str) -> bool:
    value = data.get(key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ValidationError(f"{key} must be true or false, got {value!r}")
    return value


# ---------------------------------------------------------------------------
# Maxes and logged sets
# ---------------------------------------------------------------------------


def max_value_to_dict(max_value: MaxValue) -> dict[str, Any]:
    return {
        "value": max_value.value,
        "effective_date": max_value.effective_date.isoformat() if max_value.effective_date else None,
    }


def dict_to_max_value(data: dict[str, Any]) -> MaxValue:
    value = float(_required(data, "value"))
    validate_positive(value, "value")
    effective = data.get("effective_date")
    return MaxValue(
        value=value,
        effective_date=date.fromisoformat(validate_date(effective)) if effective else None,
    )


def logged_set_to_dict(logged: LoggedSetResult) -> dict[str, Any]:
    return {"weight": logged.weight, "reps": logged.reps, "rpe": logged.rpe}


def dict_to_logged_set(data: dict[str, Any]) -> LoggedSetResult:
    weight = float(_required(data, "weight"))
    reps = int(_required(data, "reps"))
    validate_non_negative(weight, "weight")
    validate_non_negative(reps, "reps")
    rpe = data.get("rpe")
    return LoggedSetResult(weight=weight, reps=reps, rpe=float(rpe) if rpe is not None else None)


def parse_logged_set(text: str) -> LoggedSetResult:
    """
    Parse a compact set string: ``WEIGHTxREPS`` with an optional ``@RPE``.

    Examples:
        "300x5"      → 300.0 × 5, no RPE
        "287.5x3@8.5" → 287.5 × 3 @ 8.5
    """
    m = re.match(r"^\s*(\d+(?:\.\d+)?)\s*[xX]\s*(\d+)\s*(?:@\s*(\d+(?:\.\d+)?))?\s*$", text)
    if not m:
        raise ValidationError(f"Invalid set format: {text!r}. Expected WEIGHTxREPS[@RPE]")
    weight, reps, rpe = m.groups()
    return LoggedSetResult(
        weight=float(weight),
        reps=int(reps),
        rpe=float(rpe) if rpe is not None else None,
    )


# ---------------------------------------------------------------------------
# Failure counters and program state
# ---------------------------------------------------------------------------


def failure_counter_to_dict(counter: FailureCounter) -> dict[str, Any]:
    return {
        "id": counter.id,
        "user_id": counter.user_id,
        "lift_id": counter.lift_id,
        "progression_id": counter.progression_id,
        "consecutive_failures": counter.consecutive_failures,
        "last_failure_at": _dt_to_str(counter.last_failure_at),
        "last_success_at": _dt_to_str(counter.last_success_at),
        "created_at": _dt_to_str(counter.created_at),
        "updated_at": _dt_to_str(counter.updated_at),
    }


def dict_to_failure_counter(data: dict[str, Any]) -> FailureCounter:
    try:
        return FailureCounter(
            id=_required(data, "id"),
            user_id=_required(data, "user_id"),
            lift_id=_required(data, "lift_id"),
            progression_id=_required(data, "progression_id"),
            consecutive_failures=int(data.get("consecutive_failures", 0)),
            last_failure_at=_str_to_dt(data.get("last_failure_at"), "last_failure_at"),
            last_success_at=_str_to_dt(data.get("last_success_at"), "last_success_at"),
            created_at=_str_to_dt(_required(data, "created_at"), "created_at"),
            updated_at=_str_to_dt(_required(data, "updated_at"), "updated_at"),
        )
    except ValidationError:
        raise
    except InvalidParamsError as e:
        raise ValidationError(f"Invalid failure counter: {e}") from e


def program_state_to_dict(state: UserProgramState) -> dict[str, Any]:
    return {
        "id": state.id,
        "user_id": state.user_id,
        "program_id": state.program_id,
        "current_week": state.current_week,
        "current_cycle_iteration": state.current_cycle_iteration,
        "current_day_index": state.current_day_index,
        "rotation_position": state.rotation_position,
        "cycles_since_start": state.cycles_since_start,
        "enrolled_at": _dt_to_str(state.enrolled_at),
        "updated_at": _dt_to_str(state.updated_at),
    }


def dict_to_program_state(data: dict[str, Any]) -> UserProgramState:
    day = data.get("current_day_index")
    try:
        return UserProgramState(
            id=_required(data, "id"),
            user_id=_required(data, "user_id"),
            program_id=_required(data, "program_id"),
            current_week=int(data.get("current_week", 1)),
            current_cycle_iteration=int(data.get("current_cycle_iteration", 1)),
            current_day_index=int(day) if day is not None else None,
            rotation_position=int(data.get("rotation_position", 0)),
            cycles_since_start=int(data.get("cycles_since_start", 0)),
            enrolled_at=_str_to_dt(_required(data, "enrolled_at"), "enrolled_at"),
            updated_at=_str_to_dt(_required(data, "updated_at"), "updated_at"),
        )
    except ValidationError:
        raise
    except InvalidParamsError as e:
        raise ValidationError(f"Invalid program state: {e}") from e


# ---------------------------------------------------------------------------
# Trigger events and progression results (camelCase, like strategy config)
# ---------------------------------------------------------------------------


def trigger_event_to_dict(event: TriggerEvent) -> dict[str, Any]:
    data: dict[str, Any] = {"type": event.type, "timestamp": _dt_to_str(event.timestamp)}
    optional = {
        "sessionId": event.session_id,
        "weekNumber": event.week_number,
        "cycleIteration": event.cycle_iteration,
        "daySlug": event.day_slug,
        "repsPerformed": event.reps_performed,
        "maxReps": event.max_reps,
        "setWeight": event.set_weight,
        "consecutiveFailures": event.consecutive_failures,
    }
    data.update({k: v for k, v in optional.items() if v is not None})
    if event.lifts_performed:
        data["liftsPerformed"] = list(event.lifts_performed)
    if event.is_amrap:
        data["isAMRAP"] = True
    return data


def dict_to_trigger_event(data: dict[str, Any]) -> TriggerEvent:
    trigger_type = _required(data, "type")
    if trigger_type not in TRIGGER_TYPES:
        raise ValidationError(f"Invalid trigger type: {trigger_type}")
    event = TriggerEvent(
        type=trigger_type,
        session_id=data.get("sessionId"),
        week_number=data.get("weekNumber"),
        cycle_iteration=data.get("cycleIteration"),
        day_slug=data.get("daySlug"),
        lifts_performed=list(data.get("liftsPerformed") or []),
        reps_performed=data.get("repsPerformed"),
        max_reps=data.get("maxReps"),
        is_amrap=_json_bool(data, "isAMRAP"),
        set_weight=data.get("setWeight"),
        consecutive_failures=data.get("consecutiveFailures"),
    )
    if data.get("timestamp"):
        event.timestamp = _str_to_dt(data["timestamp"], "timestamp")
    return event


def progression_result_to_dict(result: ProgressionResult) -> dict[str, Any]:
    data = {
        "applied": result.applied,
        "previousValue": result.previous_value,
        "newValue": result.new_value,
        "delta": result.delta,
        "liftId": result.lift_id,
        "maxType": result.max_type,
        "appliedAt": _dt_to_str(result.applied_at),
    }
    if result.reason:
        data["reason"] = result.reason
    return data


# ---------------------------------------------------------------------------
# Configuration text (strategies, set schemes, progressions)
# ---------------------------------------------------------------------------


def read_config_text(value: str) -> str:
    """
    Return JSON text from an inline string or an ``@path`` reference.

    Examples:
        '{"type": "FIXED", "sets": 5, "reps": 5}' → returned unchanged
        "@programs/squat.json"                     → contents of the file
    """
    if value.startswith("@"):
        path = Path(value[1:]).expanduser()
        try:
            return path.read_text()
        except OSError as e:
            raise ValidationError(f"Cannot read config file {path}: {e}") from e
    return value


def strategy_from_text(value: str) -> LoadStrategy:
    return load_strategy_from_json(read_config_text(value))


def set_scheme_from_text(value: str) -> SetScheme:
    return set_scheme_from_json(read_config_text(value))


def progression_from_text(value: str) -> Progression:
    return progression_from_json(read_config_text(value))

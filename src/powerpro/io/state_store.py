"""
JSON file storage for per-user training state.

A single ``state.json`` holds everything the engine looks up or mutates
between invocations:

    {
      "maxes":    {user: {lift: {max_type: [{value, effective_date}, ...]}}},
      "sessions": {session_id: {lift: [{weight, reps, rpe}, ...]}},
      "failure_counters": [...],
      "program_states":   [...]
    }

StateStore implements the MaxLookup and SessionLookup protocols so it can be
injected straight into load strategies.  Whole-file writes, no locking.
"""

import json
import logging
from datetime import date
from pathlib import Path
from typing import Any

from ..core.models import LoggedSetResult, MaxValue
from ..core.progressions.base import validate_max_type
from ..core.state import FailureCounter, UserProgramState
from .serializers import (
    ValidationError,
    dict_to_failure_counter,
    dict_to_logged_set,
    dict_to_max_value,
    dict_to_program_state,
    failure_counter_to_dict,
    logged_set_to_dict,
    max_value_to_dict,
    program_state_to_dict,
)

logger = logging.getLogger(__name__)


def _empty_state() -> dict[str, Any]:
    return {"maxes": {}, "sessions": {}, "failure_counters": [], "program_states": []}


class StateStore:
    """
    Manages engine state stored in a single JSON file.
    """

    def __init__(self, state_path: str | Path):
        """
        Initialize the state store.

        Args:
            state_path: Path to the JSON state file
        """
        self.state_path = Path(state_path)

    def exists(self) -> bool:
        return self.state_path.exists()

    def init(self) -> None:
        """
        Create an empty state file if it doesn't exist.

        Creates parent directories if needed.
        """
        self.state_path.parent.mkdir(parents=True, exist_ok=True)
        if not self.state_path.exists():
            self._write(_empty_state())

    # ------------------------------------------------------------------
    # Raw file access
    # ------------------------------------------------------------------

    def _read(self) -> dict[str, Any]:
        """
        Raises:
            FileNotFoundError: If the state file doesn't exist
            ValidationError: If the file is not valid JSON
        """
        if not self.state_path.exists():
            raise FileNotFoundError(
                f"State file not found: {self.state_path}. Run 'set-max' first."
            )
        try:
            with open(self.state_path, "r") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValidationError(f"Error parsing {self.state_path}: {e}") from e
        if not isinstance(data, dict):
            raise ValidationError(f"Error parsing {self.state_path}: expected a JSON object")
        for key, default in _empty_state().items():
            data.setdefault(key, default)
        return data

    def _read_or_empty(self) -> dict[str, Any]:
        if not self.state_path.exists():
            return _empty_state()
        return self._read()

    def _write(self, data: dict[str, Any]) -> None:
        self.state_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.state_path, "w") as f:
            json.dump(data, f, indent=2)

    # ------------------------------------------------------------------
    # Maxes (MaxLookup)
    # ------------------------------------------------------------------

    def set_max(
        self,
        user_id: str,
        lift_id: str,
        max_type: str,
        value: float,
        effective_date: date | None = None,
    ) -> MaxValue:
        """
        Record a new max.  Earlier entries are kept as history.

        Raises:
            InvalidParamsError: If max_type is unknown
            ValidationError: If value is not positive
        """
        validate_max_type(max_type)
        if value <= 0:
            raise ValidationError(f"max value must be positive, got {value}")
        max_value = MaxValue(value=value, effective_date=effective_date or date.today())

        data = self._read_or_empty()
        entries = data["maxes"].setdefault(user_id, {}).setdefault(lift_id, {}).setdefault(max_type, [])
        entries.append(max_value_to_dict(max_value))
        self._write(data)
        logger.debug("set max %s/%s %s = %.2f", user_id, lift_id, max_type, value)
        return max_value

    def get_max_history(self, user_id: str, lift_id: str, max_type: str) -> list[MaxValue]:
        """All recorded maxes, oldest effective date first."""
        data = self._read_or_empty()
        raw = data["maxes"].get(user_id, {}).get(lift_id, {}).get(max_type, [])
        values = [dict_to_max_value(entry) for entry in raw]
        # Stable sort keeps insertion order for same-day entries
        values.sort(key=lambda m: m.effective_date or date.min)
        return values

    def get_current_max(self, user_id: str, lift_id: str, max_type: str) -> MaxValue | None:
        history = self.get_max_history(user_id, lift_id, max_type)
        return history[-1] if history else None

    # ------------------------------------------------------------------
    # Logged sets (SessionLookup)
    # ------------------------------------------------------------------

    def log_set(self, session_id: str, lift_id: str, logged: LoggedSetResult) -> int:
        """
        Append a logged set to a session.

        Returns:
            0-based index of the new set within (session, lift)
        """
        if not session_id:
            raise ValidationError("session id is required")
        data = self._read_or_empty()
        sets = data["sessions"].setdefault(session_id, {}).setdefault(lift_id, [])
        sets.append(logged_set_to_dict(logged))
        self._write(data)
        return len(sets) - 1

    def get_logged_sets(self, session_id: str, lift_id: str) -> list[LoggedSetResult]:
        data = self._read_or_empty()
        raw = data["sessions"].get(session_id, {}).get(lift_id, [])
        return [dict_to_logged_set(entry) for entry in raw]

    def get_logged_set_by_index(
        self, session_id: str, lift_id: str, index: int
    ) -> LoggedSetResult | None:
        sets = self.get_logged_sets(session_id, lift_id)
        if index < 0 or index >= len(sets):
            return None
        return sets[index]

    def clear_session(self, session_id: str) -> None:
        data = self._read_or_empty()
        if data["sessions"].pop(session_id, None) is not None:
            self._write(data)

    # ------------------------------------------------------------------
    # Failure counters
    # ------------------------------------------------------------------

    def get_failure_counter(
        self, user_id: str, lift_id: str, progression_id: str
    ) -> FailureCounter | None:
        key = (user_id, lift_id, progression_id)
        for entry in self._read_or_empty()["failure_counters"]:
            counter = dict_to_failure_counter(entry)
            if counter.key == key:
                return counter
        return None

    def get_or_create_failure_counter(
        self, user_id: str, lift_id: str, progression_id: str
    ) -> FailureCounter:
        counter = self.get_failure_counter(user_id, lift_id, progression_id)
        if counter is None:
            counter = FailureCounter.create(user_id, lift_id, progression_id)
        return counter

    def save_failure_counter(self, counter: FailureCounter) -> None:
        """Insert or replace the counter with the same (user, lift, progression) key."""
        data = self._read_or_empty()
        counters = [
            entry for entry in data["failure_counters"]
            if (entry.get("user_id"), entry.get("lift_id"), entry.get("progression_id")) != counter.key
        ]
        counters.append(failure_counter_to_dict(counter))
        data["failure_counters"] = counters
        self._write(data)

    # ------------------------------------------------------------------
    # Program state
    # ------------------------------------------------------------------

    def get_program_state(self, user_id: str, program_id: str) -> UserProgramState | None:
        for entry in self._read_or_empty()["program_states"]:
            if entry.get("user_id") == user_id and entry.get("program_id") == program_id:
                return dict_to_program_state(entry)
        return None

    def save_program_state(self, state: UserProgramState) -> None:
        data = self._read_or_empty()
        states = [
            entry for entry in data["program_states"]
            if (entry.get("user_id"), entry.get("program_id")) != (state.user_id, state.program_id)
        ]
        states.append(program_state_to_dict(state))
        data["program_states"] = states
        self._write(data)


def get_default_state_path() -> Path:
    """
    Get the default state file path.

    Returns:
        ~/.power-pro/state.json
    """
    return Path.home() / ".power-pro" / "state.json"

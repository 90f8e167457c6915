"""Tests for the JSON state store and its serializers."""

import json
from datetime import date

import pytest

from powerpro.core.models import AFTER_SET, LoggedSetResult, ONE_RM, TRAINING_MAX
from powerpro.core.progressions import TriggerEvent
from powerpro.core.state import FailureCounter, UserProgramState, advance_state
from powerpro.io.serializers import (
    ValidationError,
    dict_to_failure_counter,
    dict_to_program_state,
    dict_to_trigger_event,
    failure_counter_to_dict,
    parse_logged_set,
    program_state_to_dict,
    read_config_text,
    set_scheme_from_text,
    trigger_event_to_dict,
    validate_date,
)
from powerpro.core.set_schemes import Fixed
from powerpro.io.state_store import StateStore


@pytest.fixture
def store(tmp_path):
    s = StateStore(tmp_path / "state.json")
    s.init()
    return s


class TestParseLoggedSet:

    @pytest.mark.parametrize("text,expected", [
        ("300x5", LoggedSetResult(300.0, 5)),
        ("287.5x3@8.5", LoggedSetResult(287.5, 3, 8.5)),
        (" 225 X 10 @ 9 ", LoggedSetResult(225.0, 10, 9.0)),
    ])
    def test_valid(self, text, expected):
        assert parse_logged_set(text) == expected

    @pytest.mark.parametrize("text", ["", "300", "x5", "300x", "300x5@", "-5x5"])
    def test_invalid(self, text):
        with pytest.raises(ValidationError):
            parse_logged_set(text)


class TestValidateDate:

    def test_valid(self):
        assert validate_date("2026-03-14") == "2026-03-14"

    @pytest.mark.parametrize("text", ["2026/03/14", "14-03-2026", "2026-02-30"])
    def test_invalid(self, text):
        with pytest.raises(ValidationError):
            validate_date(text)


class TestRecordSerializers:

    def test_failure_counter_roundtrip(self):
        counter = FailureCounter.create("u1", "squat", "p1")
        counter.increment_failure()
        assert dict_to_failure_counter(failure_counter_to_dict(counter)) == counter

    def test_program_state_roundtrip(self):
        state = advance_state(UserProgramState.enroll("u1", "531"), 3, 4).new_state
        assert dict_to_program_state(program_state_to_dict(state)) == state

    def test_bad_timestamp(self):
        data = failure_counter_to_dict(FailureCounter.create("u1", "squat", "p1"))
        data["created_at"] = "yesterday"
        with pytest.raises(ValidationError):
            dict_to_failure_counter(data)

    def test_trigger_event_camel_case(self):
        event = TriggerEvent(type=AFTER_SET, session_id="s1", reps_performed=8, is_amrap=True)
        data = trigger_event_to_dict(event)
        assert data["sessionId"] == "s1"
        assert data["repsPerformed"] == 8
        assert data["isAMRAP"] is True
        assert "weekNumber" not in data
        assert dict_to_trigger_event(data) == event

    def test_trigger_event_max_reps(self):
        event = TriggerEvent(type=AFTER_SET, reps_performed=12, max_reps=12)
        data = trigger_event_to_dict(event)
        assert data["maxReps"] == 12
        assert dict_to_trigger_event(data).max_reps == 12
        assert "maxReps" not in trigger_event_to_dict(TriggerEvent(type=AFTER_SET))

    @pytest.mark.parametrize("value", ["false", 1])
    def test_trigger_event_amrap_flag_must_be_boolean(self, value):
        with pytest.raises(ValidationError, match="isAMRAP"):
            dict_to_trigger_event({"type": AFTER_SET, "isAMRAP": value})

    def test_trigger_event_unknown_type(self):
        with pytest.raises(ValidationError):
            dict_to_trigger_event({"type": "SOMETIMES"})


class TestConfigText:

    def test_inline(self):
        text = '{"type": "FIXED", "sets": 5, "reps": 5}'
        assert read_config_text(text) == text
        assert set_scheme_from_text(text) == Fixed(5, 5)

    def test_file_reference(self, tmp_path):
        path = tmp_path / "scheme.json"
        path.write_text('{"type": "FIXED", "sets": 3, "reps": 8}')
        assert set_scheme_from_text(f"@{path}") == Fixed(3, 8)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ValidationError, match="Cannot read"):
            read_config_text(f"@{tmp_path / 'nope.json'}")


class TestStateStoreMaxes:

    def test_init_creates_empty_file(self, store):
        data = json.loads(store.state_path.read_text())
        assert data == {"maxes": {}, "sessions": {}, "failure_counters": [], "program_states": []}

    def test_current_max_is_latest_by_date(self, store):
        store.set_max("u1", "squat", TRAINING_MAX, 300.0, date(2026, 3, 1))
        store.set_max("u1", "squat", TRAINING_MAX, 290.0, date(2026, 1, 1))
        assert store.get_current_max("u1", "squat", TRAINING_MAX).value == 300.0
        history = store.get_max_history("u1", "squat", TRAINING_MAX)
        assert [m.value for m in history] == [290.0, 300.0]

    def test_same_day_keeps_insertion_order(self, store):
        store.set_max("u1", "bench", ONE_RM, 200.0, date(2026, 3, 1))
        store.set_max("u1", "bench", ONE_RM, 205.0, date(2026, 3, 1))
        assert store.get_current_max("u1", "bench", ONE_RM).value == 205.0

    def test_missing_max(self, store):
        assert store.get_current_max("u1", "deadlift", ONE_RM) is None

    def test_max_types_kept_apart(self, store):
        store.set_max("u1", "squat", ONE_RM, 400.0)
        assert store.get_current_max("u1", "squat", TRAINING_MAX) is None

    def test_invalid_max(self, store):
        with pytest.raises(ValidationError):
            store.set_max("u1", "squat", ONE_RM, 0.0)
        with pytest.raises(ValueError):
            store.set_max("u1", "squat", "BEST_EVER", 400.0)

    def test_default_date_is_today(self, store):
        assert store.set_max("u1", "squat", ONE_RM, 400.0).effective_date == date.today()


class TestStateStoreSessions:

    def test_log_and_lookup_by_index(self, store):
        assert store.log_set("s1", "squat", LoggedSetResult(300.0, 5, 8.0)) == 0
        assert store.log_set("s1", "squat", LoggedSetResult(305.0, 5, 9.0)) == 1
        assert store.get_logged_set_by_index("s1", "squat", 1) == LoggedSetResult(305.0, 5, 9.0)
        assert store.get_logged_set_by_index("s1", "squat", 2) is None
        assert store.get_logged_set_by_index("s1", "bench", 0) is None

    def test_clear_session(self, store):
        store.log_set("s1", "squat", LoggedSetResult(300.0, 5))
        store.clear_session("s1")
        assert store.get_logged_sets("s1", "squat") == []

    def test_corrupt_file(self, tmp_path):
        path = tmp_path / "state.json"
        path.write_text("{not json")
        with pytest.raises(ValidationError):
            StateStore(path).get_current_max("u1", "squat", ONE_RM)

    def test_missing_file_reads_empty(self, tmp_path):
        assert StateStore(tmp_path / "none.json").get_logged_sets("s1", "squat") == []


class TestStateStoreRecords:

    def test_failure_counter_upsert(self, store):
        counter = store.get_or_create_failure_counter("u1", "squat", "p1")
        counter.increment_failure()
        store.save_failure_counter(counter)
        counter.increment_failure()
        store.save_failure_counter(counter)

        loaded = store.get_failure_counter("u1", "squat", "p1")
        assert loaded.consecutive_failures == 2
        assert len(json.loads(store.state_path.read_text())["failure_counters"]) == 1

    def test_counter_not_found(self, store):
        assert store.get_failure_counter("u1", "squat", "p1") is None

    def test_program_state_upsert(self, store):
        state = UserProgramState.enroll("u1", "531")
        store.save_program_state(state)
        advanced = advance_state(state, 3, 4).new_state
        store.save_program_state(advanced)
        assert store.get_program_state("u1", "531") == advanced
        assert store.get_program_state("u1", "other") is None

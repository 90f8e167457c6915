"""
Tests for the discriminator-keyed factories.

Every built-in variant must survive to_dict → from_dict unchanged, and bad
payloads must fail with the right error family.
"""

import json

import pytest

from powerpro.core.errors import (
    InvalidParamsError,
    PowerProError,
    TypeNotRegisteredError,
    UnknownTypeError,
)
from powerpro.core.factory import PolymorphicFactory
from powerpro.core.load_strategies import (
    FindRM,
    PercentOf,
    RelativeTo,
    RPETarget,
    Taper,
    TaperTier,
    load_strategy_from_dict,
    load_strategy_from_json,
    load_strategy_to_json,
)
from powerpro.core.models import ONE_RM, TRAINING_MAX
from powerpro.core.progressions import (
    AMRAPProgression,
    CycleProgression,
    DeloadOnFailure,
    DoubleProgression,
    GreySkullProgression,
    LinearProgression,
    RepsThreshold,
    gzclp_t1,
    progression_from_dict,
    progression_from_json,
    progression_to_json,
)
from powerpro.core.set_schemes import (
    TERMINATION_FACTORY,
    AMRAPScheme,
    FatigueDrop,
    Fixed,
    GreySkullScheme,
    MaxSets,
    MRSScheme,
    Ramp,
    RampStep,
    RepFailure,
    RepRange,
    RPEThreshold,
    TotalRepsReached,
    TotalRepsScheme,
    set_scheme_from_dict,
    set_scheme_from_json,
    set_scheme_to_json,
)


LOAD_STRATEGIES = [
    PercentOf(reference_type=TRAINING_MAX, percentage=85.0),
    PercentOf(reference_type=ONE_RM, percentage=72.5, rounding_increment=2.5, rounding_direction="DOWN"),
    RPETarget(target_reps=5, target_rpe=8.0),
    FindRM(target_reps=3),
    RelativeTo(reference_set_index=0, percentage=80.0, rounding_direction="UP"),
    Taper(base_strategy=PercentOf(reference_type=ONE_RM, percentage=100.0)),
    Taper(
        base_strategy=RPETarget(target_reps=1, target_rpe=9.0),
        taper_curve=[TaperTier(7, 0.5), TaperTier(21, 0.8)],
        maintain_intensity=True,
    ),
]

SET_SCHEMES = [
    Fixed(sets=5, reps=5),
    AMRAPScheme(sets=1, min_reps=5),
    GreySkullScheme(fixed_sets=2, fixed_reps=5, amrap_sets=1, min_amrap_reps=5),
    RepRange(sets=3, min_reps=8, max_reps=12),
    Ramp(steps=[RampStep(50.0, 5), RampStep(70.0, 3), RampStep(85.0, 5)]),
    Ramp(steps=[RampStep(60.0, 5), RampStep(90.0, 1)], work_set_threshold=90.0),
    MRSScheme(target_total_reps=25, min_reps_per_set=3, max_reps_per_set=8, num_sets=6),
    FatigueDrop(reps=3, start_rpe=8.0, stop_rpe=10.0, drop_percent=0.05, max_sets=8),
    TotalRepsScheme(target_total_reps=100, suggested_reps=10, max_sets=15),
]

PROGRESSIONS = [
    LinearProgression("lp", "Linear", 5.0, TRAINING_MAX),
    LinearProgression("lp-w", "Linear weekly", 2.5, ONE_RM, trigger="AFTER_WEEK"),
    CycleProgression("cp", "531", 10.0, TRAINING_MAX),
    AMRAPProgression(
        "ap", "AMRAP", TRAINING_MAX,
        thresholds=[RepsThreshold(5, 5.0), RepsThreshold(8, 10.0)],
    ),
    DeloadOnFailure("df", "Deload", 3, "percent", TRAINING_MAX, deload_percent=0.1),
    DeloadOnFailure("df2", "Deload", 2, "fixed", ONE_RM, deload_amount=20.0, reset_on_deload=False),
    gzclp_t1("t1", "GZCLP T1"),
    GreySkullProgression("gs", "GSLP", 2.5, 5, 10, 0.1, TRAINING_MAX),
    DoubleProgression("dp", "3x8-12", 5.0, TRAINING_MAX),
]


class TestRoundTrip:

    @pytest.mark.parametrize("strategy", LOAD_STRATEGIES, ids=lambda s: s.type_name)
    def test_load_strategy(self, strategy):
        assert load_strategy_from_json(load_strategy_to_json(strategy)) == strategy

    @pytest.mark.parametrize("scheme", SET_SCHEMES, ids=lambda s: s.type_name)
    def test_set_scheme(self, scheme):
        assert set_scheme_from_json(set_scheme_to_json(scheme)) == scheme

    @pytest.mark.parametrize("progression", PROGRESSIONS, ids=lambda p: p.id)
    def test_progression(self, progression):
        assert progression_from_json(progression_to_json(progression)) == progression

    def test_stage_index_survives(self):
        p = gzclp_t1("t1", "GZCLP T1")
        p.set_current_stage(2)
        assert progression_from_json(progression_to_json(p)).current_stage == 2

    def test_termination_conditions(self):
        for cond in (RPEThreshold(9.5), RepFailure(), MaxSets(6), TotalRepsReached(50)):
            assert TERMINATION_FACTORY.create_from_dict(cond.to_dict()) == cond


class TestWireFormat:

    def test_discriminator_and_camel_case(self):
        data = PercentOf(reference_type=TRAINING_MAX, percentage=85.0).to_dict()
        assert data == {
            "type": "PERCENT_OF",
            "referenceType": "TRAINING_MAX",
            "percentage": 85.0,
            "roundingIncrement": 5.0,
            "roundingDirection": "NEAREST",
        }

    def test_rounding_defaults_fill_in(self):
        s = load_strategy_from_dict(
            {"type": "PERCENT_OF", "referenceType": "ONE_RM", "percentage": 80}
        )
        assert s.rounding_increment == 5.0
        assert s.rounding_direction == "NEAREST"

    def test_nested_taper(self):
        payload = {
            "type": "TAPER",
            "baseStrategy": {
                "type": "TAPER",
                "baseStrategy": {"type": "FIND_RM", "targetReps": 1},
            },
        }
        outer = load_strategy_from_dict(payload)
        assert isinstance(outer.base_strategy, Taper)
        assert outer.base_strategy.base_strategy == FindRM(target_reps=1)

    def test_ramp_threshold_omitted_when_unset(self):
        data = Ramp(steps=[RampStep(50.0, 5)]).to_dict()
        assert "workSetThreshold" not in data

    def test_injected_lookups_not_serialized(self):
        s = PercentOf(reference_type=TRAINING_MAX, percentage=90.0)
        s.set_max_lookup(object())
        assert "maxLookup" not in json.loads(load_strategy_to_json(s))

    def test_double_progression_payload(self):
        data = DoubleProgression("dp", "3x8-12", 5.0, TRAINING_MAX).to_dict()
        assert data["type"] == "DOUBLE_PROGRESSION"
        assert data["weightIncrement"] == 5.0
        assert data["triggerType"] == "AFTER_SET"

        del data["triggerType"]
        assert progression_from_dict(data).trigger_type() == "AFTER_SET"

        data["triggerType"] = "AFTER_SESSION"
        with pytest.raises(InvalidParamsError, match="AFTER_SET"):
            progression_from_dict(data)


class TestBadPayloads:

    def test_unregistered_type(self):
        with pytest.raises(TypeNotRegisteredError) as exc_info:
            load_strategy_from_dict({"type": "MYSTERY"})
        assert exc_info.value.type_name == "MYSTERY"
        assert "not registered" in str(exc_info.value)

    def test_missing_discriminator(self):
        with pytest.raises(UnknownTypeError):
            set_scheme_from_dict({"sets": 5, "reps": 5})
        with pytest.raises(UnknownTypeError):
            progression_from_dict({"type": ""})

    def test_payload_not_an_object(self):
        with pytest.raises(UnknownTypeError):
            set_scheme_from_json("[1, 2, 3]")

    def test_invalid_json(self):
        with pytest.raises(InvalidParamsError, match="invalid JSON"):
            progression_from_json("{not json")

    def test_missing_required_field(self):
        with pytest.raises(InvalidParamsError, match="sets"):
            set_scheme_from_dict({"type": "FIXED", "reps": 5})

    def test_invalid_values_rejected(self):
        with pytest.raises(InvalidParamsError):
            set_scheme_from_dict({"type": "FIXED", "sets": 0, "reps": 5})

    def test_unknown_type_in_taper_base(self):
        with pytest.raises(TypeNotRegisteredError):
            load_strategy_from_dict({"type": "TAPER", "baseStrategy": {"type": "NOPE"}})

    def test_amrap_progression_rejects_other_trigger(self):
        payload = AMRAPProgression(
            "ap", "AMRAP", TRAINING_MAX, thresholds=[RepsThreshold(5, 5.0)]
        ).to_dict()
        payload["triggerType"] = "AFTER_SESSION"
        with pytest.raises(InvalidParamsError):
            progression_from_dict(payload)

    def test_non_numeric_field(self):
        with pytest.raises(InvalidParamsError, match="FIXED") as exc_info:
            set_scheme_from_dict({"type": "FIXED", "sets": "five", "reps": 5})
        assert isinstance(exc_info.value.__cause__, ValueError)

    def test_taper_tier_missing_key(self):
        payload = {
            "type": "TAPER",
            "baseStrategy": {"type": "FIND_RM", "targetReps": 1},
            "taperCurve": [{"multiplier": 0.5}],
        }
        with pytest.raises(InvalidParamsError, match="thresholdDays"):
            load_strategy_from_dict(payload)

    def test_stage_list_wrong_shape(self):
        payload = gzclp_t1("t1", "GZCLP T1").to_dict()
        payload["stages"] = 5
        with pytest.raises(InvalidParamsError, match="STAGE_PROGRESSION"):
            progression_from_dict(payload)

    @pytest.mark.parametrize("value", ["false", "true", 0, 1])
    def test_taper_flag_must_be_boolean(self, value):
        payload = {
            "type": "TAPER",
            "baseStrategy": {"type": "FIND_RM", "targetReps": 1},
            "maintainIntensity": value,
        }
        with pytest.raises(InvalidParamsError, match="maintainIntensity"):
            load_strategy_from_dict(payload)

    def test_deload_flag_must_be_boolean(self):
        payload = PROGRESSIONS[4].to_dict()
        payload["resetOnDeload"] = "false"
        with pytest.raises(InvalidParamsError, match="resetOnDeload"):
            progression_from_dict(payload)

    @pytest.mark.parametrize("key", ["resetOnExhaustion", "deloadOnReset"])
    def test_stage_flags_must_be_boolean(self, key):
        payload = gzclp_t1("t1", "GZCLP T1").to_dict()
        payload[key] = "no"
        with pytest.raises(InvalidParamsError, match=key):
            progression_from_dict(payload)

    def test_stage_amrap_flag_must_be_boolean(self):
        payload = gzclp_t1("t1", "GZCLP T1").to_dict()
        payload["stages"][0]["isAmrap"] = "false"
        with pytest.raises(InvalidParamsError, match="isAmrap"):
            progression_from_dict(payload)

    def test_boolean_flags_still_accepted(self):
        payload = PROGRESSIONS[4].to_dict()
        payload["resetOnDeload"] = False
        assert progression_from_dict(payload).reset_on_deload is False

    def test_all_errors_share_base(self):
        for exc in (TypeNotRegisteredError("X"), UnknownTypeError("y")):
            assert isinstance(exc, PowerProError)


class TestCustomRegistration:

    def test_register_and_create(self):
        factory: PolymorphicFactory[dict] = PolymorphicFactory("widget")
        factory.register("W", lambda payload: {"built": payload["n"]})
        assert factory.is_registered("W")
        assert factory.registered_types() == ["W"]
        assert factory.create_from_dict({"type": "W", "n": 3}) == {"built": 3}

    def test_empty_type_name_rejected(self):
        factory: PolymorphicFactory[dict] = PolymorphicFactory("widget")
        with pytest.raises(InvalidParamsError):
            factory.register("", dict)

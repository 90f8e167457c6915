"""
Formula-focused unit tests for the core calculators.

Covers weight rounding, the RPE chart, E1RM estimation and the lookup
modifier chain.  Values are hand-computed so the tests double as worked
examples.
"""

import pytest

from powerpro.core.config import DEFAULT_ROUNDING_INCREMENT, UNKNOWN_REPS
from powerpro.core.e1rm import E1RMCalculator, calculate_e1rm
from powerpro.core.errors import (
    InvalidIncrementError,
    InvalidParamsError,
    InvalidRoundingDirectionError,
    NegativeWeightError,
    PowerProError,
    RPEEntryNotFoundError,
    TargetRepsInvalidError,
    TargetRPEInvalidError,
)
from powerpro.core.lookups import (
    DailyLookup,
    DailyLookupEntry,
    LookupContext,
    RotationLookup,
    RotationLookupEntry,
    WeeklyLookup,
    WeeklyLookupEntry,
)
from powerpro.core.rounding import (
    DOWN,
    NEAREST,
    UP,
    RoundingConfig,
    normalize_rounding_increment,
    round_weight,
    round_weight_down,
    round_weight_nearest,
    round_weight_up,
)
from powerpro.core.rpe_chart import RPEChart, RPEChartEntry, default_rpe_chart


# ---------------------------------------------------------------------------
# Rounding
# ---------------------------------------------------------------------------

class TestRounding:

    def test_nearest_rounds_half_up(self):
        # 267.75 / 5 = 53.55 → 54 → 270
        assert round_weight(267.75, 5.0, NEAREST) == 270.0
        # 262.5 / 5 = 52.5 → 53 (half up, not banker's) → 265
        assert round_weight(262.5, 5.0, NEAREST) == 265.0

    def test_down_and_up(self):
        assert round_weight_down(268.0, 5.0) == 265.0
        assert round_weight_up(266.0, 5.0) == 270.0

    def test_exact_multiple_unchanged(self):
        for direction in (NEAREST, DOWN, UP):
            assert round_weight(270.0, 5.0, direction) == 270.0

    def test_zero_weight_is_zero(self):
        assert round_weight(0.0, 5.0, UP) == 0.0

    def test_fractional_increment(self):
        # 401.1 / 2.5 = 160.44 → 160 → 400
        assert round_weight_nearest(401.1, 2.5) == pytest.approx(400.0)

    @pytest.mark.parametrize("weight", [0.5, 12.3, 99.99, 267.75, 401.1, 1000.0])
    @pytest.mark.parametrize("increment", [1.0, 2.5, 5.0])
    def test_rounding_brackets_weight(self, weight, increment):
        down = round_weight_down(weight, increment)
        up = round_weight_up(weight, increment)
        nearest = round_weight_nearest(weight, increment)
        assert down <= weight <= up
        assert abs(nearest - weight) <= increment / 2 + 1e-9

    def test_negative_weight_rejected(self):
        with pytest.raises(NegativeWeightError):
            round_weight(-1.0, 5.0, NEAREST)

    def test_non_positive_increment_rejected(self):
        with pytest.raises(InvalidIncrementError):
            round_weight(100.0, 0.0, NEAREST)
        with pytest.raises(InvalidIncrementError):
            round_weight(100.0, -2.5, NEAREST)

    def test_unknown_direction_rejected(self):
        with pytest.raises(InvalidRoundingDirectionError):
            round_weight(100.0, 5.0, "SIDEWAYS")

    def test_errors_are_value_errors(self):
        # Callers that only know ValueError still catch range errors
        with pytest.raises(ValueError):
            round_weight(-1.0, 5.0, NEAREST)

    def test_zero_increment_normalizes_to_default(self):
        assert normalize_rounding_increment(0) == DEFAULT_ROUNDING_INCREMENT
        assert normalize_rounding_increment(None) == DEFAULT_ROUNDING_INCREMENT
        assert normalize_rounding_increment(-2.5) == DEFAULT_ROUNDING_INCREMENT
        assert normalize_rounding_increment(2.5) == 2.5

    def test_rounding_config_from_values(self):
        cfg = RoundingConfig.from_values(0, "")
        assert cfg.increment == DEFAULT_ROUNDING_INCREMENT
        assert cfg.direction == NEAREST
        assert RoundingConfig.from_values(2.5, DOWN).apply(103.0) == 102.5


# ---------------------------------------------------------------------------
# RPE chart
# ---------------------------------------------------------------------------

class TestRPEChart:

    def test_default_chart_is_complete(self):
        chart = default_rpe_chart()
        # 12 reps × 7 RPE values
        assert len(chart) == 84
        for reps in range(1, 13):
            for rpe in (7.0, 7.5, 8.0, 8.5, 9.0, 9.5, 10.0):
                assert chart.has_entry(reps, rpe)

    def test_known_percentages(self):
        chart = default_rpe_chart()
        assert chart.get_percentage(1, 10.0) == pytest.approx(1.00)
        assert chart.get_percentage(1, 8.0) == pytest.approx(0.91)
        assert chart.get_percentage(5, 8.0) == pytest.approx(0.77)

    def test_integer_rpe_matches_float_key(self):
        chart = default_rpe_chart()
        assert chart.get_percentage(5, 8) == chart.get_percentage(5, 8.0)

    def test_missing_entry(self):
        chart = RPEChart([RPEChartEntry(1, 10.0, 1.0)])
        with pytest.raises(RPEEntryNotFoundError) as exc_info:
            chart.get_percentage(3, 9.0)
        assert exc_info.value.reps == 3
        assert exc_info.value.rpe == 9.0
        # Also a PowerProError so one except clause catches every engine error
        assert isinstance(exc_info.value, PowerProError)

    def test_empty_chart_rejected(self):
        with pytest.raises(InvalidParamsError):
            RPEChart([])

    def test_duplicate_entry_rejected(self):
        with pytest.raises(InvalidParamsError, match="duplicate"):
            RPEChart([RPEChartEntry(1, 10.0, 1.0), RPEChartEntry(1, 10.0, 0.99)])

    def test_entry_validation(self):
        with pytest.raises(TargetRepsInvalidError):
            RPEChartEntry(13, 10.0, 0.6)
        with pytest.raises(TargetRPEInvalidError):
            RPEChartEntry(1, 8.25, 0.9)
        with pytest.raises(InvalidParamsError):
            RPEChartEntry(1, 10.0, 1.2)

    def test_from_rows(self):
        chart = RPEChart.from_rows({10.0: [1.0, 0.95], 9.0: [0.95, 0.91]})
        assert len(chart) == 4
        assert chart.get_percentage(2, 9.0) == pytest.approx(0.91)


# ---------------------------------------------------------------------------
# E1RM
# ---------------------------------------------------------------------------

class TestE1RM:

    def test_single_at_rpe_8(self):
        # 365 / 0.91 = 401.1 → 400.0
        assert calculate_e1rm(365, 1, 8.0) == pytest.approx(400.0)

    def test_true_max_single(self):
        assert calculate_e1rm(405, 1, 10.0) == pytest.approx(405.0)

    def test_five_at_rpe_8(self):
        # 310 / 0.77 = 402.6 → 402.5
        assert calculate_e1rm(310, 5, 8.0) == pytest.approx(402.5)

    def test_result_is_multiple_of_2_5(self):
        result = E1RMCalculator().calculate(287.0, 3, 9.0)
        assert (result / 2.5) == pytest.approx(round(result / 2.5))

    def test_custom_chart(self):
        chart = RPEChart([RPEChartEntry(1, 9.0, 0.5)])
        assert E1RMCalculator(chart).calculate(100, 1, 9.0) == pytest.approx(200.0)

    @pytest.mark.parametrize("weight,reps,rpe,error", [
        (0, 1, 8.0, InvalidParamsError),
        (-100, 1, 8.0, InvalidParamsError),
        (100, 0, 8.0, TargetRepsInvalidError),
        (100, 13, 8.0, TargetRepsInvalidError),
        (100, 1, 6.5, TargetRPEInvalidError),
        (100, 1, 10.5, TargetRPEInvalidError),
    ])
    def test_invalid_inputs(self, weight, reps, rpe, error):
        with pytest.raises(error):
            calculate_e1rm(weight, reps, rpe)

    def test_in_range_rpe_without_entry(self):
        # 8.25 is inside 7-10 but not a half step
        with pytest.raises(RPEEntryNotFoundError):
            calculate_e1rm(300, 3, 8.25)


# ---------------------------------------------------------------------------
# Lookup modifier chain
# ---------------------------------------------------------------------------

def _weekly() -> WeeklyLookup:
    return WeeklyLookup(
        name="5/3/1",
        entries=[
            WeeklyLookupEntry(1, percentages=[65, 75, 85], reps=[5, 5, 5]),
            WeeklyLookupEntry(2, percentages=[70, 80, 90], reps=[3, 3, 3]),
            WeeklyLookupEntry(4, percentage_modifier=60),
        ],
    )


def _daily() -> DailyLookup:
    return DailyLookup(
        name="HLM",
        entries=[
            DailyLookupEntry("heavy", 100, "heavy"),
            DailyLookupEntry("light", 80, "LIGHT"),
            DailyLookupEntry("unset", 0),
        ],
    )


class TestLookupContext:

    def test_no_tables_returns_base(self):
        assert LookupContext().apply_modifiers(85.0) == 85.0

    def test_per_set_percentage_replaces_base(self):
        ctx = LookupContext(week_number=2, set_number=3, weekly_lookup=_weekly())
        assert ctx.apply_modifiers(50.0) == 90

    def test_set_beyond_array_falls_back_to_base(self):
        ctx = LookupContext(week_number=1, set_number=5, weekly_lookup=_weekly())
        assert ctx.apply_modifiers(50.0) == 50.0

    def test_weekly_modifier(self):
        # 85 × 60 / 100 = 51
        ctx = LookupContext(week_number=4, set_number=1, weekly_lookup=_weekly())
        assert ctx.apply_modifiers(85.0) == pytest.approx(51.0)

    def test_weekly_then_daily(self):
        # set 1 of week 1 → 65; light day 80% → 52
        ctx = LookupContext(
            week_number=1, day_slug="light", set_number=1,
            weekly_lookup=_weekly(), daily_lookup=_daily(),
        )
        assert ctx.apply_modifiers(85.0) == pytest.approx(52.0)

    def test_daily_lookup_case_insensitive(self):
        ctx = LookupContext(day_slug="LIGHT", daily_lookup=_daily())
        assert ctx.apply_modifiers(100.0) == pytest.approx(80.0)
        assert ctx.intensity_level() == "LIGHT"

    def test_zero_daily_modifier_ignored(self):
        ctx = LookupContext(day_slug="unset", daily_lookup=_daily())
        assert ctx.apply_modifiers(85.0) == 85.0

    def test_week_zero_disables_weekly(self):
        ctx = LookupContext(week_number=0, set_number=1, weekly_lookup=_weekly())
        assert ctx.apply_modifiers(85.0) == 85.0

    def test_unknown_week_returns_base(self):
        ctx = LookupContext(week_number=3, set_number=1, weekly_lookup=_weekly())
        assert ctx.apply_modifiers(85.0) == 85.0

    def test_reps_for_set(self):
        ctx = LookupContext(week_number=2, set_number=2, weekly_lookup=_weekly())
        assert ctx.get_reps_for_set() == 3
        assert LookupContext(week_number=4, set_number=1, weekly_lookup=_weekly()).get_reps_for_set() == UNKNOWN_REPS
        assert LookupContext().get_reps_for_set() == UNKNOWN_REPS

    def test_rotation_focus(self):
        rotation = RotationLookup(
            name="conjugate",
            entries=[RotationLookupEntry(0, "squat"), RotationLookupEntry(1, "deadlift")],
        )
        ctx = LookupContext(rotation_position=1, rotation_lookup=rotation)
        assert ctx.is_lift_in_rotation_focus("deadlift")
        assert not ctx.is_lift_in_rotation_focus("squat")
        assert len(rotation) == 2

    def test_has_rpe_chart(self):
        assert not LookupContext().has_rpe_chart()
        assert LookupContext(rpe_chart=default_rpe_chart()).has_rpe_chart()


class TestLookupValidation:

    def test_mismatched_reps_and_percentages(self):
        with pytest.raises(InvalidParamsError, match="same length"):
            WeeklyLookupEntry(1, percentages=[65, 75], reps=[5])

    def test_week_entry_needs_content(self):
        with pytest.raises(InvalidParamsError):
            WeeklyLookupEntry(1)

    def test_duplicate_week(self):
        with pytest.raises(InvalidParamsError, match="duplicate week"):
            WeeklyLookup("w", [WeeklyLookupEntry(1, percentage_modifier=90), WeeklyLookupEntry(1, percentage_modifier=95)])

    def test_duplicate_day_ignores_case(self):
        with pytest.raises(InvalidParamsError, match="duplicate day"):
            DailyLookup("d", [DailyLookupEntry("Heavy", 100), DailyLookupEntry("heavy", 90)])

    def test_invalid_intensity(self):
        with pytest.raises(InvalidParamsError):
            DailyLookupEntry("heavy", 100, "BRUTAL")

    def test_name_too_long(self):
        with pytest.raises(InvalidParamsError):
            RotationLookup("x" * 101, [RotationLookupEntry(0, "squat")])

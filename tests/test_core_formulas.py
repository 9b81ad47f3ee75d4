"""
Formula-focused unit tests for the core program engine.

Each test verifies one rule of the prescription math, input validation,
goal weighting or the nutrition estimate. Values are hand-computed from
the formulas so the tests act as a reference.
"""

import math

import pytest

from bar_program.core.config import SAFETY_LIMITS
from bar_program.core.exercises.registry import exercise_for_key, get_exercise
from bar_program.core.goals import (
    build_goal_profile,
    cardio_minutes,
    goal_weights,
    unlocked_skills,
    validate_goals,
)
from bar_program.core.metrics import (
    emom_reps,
    format_rest,
    format_sets,
    prescribed_reps,
    rest_seconds_for_intensity,
    round_half_up,
    timed_amount,
)
from bar_program.core.models import MaxRepProfile
from bar_program.core.nutrition import calculate_nutrition, mifflin_st_jeor_bmr, sample_meal_plan
from bar_program.core.validation import (
    ValidationError,
    detect_level,
    normalize_profile,
    validate_count,
    validate_level,
    validate_max_reps,
    validate_weeks,
)

# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------

EXAMPLE = {"muscleUp": 2, "pullUps": 10, "dips": 15, "pushUps": 25, "squats": 40, "legRaises": 15}


def _profile(**overrides: int) -> MaxRepProfile:
    values = dict(EXAMPLE)
    values.update(overrides)
    return validate_max_reps(values)


# =============================================================================
# Rounding and rep scaling
# =============================================================================


class TestRoundHalfUp:
    """Halves round away from zero, unlike Python's round()."""

    def test_half_rounds_up(self):
        assert round_half_up(6.5) == 7
        assert round_half_up(2.5) == 3

    def test_below_half_rounds_down(self):
        assert round_half_up(6.2) == 6

    def test_negative_half_rounds_away_from_zero(self):
        assert round_half_up(-1.5) == -2


class TestPrescribedReps:
    """reps = max(1, round(max × volume × fraction))."""

    def test_week_one_pull_ups(self):
        # 10 × 0.62 = 6.2 → 6
        assert prescribed_reps(10, 0.62) == 6

    def test_week_four_pull_ups(self):
        # 10 × 0.93 = 9.3 → 9
        assert prescribed_reps(10, 0.93) == 9

    def test_zero_max_floors_at_one(self):
        assert prescribed_reps(0, 0.62) == 1

    def test_fraction_scales(self):
        # 20 × 0.62 × 0.5 = 6.2 → 6
        assert prescribed_reps(20, 0.62, 0.5) == 6

    def test_endurance_boost_capped_at_max(self):
        # 10 × 0.93 × 1.1 = 10.23 → 10; 10 × 1.0 × 1.1 = 11 → capped to 10
        assert prescribed_reps(10, 0.93, 1.1, cap_at_max=True) == 10
        assert prescribed_reps(10, 1.0, 1.1, cap_at_max=True) == 10

    def test_endurance_boost_week_one(self):
        # 10 × 0.62 × 1.1 = 6.82 → 7
        assert prescribed_reps(10, 0.62, 1.1, cap_at_max=True) == 7


class TestEmomReps:
    """EMOM reps never exceed 35% of max."""

    def test_cap_applies(self):
        # floor(25 × 0.35) = 8
        assert emom_reps(25, 13) == 8

    def test_below_cap_unchanged(self):
        assert emom_reps(25, 5) == 5

    def test_tiny_max_still_one_rep(self):
        assert emom_reps(2, 5) == 1

    def test_zero_max_keeps_reps(self):
        assert emom_reps(0, 3) == 3


class TestTimedAmount:
    """amount = round(base × (0.5 + intensity))."""

    def test_week_one(self):
        # 20 × 1.1 = 22
        assert timed_amount(20, 0.60) == 22

    def test_week_four(self):
        # 20 × 1.4 = 28
        assert timed_amount(20, 0.90) == 28


class TestRestPeriods:
    """Rest shortens as intensity rises."""

    @pytest.mark.parametrize(
        "intensity, expected",
        [(0.60, 90), (0.65, 75), (0.70, 75), (0.80, 60), (0.85, 45), (0.90, 45)],
    )
    def test_thresholds(self, intensity, expected):
        assert rest_seconds_for_intensity(intensity) == expected

    def test_shorter_bias_floors_at_thirty(self):
        assert rest_seconds_for_intensity(0.90, "shorter") == 30
        assert rest_seconds_for_intensity(0.60, "shorter") == 75

    def test_longer_bias(self):
        assert rest_seconds_for_intensity(0.60, "longer") == 105

    def test_format_rest(self):
        assert format_rest(90) == "90s between sets"
        assert format_rest(45).endswith("Rest longer if reps break down.")


class TestFormatSets:
    def test_reps(self):
        assert format_sets(4, 6, "reps") == "4 sets × 6 reps"
        assert format_sets(3, 1, "reps") == "3 sets × 1 rep"

    def test_hold(self):
        assert format_sets(3, 20, "seconds") == "3 sets × 20s hold"

    def test_minutes(self):
        assert format_sets(1, 15, "minutes") == "15 minutes"
        assert format_sets(2, 5, "minutes") == "2 × 5 minutes"


# =============================================================================
# Validation
# =============================================================================


class TestValidateLevel:
    def test_valid_levels(self):
        for level in ("beginner", "intermediate", "advanced"):
            assert validate_level(level) == level

    def test_invalid_level_cites_value(self):
        with pytest.raises(ValidationError, match="expert"):
            validate_level("expert")

    def test_non_string_rejected(self):
        with pytest.raises(ValidationError):
            validate_level(None)


class TestValidateMaxReps:
    def test_valid_profile(self):
        profile = validate_max_reps(EXAMPLE)
        assert profile.pull_ups == 10
        assert profile.to_dict() == EXAMPLE

    def test_over_ceiling_names_field_and_limit(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_max_reps({**EXAMPLE, "pushUps": 121})
        err = exc_info.value
        assert str(err) == "pushUps max reps (121) exceeds realistic competition limit of 120"
        assert err.field == "pushUps"
        assert err.limit == 120

    def test_at_ceiling_accepted(self):
        for key, limit in SAFETY_LIMITS.items():
            assert validate_max_reps({**EXAMPLE, key: limit}).get(key) == limit

    def test_missing_key(self):
        values = dict(EXAMPLE)
        del values["squats"]
        with pytest.raises(ValidationError, match="squats is required"):
            validate_max_reps(values)

    @pytest.mark.parametrize("bad", [True, "10", None, -1, math.nan, math.inf])
    def test_bad_values_rejected(self, bad):
        with pytest.raises(ValidationError) as exc_info:
            validate_max_reps({**EXAMPLE, "dips": bad})
        assert exc_info.value.field == "dips"

    def test_integral_float_accepted(self):
        assert validate_max_reps({**EXAMPLE, "dips": 15.0}).dips == 15

    def test_fractional_float_rejected(self):
        with pytest.raises(ValidationError, match="whole number"):
            validate_max_reps({**EXAMPLE, "dips": 15.5})

    def test_not_a_mapping(self):
        with pytest.raises(ValidationError):
            validate_max_reps([1, 2, 3])

    def test_unknown_keys_ignored(self):
        assert validate_max_reps({**EXAMPLE, "handstand": 3}).pull_ups == 10


class TestNormalizeProfile:
    def test_beginner_muscle_up_zeroed(self):
        profile = _profile(muscleUp=4)
        normalized = normalize_profile("beginner", profile)
        assert normalized.muscle_up == 0
        assert profile.muscle_up == 4

    def test_other_levels_unchanged(self):
        profile = _profile(muscleUp=4)
        assert normalize_profile("intermediate", profile) is profile


class TestProgramShapeValidation:
    def test_weeks(self):
        assert validate_weeks(6) == 6
        with pytest.raises(ValidationError):
            validate_weeks(5)
        with pytest.raises(ValidationError):
            validate_weeks(True)

    def test_count(self):
        assert validate_count(3) == 3
        with pytest.raises(ValidationError):
            validate_count(0)


class TestDetectLevel:
    def test_beginner(self):
        assert detect_level(_profile(pullUps=3, dips=5)) == "beginner"

    def test_advanced_by_muscle_ups(self):
        assert detect_level(_profile(pullUps=20, muscleUp=5)) == "advanced"

    def test_advanced_by_dips(self):
        assert detect_level(_profile(pullUps=20, dips=40, muscleUp=0)) == "advanced"

    def test_intermediate(self):
        assert detect_level(_profile(pullUps=20, dips=30, muscleUp=2)) == "intermediate"
        assert detect_level(_profile(pullUps=4, dips=12)) == "intermediate"


# =============================================================================
# Exercise catalog
# =============================================================================


class TestExerciseCatalog:
    def test_every_max_key_has_an_exercise(self):
        assert exercise_for_key("legRaises").exercise_id == "leg_raise"
        assert exercise_for_key("muscleUp").skill

    def test_beginner_regressions(self):
        pull_up = get_exercise("pull_up")
        assert pull_up.name_for("beginner", 3) == "Assisted or negative pull-ups"
        assert pull_up.name_for("beginner", 8) == "Australian pull-ups"
        assert pull_up.name_for("beginner", 9) == "Pull-ups"

    def test_regressions_only_for_beginners(self):
        assert get_exercise("pull_up").name_for("intermediate", 2) == "Pull-ups"

    def test_unknown_exercise(self):
        with pytest.raises(ValueError):
            get_exercise("planche_push_up")


# =============================================================================
# Goals
# =============================================================================


class TestGoals:
    def test_duplicates_removed(self):
        assert validate_goals(["lose_weight", "lose_weight"]) == ("lose_weight",)

    def test_unknown_goal(self):
        with pytest.raises(ValidationError, match="fly"):
            validate_goals(["fly"])

    def test_too_many_goals(self):
        with pytest.raises(ValidationError):
            validate_goals(["lose_weight", "improve_endurance", "build_muscle", "learn_skills"])

    def test_priority_weights(self):
        w = goal_weights(("build_muscle", "lose_weight"))
        assert w["build_muscle"] == 0.6
        assert w["lose_weight"] == 0.4
        w3 = goal_weights(("lose_weight", "improve_endurance", "learn_skills"))
        assert (w3["lose_weight"], w3["improve_endurance"], w3["learn_skills"]) == (0.6, 0.3, 0.1)

    def test_weight_loss_emphasis(self):
        gp = build_goal_profile(("lose_weight",), _profile())
        assert gp.rest_bias == "shorter"
        assert gp.extra_cardio
        assert gp.favor_jump_rope
        assert not gp.limit_cardio

    def test_muscle_priority_over_weight_loss(self):
        gp = build_goal_profile(("build_muscle", "lose_weight"), _profile())
        assert gp.rest_bias == "longer"
        assert gp.limit_cardio

    def test_cardio_minutes(self):
        limited = build_goal_profile(("build_muscle",), _profile())
        extra = build_goal_profile(("improve_endurance",), _profile())
        none = build_goal_profile((), _profile())
        assert cardio_minutes(25, limited) == 18
        assert cardio_minutes(28, extra) == 30
        assert cardio_minutes(13, extra) == 18
        assert cardio_minutes(13, none) == 13

    def test_unlocked_skills(self):
        assert unlocked_skills(_profile()) == ["handstand", "muscle_up", "planche"]

    def test_muscle_up_skill_needs_a_muscle_up(self):
        assert "muscle_up" not in unlocked_skills(_profile(muscleUp=0))

    def test_skill_work_needs_weight_and_unlock(self):
        assert build_goal_profile(("learn_skills",), _profile()).include_skill_work
        # 0.1 weight is below the 0.2 threshold
        low = build_goal_profile(("lose_weight", "build_muscle", "learn_skills"), _profile())
        assert not low.include_skill_work
        locked = _profile(pullUps=2, dips=2, pushUps=5, muscleUp=0)
        assert not build_goal_profile(("learn_skills",), locked).include_skill_work


# =============================================================================
# Nutrition
# =============================================================================


class TestNutrition:
    def test_bmr(self):
        # 10·80 + 6.25·180 − 5·30 + 5 = 1780
        assert mifflin_st_jeor_bmr(180, 80) == pytest.approx(1780)

    def test_no_goal(self):
        est = calculate_nutrition(180, 80)
        assert est.bmr == 1780
        assert est.tdee == 2759  # 1780 × 1.55
        assert est.protein_g == 144  # 80 × 1.8

    def test_lose_weight(self):
        est = calculate_nutrition(180, 80, ("lose_weight",))
        assert est.tdee == 2483  # 2759 × 0.90
        assert est.protein_g == 160

    def test_build_muscle(self):
        est = calculate_nutrition(180, 80, ("build_muscle",))
        assert est.tdee == 2980  # 2759 × 1.08 = 2979.72
        assert est.protein_g == 176

    @pytest.mark.parametrize("height, weight", [(None, 80), (180, None), (90, 80), (180, 25)])
    def test_missing_or_implausible_inputs(self, height, weight):
        est = calculate_nutrition(height, weight)
        assert est.tdee is None
        assert est.protein_g is None
        assert est.note == "Add height and weight for estimates."

    def test_missing_inputs_have_no_meal_plan(self):
        assert calculate_nutrition(None, 80).sample_meals is None


class TestSampleMeals:
    def test_five_meals_scaled_to_estimate(self):
        meals = calculate_nutrition(180, 80).sample_meals
        assert [m.name for m in meals] == [
            "Breakfast", "Snack", "Lunch", "Pre/Post-workout", "Dinner",
        ]
        breakfast = meals[0]
        # kcal scale 2759 / 2500 = 1.1036, protein scale 144 / 135 = 1.0667
        assert breakfast.kcal == 552  # 500 × 1.1036 = 551.8
        assert breakfast.protein == 32  # 30 × 1.0667 = 32.0
        assert breakfast.foods[0] == ("Oats with milk", "66g oats")
        assert meals[4].foods[1] == ("Baked chicken or fish", "107g")

    def test_scales_are_clamped(self):
        meals = sample_meal_plan(5000, 400)
        assert meals[0].kcal == 700  # scale capped at 1.4
        assert meals[0].protein == 39  # 30 × 1.3

    @pytest.mark.parametrize("tdee, protein", [(None, 100), (1100, 100), (2000, None)])
    def test_no_plan_without_usable_estimate(self, tdee, protein):
        assert sample_meal_plan(tdee, protein) is None

"""
Integration tests for the bar-program generator.

Each test exercises the full pipeline: level + max reps →
generate_program / generate_batch. Hand-computed expected values are
included in comments.

Profile matrix exercised across scenarios:
  levels  : beginner, intermediate, advanced
  lengths : 4, 6, 12 weeks
  goals   : none, lose_weight, build_muscle, learn_skills
"""

import random

import pytest

from bar_program.core.config import DAY_FOCUS_ORDER
from bar_program.core.planner import auxiliary_selection, generate_batch, generate_program
from bar_program.core.validation import ValidationError


# ===========================================================================
# Helpers
# ===========================================================================

EXAMPLE = {"muscleUp": 2, "pullUps": 10, "dips": 15, "pushUps": 25, "squats": 40, "legRaises": 15}


def _all_prescriptions(program):
    for week in program:
        for day in week.days:
            yield from day.exercises


def _numbers(program):
    """Every number in a program, in order (names excluded)."""
    return [
        (ex.kind, ex.exercise_id, ex.reps, ex.duration, ex.set_count, ex.rest_seconds, ex.rest)
        for ex in _all_prescriptions(program)
    ]


def _names(week):
    return [ex.name for day in week.days for ex in day.exercises]


def _main(week, focus, exercise_id):
    day = next(d for d in week.days if d.focus == focus)
    return day.prescriptions_for(exercise_id)[0]


# ===========================================================================
# Structure
# ===========================================================================


class TestProgramShape:
    """Weeks × days and the fixed focus order."""

    @pytest.mark.parametrize("weeks", [4, 6, 12])
    def test_week_and_day_counts(self, weeks):
        program = generate_program("intermediate", EXAMPLE, seed=1, weeks=weeks)
        assert len(program) == weeks
        assert [w.week_number for w in program] == list(range(1, weeks + 1))
        for week in program:
            assert len(week.days) == 4
            assert tuple(d.focus for d in week.days) == DAY_FOCUS_ORDER
            assert [d.day for d in week.days] == [1, 2, 3, 4]

    def test_default_is_four_weeks(self):
        assert len(generate_program("advanced", EXAMPLE, seed=1)) == 4

    def test_invalid_length(self):
        with pytest.raises(ValidationError):
            generate_program("intermediate", EXAMPLE, seed=1, weeks=8)

    def test_four_week_curve(self):
        program = generate_program("intermediate", EXAMPLE, seed=1)
        assert [w.volume_factor for w in program] == [0.62, 0.72, 0.82, 0.93]
        assert [w.intensity_factor for w in program] == [0.60, 0.70, 0.80, 0.90]
        assert [w.style for w in program] == ["volume", "density", "unbroken", "competition"]

    def test_six_week_curve_ends_with_deload_and_taper(self):
        program = generate_program("intermediate", EXAMPLE, seed=1, weeks=6)
        assert [w.style for w in program][4:] == ["deload", "taper"]
        assert [w.volume_factor for w in program][4:] == [0.60, 0.50]
        assert [w.intensity_factor for w in program][4:] == [0.60, 0.50]
        # pull-ups: round(10 × 0.60) = 6, round(10 × 0.50) = 5
        assert [_main(w, "pull", "pull_up").reps for w in program][4:] == [6, 5]

    def test_twelve_weeks_repeat_the_six_week_curve(self):
        program = generate_program("intermediate", EXAMPLE, seed=1, weeks=12)
        assert [w.settings for w in program[:6]] == [w.settings for w in program[6:]]


# ===========================================================================
# Reference scenario
# ===========================================================================


class TestReferenceScenario:
    """Intermediate, {muscleUp 2, pullUps 10, dips 15, pushUps 25, squats 40, legRaises 15}."""

    def test_pull_up_reps(self):
        program = generate_program("intermediate", EXAMPLE, seed=42)
        # round(10 × 0.62) = 6, round(10 × 0.93) = 9
        assert _main(program[0], "pull", "pull_up").reps == 6
        assert _main(program[3], "pull", "pull_up").reps == 9

    def test_muscle_ups_on_push_day_only(self):
        program = generate_program("intermediate", EXAMPLE, seed=42)
        for week in program:
            for day in week.days:
                found = day.prescriptions_for("muscle_up")
                if day.focus == "push":
                    assert len(found) == 1
                    assert found[0].rest == "2–4 min between sets"
                else:
                    assert found == ()

    def test_main_sets_by_level(self):
        for level, sets in (("beginner", 3), ("intermediate", 4), ("advanced", 5)):
            program = generate_program(level, EXAMPLE, seed=1)
            assert _main(program[0], "pull", "pull_up").set_count == sets

    def test_endurance_sets_by_level(self):
        for level, sets in (("beginner", 2), ("intermediate", 3), ("advanced", 4)):
            program = generate_program(level, EXAMPLE, seed=1)
            assert _main(program[0], "endurance", "pull_up").set_count == sets

    def test_endurance_uses_larger_share_capped_at_max(self):
        program = generate_program("intermediate", EXAMPLE, seed=1)
        # 10 × 0.62 × 1.1 = 6.82 → 7; 10 × 0.93 × 1.1 = 10.23 → 10
        assert _main(program[0], "endurance", "pull_up").reps == 7
        assert _main(program[3], "endurance", "pull_up").reps == 10
        for week in program:
            for key, exercise_id in (("pullUps", "pull_up"), ("dips", "dip"), ("squats", "squat")):
                assert _main(week, "endurance", exercise_id).reps <= EXAMPLE[key]

    def test_rest_shortens_with_intensity(self):
        program = generate_program("intermediate", EXAMPLE, seed=1)
        rests = [_main(w, "pull", "pull_up").rest_seconds for w in program]
        assert rests == [90, 75, 60, 45]

    def test_emom_capped_at_35_percent(self):
        program = generate_program("advanced", EXAMPLE, seed=1)
        # floor(25 × 0.35) = 8
        for week in program:
            push = week.days[1]
            emom = [ex for ex in push.exercises if "every minute" in ex.name]
            assert len(emom) == 1
            assert emom[0].reps <= 8

    def test_timed_hold_scales_with_intensity(self):
        program = generate_program("intermediate", EXAMPLE, seed=1)
        holds = [
            next(ex for ex in w.days[0].exercises if ex.unit == "seconds")
            for w in program
        ]
        # 20 × 1.1 = 22 in week 1, 20 × 1.4 = 28 in week 4
        assert holds[0].duration == 22
        assert holds[3].duration == 28

    def test_caller_mapping_not_mutated(self):
        max_reps = dict(EXAMPLE)
        generate_program("beginner", max_reps, seed=1)
        assert max_reps == EXAMPLE


# ===========================================================================
# Invariants
# ===========================================================================


class TestInvariants:
    def test_deterministic_for_fixed_seed(self):
        a = generate_program("intermediate", EXAMPLE, seed=7)
        b = generate_program("intermediate", EXAMPLE, seed=7)
        assert a == b

    def test_seed_never_changes_numbers(self):
        a = generate_program("intermediate", EXAMPLE, seed=1)
        b = generate_program("intermediate", EXAMPLE, seed=2)
        assert _numbers(a) == _numbers(b)

    def test_injected_rng_matches_seed(self):
        a = generate_program("advanced", EXAMPLE, seed=5)
        b = generate_program("advanced", EXAMPLE, rng=random.Random(5))
        assert a == b

    @pytest.mark.parametrize("seed", ["program-abc", ("user", 7), 2.5])
    def test_any_seed_value_accepted(self, seed):
        program = generate_program("intermediate", EXAMPLE, seed, weeks=12)
        assert program == generate_program("intermediate", EXAMPLE, seed, weeks=12)
        assert _numbers(program) == _numbers(generate_program("intermediate", EXAMPLE, 1, weeks=12))

    def test_string_seed_in_batch(self):
        programs = generate_batch("intermediate", EXAMPLE, 2, "program-abc")
        assert len(programs) == 2
        assert programs == generate_batch("intermediate", EXAMPLE, 2, "program-abc")

    @pytest.mark.parametrize("weeks", [4, 6, 12])
    def test_beginner_never_gets_muscle_ups(self, weeks):
        max_reps = {**EXAMPLE, "muscleUp": 10, "pullUps": 12}
        program = generate_program(
            "beginner", max_reps, seed=3, weeks=weeks, goals=["learn_skills"]
        )
        for ex in _all_prescriptions(program):
            assert ex.exercise_id != "muscle_up"
            assert "muscle-up" not in ex.name.lower()

    @pytest.mark.parametrize("level", ["beginner", "intermediate", "advanced"])
    def test_volume_monotonic_weeks_one_to_four(self, level):
        program = generate_program(level, EXAMPLE, seed=11)
        for day_index in range(4):
            days = [w.days[day_index] for w in program[:4]]
            lengths = {len(d.exercises) for d in days}
            assert len(lengths) == 1
            for slot in range(lengths.pop()):
                entries = [d.exercises[slot] for d in days]
                for amount in ("reps", "duration"):
                    values = [getattr(e, amount) for e in entries]
                    if values[0] is not None:
                        assert values == sorted(values), (day_index, slot, amount)

    def test_goals_never_change_reps(self):
        base = generate_program("intermediate", EXAMPLE, seed=1)
        for goals in (["lose_weight"], ["build_muscle", "improve_endurance"], ["learn_skills"]):
            with_goals = generate_program("intermediate", EXAMPLE, seed=1, goals=goals)
            reps = lambda p: [  # noqa: E731
                (e.exercise_id, e.reps) for e in _all_prescriptions(p) if e.exercise_id
            ]
            assert reps(with_goals) == reps(base)

    def test_over_ceiling_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            generate_program("intermediate", {**EXAMPLE, "pushUps": 121}, seed=1)
        assert "pushUps" in str(exc_info.value)
        assert "120" in str(exc_info.value)
        assert len(generate_program("intermediate", {**EXAMPLE, "pushUps": 120}, seed=1)) == 4

    def test_invalid_level_cited(self):
        with pytest.raises(ValidationError, match="expert"):
            generate_program("expert", EXAMPLE, seed=1)

    def test_validation_before_goals(self):
        with pytest.raises(ValidationError, match="legRaises"):
            generate_program("advanced", {k: v for k, v in EXAMPLE.items() if k != "legRaises"},
                             goals=["fly"])


# ===========================================================================
# Variants and goals
# ===========================================================================


class TestBeginnerRegressions:
    def test_low_max_uses_regression_name(self):
        program = generate_program("beginner", {**EXAMPLE, "pullUps": 3, "dips": 5}, seed=1)
        pull_up = _main(program[0], "pull", "pull_up")
        assert pull_up.name == "Assisted or negative pull-ups"
        assert pull_up.exercise_id == "pull_up"
        assert _main(program[0], "push", "dip").name == "Bench dips"


class TestMaxTest:
    def test_four_weeks_have_no_test(self):
        program = generate_program("intermediate", EXAMPLE, seed=1)
        assert not [ex for ex in _all_prescriptions(program) if ex.kind == "test"]

    def test_six_week_final_endurance_day(self):
        program = generate_program("intermediate", EXAMPLE, seed=1, weeks=6)
        for week in program[:5]:
            assert all(ex.kind != "test" for day in week.days for ex in day.exercises)
        endurance = program[5].days[3]
        tests = [ex for ex in endurance.exercises if ex.kind == "test"]
        assert len(tests) == 6
        assert endurance.exercises[-1].kind == "test"

    def test_beginner_test_skips_muscle_up(self):
        program = generate_program("beginner", EXAMPLE, seed=1, weeks=6)
        tests = [ex for ex in program[5].days[3].exercises if ex.kind == "test"]
        assert len(tests) == 5

    def test_twelve_weeks_test_at_the_end_of_each_block(self):
        program = generate_program("intermediate", EXAMPLE, seed=1, weeks=12)
        weeks_with_tests = [
            w.week_number for w in program
            if any(ex.kind == "test" for day in w.days for ex in day.exercises)
        ]
        assert weeks_with_tests == [6, 12]

    def test_second_block_uses_offset_seed(self):
        twelve = generate_program("intermediate", EXAMPLE, seed=7, weeks=12)
        six = generate_program("intermediate", EXAMPLE, seed=7 + 9999, weeks=6)
        assert [_names(w) for w in twelve[6:]] == [_names(w) for w in six]


class TestGoalEmphasis:
    def test_lose_weight_shortens_rest_and_adds_cardio(self):
        program = generate_program("intermediate", EXAMPLE, seed=1, goals=["lose_weight"])
        assert _main(program[0], "pull", "pull_up").rest_seconds == 75
        for week in program:
            cardio = next(ex for ex in week.days[2].exercises if ex.unit == "minutes")
            assert cardio.name == "Jump rope"
        # 12 × 1.1 = 13.2 → 13, +5 extra minutes
        first = next(ex for ex in program[0].days[2].exercises if ex.unit == "minutes")
        assert first.duration == 18

    def test_build_muscle_lengthens_rest(self):
        program = generate_program("intermediate", EXAMPLE, seed=1, goals=["build_muscle"])
        assert _main(program[0], "pull", "pull_up").rest_seconds == 105

    def test_learn_skills_adds_skill_work_after_warmup(self):
        program = generate_program("intermediate", EXAMPLE, seed=1, goals=["learn_skills"])
        for week in program:
            pull = week.days[0].exercises
            assert pull[0].kind == "warmup"
            assert [ex.kind for ex in pull[1:3]] == ["skill", "skill"]
            assert pull[1].name == "Handstand practice"

    def test_unknown_goal_rejected(self):
        with pytest.raises(ValidationError):
            generate_program("intermediate", EXAMPLE, seed=1, goals=["fly"])


# ===========================================================================
# Batch
# ===========================================================================


class TestBatch:
    def test_consecutive_seeds(self):
        programs = generate_batch("intermediate", EXAMPLE, 3, seed=100)
        assert len(programs) == 3
        for i, program in enumerate(programs):
            assert program == generate_program("intermediate", EXAMPLE, seed=100 + i)

    def test_kwargs_passed_through(self):
        programs = generate_batch("intermediate", EXAMPLE, 2, seed=1, weeks=6)
        assert all(len(p) == 6 for p in programs)

    def test_count_must_be_positive(self):
        with pytest.raises(ValidationError):
            generate_batch("intermediate", EXAMPLE, 0, seed=1)

    def test_auxiliary_selection_from_choices(self):
        program = generate_program("intermediate", EXAMPLE, seed=1)
        names = auxiliary_selection(program)
        assert names
        assert "Pull-ups" not in names

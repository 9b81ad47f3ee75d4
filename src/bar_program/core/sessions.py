"""
Day builders.

Turns one DayTemplate into a DayPlan for a given week: scales every
slot by the week's factors, resolves rest text, names auxiliary work
from the slot's choices and appends skill work or max tests where the
week calls for them.
"""

import random

from .config import (
    ENDURANCE_SETS_BY_LEVEL,
    ENDURANCE_VOLUME_BOOST,
    MAIN_SETS_BY_LEVEL,
    REQUIRED_EXERCISES,
    REST_SKILL,
    REST_SKILL_LONG,
    REST_UNTIL_CLEAN,
    STYLE_NOTES,
)
from .engine.program_config import DayTemplate, SlotTemplate
from .exercises.registry import exercise_for_key, get_exercise
from .goals import MAX_SKILLS_PER_SESSION, SKILL_LABELS, GoalProfile, cardio_minutes, unlocked_skills
from .metrics import (
    emom_reps,
    format_rest,
    format_sets,
    prescribed_reps,
    rest_seconds_for_intensity,
    timed_amount,
)
from .models import DayPlan, ExercisePrescription, Level, MaxRepProfile, WeekSettings

WARMUP_NAME = "Warm-up (5–7 min)"
COOLDOWN_NAME = "Cool-down"
NO_REST = "No rest needed"
FAVORED_CARDIO = "Jump rope"


def _resolve_rest(
    slot: SlotTemplate,
    week: WeekSettings,
    goal_profile: GoalProfile,
    skill: bool = False,
) -> tuple[str, int | None]:
    """Return (rest text, rest seconds or None) for a slot."""
    if skill or slot.rest == "skill":
        return REST_SKILL, None
    if slot.rest == "intensity":
        seconds = rest_seconds_for_intensity(week.intensity_factor, goal_profile.rest_bias)
        return format_rest(seconds), seconds
    return slot.rest, None


def _set_count(slot: SlotTemplate, level: Level) -> int:
    if slot.sets is not None:
        return slot.sets
    if slot.scheme == "endurance":
        return ENDURANCE_SETS_BY_LEVEL[level]
    return MAIN_SETS_BY_LEVEL[level]


def _text_block(slot: SlotTemplate) -> ExercisePrescription:
    return ExercisePrescription(
        name=WARMUP_NAME if slot.kind == "warmup" else COOLDOWN_NAME,
        sets=slot.text,
        rest=NO_REST,
        kind=slot.kind,  # type: ignore[arg-type]
    )


def _exercise_slot(
    slot: SlotTemplate,
    week: WeekSettings,
    level: Level,
    profile: MaxRepProfile,
    goal_profile: GoalProfile,
) -> ExercisePrescription:
    """Prescription for a slot bound to a catalog exercise."""
    exercise = get_exercise(slot.exercise)  # type: ignore[arg-type]
    max_reps = profile.get(exercise.max_key)
    set_count = _set_count(slot, level)

    endurance = slot.scheme == "endurance"
    fraction = slot.fraction * (ENDURANCE_VOLUME_BOOST if endurance else 1.0)
    reps = prescribed_reps(max_reps, week.volume_factor, fraction, cap_at_max=endurance)

    rest, rest_seconds = _resolve_rest(slot, week, goal_profile, skill=exercise.skill)
    note = ""
    if exercise.skill:
        note = "Perform fresh. Stop the set before form breaks down."
    elif endurance:
        note = REST_UNTIL_CLEAN

    return ExercisePrescription(
        name=exercise.name_for(level, max_reps),
        sets=format_sets(set_count, reps, "reps"),
        rest=rest,
        kind=slot.kind,  # type: ignore[arg-type]
        exercise_id=exercise.exercise_id,
        reps=reps,
        set_count=set_count,
        unit="reps",
        rest_seconds=rest_seconds,
        note=note,
    )


def _choice_slot(
    slot: SlotTemplate,
    week: WeekSettings,
    level: Level,
    profile: MaxRepProfile,
    goal_profile: GoalProfile,
    rng: random.Random,
) -> ExercisePrescription:
    """Prescription for an auxiliary slot named from its choices."""
    name = rng.choice(slot.choices)
    if slot.cardio and goal_profile.favor_jump_rope and FAVORED_CARDIO in slot.choices:
        name = FAVORED_CARDIO

    rest, rest_seconds = _resolve_rest(slot, week, goal_profile)

    if slot.unit != "reps":
        amount = timed_amount(slot.duration[level], week.intensity_factor)
        if slot.cardio:
            amount = cardio_minutes(amount, goal_profile)
        set_count = _set_count(slot, level)
        return ExercisePrescription(
            name=name,
            sets=format_sets(set_count, amount, slot.unit),
            rest=rest,
            kind=slot.kind,  # type: ignore[arg-type]
            duration=amount,
            set_count=set_count,
            unit=slot.unit,  # type: ignore[arg-type]
            rest_seconds=rest_seconds,
        )

    max_reps = profile.get(slot.base)  # type: ignore[arg-type]
    reps = prescribed_reps(max_reps, week.volume_factor, slot.fraction)

    if slot.emom:
        minutes = slot.duration[level]
        reps = emom_reps(max_reps, reps)
        return ExercisePrescription(
            name=name,
            sets=f"{minutes} minutes: {reps} reps at the start of each minute",
            rest=rest,
            kind=slot.kind,  # type: ignore[arg-type]
            reps=reps,
            set_count=minutes,
            rest_seconds=rest_seconds,
            note="EMOM reps stay at or below 35% of your max.",
        )

    set_count = _set_count(slot, level)
    return ExercisePrescription(
        name=name,
        sets=format_sets(set_count, reps, "reps"),
        rest=rest,
        kind=slot.kind,  # type: ignore[arg-type]
        reps=reps,
        set_count=set_count,
        rest_seconds=rest_seconds,
    )


def build_skill_work(profile: MaxRepProfile) -> tuple[ExercisePrescription, ...]:
    """
    Skill practice for the learn_skills goal.

    Up to two unlocked skills, low volume with long rest, placed right
    after the warm-up while the athlete is fresh.
    """
    skills = unlocked_skills(profile)[:MAX_SKILLS_PER_SESSION]
    return tuple(
        ExercisePrescription(
            name=f"{SKILL_LABELS[skill]} practice",
            sets="4 sets × 3–5 quality attempts",
            rest=REST_SKILL_LONG,
            kind="skill",
            set_count=4,
            note="Low fatigue. Stop before form degrades.",
        )
        for skill in skills
    )


def build_max_tests(level: Level, profile: MaxRepProfile) -> tuple[ExercisePrescription, ...]:
    """
    Max-test entries for the final week, one per profile exercise.

    Muscle-ups are tested only when the effective profile has any.
    """
    tests = []
    for key in REQUIRED_EXERCISES:
        max_reps = profile.get(key)
        exercise = exercise_for_key(key)
        if exercise.skill and max_reps <= 0:
            continue
        tests.append(
            ExercisePrescription(
                name=f"Max test: {exercise.name_for(level, max_reps)}",
                sets="1 set to technical failure",
                rest=REST_SKILL_LONG,
                kind="test",
                exercise_id=exercise.exercise_id,
                set_count=1,
                note=exercise.test_note,
            )
        )
    return tuple(tests)


def build_day(
    template: DayTemplate,
    day_number: int,
    week: WeekSettings,
    level: Level,
    profile: MaxRepProfile,
    goal_profile: GoalProfile,
    rng: random.Random,
    final_week: bool = False,
) -> DayPlan:
    """
    Build one training day.

    Slots are skipped when their level filter excludes ``level`` or
    their ``requires`` key is zero in the effective profile; which slots
    appear never depends on the week, so slot positions line up across
    weeks.

    Args:
        template: Day template for this focus
        day_number: 1-indexed day within the week
        week: Week progression settings
        level: Validated experience level
        profile: Effective (normalized) max-rep profile
        goal_profile: Derived goal emphasis
        rng: Source for auxiliary name choices only
        final_week: Append max tests to the endurance day

    Returns:
        DayPlan with prescriptions in template order
    """
    exercises: list[ExercisePrescription] = []
    for slot in template.slots:
        if not slot.applies_to(level):
            continue
        if slot.requires is not None and profile.get(slot.requires) <= 0:
            continue

        if slot.is_text_block:
            exercises.append(_text_block(slot))
            if (
                slot.kind == "warmup"
                and template.focus == "pull"
                and goal_profile.include_skill_work
            ):
                exercises.extend(build_skill_work(profile))
        elif slot.exercise is not None:
            exercises.append(_exercise_slot(slot, week, level, profile, goal_profile))
        else:
            exercises.append(_choice_slot(slot, week, level, profile, goal_profile, rng))

    coaching_note = STYLE_NOTES.get(week.style, "")
    if final_week and template.focus == "endurance":
        exercises.extend(build_max_tests(level, profile))
        coaching_note = "Final week: finish with a max test on every exercise. Record your results."

    return DayPlan(
        day=day_number,
        focus=template.focus,  # type: ignore[arg-type]
        title=template.title,
        exercises=tuple(exercises),
        coaching_note=coaching_note,
    )

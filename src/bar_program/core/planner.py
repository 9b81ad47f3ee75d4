"""
Program generation for bar-program.

Generates deterministic multi-week calisthenics programs from an
experience level and a max-rep profile. Every week has the same four
day roles (pull, push, legs + core + cardio, endurance); the week curve
scales reps, rest and timed work from week to week.

The seed only picks auxiliary movement names and the cardio modality.
It never changes a number: the same (level, max reps) always produce
the same sets, reps and rest.
"""

import hashlib
import random
import time
from collections.abc import Iterable, Mapping
from typing import Any

from .config import DEFAULT_PROGRAM_WEEKS, SECOND_BLOCK_SEED_OFFSET
from .engine.program_config import PROGRAM_CONFIG, ProgramConfig
from .goals import GoalProfile, build_goal_profile, validate_goals
from .models import Level, MaxRepProfile, WeekPlan, WeekSettings
from .sessions import build_day
from .validation import (
    normalize_profile,
    validate_count,
    validate_level,
    validate_max_reps,
    validate_weeks,
)

Program = tuple[WeekPlan, ...]

# Every 6-week block ends with a max test; 4-week programs do not
_MAX_TEST_VARIANTS = (6, 12)


def _coerce_seed(seed: Any) -> int:
    """
    Turn any seed value into an int.

    Ints pass through; None means time.time_ns(). Anything else (a
    program id string, a tuple) is hashed so equal values give equal
    programs.
    """
    if seed is None:
        return time.time_ns()
    if isinstance(seed, int):
        return int(seed)
    digest = hashlib.sha256(repr(seed).encode("utf-8")).digest()
    return int.from_bytes(digest[:8], "big")


def _build_week(
    week_number: int,
    settings: WeekSettings,
    level: Level,
    profile: MaxRepProfile,
    goal_profile: GoalProfile,
    config: ProgramConfig,
    rng: random.Random,
    final_week: bool,
) -> WeekPlan:
    days = tuple(
        build_day(
            template,
            day_number,
            settings,
            level,
            profile,
            goal_profile,
            rng,
            final_week=final_week,
        )
        for day_number, template in enumerate(config.days, start=1)
    )
    return WeekPlan(week_number=week_number, settings=settings, days=days)


def _build_block(
    curve: tuple[WeekSettings, ...],
    first_week: int,
    total_weeks: int,
    level: Level,
    profile: MaxRepProfile,
    goal_profile: GoalProfile,
    config: ProgramConfig,
    rng: random.Random,
) -> list[WeekPlan]:
    """
    Build consecutive weeks from a curve, numbering from first_week.

    For 6- and 12-week programs the last week of the block is a test week.
    """
    weeks = []
    for offset, settings in enumerate(curve):
        week_number = first_week + offset
        final_week = total_weeks in _MAX_TEST_VARIANTS and offset == len(curve) - 1
        weeks.append(
            _build_week(
                week_number,
                settings,
                level,
                profile,
                goal_profile,
                config,
                rng,
                final_week,
            )
        )
    return weeks


def generate_program(
    level: Any,
    max_reps: Mapping[str, Any],
    seed: Any = None,
    *,
    weeks: int = DEFAULT_PROGRAM_WEEKS,
    goals: Iterable[str] | None = (),
    config: ProgramConfig | None = None,
    rng: random.Random | None = None,
) -> Program:
    """
    Generate a complete training program.

    Validation happens before anything is built; the caller's mapping
    is never modified. Beginners get ``muscleUp`` forced to 0 in the
    effective profile, so their program has no muscle-up work.

    Args:
        level: "beginner", "intermediate" or "advanced"
        max_reps: camelCase exercise key → max reps
        seed: Any value; seeds auxiliary name choices (default: time.time_ns())
        weeks: Program length: 4, 6 or 12
        goals: Up to three goals, highest priority first
        config: Week curves and day templates (default: bundled + user YAML)
        rng: Random source to use instead of a seed

    Returns:
        Tuple of WeekPlan, one per week, each with four days

    Raises:
        ValidationError: On an invalid level, max-rep profile, length or goal
    """
    level = validate_level(level)
    profile = validate_max_reps(max_reps)
    weeks = validate_weeks(weeks)
    goal_list = validate_goals(goals)

    profile = normalize_profile(level, profile)
    goal_profile = build_goal_profile(goal_list, profile)
    if config is None:
        config = PROGRAM_CONFIG

    seed = _coerce_seed(seed)
    first_rng = rng if rng is not None else random.Random(seed)

    if weeks != 12:
        return tuple(
            _build_block(
                config.curve(weeks), 1, weeks, level, profile, goal_profile, config, first_rng
            )
        )

    # 12 weeks: two 6-week blocks, the second seeded separately
    second_rng = rng if rng is not None else random.Random(seed + SECOND_BLOCK_SEED_OFFSET)
    curve = config.curve(6)
    first = _build_block(curve, 1, 12, level, profile, goal_profile, config, first_rng)
    second = _build_block(curve, 7, 12, level, profile, goal_profile, config, second_rng)
    return tuple(first + second)


def generate_batch(
    level: Any,
    max_reps: Mapping[str, Any],
    count: int,
    seed: Any = None,
    **kwargs: Any,
) -> tuple[Program, ...]:
    """
    Generate several programs for the same inputs with consecutive seeds.

    Program i uses ``seed + i`` (after turning the seed into an int), so only auxiliary names differ between
    them. Keyword arguments (weeks, goals, config) are passed through.

    Raises:
        ValidationError: If count < 1 or any input is invalid
    """
    count = validate_count(count)
    if "rng" in kwargs:
        raise TypeError("generate_batch seeds each program itself; rng is not accepted")
    seed = _coerce_seed(seed)
    return tuple(
        generate_program(level, max_reps, seed + i, **kwargs) for i in range(count)
    )


def auxiliary_selection(program: Program) -> list[str]:
    """Ordered unique auxiliary movement names in a program (the seeded part)."""
    seen: dict[str, None] = {}
    for week in program:
        for day in week.days:
            for ex in day.exercises:
                if ex.exercise_id is None and ex.kind in ("auxiliary", "finisher"):
                    seen.setdefault(ex.name, None)
    return list(seen)

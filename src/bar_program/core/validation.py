"""
Input validation for program generation.

Every check raises ValidationError synchronously, before any part of a
program is built. Messages name the offending field and, where one
applies, the violated limit so the caller can show them verbatim.
"""

import math
from collections.abc import Mapping
from dataclasses import replace
from typing import Any

from .config import (
    ADVANCED_DIPS_MIN,
    ADVANCED_MUSCLE_UPS_MIN,
    ADVANCED_PULL_UPS_MIN,
    BEGINNER_DIPS_BELOW,
    BEGINNER_PULL_UPS_BELOW,
    LEVELS,
    PROGRAM_WEEKS,
    REQUIRED_EXERCISES,
    SAFETY_LIMITS,
)
from .models import Level, MaxRepProfile


class ValidationError(Exception):
    """Raised when program input validation fails."""

    def __init__(self, message: str, field: str | None = None, limit: int | None = None):
        super().__init__(message)
        self.field = field
        self.limit = limit


def validate_level(level: Any) -> Level:
    """
    Validate experience level.

    Args:
        level: Level string to validate

    Returns:
        Validated level

    Raises:
        ValidationError: If level is not beginner, intermediate or advanced
    """
    if not isinstance(level, str) or level not in LEVELS:
        raise ValidationError(
            f"Invalid level {level!r}. Must be: beginner, intermediate, or advanced",
            field="level",
        )
    return level  # type: ignore[return-value]


def _validate_rep_value(key: str, value: Any) -> int:
    """Validate one max-rep entry and return it as an int."""
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{key} must be a non-negative number", field=key)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValidationError(f"{key} must be a non-negative number", field=key)
        if not value.is_integer():
            raise ValidationError(f"{key} must be a whole number, got {value}", field=key)
    if value < 0:
        raise ValidationError(f"{key} must be a non-negative number", field=key)
    return int(value)


def validate_max_reps(max_reps: Any) -> MaxRepProfile:
    """
    Validate a max-rep mapping and convert it to a MaxRepProfile.

    Presence, type and sign are checked for every required key first;
    safety ceilings are checked afterwards, in the same key order.
    Unknown keys are ignored.

    Args:
        max_reps: Mapping of camelCase exercise key → max reps

    Returns:
        New MaxRepProfile (the input is never modified)

    Raises:
        ValidationError: On a missing, non-numeric, negative or
            over-ceiling entry
    """
    if not isinstance(max_reps, Mapping):
        raise ValidationError(
            "maxReps must be an object with exercise values", field="maxReps"
        )

    values: dict[str, int] = {}
    for key in REQUIRED_EXERCISES:
        if key not in max_reps:
            raise ValidationError(f"{key} is required", field=key)
        values[key] = _validate_rep_value(key, max_reps[key])

    for key, limit in SAFETY_LIMITS.items():
        if values[key] > limit:
            raise ValidationError(
                f"{key} max reps ({values[key]}) exceeds realistic competition limit of {limit}",
                field=key,
                limit=limit,
            )

    return MaxRepProfile(
        **{MaxRepProfile.KEYS[key]: value for key, value in values.items()}
    )


def normalize_profile(level: Level, profile: MaxRepProfile) -> MaxRepProfile:
    """Return the effective profile: beginners never get muscle-up work."""
    if level == "beginner" and profile.muscle_up != 0:
        return replace(profile, muscle_up=0)
    return profile


def validate_weeks(weeks: Any) -> int:
    """
    Validate the program length.

    Raises:
        ValidationError: If weeks is not one of the supported variants
    """
    if isinstance(weeks, bool) or weeks not in PROGRAM_WEEKS:
        valid = ", ".join(str(w) for w in PROGRAM_WEEKS)
        raise ValidationError(f"weeks must be one of {valid}, got {weeks!r}", field="weeks")
    return int(weeks)


def validate_count(count: Any) -> int:
    """Validate a batch size."""
    if isinstance(count, bool) or not isinstance(count, int) or count < 1:
        raise ValidationError(f"count must be a positive integer, got {count!r}", field="count")
    return count


def detect_level(profile: MaxRepProfile) -> Level:
    """
    Guess the experience level from a max-rep profile.

    Beginner: fewer than 5 pull-ups and fewer than 10 dips.
    Advanced: 20+ pull-ups and either 5+ muscle-ups or 40+ dips.
    Everything else is intermediate.
    """
    if profile.pull_ups < BEGINNER_PULL_UPS_BELOW and profile.dips < BEGINNER_DIPS_BELOW:
        return "beginner"
    if profile.pull_ups >= ADVANCED_PULL_UPS_MIN and (
        profile.muscle_up >= ADVANCED_MUSCLE_UPS_MIN or profile.dips >= ADVANCED_DIPS_MIN
    ):
        return "advanced"
    return "intermediate"

"""
Prescription math.

Pure helpers that turn a max-rep value and a week's progression factors
into rep counts, timed durations and rest periods, plus the formatting
used for the human-readable ``sets`` / ``rest`` descriptions.
"""

import math

from .config import (
    EMOM_CAP_FRACTION,
    REST_AT_PEAK_SECONDS,
    REST_BY_INTENSITY,
    REST_GOAL_SHIFT_SECONDS,
    REST_MIN_SECONDS,
    TIMED_BASE,
)


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, halves away from zero.

    Python's round() uses banker's rounding (round(6.5) == 6); plans
    must round 6.5 up to 7.
    """
    if value < 0:
        return -math.floor(-value + 0.5)
    return math.floor(value + 0.5)


def prescribed_reps(
    max_reps: int,
    volume_factor: float,
    fraction: float = 1.0,
    min_reps: int = 1,
    cap_at_max: bool = False,
) -> int:
    """
    Reps per set for one exercise in one week.

        reps = max(min_reps, round(max_reps × volume_factor × fraction))

    Args:
        max_reps: User's max for the exercise (or a virtual max)
        volume_factor: Week volume factor (e.g. 0.62 in week 1)
        fraction: Per-slot multiplier (1.0 for main lifts)
        min_reps: Floor, never below 1
        cap_at_max: Never prescribe more than max_reps (when max_reps > 0)

    Returns:
        Reps per set
    """
    reps = round_half_up(max_reps * volume_factor * fraction)
    if cap_at_max and max_reps > 0:
        reps = min(reps, max_reps)
    return max(max(1, min_reps), reps)


def emom_reps(max_reps: int, reps: int) -> int:
    """Cap EMOM reps at 35% of max (never below 1)."""
    if max_reps < 1:
        return max(1, reps)
    cap = max(1, math.floor(max_reps * EMOM_CAP_FRACTION))
    return max(1, min(reps, cap))


def timed_amount(base: int, intensity_factor: float) -> int:
    """
    Scale a hold time (seconds) or cardio duration (minutes).

        amount = round(base × (0.5 + intensity_factor))

    Week 1 (intensity 0.60) gives 1.1 × base, week 4 (0.90) 1.4 × base.
    """
    return max(1, round_half_up(base * (TIMED_BASE + intensity_factor)))


def rest_seconds_for_intensity(intensity_factor: float, bias: str = "default") -> int:
    """
    Rest between sets for a week's intensity.

    Rest shortens as intensity rises: 90s below 0.65, 75s below 0.75,
    60s below 0.85, 45s above. ``bias`` "shorter" removes 15s (floor
    30s), "longer" adds 15s.

    Args:
        intensity_factor: Week intensity factor
        bias: "default" | "shorter" | "longer" (from goals)

    Returns:
        Rest in seconds
    """
    rest = REST_AT_PEAK_SECONDS
    for upper, seconds in REST_BY_INTENSITY:
        if intensity_factor < upper:
            rest = seconds
            break

    if bias == "shorter":
        rest -= REST_GOAL_SHIFT_SECONDS
    elif bias == "longer":
        rest += REST_GOAL_SHIFT_SECONDS

    return max(REST_MIN_SECONDS, rest)


def format_rest(seconds: int) -> str:
    """Describe a rest period, e.g. "60s between sets"."""
    text = f"{seconds}s between sets"
    if seconds <= REST_AT_PEAK_SECONDS:
        text += ". Rest longer if reps break down."
    return text


def format_sets(set_count: int, amount: int, unit: str) -> str:
    """
    Describe a set scheme.

    Examples:
        format_sets(4, 6, "reps")      -> "4 sets × 6 reps"
        format_sets(3, 20, "seconds")  -> "3 sets × 20s hold"
        format_sets(1, 15, "minutes")  -> "15 minutes"
    """
    if unit == "minutes":
        if set_count > 1:
            return f"{set_count} × {amount} minutes"
        return f"{amount} minutes"
    if unit == "seconds":
        return f"{set_count} sets × {amount}s hold"
    rep_word = "rep" if amount == 1 else "reps"
    return f"{set_count} sets × {amount} {rep_word}"

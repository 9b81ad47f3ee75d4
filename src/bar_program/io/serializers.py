"""
JSON serialization for program data models.

Handles conversion between the plan dataclasses and JSON-compatible
dicts. Keys are camelCase, matching the request/response format that
renderers and HTTP clients already consume.
"""

from typing import Any

from ..core.models import (
    DayPlan,
    ExercisePrescription,
    MaxRepProfile,
    Meal,
    NutritionEstimate,
    WeekPlan,
    WeekSettings,
)
from ..core.validation import ValidationError

__all__ = [
    "ValidationError",
    "day_to_dict",
    "dict_to_day",
    "dict_to_prescription",
    "dict_to_week",
    "error_envelope",
    "list_to_program",
    "meal_to_dict",
    "nutrition_to_dict",
    "prescription_to_dict",
    "program_to_list",
    "success_envelope",
    "week_to_dict",
]


def prescription_to_dict(ex: ExercisePrescription) -> dict[str, Any]:
    """
    Convert ExercisePrescription to JSON-compatible dict.

    ``name``, ``sets``, ``rest`` and ``kind`` are always present; the
    numeric fields only when the entry has them.
    """
    d: dict[str, Any] = {
        "name": ex.name,
        "sets": ex.sets,
        "rest": ex.rest,
        "kind": ex.kind,
    }
    if ex.exercise_id is not None:
        d["exerciseId"] = ex.exercise_id
    if ex.reps is not None:
        d["reps"] = ex.reps
    if ex.duration is not None:
        d["duration"] = ex.duration
    if ex.set_count is not None:
        d["setCount"] = ex.set_count
    if ex.reps is not None or ex.duration is not None:
        d["unit"] = ex.unit
    if ex.rest_seconds is not None:
        d["restSeconds"] = ex.rest_seconds
    if ex.note:
        d["note"] = ex.note
    return d


def dict_to_prescription(data: dict[str, Any]) -> ExercisePrescription:
    """
    Convert dict to ExercisePrescription.

    Raises:
        ValidationError: If a required key is missing or a value is invalid
    """
    try:
        return ExercisePrescription(
            name=data["name"],
            sets=data["sets"],
            rest=data["rest"],
            kind=data.get("kind", "main"),
            exercise_id=data.get("exerciseId"),
            reps=data.get("reps"),
            duration=data.get("duration"),
            set_count=data.get("setCount"),
            unit=data.get("unit", "reps"),
            rest_seconds=data.get("restSeconds"),
            note=data.get("note", ""),
        )
    except KeyError as e:
        raise ValidationError(f"Exercise entry missing {e.args[0]!r}") from e
    except ValueError as e:
        raise ValidationError(f"Invalid exercise entry: {e}") from e


def day_to_dict(day: DayPlan) -> dict[str, Any]:
    """Convert DayPlan to JSON-compatible dict."""
    return {
        "day": day.day,
        "focus": day.focus,
        "title": day.title,
        "exercises": [prescription_to_dict(ex) for ex in day.exercises],
        "coachingNote": day.coaching_note,
    }


def dict_to_day(data: dict[str, Any]) -> DayPlan:
    """Convert dict to DayPlan."""
    try:
        return DayPlan(
            day=data["day"],
            focus=data["focus"],
            title=data.get("title", ""),
            exercises=tuple(dict_to_prescription(ex) for ex in data["exercises"]),
            coaching_note=data.get("coachingNote", ""),
        )
    except KeyError as e:
        raise ValidationError(f"Day entry missing {e.args[0]!r}") from e


def week_to_dict(week: WeekPlan) -> dict[str, Any]:
    """Convert WeekPlan to JSON-compatible dict."""
    return {
        "week": week.week_number,
        "volume": week.volume_factor,
        "intensity": week.intensity_factor,
        "style": week.style,
        "label": week.settings.label,
        "days": [day_to_dict(day) for day in week.days],
    }


def dict_to_week(data: dict[str, Any]) -> WeekPlan:
    """Convert dict to WeekPlan."""
    try:
        settings = WeekSettings(
            volume_factor=float(data["volume"]),
            intensity_factor=float(data["intensity"]),
            style=data["style"],
            label=data.get("label", ""),
        )
        return WeekPlan(
            week_number=data["week"],
            settings=settings,
            days=tuple(dict_to_day(day) for day in data["days"]),
        )
    except KeyError as e:
        raise ValidationError(f"Week entry missing {e.args[0]!r}") from e
    except ValueError as e:
        raise ValidationError(f"Invalid week entry: {e}") from e


def program_to_list(weeks: tuple[WeekPlan, ...] | list[WeekPlan]) -> list[dict[str, Any]]:
    """Convert a generated program to a JSON-compatible list of weeks."""
    return [week_to_dict(week) for week in weeks]


def list_to_program(data: list[dict[str, Any]]) -> tuple[WeekPlan, ...]:
    """
    Convert a list of week dicts back to a program.

    Raises:
        ValidationError: If the data is not a list of valid week entries
    """
    if not isinstance(data, list):
        raise ValidationError("program must be a list of weeks")
    return tuple(dict_to_week(week) for week in data)


def meal_to_dict(meal: Meal) -> dict[str, Any]:
    return {
        "time": meal.time,
        "name": meal.name,
        "foods": [{"name": name, "qty": qty} for name, qty in meal.foods],
        "kcal": meal.kcal,
        "protein": meal.protein,
    }


def nutrition_to_dict(estimate: NutritionEstimate) -> dict[str, Any]:
    """Convert NutritionEstimate to JSON-compatible dict."""
    return {
        "bmr": estimate.bmr,
        "tdee": estimate.tdee,
        "proteinG": estimate.protein_g,
        "goals": list(estimate.goals),
        "note": estimate.note,
        "sampleMeals": (
            None
            if estimate.sample_meals is None
            else [meal_to_dict(m) for m in estimate.sample_meals]
        ),
    }


def success_envelope(
    level: str,
    max_reps: MaxRepProfile,
    weeks: tuple[WeekPlan, ...],
    nutrition: NutritionEstimate | None = None,
) -> dict[str, Any]:
    """
    Build the success response for a generated program.

    Args:
        level: Validated level
        max_reps: Effective (normalized) profile the program was built from
        weeks: Generated program
        nutrition: Optional nutrition estimate

    Returns:
        {"success": True, "data": {"level", "maxReps", "program"[, "nutrition"]}}
    """
    data: dict[str, Any] = {
        "level": level,
        "maxReps": max_reps.to_dict(),
        "program": program_to_list(weeks),
    }
    if nutrition is not None:
        data["nutrition"] = nutrition_to_dict(nutrition)
    return {"success": True, "data": data}


def error_envelope(error: ValidationError) -> dict[str, Any]:
    """Build the failure response for a ValidationError (HTTP 400 body)."""
    d: dict[str, Any] = {
        "success": False,
        "message": str(error),
        "field": error.field,
    }
    if error.limit is not None:
        d["limit"] = error.limit
    return d

"""
Calorie and protein estimate stored alongside a generated program.

Mifflin-St Jeor BMR with a fixed reference profile (male, age 30) and a
moderate activity factor for five training days a week. Estimates with
numbers also carry a food-first sample meal plan scaled to them.
"""

from collections.abc import Iterable

from .config import (
    DEFAULT_PROTEIN_G_PER_KG,
    GOAL_NUTRITION_ADJUSTMENTS,
    MEAL_KCAL_SCALE_BOUNDS,
    MEAL_PLAN_MIN_TDEE,
    MEAL_PROTEIN_SCALE_BOUNDS,
    MEAL_REFERENCE_PROTEIN_G,
    MEAL_REFERENCE_TDEE,
    NUTRITION_ACTIVITY_FACTOR,
    NUTRITION_MIN_HEIGHT_CM,
    NUTRITION_MIN_WEIGHT_KG,
    NUTRITION_REFERENCE_AGE,
)
from .metrics import round_half_up
from .models import Meal, NutritionEstimate


def mifflin_st_jeor_bmr(height_cm: float, weight_kg: float) -> float:
    """BMR = 10·W + 6.25·H − 5·age + 5 (reference age 30)."""
    return 10 * weight_kg + 6.25 * height_cm - 5 * NUTRITION_REFERENCE_AGE + 5


def _clamp(value: float, bounds: tuple[float, float]) -> float:
    low, high = bounds
    return min(high, max(low, value))


def sample_meal_plan(tdee: int | None, protein_g: int | None) -> tuple[Meal, ...] | None:
    """
    Five budget-friendly meals for one training day.

    Portions, calories and protein scale with the estimate (kcal by
    tdee / 2500, protein by protein / 135 g, both clamped). Returns None
    below 1200 kcal or without a protein target.
    """
    if not tdee or tdee < MEAL_PLAN_MIN_TDEE or not protein_g:
        return None
    scale = _clamp(tdee / MEAL_REFERENCE_TDEE, MEAL_KCAL_SCALE_BOUNDS)
    p_scale = _clamp(protein_g / MEAL_REFERENCE_PROTEIN_G, MEAL_PROTEIN_SCALE_BOUNDS)

    def grams(base: float, factor: float) -> int:
        return round_half_up(base * factor)

    return (
        Meal(
            time="7:00",
            name="Breakfast",
            foods=(
                ("Oats with milk", f"{grams(60, scale)}g oats"),
                ("Banana", "1"),
                ("Peanut butter", "1 tbsp"),
                ("Boiled eggs", "3-4"),
            ),
            kcal=grams(500, scale),
            protein=grams(30, p_scale),
        ),
        Meal(
            time="10:00",
            name="Snack",
            foods=(
                ("Greek yogurt", f"{grams(150, scale)}g"),
                ("Oats or seeds", "small handful"),
            ),
            kcal=grams(250, scale),
            protein=grams(18, p_scale),
        ),
        Meal(
            time="13:00",
            name="Lunch",
            foods=(
                ("Brown rice + lentils", f"{grams(120, scale)}g cooked"),
                ("Sautéed vegetables", "1 serving"),
                ("Chicken thighs or canned tuna", f"{grams(120, p_scale)}g"),
            ),
            kcal=grams(600, scale),
            protein=grams(42, p_scale),
        ),
        Meal(
            time="16:00",
            name="Pre/Post-workout",
            foods=(
                ("Banana", "1"),
                ("Milk", "1 glass"),
                ("Or: Rice + beans + chicken", "small portion"),
            ),
            kcal=grams(250, scale),
            protein=grams(18, p_scale),
        ),
        Meal(
            time="19:00",
            name="Dinner",
            foods=(
                ("Sweet potato", f"{grams(150, scale)}g"),
                ("Baked chicken or fish", f"{grams(100, p_scale)}g"),
                ("Mixed vegetables", "1 bowl"),
            ),
            kcal=grams(550, scale),
            protein=grams(35, p_scale),
        ),
    )


def calculate_nutrition(
    height_cm: float | None,
    weight_kg: float | None,
    goals: Iterable[str] = (),
) -> NutritionEstimate:
    """
    Estimate daily energy need and protein target.

    The first goal (in lose_weight, build_muscle, improve_endurance
    order) that is present adjusts calories and protein per kg.

    Args:
        height_cm: Height in cm (None if unknown)
        weight_kg: Bodyweight in kg (None if unknown)
        goals: Validated goal identifiers

    Returns:
        NutritionEstimate; numeric fields are None when height < 100 cm,
        weight < 30 kg or either is missing
    """
    goals = tuple(goals)
    if (
        not height_cm
        or not weight_kg
        or height_cm < NUTRITION_MIN_HEIGHT_CM
        or weight_kg < NUTRITION_MIN_WEIGHT_KG
    ):
        return NutritionEstimate(
            bmr=None,
            tdee=None,
            protein_g=None,
            goals=goals,
            note="Add height and weight for estimates.",
        )

    bmr = mifflin_st_jeor_bmr(height_cm, weight_kg)
    tdee = round_half_up(bmr * NUTRITION_ACTIVITY_FACTOR)
    protein_per_kg = DEFAULT_PROTEIN_G_PER_KG

    for goal, (kcal_mult, protein) in GOAL_NUTRITION_ADJUSTMENTS.items():
        if goal in goals:
            tdee = round_half_up(tdee * kcal_mult)
            protein_per_kg = protein
            break

    protein_g = round_half_up(weight_kg * protein_per_kg)
    return NutritionEstimate(
        bmr=round_half_up(bmr),
        tdee=tdee,
        protein_g=protein_g,
        goals=goals,
        note=f"~{tdee} kcal/day (training days), ~{protein_g}g protein. Adjust based on goals.",
        sample_meals=sample_meal_plan(tdee, protein_g),
    )

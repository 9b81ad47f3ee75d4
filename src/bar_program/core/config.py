"""
Configuration constants for the calisthenics program generator.

All fixed parameters are centralized here. Week curves and per-day
templates can be overridden from YAML (see engine/config_loader.py);
safety ceilings cannot.
"""

from typing import Final

# =============================================================================
# LEVELS AND PROFILE KEYS
# =============================================================================

LEVELS: Final[tuple[str, ...]] = ("beginner", "intermediate", "advanced")

# camelCase keys as they arrive in request bodies
REQUIRED_EXERCISES: Final[tuple[str, ...]] = (
    "muscleUp",
    "pullUps",
    "dips",
    "pushUps",
    "squats",
    "legRaises",
)

# =============================================================================
# SAFETY CEILINGS
# =============================================================================

# Realistic competition-level limits; anything above is rejected
SAFETY_LIMITS: Final[dict[str, int]] = {
    "muscleUp": 25,
    "pullUps": 60,
    "dips": 80,
    "pushUps": 120,
    "squats": 200,
    "legRaises": 60,
}

# =============================================================================
# DAY STRUCTURE
# =============================================================================

DAY_FOCUS_ORDER: Final[tuple[str, ...]] = (
    "pull",
    "push",
    "legs_cardio_core",
    "endurance",
)

DAY_TITLES: Final[dict[str, str]] = {
    "pull": "Pull Day",
    "push": "Push Day",
    "legs_cardio_core": "Legs + Core + Cardio",
    "endurance": "Endurance Sets",
}

# =============================================================================
# SET COUNTS
# =============================================================================

MAIN_SETS_BY_LEVEL: Final[dict[str, int]] = {
    "beginner": 3,
    "intermediate": 4,
    "advanced": 5,
}

ENDURANCE_SETS_BY_LEVEL: Final[dict[str, int]] = {
    "beginner": 2,
    "intermediate": 3,
    "advanced": 4,
}

# Endurance day prescribes a larger share of the week's volume, capped at max
ENDURANCE_VOLUME_BOOST: Final[float] = 1.1

# =============================================================================
# REST PERIODS
# =============================================================================

# (upper intensity bound, rest seconds): rest shortens as intensity rises
REST_BY_INTENSITY: Final[tuple[tuple[float, int], ...]] = (
    (0.65, 90),
    (0.75, 75),
    (0.85, 60),
)
REST_AT_PEAK_SECONDS: Final[int] = 45
REST_MIN_SECONDS: Final[int] = 30
REST_GOAL_SHIFT_SECONDS: Final[int] = 15

REST_SKILL: Final[str] = "2–4 min between sets"
REST_SKILL_LONG: Final[str] = "3–4 min between sets"
REST_UNTIL_CLEAN: Final[str] = "Rest until you can perform the next set with clean reps."

# =============================================================================
# SAFETY CAPS (auxiliary work)
# =============================================================================

EMOM_CAP_FRACTION: Final[float] = 0.35  # EMOM reps never above 35% of max

# =============================================================================
# TIMED WORK
# =============================================================================

# Holds and cardio scale with (TIMED_BASE + intensity_factor)
TIMED_BASE: Final[float] = 0.5

# =============================================================================
# BEGINNER REGRESSIONS
# =============================================================================

REGRESSION_LOW_MAX: Final[int] = 3   # max ≤ 3 → "low" regression
REGRESSION_MID_MAX: Final[int] = 8   # max ≤ 8 → "mid" regression

# =============================================================================
# PROGRAM VARIANTS
# =============================================================================

PROGRAM_WEEKS: Final[tuple[int, ...]] = (4, 6, 12)
DEFAULT_PROGRAM_WEEKS: Final[int] = 4
SECOND_BLOCK_SEED_OFFSET: Final[int] = 9999

# Default curves; the bundled program.yaml carries the same values
DEFAULT_WEEK_CURVES: Final[dict[int, list[dict]]] = {
    4: [
        {"volume": 0.62, "intensity": 0.60, "style": "volume", "label": "Volume base"},
        {"volume": 0.72, "intensity": 0.70, "style": "density", "label": "Density"},
        {"volume": 0.82, "intensity": 0.80, "style": "unbroken", "label": "Unbroken"},
        {"volume": 0.93, "intensity": 0.90, "style": "competition", "label": "Competition"},
    ],
    6: [
        {"volume": 0.62, "intensity": 0.60, "style": "volume", "label": "Volume base"},
        {"volume": 0.72, "intensity": 0.70, "style": "density", "label": "Density"},
        {"volume": 0.82, "intensity": 0.80, "style": "unbroken", "label": "Unbroken"},
        {"volume": 0.93, "intensity": 0.90, "style": "competition", "label": "Competition"},
        {"volume": 0.60, "intensity": 0.60, "style": "deload", "label": "Deload"},
        {"volume": 0.50, "intensity": 0.50, "style": "taper", "label": "Taper + max test"},
    ],
}

STYLE_NOTES: Final[dict[str, str]] = {
    "volume": "Build the base. Rest fully and keep every rep clean.",
    "density": "Same work, less rest. Keep the pace steady.",
    "unbroken": "Fewer breaks per set. Only stop if your form breaks.",
    "competition": "Near-max simulation. Push through fatigue with good form.",
    "deload": "Recovery week. Lower volume, stay fresh.",
    "taper": "Stay sharp and rested for the final test.",
}

# =============================================================================
# LEVEL DETECTION
# =============================================================================

BEGINNER_PULL_UPS_BELOW: Final[int] = 5
BEGINNER_DIPS_BELOW: Final[int] = 10
ADVANCED_PULL_UPS_MIN: Final[int] = 20
ADVANCED_MUSCLE_UPS_MIN: Final[int] = 5
ADVANCED_DIPS_MIN: Final[int] = 40

# =============================================================================
# NUTRITION
# =============================================================================

NUTRITION_REFERENCE_AGE: Final[int] = 30
NUTRITION_ACTIVITY_FACTOR: Final[float] = 1.55
NUTRITION_MIN_HEIGHT_CM: Final[float] = 100.0
NUTRITION_MIN_WEIGHT_KG: Final[float] = 30.0
DEFAULT_PROTEIN_G_PER_KG: Final[float] = 1.8

# goal → (kcal multiplier, protein g/kg); first matching goal in this order wins
GOAL_NUTRITION_ADJUSTMENTS: Final[dict[str, tuple[float, float]]] = {
    "lose_weight": (0.90, 2.0),
    "build_muscle": (1.08, 2.2),
    "improve_endurance": (1.02, DEFAULT_PROTEIN_G_PER_KG),
}

# Sample meal plan: portions scale with tdee / 2500 and protein / 135 g
MEAL_PLAN_MIN_TDEE: Final[int] = 1200
MEAL_REFERENCE_TDEE: Final[float] = 2500.0
MEAL_REFERENCE_PROTEIN_G: Final[float] = 135.0
MEAL_KCAL_SCALE_BOUNDS: Final[tuple[float, float]] = (0.7, 1.4)
MEAL_PROTEIN_SCALE_BOUNDS: Final[tuple[float, float]] = (0.8, 1.3)

"""
Data models for bar-program.

All core dataclasses representing the generated training plan. Every
model is frozen and uses tuples for sequences, so a generated program
is an immutable tree that can be shared freely.
"""

from dataclasses import dataclass, field
from typing import ClassVar, Literal

Level = Literal["beginner", "intermediate", "advanced"]
DayFocus = Literal["pull", "push", "legs_cardio_core", "endurance"]
PrescriptionKind = Literal[
    "warmup", "skill", "main", "auxiliary", "finisher", "test", "cooldown"
]
Unit = Literal["reps", "seconds", "minutes"]


@dataclass(frozen=True)
class MaxRepProfile:
    """
    Maximum repetitions per exercise, as reported by the user.

    Field names are snake_case; the request/response format uses the
    camelCase keys in ``KEYS``.
    """

    muscle_up: int
    pull_ups: int
    dips: int
    push_ups: int
    squats: int
    leg_raises: int

    KEYS: ClassVar[dict[str, str]] = {
        "muscleUp": "muscle_up",
        "pullUps": "pull_ups",
        "dips": "dips",
        "pushUps": "push_ups",
        "squats": "squats",
        "legRaises": "leg_raises",
    }

    def __post_init__(self) -> None:
        """Validate profile values."""
        for key, attr in self.KEYS.items():
            if getattr(self, attr) < 0:
                raise ValueError(f"{key} must be non-negative")

    def get(self, key: str) -> int:
        """Return the max for a camelCase key (e.g. "pullUps")."""
        if key not in self.KEYS:
            raise KeyError(key)
        return getattr(self, self.KEYS[key])

    def to_dict(self) -> dict[str, int]:
        """Return the profile with camelCase keys."""
        return {key: getattr(self, attr) for key, attr in self.KEYS.items()}


@dataclass(frozen=True)
class WeekSettings:
    """One point on the weekly progression curve."""

    volume_factor: float     # fraction of max reps prescribed this week
    intensity_factor: float  # density proxy: higher means shorter rest
    style: str               # e.g. "volume", "density", "deload"
    label: str = ""

    def __post_init__(self) -> None:
        if not 0 < self.volume_factor <= 1.5:
            raise ValueError(f"volume_factor out of range: {self.volume_factor}")
        if not 0 < self.intensity_factor <= 1.5:
            raise ValueError(f"intensity_factor out of range: {self.intensity_factor}")


@dataclass(frozen=True)
class ExercisePrescription:
    """
    A single entry in a training day.

    ``sets`` and ``rest`` are the human-readable descriptions handed to
    renderers; ``reps`` (or ``duration`` for timed work), ``set_count``
    and ``rest_seconds`` carry the numbers behind them when the entry
    has any.
    """

    name: str
    sets: str
    rest: str
    kind: PrescriptionKind = "main"
    exercise_id: str | None = None
    reps: int | None = None
    duration: int | None = None  # seconds or minutes, per unit
    set_count: int | None = None
    unit: Unit = "reps"
    rest_seconds: int | None = None
    note: str = ""

    def __post_init__(self) -> None:
        if self.reps is not None and self.reps < 1:
            raise ValueError("reps must be at least 1")
        if self.duration is not None and self.duration < 1:
            raise ValueError("duration must be at least 1")
        if self.set_count is not None and self.set_count < 1:
            raise ValueError("set_count must be at least 1")
        if self.rest_seconds is not None and self.rest_seconds < 0:
            raise ValueError("rest_seconds must be non-negative")


@dataclass(frozen=True)
class DayPlan:
    """One training day with a fixed focus role."""

    day: int  # 1-indexed position within the week
    focus: DayFocus
    title: str
    exercises: tuple[ExercisePrescription, ...] = field(default_factory=tuple)
    coaching_note: str = ""

    def prescriptions_for(self, exercise_id: str) -> tuple[ExercisePrescription, ...]:
        """Return all entries for the given exercise id."""
        return tuple(e for e in self.exercises if e.exercise_id == exercise_id)


@dataclass(frozen=True)
class WeekPlan:
    """One week of the program: settings plus four days in fixed order."""

    week_number: int  # 1-indexed
    settings: WeekSettings
    days: tuple[DayPlan, ...] = field(default_factory=tuple)

    @property
    def volume_factor(self) -> float:
        return self.settings.volume_factor

    @property
    def intensity_factor(self) -> float:
        return self.settings.intensity_factor

    @property
    def style(self) -> str:
        return self.settings.style


@dataclass(frozen=True)
class Meal:
    """One meal of the sample plan."""

    time: str  # e.g. "7:00"
    name: str
    foods: tuple[tuple[str, str], ...]  # (food, quantity)
    kcal: int
    protein: int


@dataclass(frozen=True)
class NutritionEstimate:
    """
    Daily energy and protein estimate.

    All numeric fields are None when height or weight is missing or
    implausible; ``note`` then explains what to add and there is no
    sample meal plan.
    """

    bmr: int | None
    tdee: int | None
    protein_g: int | None
    goals: tuple[str, ...] = ()
    note: str = ""
    sample_meals: tuple[Meal, ...] | None = None

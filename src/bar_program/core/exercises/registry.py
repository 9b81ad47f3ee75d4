"""
Exercise registry.

All prescribable exercises are registered here. Use get_exercise() to
look up an ExerciseDefinition by its exercise_id string, or
exercise_for_key() by its max-rep key.

Exercises are loaded from per-exercise YAML files in the bundled
``src/bar_program/exercises/`` directory at import time. If nothing can
be loaded, or a max-rep key has no exercise, a RuntimeError is raised:
the generator cannot run without a complete catalog.

User overrides: place matching files in ``~/.bar-program/exercises/``.
"""

from ..config import REQUIRED_EXERCISES
from .base import ExerciseDefinition


def _build_registry() -> dict[str, ExerciseDefinition]:
    from .loader import load_exercises_from_yaml

    loaded = load_exercises_from_yaml()
    if not loaded:
        raise RuntimeError(
            "bar-program: no exercise definitions could be loaded from YAML. "
            "Check that src/bar_program/exercises/*.yaml files are present and valid."
        )
    covered = {ex.max_key for ex in loaded.values()}
    missing = [key for key in REQUIRED_EXERCISES if key not in covered]
    if missing:
        raise RuntimeError(f"bar-program: no exercise definition for max keys {missing}")
    return loaded


EXERCISE_REGISTRY: dict[str, ExerciseDefinition] = _build_registry()


def get_exercise(exercise_id: str) -> ExerciseDefinition:
    """
    Return the ExerciseDefinition for the given exercise_id.

    Args:
        exercise_id: e.g. "pull_up", "dip", "muscle_up"

    Returns:
        ExerciseDefinition for the requested exercise

    Raises:
        ValueError: If exercise_id is not in the registry
    """
    if exercise_id not in EXERCISE_REGISTRY:
        valid = ", ".join(EXERCISE_REGISTRY)
        raise ValueError(f"Unknown exercise '{exercise_id}'. Valid IDs: {valid}")
    return EXERCISE_REGISTRY[exercise_id]


def exercise_for_key(max_key: str) -> ExerciseDefinition:
    """Return the exercise scaled by a max-rep key (e.g. "pullUps")."""
    for ex in EXERCISE_REGISTRY.values():
        if ex.max_key == max_key:
            return ex
    raise ValueError(f"No exercise for max key '{max_key}'")

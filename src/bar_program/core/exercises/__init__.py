"""
Exercise definitions for bar-program.

Each exercise is described by an ExerciseDefinition loaded from YAML;
day templates refer to exercises by id.
"""

from .base import ExerciseDefinition
from .registry import EXERCISE_REGISTRY, exercise_for_key, get_exercise

__all__ = [
    "ExerciseDefinition",
    "EXERCISE_REGISTRY",
    "exercise_for_key",
    "get_exercise",
]

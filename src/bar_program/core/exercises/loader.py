"""
YAML → ExerciseDefinition loader.

Loads exercise definitions from individual YAML files in the bundled
``src/bar_program/exercises/`` directory. Each file (e.g. pull_up.yaml)
contains a flat exercise definition matching the ExerciseDefinition schema.

User overrides: place matching files in ``~/.bar-program/exercises/``.
A user file is deep-merged over the bundled definition, so only changed
keys need to be listed. User files with no bundled counterpart are
ignored: the generator only prescribes exercises its templates know.
"""

from __future__ import annotations

import warnings
from pathlib import Path

from ..engine.config_loader import deep_merge, get_package_dir, get_user_dir, load_yaml_file
from .base import ExerciseDefinition

_REQUIRED_EXERCISE_FIELDS: frozenset[str] = frozenset(
    {
        "exercise_id",
        "display_name",
        "max_key",
    }
)


def exercise_from_dict(d: dict) -> ExerciseDefinition:
    """Convert a raw dict (from YAML) to an ExerciseDefinition.

    Raises ValueError if any required field is absent.
    """
    missing = _REQUIRED_EXERCISE_FIELDS - set(d)
    if missing:
        raise ValueError(f"ExerciseDefinition missing fields: {sorted(missing)}")

    regressions = d.get("regressions") or {}
    if not isinstance(regressions, dict):
        raise ValueError("regressions must be a mapping of low/mid names")

    return ExerciseDefinition(
        exercise_id=str(d["exercise_id"]),
        display_name=str(d["display_name"]),
        max_key=str(d["max_key"]),
        skill=bool(d.get("skill", False)),
        test_note=str(d.get("test_note", "")),
        regressions={str(k): str(v) for k, v in regressions.items()},
    )


def _get_bundled_exercises_dir() -> Path | None:
    """Return path to the bundled exercises/ data directory, or None if not found."""
    candidate = get_package_dir() / "exercises"
    return candidate if candidate.is_dir() else None


def _get_user_exercises_dir() -> Path | None:
    """Return ~/.bar-program/exercises/ if it exists, else None."""
    p = get_user_dir() / "exercises"
    return p if p.is_dir() else None


def load_exercises_from_yaml() -> dict[str, ExerciseDefinition]:
    """Return {exercise_id: ExerciseDefinition} loaded from per-exercise YAML files.

    Loads each ``<exercise_id>.yaml`` from the bundled exercises/ directory.
    If a matching file exists in ``~/.bar-program/exercises/`` it is
    deep-merged over the bundled definition. Invalid files are skipped
    with a warning; an empty dict means nothing could be loaded.
    """
    bundled_dir = _get_bundled_exercises_dir()
    if bundled_dir is None:
        return {}
    user_dir = _get_user_exercises_dir()

    result: dict[str, ExerciseDefinition] = {}
    for bundled_path in sorted(bundled_dir.glob("*.yaml")):
        raw = load_yaml_file(bundled_path)
        if not raw:
            continue
        if user_dir is not None:
            user_path = user_dir / bundled_path.name
            if user_path.is_file():
                user_raw = load_yaml_file(user_path)
                if user_raw:
                    raw = deep_merge(raw, user_raw)
        try:
            ex = exercise_from_dict(raw)
        except ValueError as exc:
            warnings.warn(
                f"bar-program: skipping exercise '{bundled_path.stem}' ({exc})",
                stacklevel=2,
            )
            continue
        result[ex.exercise_id] = ex

    return result

"""Shared Typer app object, shared option types, and input helpers."""

from pathlib import Path
from typing import Annotated, Optional

import typer

from ..core.models import Level
from ..core.validation import detect_level, validate_max_reps

app = typer.Typer(
    name="bar-program",
    help="Deterministic calisthenics program generator: pull, push, legs + core + cardio, endurance.",
    no_args_is_help=True,
)

# Shared option types used across commands
LevelOption = Annotated[
    Optional[str],
    typer.Option("--level", "-l", help="beginner, intermediate or advanced (detected if omitted)"),
]
MuscleUpOption = Annotated[Optional[int], typer.Option("--muscle-up", help="Max muscle-ups")]
PullUpsOption = Annotated[Optional[int], typer.Option("--pull-ups", help="Max pull-ups")]
DipsOption = Annotated[Optional[int], typer.Option("--dips", help="Max dips")]
PushUpsOption = Annotated[Optional[int], typer.Option("--push-ups", help="Max push-ups")]
SquatsOption = Annotated[Optional[int], typer.Option("--squats", help="Max squats")]
LegRaisesOption = Annotated[Optional[int], typer.Option("--leg-raises", help="Max leg raises")]
WeeksOption = Annotated[int, typer.Option("--weeks", "-n", help="Program length: 4, 6 or 12 weeks")]
SeedOption = Annotated[
    Optional[int],
    typer.Option("--seed", help="Seed for auxiliary exercise choices (random if omitted)"),
]
GoalOption = Annotated[
    Optional[list[str]],
    typer.Option(
        "--goal",
        "-g",
        help="Goal, repeatable up to 3: lose_weight, improve_endurance, build_muscle, learn_skills",
    ),
]
HeightOption = Annotated[Optional[float], typer.Option("--height-cm", help="Height in centimeters")]
WeightOption = Annotated[Optional[float], typer.Option("--weight-kg", "-w", help="Bodyweight in kg")]
JsonOption = Annotated[
    bool,
    typer.Option("--json", "-j", help="Output as JSON for machine processing"),
]
OutputOption = Annotated[
    Optional[Path],
    typer.Option("--output", "-o", help="Write the program envelope to this JSON file"),
]


def collect_max_reps(
    muscle_up: int | None,
    pull_ups: int | None,
    dips: int | None,
    push_ups: int | None,
    squats: int | None,
    leg_raises: int | None,
) -> dict[str, int]:
    """
    Build a camelCase max-rep mapping from CLI options.

    Options that were not given are left out, so validation reports
    them as required.
    """
    given = {
        "muscleUp": muscle_up,
        "pullUps": pull_ups,
        "dips": dips,
        "pushUps": push_ups,
        "squats": squats,
        "legRaises": leg_raises,
    }
    return {key: value for key, value in given.items() if value is not None}


def resolve_level(level: str | None, max_reps: dict[str, int]) -> tuple[str, bool]:
    """
    Return (level, detected).

    When no level is given it is detected from the profile; the profile
    is validated first so a bad value is reported before detection.
    """
    if level is not None:
        return level, False
    detected: Level = detect_level(validate_max_reps(max_reps))
    return detected, True

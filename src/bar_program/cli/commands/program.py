"""Program commands: generate, batch, show."""

import json
import time
from pathlib import Path
from typing import Annotated

import typer

from ...core.goals import validate_goals
from ...core.nutrition import calculate_nutrition
from ...core.planner import auxiliary_selection, generate_batch, generate_program
from ...core.validation import normalize_profile, validate_level, validate_max_reps
from ...io.program_store import ProgramStore
from ...io.serializers import ValidationError, error_envelope, program_to_list, success_envelope
from .. import views
from ..app import (
    DipsOption,
    GoalOption,
    HeightOption,
    JsonOption,
    LegRaisesOption,
    LevelOption,
    MuscleUpOption,
    OutputOption,
    PullUpsOption,
    PushUpsOption,
    SeedOption,
    SquatsOption,
    WeeksOption,
    WeightOption,
    app,
    collect_max_reps,
    resolve_level,
)


def _report(error: ValidationError, json_out: bool) -> None:
    """Print a validation error as text or as a JSON error envelope."""
    if json_out:
        print(json.dumps(error_envelope(error), indent=2))
    else:
        views.print_error(str(error))


@app.command()
def generate(
    level: LevelOption = None,
    muscle_up: MuscleUpOption = None,
    pull_ups: PullUpsOption = None,
    dips: DipsOption = None,
    push_ups: PushUpsOption = None,
    squats: SquatsOption = None,
    leg_raises: LegRaisesOption = None,
    weeks: WeeksOption = 4,
    seed: SeedOption = None,
    goal: GoalOption = None,
    height_cm: HeightOption = None,
    weight_kg: WeightOption = None,
    json_out: JsonOption = False,
    output: OutputOption = None,
) -> None:
    """
    Generate a training program from your max reps.
    """
    max_reps = collect_max_reps(muscle_up, pull_ups, dips, push_ups, squats, leg_raises)

    try:
        level, detected = resolve_level(level, max_reps)
        goals = validate_goals(goal)
        program = generate_program(level, max_reps, seed, weeks=weeks, goals=goals)
    except ValidationError as e:
        _report(e, json_out)
        raise typer.Exit(1)

    valid_level = validate_level(level)
    profile = normalize_profile(valid_level, validate_max_reps(max_reps))
    nutrition = None
    if height_cm is not None or weight_kg is not None:
        nutrition = calculate_nutrition(height_cm, weight_kg, goals)
    envelope = success_envelope(valid_level, profile, program, nutrition)

    if output is not None:
        ProgramStore(output).save(envelope)

    if json_out:
        print(json.dumps(envelope, indent=2, ensure_ascii=False))
        return

    views.print_program(program, valid_level, profile, goals=goals, detected=detected)
    if nutrition is not None:
        views.print_nutrition(nutrition)
    if output is not None:
        views.print_success(f"Saved program to {output}")


@app.command()
def batch(
    level: LevelOption = None,
    muscle_up: MuscleUpOption = None,
    pull_ups: PullUpsOption = None,
    dips: DipsOption = None,
    push_ups: PushUpsOption = None,
    squats: SquatsOption = None,
    leg_raises: LegRaisesOption = None,
    count: Annotated[
        int,
        typer.Option("--count", "-c", help="Number of programs to generate"),
    ] = 3,
    weeks: WeeksOption = 4,
    seed: SeedOption = None,
    goal: GoalOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Generate several programs with consecutive seeds and compare their variety.
    """
    max_reps = collect_max_reps(muscle_up, pull_ups, dips, push_ups, squats, leg_raises)
    if seed is None:
        seed = time.time_ns()

    try:
        level, _ = resolve_level(level, max_reps)
        goals = validate_goals(goal)
        programs = generate_batch(level, max_reps, count, seed, weeks=weeks, goals=goals)
    except ValidationError as e:
        _report(e, json_out)
        raise typer.Exit(1)

    seeds = [seed + i for i in range(len(programs))]

    if json_out:
        profile = normalize_profile(validate_level(level), validate_max_reps(max_reps))
        print(json.dumps({
            "success": True,
            "data": {
                "level": level,
                "maxReps": profile.to_dict(),
                "programs": [
                    {"seed": s, "program": program_to_list(p)}
                    for s, p in zip(seeds, programs)
                ],
            },
        }, indent=2, ensure_ascii=False))
        return

    views.print_info(f"{len(programs)} × {weeks}-week programs for level {level}")
    views.print_batch_summary(seeds, [auxiliary_selection(p) for p in programs])


@app.command()
def show(
    path: Annotated[Path, typer.Argument(help="Program JSON file written by generate --output")],
    week: Annotated[
        int,
        typer.Option("--week", help="Show only this week (0 = all)"),
    ] = 0,
) -> None:
    """
    Display a saved program.
    """
    store = ProgramStore(path)
    try:
        saved = store.load()
        profile = validate_max_reps(saved.max_reps)
    except FileNotFoundError as e:
        views.print_error(str(e))
        raise typer.Exit(1)
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    weeks = saved.weeks
    if week:
        weeks = tuple(w for w in weeks if w.week_number == week)
        if not weeks:
            views.print_error(f"Week {week} not in program (1–{len(saved.weeks)})")
            raise typer.Exit(1)

    views.print_program(weeks, saved.level, profile)

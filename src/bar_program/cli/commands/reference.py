"""Reference commands: limits, detect-level, nutrition."""

import json

import typer

from ...core.config import SAFETY_LIMITS
from ...core.goals import validate_goals
from ...core.nutrition import calculate_nutrition
from ...core.validation import detect_level, validate_max_reps
from ...io.serializers import ValidationError, nutrition_to_dict
from .. import views
from ..app import (
    DipsOption,
    GoalOption,
    HeightOption,
    JsonOption,
    LegRaisesOption,
    MuscleUpOption,
    PullUpsOption,
    PushUpsOption,
    SquatsOption,
    WeightOption,
    app,
    collect_max_reps,
)


@app.command()
def limits(json_out: JsonOption = False) -> None:
    """
    Show the highest max-rep value accepted for each exercise.
    """
    if json_out:
        print(json.dumps(SAFETY_LIMITS, indent=2))
        return
    views.print_limits()


@app.command("detect-level")
def detect_level_cmd(
    muscle_up: MuscleUpOption = None,
    pull_ups: PullUpsOption = None,
    dips: DipsOption = None,
    push_ups: PushUpsOption = None,
    squats: SquatsOption = None,
    leg_raises: LegRaisesOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Suggest an experience level from your max reps.
    """
    max_reps = collect_max_reps(muscle_up, pull_ups, dips, push_ups, squats, leg_raises)
    try:
        profile = validate_max_reps(max_reps)
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    level = detect_level(profile)
    if json_out:
        print(json.dumps({"level": level, "maxReps": profile.to_dict()}, indent=2))
        return
    views.console.print(f"Suggested level: [bold cyan]{level}[/bold cyan]")


@app.command()
def nutrition(
    height_cm: HeightOption = None,
    weight_kg: WeightOption = None,
    goal: GoalOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Estimate daily calories and protein for training days.
    """
    try:
        goals = validate_goals(goal)
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    estimate = calculate_nutrition(height_cm, weight_kg, goals)
    if json_out:
        print(json.dumps(nutrition_to_dict(estimate), indent=2))
        return
    views.print_nutrition(estimate)

"""
CLI view formatters using Rich for pretty console output.

Handles table formatting and display of generated programs.
"""

from rich.console import Console
from rich.table import Table

from ..core.config import SAFETY_LIMITS
from ..core.goals import GOAL_LABELS
from ..core.models import DayPlan, MaxRepProfile, Meal, NutritionEstimate, WeekPlan

console = Console()

# Row styles per prescription kind
_KIND_STYLES = {
    "warmup": "dim",
    "cooldown": "dim",
    "skill": "magenta",
    "main": "bold",
    "auxiliary": "",
    "finisher": "yellow",
    "test": "bold green",
}


def format_day_table(day: DayPlan) -> Table:
    """
    Create a Rich table for one training day.

    Args:
        day: Day to display

    Returns:
        Rich Table object
    """
    table = Table(title=f"Day {day.day}: {day.title}", title_justify="left")

    table.add_column("#", justify="right", style="dim", width=3)
    table.add_column("Exercise", style="cyan")
    table.add_column("Sets")
    table.add_column("Rest", style="dim")

    for i, ex in enumerate(day.exercises, 1):
        table.add_row(
            str(i),
            ex.name,
            ex.sets,
            ex.rest,
            style=_KIND_STYLES.get(ex.kind, ""),
        )

    if day.coaching_note:
        table.caption = day.coaching_note
    return table


def print_week(week: WeekPlan) -> None:
    """Print the header and day tables of one week."""
    label = f" ({week.settings.label})" if week.settings.label else ""
    console.print()
    console.print(
        f"[bold cyan]Week {week.week_number}{label}[/bold cyan]  "
        f"[dim]volume {week.volume_factor:.0%} · intensity {week.intensity_factor:.0%} · "
        f"{week.style}[/dim]"
    )
    for day in week.days:
        console.print(format_day_table(day))


def print_program(
    weeks: tuple[WeekPlan, ...],
    level: str,
    profile: MaxRepProfile,
    goals: tuple[str, ...] = (),
    detected: bool = False,
) -> None:
    """
    Print a full program with a short profile header.

    Args:
        weeks: Generated program
        level: Level the program was built for
        profile: Effective max-rep profile
        goals: Validated goals
        detected: Level was detected rather than given
    """
    source = " (detected)" if detected else ""
    console.print()
    console.print(f"[bold]{len(weeks)}-week program[/bold] · level: [cyan]{level}[/cyan]{source}")
    console.print(
        "[dim]"
        + ", ".join(f"{key} {value}" for key, value in profile.to_dict().items())
        + "[/dim]"
    )
    if goals:
        console.print("Goals: " + ", ".join(GOAL_LABELS[g] for g in goals))

    for week in weeks:
        print_week(week)
    console.print()


def format_limits_table() -> Table:
    """Create a Rich table of the per-exercise safety ceilings."""
    table = Table(title="Safety Limits")

    table.add_column("Exercise", style="cyan")
    table.add_column("Max reps accepted", justify="right", style="bold")

    for key, limit in SAFETY_LIMITS.items():
        table.add_row(key, str(limit))

    return table


def print_limits() -> None:
    """Print the safety-ceiling table."""
    console.print(format_limits_table())


def print_nutrition(estimate: NutritionEstimate) -> None:
    """Print a nutrition estimate, or the hint when it has no numbers."""
    if estimate.tdee is None:
        print_warning(estimate.note)
        return

    table = Table(title="Nutrition Estimate", show_header=False)
    table.add_column("", style="dim")
    table.add_column("", justify="right", style="bold")
    table.add_row("BMR", f"{estimate.bmr} kcal")
    table.add_row("Training-day energy", f"{estimate.tdee} kcal")
    table.add_row("Protein", f"{estimate.protein_g} g")
    if estimate.goals:
        table.add_row("Goals", ", ".join(GOAL_LABELS[g] for g in estimate.goals))

    console.print(table)
    console.print(f"[dim]{estimate.note}[/dim]")
    if estimate.sample_meals:
        console.print(format_meals_table(estimate.sample_meals))


def format_meals_table(meals: tuple[Meal, ...]) -> Table:
    """Create a Rich table of the sample meal plan."""
    table = Table(title="Sample Meals")

    table.add_column("Time", style="dim")
    table.add_column("Meal", style="cyan")
    table.add_column("Foods")
    table.add_column("kcal", justify="right")
    table.add_column("Protein", justify="right")

    for meal in meals:
        foods = "\n".join(f"{name} ({qty})" for name, qty in meal.foods)
        table.add_row(meal.time, meal.name, foods, str(meal.kcal), f"{meal.protein} g")

    return table


def print_batch_summary(seeds: list[int], names: list[list[str]]) -> None:
    """
    Print one row per generated program with its auxiliary selection.

    Args:
        seeds: Seed used for each program
        names: Auxiliary exercise names per program, in order
    """
    table = Table(title="Batch")

    table.add_column("#", justify="right", style="dim", width=3)
    table.add_column("Seed", style="cyan")
    table.add_column("Auxiliary work")

    for i, (seed, program_names) in enumerate(zip(seeds, names), 1):
        table.add_row(str(i), str(seed), ", ".join(program_names))

    console.print(table)
    distinct = len({tuple(n) for n in names})
    console.print(f"[dim]{distinct} distinct auxiliary selections out of {len(names)}[/dim]")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]{message}[/green]")


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]Error: {message}[/red]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]Warning: {message}[/yellow]")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]{message}[/blue]")

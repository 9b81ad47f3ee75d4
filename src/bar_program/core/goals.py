"""
Training goals.

Goals keep the same weekly structure and only change emphasis: rest
text, cardio minutes and optional skill work. They never change rep
counts. Up to three goals may be given; list order is priority order.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Final

from .models import MaxRepProfile
from .validation import ValidationError

VALID_GOALS: Final[tuple[str, ...]] = (
    "lose_weight",
    "improve_endurance",
    "build_muscle",
    "learn_skills",
)

GOAL_LABELS: Final[dict[str, str]] = {
    "lose_weight": "Lose Weight",
    "improve_endurance": "Improve Endurance",
    "build_muscle": "Build Muscle",
    "learn_skills": "Learn New Skills",
}

MAX_GOALS: Final[int] = 3

# Priority weighting by number of goals
_PRIORITY_WEIGHTS: Final[dict[int, tuple[float, ...]]] = {
    1: (1.0,),
    2: (0.6, 0.4),
    3: (0.6, 0.3, 0.1),
}

# Skill → minimum max reps needed before it is programmed
SKILL_GATES: Final[dict[str, dict[str, int]]] = {
    "l_sit": {"pullUps": 15, "legRaises": 15},
    "handstand": {"pushUps": 10},
    "muscle_up": {"pullUps": 10, "dips": 10},
    "front_lever": {"pullUps": 15},
    "back_lever": {"pullUps": 12},
    "planche": {"pushUps": 25, "dips": 15},
}

SKILL_LABELS: Final[dict[str, str]] = {
    "l_sit": "L-sit",
    "handstand": "Handstand",
    "muscle_up": "Muscle-up transition",
    "front_lever": "Front lever",
    "back_lever": "Back lever",
    "planche": "Planche lean",
}

# Skill blocks per session; earlier skills in SKILL_GATES order come first
MAX_SKILLS_PER_SESSION: Final[int] = 2

CARDIO_EXTRA_MINUTES: Final[int] = 5
CARDIO_CAP_MINUTES: Final[int] = 30
CARDIO_CAP_BUILD_MUSCLE: Final[int] = 18


@dataclass(frozen=True)
class GoalProfile:
    """Derived emphasis for a set of goals."""

    goals: tuple[str, ...]
    weights: dict[str, float]
    rest_bias: str          # "default" | "shorter" | "longer"
    extra_cardio: bool      # add minutes to the cardio block
    favor_jump_rope: bool   # always pick jump rope for cardio
    limit_cardio: bool      # cap cardio minutes (muscle-gain priority)
    include_skill_work: bool


def validate_goals(goals: Iterable[str] | None) -> tuple[str, ...]:
    """
    Validate and de-duplicate goals, keeping priority order.

    Raises:
        ValidationError: On an unknown goal or more than three goals
    """
    if goals is None:
        return ()
    if isinstance(goals, str):
        goals = [goals]

    result: list[str] = []
    for goal in goals:
        if goal not in VALID_GOALS:
            valid = ", ".join(VALID_GOALS)
            raise ValidationError(f"Unknown goal {goal!r}. Valid goals: {valid}", field="goals")
        if goal not in result:
            result.append(goal)

    if len(result) > MAX_GOALS:
        raise ValidationError(f"At most {MAX_GOALS} goals are allowed", field="goals")
    return tuple(result)


def goal_weights(goals: tuple[str, ...]) -> dict[str, float]:
    """Priority weights: 1 goal → 1.0; 2 → 0.6/0.4; 3 → 0.6/0.3/0.1."""
    weights = {g: 0.0 for g in VALID_GOALS}
    if not goals:
        return weights
    for goal, w in zip(goals, _PRIORITY_WEIGHTS[len(goals)]):
        weights[goal] = w
    return weights


def unlocked_skills(profile: MaxRepProfile) -> list[str]:
    """
    Return the skills whose rep prerequisites are all met.

    Muscle-up transition work also needs at least one muscle-up in the
    effective profile, so beginners never get it.
    """
    return [
        skill
        for skill, gate in SKILL_GATES.items()
        if all(profile.get(key) >= minimum for key, minimum in gate.items())
        and (skill != "muscle_up" or profile.muscle_up > 0)
    ]


def build_goal_profile(goals: tuple[str, ...], profile: MaxRepProfile) -> GoalProfile:
    """
    Derive the emphasis switches for validated goals.

    Rest: build_muscle > 0.4 → "longer", else lose_weight > 0.4 → "shorter".
    Cardio: lose_weight > 0.3 or improve_endurance > 0.3 → extra minutes;
    jump rope when either is > 0.2; build_muscle > 0.5 caps cardio.
    Skill work when learn_skills ≥ 0.2 and a skill is unlocked.
    """
    w = goal_weights(goals)

    if w["build_muscle"] > 0.4:
        rest_bias = "longer"
    elif w["lose_weight"] > 0.4:
        rest_bias = "shorter"
    else:
        rest_bias = "default"

    return GoalProfile(
        goals=goals,
        weights=w,
        rest_bias=rest_bias,
        extra_cardio=w["lose_weight"] > 0.3 or w["improve_endurance"] > 0.3,
        favor_jump_rope=w["lose_weight"] > 0.2 or w["improve_endurance"] > 0.2,
        limit_cardio=w["build_muscle"] > 0.5,
        include_skill_work=w["learn_skills"] >= 0.2 and bool(unlocked_skills(profile)),
    )


def cardio_minutes(base_minutes: int, goal_profile: GoalProfile) -> int:
    """Apply goal emphasis to a cardio duration."""
    if goal_profile.limit_cardio:
        return min(CARDIO_CAP_BUILD_MUSCLE, base_minutes)
    if goal_profile.extra_cardio:
        return min(CARDIO_CAP_MINUTES, base_minutes + CARDIO_EXTRA_MINUTES)
    return base_minutes

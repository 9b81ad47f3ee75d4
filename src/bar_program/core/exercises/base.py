"""
Base types for exercise definitions.

ExerciseDefinition describes one exercise the generator can prescribe:
its display name, which max-rep key scales it, whether it is skill work,
and the beginner regressions shown instead of the full movement.
"""

from dataclasses import dataclass, field

from ..config import REGRESSION_LOW_MAX, REGRESSION_MID_MAX


@dataclass(frozen=True)
class ExerciseDefinition:
    """Full catalog entry for one exercise."""

    exercise_id: str          # e.g. "pull_up"
    display_name: str         # e.g. "Pull-ups"
    max_key: str              # MaxRepProfile key, e.g. "pullUps"
    skill: bool = False       # skill work: fresh, low volume, long rest
    test_note: str = ""       # note shown on the max-test entry

    # Beginner regressions: {"low": ..., "mid": ...}
    regressions: dict[str, str] = field(default_factory=dict)

    def name_for(self, level: str, max_reps: int) -> str:
        """
        Display name for a level and max.

        Beginners with a max ≤ 3 get the "low" regression, ≤ 8 the "mid"
        regression; everyone else gets the full movement.
        """
        if level != "beginner" or not self.regressions:
            return self.display_name
        if max_reps <= REGRESSION_LOW_MAX and "low" in self.regressions:
            return self.regressions["low"]
        if max_reps <= REGRESSION_MID_MAX and "mid" in self.regressions:
            return self.regressions["mid"]
        return self.display_name

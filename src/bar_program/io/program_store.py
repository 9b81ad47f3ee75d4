"""
JSON file storage for generated programs.

A saved program is the success envelope written as a single JSON
document, so the same file can be handed to a renderer or read back
with ``bar-program show``.
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ..core.models import WeekPlan
from .serializers import ValidationError, list_to_program


@dataclass(frozen=True)
class SavedProgram:
    """A program read back from disk."""

    level: str
    max_reps: dict[str, int]
    weeks: tuple[WeekPlan, ...]
    nutrition: dict[str, Any] | None = None


class ProgramStore:
    """
    Reads and writes one program file.

    The file holds ``{"success": true, "data": {...}}`` exactly as
    returned by ``success_envelope``.
    """

    def __init__(self, path: str | Path):
        """
        Initialize the store.

        Args:
            path: Path to the program JSON file
        """
        self.path = Path(path)

    def exists(self) -> bool:
        """Check if the program file exists."""
        return self.path.exists()

    def save(self, envelope: dict[str, Any]) -> None:
        """
        Write an envelope to the program file.

        Creates parent directories if needed.
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(envelope, f, indent=2, ensure_ascii=False)

    def load(self) -> SavedProgram:
        """
        Load the program file.

        Raises:
            FileNotFoundError: If the file does not exist
            ValidationError: If the file is not a valid program envelope
        """
        if not self.path.exists():
            raise FileNotFoundError(f"Program file not found: {self.path}")

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                envelope = json.load(f)
        except json.JSONDecodeError as e:
            raise ValidationError(f"Invalid JSON in {self.path}: {e}") from e

        if not isinstance(envelope, dict) or not envelope.get("success"):
            raise ValidationError(f"{self.path} does not contain a generated program")
        data = envelope.get("data")
        if not isinstance(data, dict) or "program" not in data:
            raise ValidationError(f"{self.path} is missing program data")

        return SavedProgram(
            level=data.get("level", ""),
            max_reps=dict(data.get("maxReps", {})),
            weeks=list_to_program(data["program"]),
            nutrition=data.get("nutrition"),
        )

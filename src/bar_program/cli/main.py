"""
CLI entry point using Typer.

Provides commands for program generation:
- generate: Generate and display a training program
- batch: Generate several programs with consecutive seeds
- show: Display a saved program
- limits: Show the per-exercise safety ceilings
- detect-level: Suggest a level from max reps
- nutrition: Estimate calories and protein
"""

from .app import app

# Importing the command modules registers their commands on ``app``
from .commands import program, reference  # noqa: F401

if __name__ == "__main__":
    app()

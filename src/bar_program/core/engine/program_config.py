"""
Typed program configuration.

Turns the merged program.yaml dict into an immutable ProgramConfig:
week curves per program length and one slot template list per day
focus. The default configuration is built once at import so program
generation never touches the filesystem.
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass, field
from typing import Any

from ..config import (
    DAY_FOCUS_ORDER,
    DAY_TITLES,
    DEFAULT_WEEK_CURVES,
    LEVELS,
    REQUIRED_EXERCISES,
)
from ..exercises.registry import EXERCISE_REGISTRY
from ..models import WeekSettings
from .config_loader import load_program_yaml

_SLOT_KINDS = ("warmup", "skill", "main", "auxiliary", "finisher", "cooldown")
_UNITS = ("reps", "seconds", "minutes")
_SCHEMES = ("main", "endurance")

# Curves that must be present; 12 weeks is two 6-week blocks
_CURVE_LENGTHS = (4, 6)


@dataclass(frozen=True)
class SlotTemplate:
    """One entry of a day template."""

    id: str
    kind: str
    exercise: str | None = None     # catalog id
    choices: tuple[str, ...] = ()   # display names for auxiliary work
    base: str | None = None         # max key scaling a choice slot
    scheme: str | None = None       # "main" | "endurance"
    sets: int | None = None
    fraction: float = 1.0
    unit: str = "reps"
    duration: dict[str, int] = field(default_factory=dict)
    emom: bool = False
    cardio: bool = False
    rest: str = "intensity"
    levels: tuple[str, ...] = LEVELS
    requires: str | None = None
    text: str = ""

    @property
    def is_text_block(self) -> bool:
        return self.kind in ("warmup", "cooldown")

    def applies_to(self, level: str) -> bool:
        return level in self.levels


@dataclass(frozen=True)
class DayTemplate:
    focus: str
    title: str
    slots: tuple[SlotTemplate, ...]


@dataclass(frozen=True)
class ProgramConfig:
    """Week curves and day templates used by the planner."""

    week_curves: dict[int, tuple[WeekSettings, ...]]
    days: tuple[DayTemplate, ...]  # in DAY_FOCUS_ORDER

    def curve(self, weeks: int) -> tuple[WeekSettings, ...]:
        """Return the curve for a 4- or 6-week block."""
        if weeks not in self.week_curves:
            raise KeyError(f"No week curve for {weeks} weeks")
        return self.week_curves[weeks]


# =============================================================================
# Parsing
# =============================================================================


def _week_settings_from_dict(d: Any) -> WeekSettings:
    if not isinstance(d, dict):
        raise ValueError(f"week entry must be a mapping, got {d!r}")
    try:
        return WeekSettings(
            volume_factor=float(d["volume"]),
            intensity_factor=float(d["intensity"]),
            style=str(d["style"]),
            label=str(d.get("label", "")),
        )
    except KeyError as exc:
        raise ValueError(f"week entry missing {exc.args[0]!r}") from exc


def _parse_curves(raw: Any) -> dict[int, tuple[WeekSettings, ...]]:
    if raw is None:
        raw = DEFAULT_WEEK_CURVES
    if not isinstance(raw, dict):
        raise ValueError("week_curves must be a mapping of length → weeks")

    curves: dict[int, tuple[WeekSettings, ...]] = {}
    for length in _CURVE_LENGTHS:
        entries = raw.get(length, raw.get(str(length), DEFAULT_WEEK_CURVES[length]))
        if not isinstance(entries, list) or len(entries) != length:
            raise ValueError(f"week_curves[{length}] must list exactly {length} weeks")
        curves[length] = tuple(_week_settings_from_dict(e) for e in entries)
    return curves


def slot_from_dict(d: Any) -> SlotTemplate:
    """
    Convert a raw slot dict (from YAML) to a SlotTemplate.

    Raises:
        ValueError: On a missing id/kind, an unknown kind, unit, scheme,
            level or max key, or a slot with nothing to prescribe
    """
    if not isinstance(d, dict):
        raise ValueError(f"slot must be a mapping, got {d!r}")
    if "id" not in d or "kind" not in d:
        raise ValueError(f"slot missing id or kind: {d!r}")

    slot_id = str(d["id"])
    kind = str(d["kind"])
    if kind not in _SLOT_KINDS:
        raise ValueError(f"slot '{slot_id}': unknown kind '{kind}'")

    unit = str(d.get("unit", "reps"))
    if unit not in _UNITS:
        raise ValueError(f"slot '{slot_id}': unknown unit '{unit}'")

    scheme = d.get("scheme")
    if scheme is not None and scheme not in _SCHEMES:
        raise ValueError(f"slot '{slot_id}': unknown scheme '{scheme}'")

    levels = tuple(str(lv) for lv in d.get("levels", LEVELS))
    for lv in levels:
        if lv not in LEVELS:
            raise ValueError(f"slot '{slot_id}': unknown level '{lv}'")

    for key_field in ("base", "requires"):
        key = d.get(key_field)
        if key is not None and key not in REQUIRED_EXERCISES:
            raise ValueError(f"slot '{slot_id}': unknown max key '{key}' in {key_field}")

    duration = d.get("duration") or {}
    if not isinstance(duration, dict):
        raise ValueError(f"slot '{slot_id}': duration must map level → amount")

    slot = SlotTemplate(
        id=slot_id,
        kind=kind,
        exercise=d.get("exercise"),
        choices=tuple(str(c) for c in d.get("choices", [])),
        base=d.get("base"),
        scheme=scheme,
        sets=int(d["sets"]) if d.get("sets") is not None else None,
        fraction=float(d.get("fraction", 1.0)),
        unit=unit,
        duration={str(k): int(v) for k, v in duration.items()},
        emom=bool(d.get("emom", False)),
        cardio=bool(d.get("cardio", False)),
        rest=str(d.get("rest", "intensity")),
        levels=levels,
        requires=d.get("requires"),
        text=str(d.get("text", "")),
    )

    if slot.is_text_block:
        if not slot.text:
            raise ValueError(f"slot '{slot_id}': {kind} needs text")
        return slot
    if slot.exercise is not None and slot.exercise not in EXERCISE_REGISTRY:
        raise ValueError(f"slot '{slot_id}': unknown exercise '{slot.exercise}'")
    if slot.exercise is None and not slot.choices:
        raise ValueError(f"slot '{slot_id}': needs exercise or choices")
    if slot.fraction <= 0:
        raise ValueError(f"slot '{slot_id}': fraction must be positive")
    timed = slot.unit != "reps" or slot.emom
    if timed and any(lv not in slot.duration for lv in slot.levels):
        raise ValueError(f"slot '{slot_id}': duration needed for every level")
    if slot.exercise is None and slot.unit == "reps" and slot.base is None:
        raise ValueError(f"slot '{slot_id}': rep-based choice slot needs base")
    if slot.scheme is None and slot.sets is None and not slot.emom:
        raise ValueError(f"slot '{slot_id}': needs scheme or sets")
    return slot


def _parse_days(raw: Any) -> tuple[DayTemplate, ...]:
    if not isinstance(raw, dict):
        raise ValueError("days must be a mapping of focus → template")

    days: list[DayTemplate] = []
    for focus in DAY_FOCUS_ORDER:
        entry = raw.get(focus)
        if not isinstance(entry, dict) or not isinstance(entry.get("slots"), list):
            raise ValueError(f"days.{focus} must define a slots list")
        slots = tuple(slot_from_dict(s) for s in entry["slots"])
        ids = [s.id for s in slots]
        if len(ids) != len(set(ids)):
            raise ValueError(f"days.{focus}: duplicate slot ids")
        days.append(
            DayTemplate(
                focus=focus,
                title=str(entry.get("title", DAY_TITLES[focus])),
                slots=slots,
            )
        )
    return tuple(days)


def build_program_config(raw: dict[str, Any]) -> ProgramConfig:
    """
    Build a ProgramConfig from a merged program.yaml dict.

    Missing week curves fall back to DEFAULT_WEEK_CURVES; day templates
    have no Python default.

    Raises:
        ValueError: If any section is malformed
    """
    return ProgramConfig(
        week_curves=_parse_curves(raw.get("week_curves")),
        days=_parse_days(raw.get("days")),
    )


def load_program_config() -> ProgramConfig:
    """
    Load the bundled program config merged with user overrides.

    An override that produces an invalid config is reported with a
    warning and ignored.
    """
    raw = load_program_yaml()
    try:
        return build_program_config(raw)
    except ValueError as exc:
        warnings.warn(
            f"bar-program: ignoring ~/.bar-program/program.yaml ({exc})",
            stacklevel=2,
        )
    return build_program_config(load_program_yaml(include_user=False))


PROGRAM_CONFIG: ProgramConfig = load_program_config()

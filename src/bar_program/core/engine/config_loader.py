"""
YAML → merged config dict loader.

Loads program configuration from program.yaml (bundled with the package)
and optionally merges user overrides from ~/.bar-program/program.yaml.

Usage:
    from bar_program.core.engine.config_loader import load_program_yaml
    raw = load_program_yaml()
    curve = raw.get("week_curves", {}).get(4, [])

If a YAML file cannot be read or parsed, a warning is issued and the file
is treated as empty; program_config.py then falls back to the Python
defaults from config.py where it has them.
"""

from __future__ import annotations

import os
import warnings
from pathlib import Path
from typing import Any

import yaml

USER_DIR_NAME = ".bar-program"

# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a single YAML mapping; warn and return {} on read/parse errors."""
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError) as exc:
        warnings.warn(f"bar-program: ignoring {path} ({exc})", stacklevel=2)
        return {}
    if data is None:
        return {}
    if not isinstance(data, dict):
        warnings.warn(f"bar-program: ignoring {path} (top level is not a mapping)", stacklevel=2)
        return {}
    return data


def deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge *override* into *base* (non-destructive to base)."""
    result = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(result.get(k), dict):
            result[k] = deep_merge(result[k], v)
        else:
            result[k] = v
    return result


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def get_package_dir() -> Path:
    """Return the directory holding the bundled YAML data."""
    return Path(__file__).parent.parent.parent


def get_bundled_yaml_path() -> Path | None:
    """Return the path to the bundled program.yaml, or None if not found."""
    candidate = get_package_dir() / "program.yaml"
    return candidate if candidate.is_file() else None


def get_user_dir() -> Path:
    """Return ~/.bar-program (may not exist)."""
    home = Path(os.environ.get("HOME", "~")).expanduser()
    return home / USER_DIR_NAME


def get_user_yaml_path() -> Path | None:
    """Return ~/.bar-program/program.yaml if it exists, else None."""
    p = get_user_dir() / "program.yaml"
    return p if p.is_file() else None


def load_program_yaml(include_user: bool = True) -> dict[str, Any]:
    """
    Load and merge program configuration from YAML sources.

    Load order (later overrides earlier):
    1. Bundled src/bar_program/program.yaml
    2. User override at ~/.bar-program/program.yaml

    Args:
        include_user: Merge the user override file when present

    Returns:
        Merged dict of config sections. Empty dict if no YAML available.
    """
    config: dict[str, Any] = {}

    bundled = get_bundled_yaml_path()
    if bundled is not None:
        config = deep_merge(config, load_yaml_file(bundled))

    user = get_user_yaml_path() if include_user else None
    if user is not None:
        user_cfg = load_yaml_file(user)
        if user_cfg:
            config = deep_merge(config, user_cfg)

    return config

"""
YAML → typed program config loader.

Loads equipment, rest and progression settings from program.yaml (bundled
with the package) and optionally merges user overrides from
~/.iron-five/program.yaml.

Usage:
    from iron_five.core.engine.config_loader import load_equipment
    eq = load_equipment()
    plates = resolve_plates(225, eq.bar_weight, eq.plates)

If a YAML file cannot be read or parsed, a warning is issued and the file is
ignored; every typed accessor falls back to the Python defaults from
config.py for missing or malformed keys.
"""

from __future__ import annotations

import importlib.resources
import os
import warnings
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from ..config import (
    BAR_WEIGHT,
    CYCLE_INCREMENTS,
    DEFAULT_REST_SECONDS,
    PLATE_SIZES,
    ROUNDING_INCREMENT,
)

# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a single YAML file; warn and return {} on any error."""
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError) as exc:
        warnings.warn(f"iron-five: ignoring config file {path} ({exc})", stacklevel=2)
        return {}
    return data if isinstance(data, dict) else {}


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge *override* into *base* (non-destructive to base)."""
    result = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(result.get(k), dict):
            result[k] = _deep_merge(result[k], v)
        else:
            result[k] = v
    return result


def _positive_float(value: Any, default: float) -> float:
    try:
        f = float(value)
    except (TypeError, ValueError):
        return default
    return f if f > 0 else default


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def get_bundled_yaml_path() -> Path | None:
    """Return the path to the bundled program.yaml, or None if not found."""
    ref = importlib.resources.files("iron_five").joinpath("program.yaml")
    if ref.is_file():
        with importlib.resources.as_file(ref) as p:
            return p
    candidate = Path(__file__).parent.parent.parent / "program.yaml"
    return candidate if candidate.exists() else None


def get_user_config_dir() -> Path:
    """Return ~/.iron-five (not created here)."""
    home = Path(os.environ.get("HOME", "~")).expanduser()
    return home / ".iron-five"


def get_user_yaml_path() -> Path | None:
    """Return ~/.iron-five/program.yaml if it exists, else None."""
    p = get_user_config_dir() / "program.yaml"
    return p if p.exists() else None


def load_program_config() -> dict[str, Any]:
    """
    Load and merge program configuration from YAML sources.

    Load order (later overrides earlier):
    1. Bundled src/iron_five/program.yaml
    2. User override at ~/.iron-five/program.yaml

    Returns:
        Merged dict of config sections.  Empty dict if no YAML available.
    """
    config: dict[str, Any] = {}

    bundled = get_bundled_yaml_path()
    if bundled is not None:
        config = _deep_merge(config, _load_yaml_file(bundled))

    user = get_user_yaml_path()
    if user is not None:
        user_cfg = _load_yaml_file(user)
        if user_cfg:
            config = _deep_merge(config, user_cfg)

    return config


@dataclass(frozen=True)
class EquipmentSettings:
    bar_weight: float = BAR_WEIGHT
    plates: tuple[float, ...] = PLATE_SIZES
    rounding_increment: float = ROUNDING_INCREMENT


def load_equipment(config: dict[str, Any] | None = None) -> EquipmentSettings:
    """Typed equipment section; defaults for anything missing or malformed."""
    if config is None:
        config = load_program_config()
    section = config.get("equipment") or {}
    if not isinstance(section, dict):
        return EquipmentSettings()

    plates = PLATE_SIZES
    raw_plates = section.get("plates")
    if isinstance(raw_plates, list) and raw_plates:
        parsed = [_positive_float(p, 0.0) for p in raw_plates]
        if all(p > 0 for p in parsed):
            plates = tuple(sorted(parsed, reverse=True))

    return EquipmentSettings(
        bar_weight=_positive_float(section.get("bar_weight"), BAR_WEIGHT),
        plates=plates,
        rounding_increment=_positive_float(section.get("rounding_increment"), ROUNDING_INCREMENT),
    )


def load_rest_seconds(config: dict[str, Any] | None = None) -> int:
    """Rest countdown length in seconds (90 by default)."""
    if config is None:
        config = load_program_config()
    section = config.get("rest") or {}
    if not isinstance(section, dict):
        return DEFAULT_REST_SECONDS
    return int(_positive_float(section.get("duration_seconds"), DEFAULT_REST_SECONDS))


def load_increments(config: dict[str, Any] | None = None) -> dict[str, float]:
    """Per-lift 1RM increase applied at the end of each cycle."""
    if config is None:
        config = load_program_config()
    section = (config.get("progression") or {})
    raw = section.get("increments") if isinstance(section, dict) else None
    result = dict(CYCLE_INCREMENTS)
    if isinstance(raw, dict):
        for lift, value in raw.items():
            if lift in result:
                try:
                    result[lift] = max(0.0, float(value))
                except (TypeError, ValueError):
                    continue
    return result

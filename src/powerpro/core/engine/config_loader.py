"""
Engine defaults loaded from YAML.

The bundled src/powerpro/model.yaml ships the rounding policy, RPE chart
and taper curve.  A user may drop a partial copy at ~/.power-pro/model.yaml;
its sections are merged over the bundled ones key by key.

    cfg = load_model_config()
    chart_rows = rpe_chart_rows(cfg)

Each accessor falls back to the constants in config.py for any section the
YAML does not provide.  A user file that fails to parse triggers a warning
and is skipped; the bundled file failing to parse does the same.
"""

from __future__ import annotations

import functools
import importlib.resources
import os
import warnings
from pathlib import Path
from typing import Any

import yaml

from ..config import (
    DEFAULT_ROUNDING_DIRECTION,
    DEFAULT_ROUNDING_INCREMENT,
    DEFAULT_RPE_CHART,
    DEFAULT_TAPER_CURVE,
)

CONFIG_FILENAME = "model.yaml"
USER_CONFIG_DIRNAME = ".power-pro"


def _read_mapping(path: Path) -> dict[str, Any]:
    """Parse *path*; anything other than a top-level mapping counts as empty."""
    text = path.read_text(encoding="utf-8")
    parsed = yaml.safe_load(text)
    if not isinstance(parsed, dict):
        return {}
    return parsed


def _deep_merge(base: dict, override: dict) -> dict:
    """Return a new dict with *override* layered over *base*; nested dicts merge."""
    merged = {**base}
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = _deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def get_bundled_yaml_path() -> Path | None:
    """Locate model.yaml inside the installed package."""
    resource = importlib.resources.files("powerpro") / CONFIG_FILENAME
    if not resource.is_file():
        return None
    with importlib.resources.as_file(resource) as path:
        return path


def get_user_yaml_path() -> Path | None:
    """Locate ~/.power-pro/model.yaml; HOME is read from the environment."""
    home = Path(os.environ.get("HOME", "~")).expanduser()
    candidate = home / USER_CONFIG_DIRNAME / CONFIG_FILENAME
    if candidate.exists():
        return candidate
    return None


def _config_sources() -> list[tuple[str, Path]]:
    sources = []
    bundled = get_bundled_yaml_path()
    if bundled is not None:
        sources.append(("bundled", bundled))
    user = get_user_yaml_path()
    if user is not None:
        sources.append(("user", user))
    return sources


def load_model_config() -> dict[str, Any]:
    """
    Merge every available YAML source, bundled first, user override last.

    Returns:
        Merged sections, or {} when neither file is readable
    """
    config: dict[str, Any] = {}
    for origin, path in _config_sources():
        try:
            layer = _read_mapping(path)
        except (OSError, yaml.YAMLError) as exc:
            warnings.warn(f"power-pro: ignoring {origin} config {path}: {exc}", stacklevel=2)
            continue
        config = _deep_merge(config, layer)
    return config


@functools.lru_cache(maxsize=1)
def cached_model_config() -> dict[str, Any]:
    """
    Load the merged config once per process.

    Default charts and curves are read through this so strategy evaluation
    does no file I/O after the first call.  Callers must not mutate the result.
    """
    return load_model_config()


def clear_config_cache() -> None:
    """Forget the cached config, e.g. after HOME or model.yaml changed."""
    cached_model_config.cache_clear()


def rounding_defaults(config: dict[str, Any] | None = None) -> tuple[float, str]:
    """Return (increment, direction) from the ``rounding`` section."""
    cfg = cached_model_config() if config is None else config
    section = cfg.get("rounding") or {}
    increment = float(section.get("increment", DEFAULT_ROUNDING_INCREMENT))
    direction = str(section.get("direction", DEFAULT_ROUNDING_DIRECTION)).upper()
    return increment, direction


def rpe_chart_rows(config: dict[str, Any] | None = None) -> dict[float, tuple[float, ...]]:
    """
    Return the default RPE chart as {rpe: (pct_for_1_rep, ..., pct_for_12_reps)}.

    The ``rpe_chart`` YAML section maps RPE values to lists of percentages.
    Rows missing from YAML fall back to DEFAULT_RPE_CHART.
    """
    cfg = cached_model_config() if config is None else config
    rows = dict(DEFAULT_RPE_CHART)
    section = cfg.get("rpe_chart") or {}
    for rpe, pcts in section.items():
        rows[float(rpe)] = tuple(float(p) for p in pcts)
    return rows


def taper_curve_tiers(config: dict[str, Any] | None = None) -> list[tuple[int, float]]:
    """Return the default taper curve as [(threshold_days, multiplier), ...]."""
    cfg = cached_model_config() if config is None else config
    section = cfg.get("taper_curve")
    if not section:
        return list(DEFAULT_TAPER_CURVE)
    return [(int(t["threshold_days"]), float(t["multiplier"])) for t in section]

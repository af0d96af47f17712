"""YAML configuration helpers for dctkit."""

from __future__ import annotations

import importlib
from pathlib import Path
from typing import Any, Iterable

import yaml

from .config_schema import PlannerConfig, parse_planner_config

try:
    OmegaConf = importlib.import_module("omegaconf").OmegaConf
except ModuleNotFoundError as exc:
    raise RuntimeError(
        "dctkit requires 'omegaconf'. Install it with `pip install omegaconf`."
    ) from exc


def _as_str_key_dict(value: Any, *, context: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise TypeError(f"Expected mapping in {context}, got {type(value)!r}")
    return {str(key): item for key, item in value.items()}


def load_yaml(path: str | Path) -> dict[str, Any]:
    """Load a YAML file into a dictionary with interpolations resolved."""
    loaded = OmegaConf.to_container(OmegaConf.load(Path(path)), resolve=True)
    return _as_str_key_dict(loaded, context=str(path))


def merge_overrides(
    data: dict[str, Any],
    overrides: Iterable[str] | None = None,
) -> dict[str, Any]:
    """Apply dotlist overrides such as ``["planner.dtype=float32"]`` to a mapping.

    The input mapping is left untouched; a new dictionary is returned.
    """
    dotlist = [item for item in (overrides or []) if item]
    if not dotlist:
        return dict(data)
    merged = OmegaConf.merge(OmegaConf.create(data), OmegaConf.from_dotlist(dotlist))
    return _as_str_key_dict(
        OmegaConf.to_container(merged, resolve=True), context="dotlist overrides"
    )


def save_yaml(path: str | Path, data: dict[str, Any]) -> None:
    """Write ``data`` as YAML, creating parent directories as needed."""
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    with out.open("w", encoding="utf-8") as handle:
        yaml.safe_dump(data, handle, sort_keys=False)


def load_planner_config(
    path: str | Path,
    overrides: Iterable[str] | None = None,
) -> PlannerConfig:
    """Load a :class:`PlannerConfig` from YAML.

    The file may hold the fields at top level or under a ``planner`` key.
    ``overrides`` address the file layout, e.g. ``planner.dtype=float32`` for
    a nested file or ``dtype=float32`` for a flat one.
    """
    data = merge_overrides(load_yaml(path), overrides)
    if "planner" in data:
        data = _as_str_key_dict(data["planner"], context=f"{path}:planner")
    return parse_planner_config(data)

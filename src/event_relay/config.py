"""Configuration models for event dispatchers."""
from __future__ import annotations

import os
from typing import Any, Dict, Mapping

from pydantic import BaseModel, Field, ValidationError

from .exceptions import ConfigurationError

_TRUTHY = {"1", "true", "yes", "on"}


class DispatcherSettings(BaseModel):
    """Tunables shared by :class:`EventDispatcher` and :class:`EventManager`."""

    max_depth: int | None = Field(
        default=None,
        ge=1,
        description="Maximum nesting of dispatch calls made from listeners. None leaves recursion unguarded.",
    )
    collect_metrics: bool = Field(
        default=False,
        description="If True a MetricsCollector is created when none is supplied.",
    )


def build_settings_from_dict(raw: Mapping[str, Any]) -> DispatcherSettings:
    """Utility helper to build :class:`DispatcherSettings` from a plain dictionary."""

    try:
        return DispatcherSettings.model_validate(dict(raw))
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid dispatcher settings: {exc}") from exc


def settings_from_env(environ: Mapping[str, str] | None = None) -> DispatcherSettings:
    """Read settings from ``EVENT_RELAY_*`` environment variables."""

    env = os.environ if environ is None else environ
    raw: Dict[str, Any] = {}
    max_depth = env.get("EVENT_RELAY_MAX_DEPTH", "").strip()
    if max_depth:
        raw["max_depth"] = max_depth
    collect = env.get("EVENT_RELAY_COLLECT_METRICS", "").strip().lower()
    if collect:
        raw["collect_metrics"] = collect in _TRUTHY
    return build_settings_from_dict(raw)


__all__ = [
    "DispatcherSettings",
    "build_settings_from_dict",
    "settings_from_env",
]

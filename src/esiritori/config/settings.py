"""Engine configuration loaded from JSON and environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import orjson

from ..core.scoring import DEFAULT_CORRECT_ANSWER_POINTS, DEFAULT_DRAWER_PENALTY_POINTS, ScoringPolicy

DEFAULT_CONFIG_PATH = Path("config/esiritori.json")
ENV_PREFIX = "ESIRITORI_"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass(frozen=True)
class EngineConfig:
    """Tunable values for the application layer."""

    correct_answer_points: int = DEFAULT_CORRECT_ANSWER_POINTS
    drawer_penalty_points: int = DEFAULT_DRAWER_PENALTY_POINTS
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.correct_answer_points < 1:
            raise ValueError("correct_answer_points must be at least 1")
        if self.drawer_penalty_points < 1:
            raise ValueError("drawer_penalty_points must be at least 1")
        level = str(self.log_level).upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        object.__setattr__(self, "log_level", level)

    @property
    def scoring(self) -> ScoringPolicy:
        return ScoringPolicy(
            correct_answer_points=self.correct_answer_points,
            drawer_penalty_points=self.drawer_penalty_points,
        )


def _coerce_int(key: str, value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{key} must be an integer, got {value!r}") from exc


def _overrides(data: Mapping[str, Any]) -> Dict[str, Any]:
    values: Dict[str, Any] = {}
    for key in ("correct_answer_points", "drawer_penalty_points"):
        if data.get(key) is not None:
            values[key] = _coerce_int(key, data[key])
    if data.get("log_level") is not None:
        values["log_level"] = str(data["log_level"])
    return values


def load_engine_config(
    path: Path = DEFAULT_CONFIG_PATH,
    *,
    environ: Optional[Mapping[str, str]] = None,
) -> EngineConfig:
    """Load configuration from ``path`` (if present) then apply ``ESIRITORI_*`` variables."""

    config = EngineConfig()
    if path.exists():
        data = orjson.loads(path.read_bytes())
        if not isinstance(data, dict):
            raise ValueError(f"{path} must contain a JSON object")
        config = replace(config, **_overrides(data))

    env = os.environ if environ is None else environ
    from_env = {
        key[len(ENV_PREFIX):].lower(): value
        for key, value in env.items()
        if key.startswith(ENV_PREFIX)
    }
    return replace(config, **_overrides(from_env))

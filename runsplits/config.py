import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent / "config" / "config.yaml"

DEFAULT_SPLIT_DISTANCE_M = 1000.0
DEFAULT_MAX_WORKERS = 2


def _expand(value):
    """Recursively expand ~ and env vars in string values."""
    if isinstance(value, str):
        return os.path.expandvars(os.path.expanduser(value))
    if isinstance(value, dict):
        return {k: _expand(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_expand(v) for v in value]
    return value


def load_config(path=None):
    """Load YAML config, expanding ~ and $ENV_VARS in all string values."""
    path = Path(path) if path else DEFAULT_CONFIG_PATH
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with open(path) as f:
        raw = yaml.safe_load(f) or {}
    return _expand(raw)


@dataclass(frozen=True)
class AnalysisSettings:
    """Settings handed explicitly to the aggregator and discovery executor."""

    max_heart_rate: Optional[int] = None
    split_distance_m: float = DEFAULT_SPLIT_DISTANCE_M
    max_workers: int = DEFAULT_MAX_WORKERS

    @classmethod
    def from_config(cls, config: dict | None) -> "AnalysisSettings":
        section = (config or {}).get("analysis") or {}

        max_hr = section.get("max_heart_rate")
        if max_hr is not None:
            max_hr = int(max_hr)
            if max_hr <= 0:
                raise ValueError(f"analysis.max_heart_rate must be positive, got {max_hr}")

        split_m = float(section.get("split_distance_m", DEFAULT_SPLIT_DISTANCE_M))
        if split_m <= 0:
            raise ValueError(f"analysis.split_distance_m must be positive, got {split_m}")

        workers = int(section.get("max_workers", DEFAULT_MAX_WORKERS))
        if workers < 1:
            raise ValueError(f"analysis.max_workers must be >= 1, got {workers}")

        return cls(max_heart_rate=max_hr, split_distance_m=split_m, max_workers=workers)

"""
Tool Settings - Defaults for analysis and replacement

Settings come from three places, later ones winning:
1. Built-in defaults
2. A YAML file named by COLOR_REPLACER_CONFIG
3. COLOR_REPLACER_* environment variables

Example YAML:

    default_threshold: 24
    top_n: 10
    log_level: DEBUG
"""

import logging
import math
import numbers
import os
from dataclasses import dataclass, asdict
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml


logger = logging.getLogger(__name__)

CONFIG_ENV = "COLOR_REPLACER_CONFIG"

ENV_OVERRIDES = {
    "COLOR_REPLACER_THRESHOLD": ("default_threshold", float),
    "COLOR_REPLACER_TOP_N": ("top_n", int),
    "COLOR_REPLACER_LOG_LEVEL": ("log_level", str),
}

LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET"}


@dataclass(frozen=True)
class ToolSettings:
    """Defaults shared by the analyzer and the replacer"""

    # Euclidean RGB distance below which a pixel counts as the source color
    default_threshold: float = 30.0

    # Number of dominant colors reported
    top_n: int = 10

    log_level: str = "INFO"

    def __post_init__(self):
        threshold = self.default_threshold
        if isinstance(threshold, bool) or not isinstance(threshold, numbers.Real):
            raise ValueError(f"default_threshold must be a number, got {threshold!r}")
        threshold = float(threshold)
        if math.isnan(threshold) or threshold < 0:
            raise ValueError(f"default_threshold must be >= 0, got {self.default_threshold!r}")
        object.__setattr__(self, 'default_threshold', threshold)

        if isinstance(self.top_n, bool) or not isinstance(self.top_n, int) or self.top_n < 0:
            raise ValueError(f"top_n must be a non-negative integer, got {self.top_n!r}")

        level = str(self.log_level).upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log_level '{self.log_level}'. Available: {sorted(LOG_LEVELS)}")
        object.__setattr__(self, 'log_level', level)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for YAML serialization"""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ToolSettings':
        """Create from dictionary, ignoring unknown keys"""
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in data.items() if k in valid_fields}

        ignored = set(data) - valid_fields
        if ignored:
            logger.warning("Ignoring unknown settings: %s", ", ".join(sorted(ignored)))

        return cls(**filtered)


def load_settings(path: Optional[Union[str, Path]] = None) -> ToolSettings:
    """
    Load settings from a YAML file.

    Args:
        path: YAML file; a missing path or file gives the defaults

    Returns:
        ToolSettings instance
    """
    if path is None:
        return ToolSettings()

    path = Path(path)
    if not path.exists():
        logger.debug("Settings file %s not found, using defaults", path)
        return ToolSettings()

    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Settings file {path} must contain a mapping")

    return ToolSettings.from_dict(data)


def _apply_env(settings: ToolSettings) -> ToolSettings:
    data = settings.to_dict()
    for env_name, (field_name, cast) in ENV_OVERRIDES.items():
        raw = os.getenv(env_name)
        if raw is None or raw.strip() == "":
            continue
        try:
            data[field_name] = cast(raw.strip())
        except ValueError:
            raise ValueError(f"{env_name}={raw!r} is not a valid {cast.__name__}") from None
    return ToolSettings.from_dict(data)


@lru_cache
def get_settings() -> ToolSettings:
    """Return cached settings to avoid re-reading configuration"""
    return _apply_env(load_settings(os.getenv(CONFIG_ENV)))

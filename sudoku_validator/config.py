"""Settings for batch validation runs."""

from __future__ import annotations
import json
import logging
import os
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Optional

from .core.errors import ConfigError

logger = logging.getLogger(__name__)


@dataclass
class BatchConfig:
    """Options for `sudoku-validator batch`, loadable from a JSON file."""
    workers: int = 1
    strict: bool = False
    charts: bool = True
    show_progress: bool = True
    output_dir: str = "results"

    def __post_init__(self):
        if not isinstance(self.workers, int) or isinstance(self.workers, bool) or self.workers < 1:
            raise ConfigError(f"workers must be a positive integer, got {self.workers!r}")
        for name in ("strict", "charts", "show_progress"):
            if not isinstance(getattr(self, name), bool):
                raise ConfigError(f"{name} must be true or false, got {getattr(self, name)!r}")
        if not isinstance(self.output_dir, str) or not self.output_dir:
            raise ConfigError("output_dir must be a non-empty string")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> BatchConfig:
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")
        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def override(self, **kwargs) -> BatchConfig:
        """Return a copy with every non-None keyword applied."""
        changes = {k: v for k, v in kwargs.items() if v is not None}
        return replace(self, **changes)


def load_config(path: Optional[str]) -> BatchConfig:
    """
    Load a BatchConfig from a JSON file.

    Args:
        path: Path to the JSON file, or None for the defaults.

    Raises:
        ConfigError: If the file is missing, unreadable or holds bad values.
    """
    if path is None:
        return BatchConfig()
    if not os.path.exists(path):
        raise ConfigError(f"Config file not found: {path}")

    try:
        with open(path, "r") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Could not read config file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must hold a JSON object")

    config = BatchConfig.from_dict(data)
    logger.debug("Loaded batch config from %s: %s", path, config)
    return config

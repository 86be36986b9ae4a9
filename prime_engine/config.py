"""
Engine configuration.

Loaded from YAML (config/default.yaml). Missing keys take defaults.
"""

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .batch_sieve import DEFAULT_BATCH_SIZE
from .errors import ConfigError

LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


@dataclass(frozen=True)
class EngineConfig:
    """
    Parameters
    ----------
    max_batch_size : int
        Odd slots per sieve batch; bounds the memory of one batch.
    log_level : str
        Level name used by the command-line front end.
    """
    max_batch_size: int = DEFAULT_BATCH_SIZE
    log_level: str = 'WARNING'

    def __post_init__(self):
        size = self.max_batch_size
        if isinstance(size, bool) or not isinstance(size, int) or size <= 0:
            raise ConfigError(f"max_batch_size must be a positive integer, got {size!r}")
        if str(self.log_level).upper() not in LOG_LEVELS:
            raise ConfigError(f"log_level must be one of {LOG_LEVELS}, got {self.log_level!r}")

    @property
    def log_level_value(self) -> int:
        return getattr(logging, str(self.log_level).upper())

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'EngineConfig':
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigError(f"config must be a mapping, got {type(data).__name__}")
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"unknown config keys: {', '.join(map(str, unknown))}")
        return cls(**data)


def load_config(path: Optional[Union[str, Path]] = None) -> EngineConfig:
    """
    Load an EngineConfig from a YAML file.

    Parameters
    ----------
    path : str or Path, optional
        YAML file. None gives the defaults.

    Returns
    -------
    EngineConfig
    """
    if path is None:
        return EngineConfig()
    with open(path) as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise ConfigError(f"could not parse {path}: {exc}") from exc
    return EngineConfig.from_dict(data)

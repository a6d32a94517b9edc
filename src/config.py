"""Configuration for the payments engine."""

import logging
import os
from dataclasses import dataclass

from exceptions import ConfigurationError

_TRUE_VALUES = {"true", "1", "yes"}
_FALSE_VALUES = {"false", "0", "no"}


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"{name} must be a boolean, got {value!r}")


def _parse_int(name: str, value: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {value!r}") from None


@dataclass
class EngineConfig:
    """Engine configuration."""

    queue_capacity: int = 16
    strict_parsing: bool = True
    precision: int = 4
    log_level: str = "WARNING"

    def validate(self) -> "EngineConfig":
        if self.queue_capacity < 1:
            raise ConfigurationError(f"queue_capacity must be at least 1, got {self.queue_capacity}")
        if self.precision < 0:
            raise ConfigurationError(f"precision must not be negative, got {self.precision}")
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ConfigurationError(f"Unknown log level {self.log_level!r}")
        return self

    @property
    def log_level_value(self) -> int:
        return logging.getLevelName(self.log_level.upper())

    @classmethod
    def from_env(cls) -> "EngineConfig":
        """Create config from PAYMENTS_* environment variables."""
        defaults = cls()
        config = cls(
            queue_capacity=_parse_int(
                "PAYMENTS_QUEUE_CAPACITY",
                os.getenv("PAYMENTS_QUEUE_CAPACITY", str(defaults.queue_capacity)),
            ),
            strict_parsing=_parse_bool(
                "PAYMENTS_STRICT_PARSING",
                os.getenv("PAYMENTS_STRICT_PARSING", str(defaults.strict_parsing)),
            ),
            precision=_parse_int(
                "PAYMENTS_PRECISION",
                os.getenv("PAYMENTS_PRECISION", str(defaults.precision)),
            ),
            log_level=os.getenv("PAYMENTS_LOG_LEVEL", defaults.log_level),
        )
        return config.validate()

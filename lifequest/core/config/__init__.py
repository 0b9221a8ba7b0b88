"""
LifeQuest configuration package.

- `Config`: static settings from environment variables (.env aware)
- `ConfigManager` (in `lifequest.core.config.manager`): YAML-backed game
  configuration with dot-notation reads. Not re-exported here because it
  depends on the logging subsystem, which itself reads `Config`.
"""

from lifequest.core.config.config import Config, ConfigLoadReport, Environment, UnlockScope
from lifequest.core.config.errors import (
    ConfigError,
    ConfigInitializationError,
    ConfigValidationError,
)

__all__ = [
    "Config",
    "ConfigLoadReport",
    "Environment",
    "UnlockScope",
    "ConfigError",
    "ConfigInitializationError",
    "ConfigValidationError",
]

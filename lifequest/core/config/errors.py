"""
Errors raised while loading YAML configuration.

ConfigError
├── ConfigInitializationError   a path is missing or a file does not parse
└── ConfigValidationError       a document parsed but has the wrong shape
"""


class ConfigError(Exception):
    """Base for ConfigManager failures."""


class ConfigInitializationError(ConfigError):
    """The catalog could not be read; the engine cannot be seeded."""


class ConfigValidationError(ConfigError):
    """A YAML root (or section) is not the mapping the loader expects."""


__all__ = [
    "ConfigError",
    "ConfigInitializationError",
    "ConfigValidationError",
]

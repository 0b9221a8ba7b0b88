"""
Static settings for LifeQuest.

Purpose
-------
Read the handful of process-level settings (environment, logging, catalog
location, achievement unlock scope) from environment variables once at
import, with `.env` support. Game data lives in YAML and is served by
`ConfigManager`, not here.

Architecture Notes
------------------
- Class attributes, no instances: `Config.LOG_LEVEL`, `Config.unlock_scope()`
- Every read goes through a `_safe_*` parser. A malformed value never
  raises; it falls back to the default and is recorded in the load report
- `Config.load()` re-reads the environment (tests call it after
  monkeypatching)

Environment Variables
---------------------
=========================  ==============================  =====================
Name                       Meaning                         Default
=========================  ==============================  =====================
ENVIRONMENT                development/testing/production  development
DEBUG                      debug flag                      false
LOG_LEVEL                  root log level                  INFO
LOG_JSON                   JSON console output             on in production
LOG_COLORS                 colored console on a tty        true
LOG_TO_FILE                rotating JSON log file          false
LOGS_DIR                   log directory                   <project>/logs
CATALOG_PATH               YAML seed catalog file or dir   bundled catalog.yaml
ACHIEVEMENT_UNLOCK_SCOPE   shared | player                 shared
=========================  ==============================  =====================
"""

import logging
import os
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from dotenv import load_dotenv

load_dotenv()

_TRUE = frozenset({"1", "true", "yes", "on"})
_FALSE = frozenset({"0", "false", "no", "off"})


class Environment(Enum):
    DEVELOPMENT = "development"
    TESTING = "testing"
    STAGING = "staging"
    PRODUCTION = "production"

    @classmethod
    def parse(cls, value: str) -> "Environment":
        """
        >>> Environment.parse("Production") is Environment.PRODUCTION
        True
        >>> Environment.parse("qa") is Environment.DEVELOPMENT
        True
        """
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.DEVELOPMENT


class UnlockScope(Enum):
    """Who sees an achievement once somebody unlocks it."""

    SHARED = "shared"  # global flag: first player to earn it closes it for everyone
    PLAYER = "player"


@dataclass
class ConfigLoadReport:
    """Where each setting came from on the last `Config.load()`."""

    from_env: List[str] = field(default_factory=list)
    defaulted: List[str] = field(default_factory=list)
    validation_errors: Dict[str, str] = field(default_factory=dict)
    loaded_at: Optional[str] = None

    def note(self, key: str, present: bool) -> None:
        (self.from_env if present else self.defaulted).append(key)

    def reject(self, key: str, raw: str, default: Any) -> None:
        message = f"{key}={raw!r} is invalid, using {default!r}"
        self.validation_errors[key] = message
        # Structured logging reads Config, so it is not available yet
        logging.getLogger(__name__).warning(message)

    def summary(self) -> Dict[str, Any]:
        return {
            "from_env": len(self.from_env),
            "defaulted": list(self.defaulted),
            "validation_errors": dict(self.validation_errors),
            "loaded_at": self.loaded_at,
        }


class Config:
    """
    Process-wide settings.

    Usage
    -----
    >>> Config.unlock_scope()
    <UnlockScope.SHARED: 'shared'>
    >>> Config.is_production()
    False
    """

    _report: ConfigLoadReport = ConfigLoadReport()
    _validated: bool = False

    PACKAGE_ROOT = Path(__file__).resolve().parents[2]
    PROJECT_ROOT = PACKAGE_ROOT.parent

    # Runtime
    ENVIRONMENT: str = Environment.DEVELOPMENT.value
    DEBUG: bool = False

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: Optional[bool] = None
    LOG_COLORS: bool = True
    LOG_TO_FILE: bool = False
    LOGS_DIR: Path = PROJECT_ROOT / "logs"

    # Game
    CATALOG_PATH: Path = PACKAGE_ROOT / "data" / "catalog.yaml"
    ACHIEVEMENT_UNLOCK_SCOPE: str = UnlockScope.SHARED.value

    # =========================================================================
    # Parsers
    # =========================================================================

    @classmethod
    def _safe_str(cls, key: str, default: str) -> str:
        raw = os.environ.get(key)
        cls._report.note(key, raw is not None)
        return default if raw is None else raw.strip()

    @classmethod
    def _safe_bool(cls, key: str, default: Optional[bool]) -> Optional[bool]:
        raw = os.environ.get(key)
        cls._report.note(key, raw is not None)
        if raw is None:
            return default
        flag = raw.strip().lower()
        if flag in _TRUE:
            return True
        if flag in _FALSE:
            return False
        cls._report.reject(key, raw, default)
        return default

    @classmethod
    def _safe_choice(cls, key: str, default: str, choices: Iterable[str]) -> str:
        value = cls._safe_str(key, default).lower()
        if value not in set(choices):
            cls._report.reject(key, value, default)
            return default
        return value

    @classmethod
    def _safe_path(cls, key: str, default: Path) -> Path:
        return Path(cls._safe_str(key, str(default))).expanduser()

    # =========================================================================
    # Loading
    # =========================================================================

    @classmethod
    def load(cls) -> None:
        """(Re)read every setting from the environment."""
        cls._report = ConfigLoadReport()
        cls._validated = False

        cls.ENVIRONMENT = Environment.parse(
            cls._safe_str("ENVIRONMENT", Environment.DEVELOPMENT.value)
        ).value
        cls.DEBUG = bool(cls._safe_bool("DEBUG", False))

        cls.LOG_LEVEL = cls._safe_str("LOG_LEVEL", "INFO").upper()
        cls.LOG_JSON = cls._safe_bool("LOG_JSON", None)
        cls.LOG_COLORS = bool(cls._safe_bool("LOG_COLORS", True))
        cls.LOG_TO_FILE = bool(cls._safe_bool("LOG_TO_FILE", False))
        cls.LOGS_DIR = cls._safe_path("LOGS_DIR", cls.PROJECT_ROOT / "logs")

        cls.CATALOG_PATH = cls._safe_path("CATALOG_PATH", cls.PACKAGE_ROOT / "data" / "catalog.yaml")
        cls.ACHIEVEMENT_UNLOCK_SCOPE = cls._safe_choice(
            "ACHIEVEMENT_UNLOCK_SCOPE",
            UnlockScope.SHARED.value,
            (scope.value for scope in UnlockScope),
        )

        cls._report.loaded_at = datetime.now(timezone.utc).isoformat()

    @classmethod
    def validate(cls) -> None:
        """
        Check the settings the engine cannot start without.

        A missing catalog is fatal in production and a warning elsewhere.

        Raises
        ------
        ValueError
            If `CATALOG_PATH` does not exist in production.
        """
        if cls._validated:
            return

        logger = logging.getLogger(__name__)
        if not cls.CATALOG_PATH.exists():
            message = f"Seed catalog not found: {cls.CATALOG_PATH}"
            if cls.is_production():
                raise ValueError(message)
            logger.warning(message)
        if cls.is_production() and cls.DEBUG:
            logger.warning("DEBUG is enabled in production")

        cls._validated = True

    # =========================================================================
    # Accessors
    # =========================================================================

    @classmethod
    def environment(cls) -> Environment:
        return Environment(cls.ENVIRONMENT)

    @classmethod
    def is_production(cls) -> bool:
        return cls.environment() is Environment.PRODUCTION

    @classmethod
    def is_testing(cls) -> bool:
        return cls.environment() is Environment.TESTING

    @classmethod
    def unlock_scope(cls) -> UnlockScope:
        return UnlockScope(cls.ACHIEVEMENT_UNLOCK_SCOPE)

    @classmethod
    def get_metrics(cls) -> ConfigLoadReport:
        return cls._report

    @classmethod
    def get_config_summary(cls) -> Dict[str, Any]:
        return {
            "environment": cls.ENVIRONMENT,
            "debug": cls.DEBUG,
            "log_level": cls.LOG_LEVEL,
            "catalog_path": str(cls.CATALOG_PATH),
            "achievement_unlock_scope": cls.ACHIEVEMENT_UNLOCK_SCOPE,
            **cls._report.summary(),
        }


Config.load()

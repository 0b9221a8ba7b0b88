"""
ConfigManager: YAML-backed game configuration access for LifeQuest.

Purpose
-------
- Provide hierarchical, dot-notation access to game configuration values.
- Back configuration with YAML documents (the seed catalog and any overrides).
- Keep the merged result in memory for cheap reads.

Responsibilities
----------------
- Load and deep-merge every YAML document under the configured path.
- Serve configuration reads by dot key with default fallback.
- Track read metrics (hits, misses) for health snapshots.

Key Design Decisions
--------------------
- A path may be a single YAML file or a directory; directories are scanned
  recursively and files merged in sorted order so later files override
  earlier ones.
- Instance-based so tests and hosts can build isolated managers.

Dependencies
------------
- PyYAML (`yaml.safe_load`)
- `lifequest.core.logging.logger.get_logger`
"""

from __future__ import annotations

import threading
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, List, MutableMapping, Optional, Sequence, Union

import yaml

from lifequest.core.config.errors import (
    ConfigInitializationError,
    ConfigValidationError,
)
from lifequest.core.logging.logger import get_logger

logger = get_logger(__name__)

PathLike = Union[str, Path]


@dataclass(slots=True)
class ConfigMetrics:
    gets: int = 0
    cache_hits: int = 0
    cache_misses: int = 0
    files_loaded: int = 0


class ConfigManager:
    """
    Game configuration loaded from YAML with dot-notation reads.

    Examples
    --------
    >>> manager = ConfigManager(Config.CATALOG_PATH)
    >>> manager.initialize()
    >>> manager.get("quests.daily_water.xp_reward")
    10
    """

    def __init__(self, *paths: PathLike) -> None:
        self._paths: List[Path] = [Path(p) for p in paths]
        self._cache: Dict[str, Any] = {}
        self._initialized = False
        self._lock = threading.Lock()
        self._metrics = ConfigMetrics()

    # =========================================================================
    # YAML LOADING
    # =========================================================================

    @staticmethod
    def _deep_merge_dict(
        target: MutableMapping[str, Any],
        source: MutableMapping[str, Any],
    ) -> None:
        """Recursively merge `source` into `target` (in-place)."""
        for key, value in source.items():
            if isinstance(value, dict) and isinstance(target.get(key), dict):
                ConfigManager._deep_merge_dict(target[key], value)
            else:
                target[key] = value

    @staticmethod
    def _discover(path: Path) -> Sequence[Path]:
        if path.is_dir():
            return sorted(list(path.rglob("*.yaml")) + list(path.rglob("*.yml")))
        if path.is_file():
            return [path]
        raise ConfigInitializationError(f"Config path not found: {path}")

    def _load_file(self, yaml_file: Path) -> None:
        try:
            with yaml_file.open("r", encoding="utf-8") as handle:
                data = yaml.safe_load(handle)
        except (OSError, yaml.YAMLError) as exc:
            logger.error(
                "Failed to load YAML config",
                extra={
                    "file": str(yaml_file),
                    "error": str(exc),
                    "error_type": type(exc).__name__,
                },
            )
            raise ConfigInitializationError(
                f"Cannot load YAML config {yaml_file}: {exc}"
            ) from exc

        if data is None:
            return
        if not isinstance(data, dict):
            raise ConfigValidationError(
                f"YAML root of {yaml_file} must be a mapping, got {type(data).__name__}"
            )

        self._deep_merge_dict(self._cache, data)
        self._metrics.files_loaded += 1
        logger.debug("Loaded YAML config", extra={"file": str(yaml_file)})

    def initialize(self) -> None:
        """
        Load every configured YAML document.

        Raises
        ------
        ConfigInitializationError
            If a path does not exist or a file cannot be parsed.
        ConfigValidationError
            If a document's root is not a mapping.
        """
        with self._lock:
            if self._initialized:
                return

            for path in self._paths:
                for yaml_file in self._discover(path):
                    self._load_file(yaml_file)

            self._initialized = True

        logger.info(
            "YAML configs loaded",
            extra={
                "yaml_file_count": self._metrics.files_loaded,
                "total_cache_keys": len(self._cache),
            },
        )

    def load_mapping(self, data: MutableMapping[str, Any]) -> None:
        """Merge an in-memory mapping on top of the loaded configuration."""
        with self._lock:
            self._deep_merge_dict(self._cache, dict(data))
            self._initialized = True

    # =========================================================================
    # READS
    # =========================================================================

    def get(self, key: str, default: Any = None) -> Any:
        """
        Retrieve a configuration value by dot-notation path.

        Examples
        --------
        >>> manager.get("achievements.first_steps.rewards.xp")
        50
        >>> manager.get("missing.key", 0)
        0
        """
        if not self._initialized:
            logger.warning(
                "ConfigManager accessed before initialization; loading now"
            )
            self.initialize()

        self._metrics.gets += 1
        value: Any = self._cache
        for part in key.split("."):
            if not isinstance(value, dict) or part not in value:
                self._metrics.cache_misses += 1
                return default
            value = value[part]

        self._metrics.cache_hits += 1
        return value if value is not None else default

    def get_all_keys(self) -> List[str]:
        """Return all top-level configuration keys."""
        return list(self._cache.keys())

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    def health_snapshot(self) -> Dict[str, Any]:
        return {
            "initialized": self._initialized,
            "paths": [str(p) for p in self._paths],
            "top_level_keys": len(self._cache),
            **asdict(self._metrics),
        }

    def reset(self, paths: Optional[Sequence[PathLike]] = None) -> None:
        """Drop cached values so the next read reloads from disk."""
        with self._lock:
            if paths is not None:
                self._paths = [Path(p) for p in paths]
            self._cache = {}
            self._initialized = False
            self._metrics = ConfigMetrics()


__all__ = ["ConfigManager", "ConfigMetrics"]

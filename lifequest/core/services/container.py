"""
Service Container
=================

Purpose
-------
Own the application's ProgressionStore and its configuration, and tie
their lifecycle to host start-up and shutdown.

Responsibilities
----------------
- Load the YAML seed catalog through ConfigManager
- Build the store with the unlock policy chosen by `Config`
- Provide access to the store once initialized
- Report a small health snapshot

Non-Responsibilities
--------------------
- Game rules (delegated to ProgressionStore)
- Logging setup (done on import of `lifequest.core.logging`)
"""

from __future__ import annotations

import time
from typing import Any, Dict, Optional

from lifequest.core.config import Config
from lifequest.core.config.manager import ConfigManager
from lifequest.core.logging.logger import get_logger
from lifequest.modules.progression.catalog import load_achievements, load_quests
from lifequest.modules.progression.store import ProgressionStore
from lifequest.modules.progression.unlock_policy import UnlockPolicy, policy_for_scope

logger = get_logger(__name__)


class ServiceContainer:
    """
    Dependency container for the progression engine.

    Usage:
        container = ServiceContainer()
        container.initialize()

        store = container.store
        player = store.create_player("Ada", "🧙", "scholar")

        container.shutdown()
    """

    def __init__(
        self,
        config_manager: Optional[ConfigManager] = None,
        unlock_policy: Optional[UnlockPolicy] = None,
    ) -> None:
        """
        Args:
            config_manager: Catalog source; defaults to `Config.CATALOG_PATH`
            unlock_policy: Overrides the policy picked from configuration
        """
        self._config_manager = config_manager or ConfigManager(Config.CATALOG_PATH)
        self._unlock_policy_override = unlock_policy
        self._store: Optional[ProgressionStore] = None
        self._initialized = False

        self._init_start: Optional[float] = None
        self._init_end: Optional[float] = None

    # ========================================================================
    # Lifecycle
    # ========================================================================

    def initialize(self) -> None:
        """Load the catalog and build the store. Idempotent."""
        if self._initialized:
            logger.warning("ServiceContainer already initialized")
            return

        self._init_start = time.perf_counter()
        logger.info("Service container initialization starting...")

        try:
            Config.validate()
            self._config_manager.initialize()
            quests = load_quests(self._config_manager)
            achievements = load_achievements(self._config_manager)
            policy = self._unlock_policy_override or policy_for_scope(Config.unlock_scope())

            self._store = ProgressionStore(
                quests=quests,
                achievements=achievements,
                unlock_policy=policy,
            )
        except Exception as e:
            logger.critical(
                "Service container initialization failed",
                exc_info=True,
                extra={"error": str(e)},
            )
            raise

        self._init_end = time.perf_counter()
        self._initialized = True
        logger.info(
            "Service container initialized successfully",
            extra={
                "total_time_seconds": round(self._init_end - self._init_start, 3),
                "quest_count": len(quests),
                "achievement_count": len(achievements),
                "unlock_scope": policy.scope.value,
            },
        )

    def shutdown(self) -> None:
        """Drop the store. Safe to call when not initialized."""
        if not self._initialized:
            return

        logger.info("Shutting down service container...")
        self._store = None
        self._initialized = False
        logger.info("Service container shut down")

    def health_check(self) -> Dict[str, Any]:
        snapshot: Dict[str, Any] = {
            "initialized": self._initialized,
            "total_init_time_seconds": (
                round(self._init_end - self._init_start, 3)
                if self._init_start is not None and self._init_end is not None
                else None
            ),
            "config": self._config_manager.health_snapshot(),
        }
        if self._store is not None:
            snapshot["store"] = self._store.health_snapshot()
        return snapshot

    # ========================================================================
    # Services
    # ========================================================================

    @property
    def store(self) -> ProgressionStore:
        if not self._initialized or self._store is None:
            raise RuntimeError("ServiceContainer not initialized. Call initialize() first.")
        return self._store

    @property
    def config_manager(self) -> ConfigManager:
        return self._config_manager

    @property
    def is_initialized(self) -> bool:
        """Check if container is initialized."""
        return self._initialized

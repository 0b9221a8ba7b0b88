"""
Unit tests for the ServiceContainer lifecycle.
"""

import pytest

from lifequest.core.config import ConfigInitializationError
from lifequest.core.config.manager import ConfigManager
from lifequest.core.services import ServiceContainer
from lifequest.modules.progression import PerPlayerUnlockPolicy, ProgressionStore


@pytest.fixture
def container(catalog_manager):
    container = ServiceContainer(config_manager=catalog_manager)
    yield container
    container.shutdown()


@pytest.mark.unit
class TestServiceContainer:
    def test_store_requires_initialize(self, container):
        with pytest.raises(RuntimeError):
            _ = container.store

    def test_initialize_builds_seeded_store(self, container):
        # Act
        container.initialize()

        # Assert
        assert container.is_initialized is True
        assert isinstance(container.store, ProgressionStore)
        assert {quest.id for quest in container.store.list_quests()} == {
            "daily_water",
            "daily_reading",
            "weekly_exercise",
        }
        assert container.store.unlock_policy.scope.value == "shared"

    def test_default_manager_reads_bundled_catalog(self):
        container = ServiceContainer()

        container.initialize()

        assert container.store.get_achievement("first_steps") is not None
        container.shutdown()

    def test_initialize_is_idempotent(self, container, mocker):
        # Arrange
        spy = mocker.spy(container.config_manager, "initialize")
        container.initialize()
        store = container.store

        # Act
        container.initialize()

        # Assert
        assert container.store is store
        assert spy.call_count == 1

    def test_unlock_policy_override(self, catalog_manager):
        container = ServiceContainer(
            config_manager=catalog_manager, unlock_policy=PerPlayerUnlockPolicy()
        )

        container.initialize()

        assert isinstance(container.store.unlock_policy, PerPlayerUnlockPolicy)

    def test_failed_initialize_propagates(self, mocker):
        # Arrange
        manager = mocker.Mock(spec=ConfigManager)
        manager.initialize.side_effect = ConfigInitializationError("catalog missing")
        container = ServiceContainer(config_manager=manager)

        # Act & Assert
        with pytest.raises(ConfigInitializationError):
            container.initialize()
        assert container.is_initialized is False

    def test_health_check(self, container):
        # Arrange
        before = container.health_check()

        # Act
        container.initialize()
        after = container.health_check()

        # Assert
        assert before["initialized"] is False
        assert "store" not in before
        assert after["initialized"] is True
        assert after["total_init_time_seconds"] >= 0
        assert after["config"]["initialized"] is True
        assert after["store"]["quests"] == 3

    def test_shutdown_drops_store(self, container):
        container.initialize()

        container.shutdown()

        assert container.is_initialized is False
        with pytest.raises(RuntimeError):
            _ = container.store

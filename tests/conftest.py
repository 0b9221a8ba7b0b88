"""
Pytest Configuration and Fixtures for LifeQuest Tests
=====================================================

Purpose
-------
Centralized test fixtures for the LifeQuest test suite: the bundled seed
catalog, progression stores, players and small domain factories.

Architecture Notes
------------------
- Every store fixture is a fresh instance; nothing is shared between tests
- `seeded_store` uses the bundled catalog.yaml verbatim
- `empty_store` has no catalog so tests control every achievement
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Callable, Iterable, Mapping, Optional

import pytest

import lifequest
from lifequest.core.config.manager import ConfigManager
from lifequest.domain.models import (
    Achievement,
    AchievementCategory,
    AchievementReward,
    CharacterClass,
    Player,
    PlayerIdentity,
    PlayerStats,
    Quest,
    QuestCategory,
    QuestDifficulty,
    QuestType,
    requirement_from_dict,
)
from lifequest.modules.progression import ProgressionStore, load_achievements, load_quests

SEED_CATALOG = Path(lifequest.__file__).resolve().parent / "data" / "catalog.yaml"

# ============================================================================
# PYTEST CONFIGURATION
# ============================================================================


def pytest_configure(config):
    """Configure pytest environment."""
    os.environ["ENVIRONMENT"] = "testing"
    os.environ["LOG_LEVEL"] = "DEBUG"
    os.environ.setdefault("LOG_TO_FILE", "false")

    from lifequest.core.config import Config

    Config.load()


# ============================================================================
# CATALOG FIXTURES
# ============================================================================


@pytest.fixture
def catalog_manager() -> ConfigManager:
    """ConfigManager loaded with the bundled seed catalog."""
    manager = ConfigManager(SEED_CATALOG)
    manager.initialize()
    return manager


@pytest.fixture
def seeded_store(catalog_manager) -> ProgressionStore:
    """Store holding the seed quests and achievements."""
    return ProgressionStore(
        quests=load_quests(catalog_manager),
        achievements=load_achievements(catalog_manager),
    )


@pytest.fixture
def empty_store() -> ProgressionStore:
    return ProgressionStore()


# ============================================================================
# PLAYER FIXTURES
# ============================================================================


@pytest.fixture
def scholar(seeded_store) -> Player:
    return seeded_store.create_player("Ada", "🧙", CharacterClass.SCHOLAR)


@pytest.fixture
def athlete(seeded_store) -> Player:
    return seeded_store.create_player("Bo", "🏃", CharacterClass.ATHLETE)


@pytest.fixture
def make_player() -> Callable[..., Player]:
    """Factory for standalone Player aggregates (not registered in a store)."""

    def _make(
        player_id: str = "p1",
        character_class: CharacterClass = CharacterClass.SCHOLAR,
        level: int = 1,
        xp: int = 0,
        stats: Optional[Mapping[str, int]] = None,
        completed_quests: Iterable[str] = (),
    ) -> Player:
        return Player(
            identity=PlayerIdentity(player_id, "Tester", "🙂"),
            character_class=character_class,
            stats=PlayerStats.from_mapping(stats or {}),
            level=level,
            xp=xp,
            completed_quests=list(completed_quests),
        )

    return _make


# ============================================================================
# DOMAIN FACTORIES
# ============================================================================


@pytest.fixture
def make_achievement() -> Callable[..., Achievement]:
    def _make(
        achievement_id: str,
        requirements: Iterable[Mapping[str, object]] = (),
        xp: int = 0,
        stats: Optional[Mapping[str, int]] = None,
    ) -> Achievement:
        return Achievement(
            achievement_id=achievement_id,
            title=achievement_id.replace("_", " ").title(),
            description="",
            icon="🏅",
            category=AchievementCategory.MILESTONE,
            requirements=[requirement_from_dict(raw) for raw in requirements],
            rewards=AchievementReward.build(xp=xp, stats=stats),
        )

    return _make


@pytest.fixture
def make_quest() -> Callable[..., Quest]:
    def _make(
        quest_id: str,
        category: QuestCategory = QuestCategory.PERSONAL,
        xp_reward: int = 20,
        stat_rewards: Optional[Mapping[str, int]] = None,
        prerequisites: Iterable[str] = (),
    ) -> Quest:
        return Quest(
            quest_id=quest_id,
            title=quest_id.replace("_", " ").title(),
            description="",
            category=category,
            difficulty=QuestDifficulty.EASY,
            quest_type=QuestType.SIDE,
            xp_reward=xp_reward,
            stat_rewards=stat_rewards or {},
            time_estimate=10,
            prerequisites=prerequisites,
        )

    return _make

"""
Unit tests for seed catalog loading.
"""

import logging

import pytest

from lifequest.core.config.manager import ConfigManager
from lifequest.core.exceptions import CatalogLoadError, ConfigurationError
from lifequest.domain.models import (
    LevelReachRequirement,
    QuestCategory,
    QuestDifficulty,
    QuestType,
    Rarity,
    Stat,
    UnsupportedRequirement,
)
from lifequest.modules.progression import load_achievements, load_quests


def _manager(data) -> ConfigManager:
    manager = ConfigManager()
    manager.load_mapping(data)
    return manager


def _quest_entry(**overrides):
    entry = {
        "title": "Stretch",
        "description": "Ten minutes of stretching",
        "category": "health",
        "difficulty": "easy",
        "type": "daily",
        "xp_reward": 10,
        "stat_rewards": {"strength": 1},
        "time_estimate": 10,
        "prerequisites": [],
    }
    entry.update(overrides)
    return entry


@pytest.mark.unit
class TestSeedCatalog:
    def test_seed_quests(self, catalog_manager):
        # Act
        quests = {quest.id: quest for quest in load_quests(catalog_manager)}

        # Assert
        assert set(quests) == {"daily_water", "daily_reading", "weekly_exercise"}
        water = quests["daily_water"]
        assert water.title == "Hydration Hero"
        assert water.category is QuestCategory.HEALTH
        assert water.difficulty is QuestDifficulty.EASY
        assert water.quest_type is QuestType.DAILY
        assert water.xp_reward == 10
        assert water.stat_rewards == {Stat.STRENGTH: 1}
        assert water.time_estimate == 5
        assert quests["weekly_exercise"].quest_type is QuestType.WEEKLY
        assert quests["weekly_exercise"].time_estimate == 300
        assert quests["daily_reading"].stat_rewards == {Stat.INTELLIGENCE: 2}
        assert not any(quest.is_completed for quest in quests.values())

    def test_seed_achievements(self, catalog_manager):
        # Act
        achievements = {a.id: a for a in load_achievements(catalog_manager)}

        # Assert
        first_steps = achievements["first_steps"]
        assert first_steps.title == "First Steps"
        assert first_steps.rewards.xp == 50
        assert first_steps.rewards.stats == {Stat.WISDOM: 5}
        assert first_steps.rarity is Rarity.COMMON
        assert first_steps.is_unlocked is False

        level_10 = achievements["level_10"]
        assert level_10.rarity is Rarity.UNCOMMON
        assert level_10.rewards.xp == 200
        assert isinstance(level_10.requirements[0], LevelReachRequirement)
        assert level_10.requirements[0].value == 10


@pytest.mark.unit
class TestCatalogErrors:
    def test_missing_field_names_entry(self):
        # Arrange
        entry = _quest_entry()
        del entry["title"]
        manager = _manager({"quests": {"stretch": entry}})

        # Act
        with pytest.raises(CatalogLoadError) as exc_info:
            load_quests(manager)

        # Assert
        assert exc_info.value.section == "quests"
        assert exc_info.value.entry_id == "stretch"
        assert "title" in str(exc_info.value)
        assert exc_info.value.error_code == "CATALOG_LOAD_ERROR"

    def test_unknown_category_is_rejected(self):
        manager = _manager({"quests": {"stretch": _quest_entry(category="gardening")}})

        with pytest.raises(CatalogLoadError):
            load_quests(manager)

    def test_non_numeric_xp_is_rejected(self):
        manager = _manager({"quests": {"stretch": _quest_entry(xp_reward="lots")}})

        with pytest.raises(CatalogLoadError):
            load_quests(manager)

    def test_achievement_with_unknown_rarity(self):
        manager = _manager(
            {"achievements": {"odd": {"title": "Odd", "category": "rare", "rarity": "mythic"}}}
        )

        with pytest.raises(CatalogLoadError) as exc_info:
            load_achievements(manager)

        assert exc_info.value.section == "achievements"

    def test_section_must_be_mapping(self):
        manager = _manager({"quests": ["daily_water"]})

        with pytest.raises(ConfigurationError) as exc_info:
            load_quests(manager)

        assert exc_info.value.config_key == "quests"

    def test_missing_section_is_empty(self):
        manager = _manager({"quests": {"stretch": _quest_entry()}})

        assert load_achievements(manager) == []
        assert [quest.id for quest in load_quests(manager)] == ["stretch"]

    def test_unsupported_requirement_loads_with_warning(self, caplog):
        # Arrange
        manager = _manager(
            {
                "achievements": {
                    "streaker": {
                        "title": "Streaker",
                        "category": "rare",
                        "requirements": [{"type": "streak_reach", "value": 7}],
                    }
                }
            }
        )

        # Act
        with caplog.at_level(logging.WARNING):
            achievements = load_achievements(manager)

        # Assert
        assert isinstance(achievements[0].requirements[0], UnsupportedRequirement)
        assert "can never be met" in caplog.text

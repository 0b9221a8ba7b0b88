"""Unit tests for the pure progression formulas."""

import pytest

from lifequest.domain.models import CharacterClass, QuestCategory, QuestDifficulty
from lifequest.modules.shared.formulas import (
    calculate_class_multiplier,
    calculate_level_from_xp,
    calculate_level_progress_percent,
    calculate_quest_xp,
    calculate_task_stat,
    calculate_task_stat_amount,
    calculate_xp_for_level,
    calculate_xp_to_next_level,
    estimate_task_minutes,
)


@pytest.mark.unit
class TestXpCurve:
    def test_xp_for_level(self):
        assert calculate_xp_for_level(1) == 100
        assert calculate_xp_for_level(2) == 150
        assert calculate_xp_for_level(3) == 225
        assert calculate_xp_for_level(4) == 337  # floor(337.5)

    @pytest.mark.parametrize(
        "total_xp, expected_level",
        [(0, 1), (99, 1), (100, 2), (249, 2), (250, 3), (474, 3), (475, 4), (812, 5)],
    )
    def test_level_from_xp_boundaries(self, total_xp, expected_level):
        assert calculate_level_from_xp(total_xp) == expected_level

    def test_level_from_negative_xp_is_one(self):
        assert calculate_level_from_xp(-50) == 1

    def test_xp_to_next_level(self):
        assert calculate_xp_to_next_level(1, 60) == 190
        assert calculate_xp_to_next_level(2, 200) == 175  # 225 - (200 - 150)

    def test_xp_to_next_level_never_negative(self):
        assert calculate_xp_to_next_level(1, 10_000) == 0

    def test_xp_to_next_level_clamps_top_of_level_five(self):
        assert calculate_xp_to_next_level(5, 1317) == 0  # raw: 759 - (1317 - 506) = -52
        assert calculate_xp_to_next_level(5, 1265) == 0  # raw: 0
        assert calculate_xp_to_next_level(5, 1264) == 1

    def test_progress_percent_is_clamped(self):
        assert calculate_level_progress_percent(1, 0, 100) == 0.0
        assert calculate_level_progress_percent(1, 10_000, 190) == 100.0

    def test_progress_percent_in_range(self):
        # (190 - (150 - 60)) / 150 * 100
        assert calculate_level_progress_percent(1, 60, 190) == pytest.approx(66.6667, rel=1e-4)


@pytest.mark.unit
class TestQuestRewards:
    @pytest.mark.parametrize(
        "character_class, primary, secondary",
        [
            ("scholar", "learning", "work"),
            ("athlete", "health", "personal"),
            ("creator", "creative", "personal"),
            ("social", "social", "work"),
            ("explorer", "personal", "social"),
        ],
    )
    def test_class_multiplier_table(self, character_class, primary, secondary):
        assert calculate_class_multiplier(character_class, primary) == 1.5
        assert calculate_class_multiplier(character_class, secondary) == 1.2

    def test_class_multiplier_defaults_to_one(self):
        assert calculate_class_multiplier(CharacterClass.SCHOLAR, QuestCategory.HEALTH) == 1.0

    def test_class_multiplier_accepts_enums(self):
        assert calculate_class_multiplier(CharacterClass.ATHLETE, QuestCategory.HEALTH) == 1.5

    def test_quest_xp_floors(self):
        assert calculate_quest_xp(100, 1.5) == 150
        assert calculate_quest_xp(15, 1.5) == 22
        assert calculate_quest_xp(10, 1.2) == 12

    def test_task_stat_mapping(self):
        assert calculate_task_stat(QuestCategory.HEALTH) == "strength"
        assert calculate_task_stat(QuestCategory.LEARNING) == "intelligence"
        assert calculate_task_stat(QuestCategory.CREATIVE) == "creativity"
        assert calculate_task_stat(QuestCategory.SOCIAL) == "social"
        assert calculate_task_stat(QuestCategory.PERSONAL) == "wisdom"
        assert calculate_task_stat(QuestCategory.WORK) == "wisdom"

    def test_task_stat_amount_has_floor_of_one(self):
        assert calculate_task_stat_amount(0) == 1
        assert calculate_task_stat_amount(39) == 1
        assert calculate_task_stat_amount(40) == 2
        assert calculate_task_stat_amount(690) == 34

    def test_time_estimates(self):
        assert estimate_task_minutes(QuestDifficulty.EASY) == 10
        assert estimate_task_minutes(QuestDifficulty.MEDIUM) == 45
        assert estimate_task_minutes(QuestDifficulty.HARD) == 120
        assert estimate_task_minutes(QuestDifficulty.EPIC) == 300
        assert estimate_task_minutes(QuestDifficulty.LEGENDARY) == 45

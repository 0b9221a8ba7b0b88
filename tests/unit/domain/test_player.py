"""
Unit Tests for Player Domain Model
==================================

Purpose
-------
Test the business logic in the Player aggregate without a store.

Test Coverage
-------------
- Player identity validation
- Experience gain and level derivation
- Quest bookkeeping and achievement credit
- Domain event emission

Testing Strategy
----------------
- AAA pattern (Arrange, Act, Assert)
- Test one behavior per test
"""

import pytest

from lifequest.domain.models import (
    CharacterClass,
    Player,
    PlayerIdentity,
    PlayerStats,
    Stat,
)
from lifequest.domain.models.base import DomainValidationError


# ============================================================================
# PLAYER IDENTITY TESTS
# ============================================================================


@pytest.mark.unit
@pytest.mark.domain
class TestPlayerIdentity:
    """Test PlayerIdentity value object."""

    def test_create_valid_identity(self):
        # Arrange & Act
        identity = PlayerIdentity(player_id="abc123", name="Ada", avatar="🧙")

        # Assert
        assert identity.player_id == "abc123"
        assert identity.name == "Ada"
        assert identity.avatar == "🧙"

    def test_identity_requires_non_empty_name(self):
        # Arrange & Act & Assert
        with pytest.raises(DomainValidationError) as exc_info:
            PlayerIdentity(player_id="abc123", name="   ")

        assert "name cannot be empty" in str(exc_info.value)
        assert exc_info.value.field == "name"

    def test_identity_is_immutable(self):
        # Arrange
        identity = PlayerIdentity(player_id="abc123", name="Ada")

        # Act & Assert
        with pytest.raises(Exception):  # FrozenInstanceError
            identity.name = "Bea"  # type: ignore[misc]


# ============================================================================
# PLAYER AGGREGATE ROOT TESTS
# ============================================================================


@pytest.mark.unit
@pytest.mark.domain
class TestPlayer:
    """Test Player aggregate root business logic."""

    @pytest.fixture
    def sample_player(self) -> Player:
        return Player(
            identity=PlayerIdentity(player_id="p1", name="Ada", avatar="🧙"),
            character_class=CharacterClass.SCHOLAR,
            stats=PlayerStats(strength=8, intelligence=15, creativity=10, social=8, wisdom=12, luck=7),
        )

    # ========================================================================
    # INITIALIZATION TESTS
    # ========================================================================

    def test_player_initialization(self, sample_player):
        # Assert
        assert sample_player.id == "p1"
        assert sample_player.name == "Ada"
        assert sample_player.level == 1
        assert sample_player.xp == 0
        assert sample_player.character_class is CharacterClass.SCHOLAR
        assert sample_player.achievements == ()
        assert sample_player.current_quests == ()
        assert sample_player.completed_quests == ()

    def test_player_rejects_negative_xp(self):
        with pytest.raises(DomainValidationError):
            Player(
                identity=PlayerIdentity("p1", "Ada"),
                character_class=CharacterClass.SCHOLAR,
                stats=PlayerStats(),
                xp=-5,
            )

    def test_duplicate_ids_are_collapsed_on_load(self):
        # Arrange & Act
        player = Player(
            identity=PlayerIdentity("p1", "Ada"),
            character_class="athlete",
            stats=PlayerStats(),
            achievements=["first_steps", "first_steps"],
            completed_quests=["daily_water", "daily_water", "daily_reading"],
        )

        # Assert
        assert player.achievements == ("first_steps",)
        assert player.completed_quests == ("daily_water", "daily_reading")
        assert player.character_class is CharacterClass.ATHLETE

    # ========================================================================
    # EXPERIENCE & LEVEL TESTS
    # ========================================================================

    def test_gain_experience_no_level_up(self, sample_player):
        # Act
        change = sample_player.gain_experience(50)

        # Assert
        assert change.leveled_up is False
        assert sample_player.xp == 50
        assert sample_player.level == 1
        events = sample_player.get_pending_events()
        assert [e.event_name for e in events] == ["player.experience_gained"]

    def test_gain_experience_with_level_up(self, sample_player):
        # Act
        change = sample_player.gain_experience(100)

        # Assert
        assert change.leveled_up is True
        assert change.old_level == 1
        assert change.new_level == 2
        assert sample_player.xp == 100  # XP is cumulative, never reset
        events = sample_player.get_pending_events()
        assert any(e.event_name == "player.leveled_up" for e in events)

    def test_gain_experience_crosses_several_levels(self, sample_player):
        # Act
        change = sample_player.gain_experience(812)

        # Assert
        assert change.new_level == 5
        assert sample_player.level == 5
        leveled = [e for e in sample_player.get_pending_events() if e.event_name == "player.leveled_up"]
        assert len(leveled) == 1
        assert leveled[0].payload == {"player_id": "p1", "old_level": 1, "new_level": 5}

    def test_level_never_decreases(self):
        # Arrange
        player = Player(
            identity=PlayerIdentity("p1", "Ada"),
            character_class=CharacterClass.SCHOLAR,
            stats=PlayerStats(),
            level=3,
            xp=300,
        )

        # Act
        change = player.gain_experience(-100)

        # Assert
        assert player.xp == 200
        assert player.level == 3
        assert change.leveled_up is False

    def test_refresh_xp_to_next_level(self, sample_player):
        # Arrange
        sample_player.gain_experience(60)

        # Act
        remaining = sample_player.refresh_xp_to_next_level()

        # Assert
        assert remaining == 190  # 150 - (60 - 100)
        assert sample_player.xp_to_next_level == 190

    def test_refresh_xp_to_next_level_for_given_level(self, sample_player):
        # Arrange
        sample_player.gain_experience(200)

        # Act
        remaining = sample_player.refresh_xp_to_next_level(1)

        # Assert
        assert sample_player.level == 2
        assert remaining == 50  # 150 - (200 - 100)
        assert sample_player.xp_to_next_level == 50

    def test_level_up_bonus_adds_one_to_every_stat(self, sample_player):
        # Arrange
        before = sample_player.stats.as_dict()

        # Act
        sample_player.apply_level_up_bonus()

        # Assert
        after = sample_player.stats.as_dict()
        assert all(after[name] == before[name] + 1 for name in before)

    def test_award_stats_ignores_unknown_names(self, sample_player):
        # Act
        applied = sample_player.award_stats({"wisdom": 5, "charisma": 3})

        # Assert
        assert applied == {Stat.WISDOM: 5}
        assert sample_player.stats.wisdom == 17

    # ========================================================================
    # QUEST TESTS
    # ========================================================================

    def test_assign_quest_is_idempotent(self, sample_player):
        # Act
        sample_player.assign_quest("daily_water")
        sample_player.assign_quest("daily_water")

        # Assert
        assert sample_player.current_quests == ("daily_water",)

    def test_record_quest_completion_moves_quest(self, sample_player):
        # Arrange
        sample_player.assign_quest("daily_water")

        # Act
        sample_player.record_quest_completion("daily_water", xp_awarded=10)

        # Assert
        assert sample_player.completed_quests == ("daily_water",)
        assert sample_player.current_quests == ()
        assert sample_player.has_completed("daily_water")

    def test_record_quest_completion_without_assignment(self, sample_player):
        # Act
        sample_player.record_quest_completion("weekly_exercise", xp_awarded=100)

        # Assert
        assert sample_player.completed_quests == ("weekly_exercise",)

    def test_record_quest_completion_twice_raises(self, sample_player):
        # Arrange
        sample_player.record_quest_completion("daily_water", xp_awarded=10)

        # Act & Assert
        with pytest.raises(DomainValidationError):
            sample_player.record_quest_completion("daily_water", xp_awarded=10)
        assert sample_player.completed_quests == ("daily_water",)

    # ========================================================================
    # ACHIEVEMENT TESTS
    # ========================================================================

    def test_credit_achievement_once(self, sample_player):
        # Act
        first = sample_player.credit_achievement("first_steps")
        second = sample_player.credit_achievement("first_steps")

        # Assert
        assert first is True
        assert second is False
        assert sample_player.achievements == ("first_steps",)
        unlocked = [
            e for e in sample_player.get_pending_events()
            if e.event_name == "player.achievement_unlocked"
        ]
        assert len(unlocked) == 1

    # ========================================================================
    # DOMAIN EVENTS TESTS
    # ========================================================================

    def test_clear_domain_events(self, sample_player):
        # Arrange
        sample_player.gain_experience(100)

        # Act
        events = sample_player.clear_domain_events()

        # Assert
        assert len(events) == 2
        assert sample_player.get_pending_events() == []

    def test_to_dict_snapshot(self, sample_player):
        # Act
        snapshot = sample_player.to_dict()

        # Assert
        assert snapshot["character_class"] == "scholar"
        assert snapshot["stats"]["intelligence"] == 15
        assert snapshot["xp_to_next_level"] == sample_player.xp_to_next_level

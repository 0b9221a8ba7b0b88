"""
Progression Store
=================

Purpose
-------
Own the authoritative collections of players, quests and achievements and
expose every mutating and query operation of the progression engine.

Responsibilities
----------------
- Award XP, derive levels and run level-up side effects
- Complete quests with class x category multipliers
- Synthesize quests from custom task data
- Evaluate and unlock achievements (through an `UnlockPolicy`)
- Read-only queries for the presentation layer

Error Policy
------------
- Hard failure (`NotFoundError`): awarding XP to, or creating a task for,
  an unknown player
- Silent tolerance: completing a quest with an unknown player or quest id,
  completing an already completed quest, unlocking an achievement the
  player already holds, awarding an unknown stat

Concurrency
-----------
All operations run under one re-entrant lock. Re-entrant because unlocking
an achievement pays XP, which can level up and unlock further achievements
within the same call.

Usage
-----
    store = ProgressionStore(quests=load_quests(cm), achievements=load_achievements(cm))
    player = store.create_player("Ada", "🧙", CharacterClass.SCHOLAR)
    store.complete_quest(player.id, "daily_reading")
"""

from __future__ import annotations

import threading
import uuid
from typing import Callable, Dict, Iterable, List, Mapping, Optional

from lifequest.core.logging.logger import LogContext, get_logger
from lifequest.domain.models.achievement import Achievement
from lifequest.domain.models.base import DomainEvent
from lifequest.domain.models.enums import CharacterClass, QuestCategory, QuestType
from lifequest.domain.models.player import LevelChange, Player, PlayerIdentity
from lifequest.domain.models.quest import Quest, TaskCreationData
from lifequest.domain.models.stats import PlayerStats, Stat, StatKey
from lifequest.modules.progression.unlock_policy import SharedUnlockPolicy, UnlockPolicy
from lifequest.modules.shared.constants import (
    CLASS_STARTING_STATS,
    LEVEL_MILESTONE_ACHIEVEMENT_PREFIX,
    LEVEL_MILESTONES,
    XP_BASE,
)
from lifequest.modules.shared.exceptions import NotFoundError, ValidationError
from lifequest.modules.shared.formulas import (
    calculate_class_multiplier,
    calculate_quest_xp,
    calculate_task_stat,
    calculate_task_stat_amount,
    estimate_task_minutes,
)

logger = get_logger(__name__)


def _new_id() -> str:
    return uuid.uuid4().hex


class ProgressionStore:
    """
    In-memory progression engine.

    Constructed explicitly and handed to callers; the ServiceContainer owns
    the application instance.
    """

    def __init__(
        self,
        quests: Iterable[Quest] = (),
        achievements: Iterable[Achievement] = (),
        unlock_policy: Optional[UnlockPolicy] = None,
        id_factory: Callable[[], str] = _new_id,
    ) -> None:
        self._players: Dict[str, Player] = {}
        self._quests: Dict[str, Quest] = {}
        self._achievements: Dict[str, Achievement] = {}
        self._unlock_policy = unlock_policy or SharedUnlockPolicy()
        self._new_id = id_factory
        self._lock = threading.RLock()

        for quest in quests:
            self.register_quest(quest)
        for achievement in achievements:
            self.register_achievement(achievement)

    @property
    def unlock_policy(self) -> UnlockPolicy:
        return self._unlock_policy

    # ========================================================================
    # CATALOG REGISTRATION
    # ========================================================================

    def register_quest(self, quest: Quest) -> None:
        with self._lock:
            self._quests[quest.id] = quest

    def register_achievement(self, achievement: Achievement) -> None:
        with self._lock:
            self._achievements[achievement.id] = achievement

    # ========================================================================
    # PLAYERS
    # ========================================================================

    def create_player(
        self,
        name: str,
        avatar: str,
        character_class: CharacterClass | str,
        stats: Optional[Mapping[StatKey, int]] = None,
    ) -> Player:
        """
        Create a level 1 character.

        Stats default to the class starting block.

        Raises
        ------
        ValidationError
            If the name is blank or the class is unknown
        """
        if not name or not name.strip():
            raise ValidationError("name", "Character name cannot be blank")
        try:
            resolved_class = CharacterClass(character_class)
        except ValueError:
            raise ValidationError(
                "character_class", f"Unknown character class: {character_class!r}"
            ) from None

        starting = stats if stats is not None else CLASS_STARTING_STATS[resolved_class.value]

        with self._lock:
            player_id = self._new_id()
            player = Player(
                identity=PlayerIdentity(player_id, name.strip(), avatar),
                character_class=resolved_class,
                stats=PlayerStats.from_mapping(starting),
                xp_to_next_level=XP_BASE,
            )
            self._players[player_id] = player

        with LogContext(player_id=player_id, operation="create_player"):
            logger.info(
                "Player created",
                extra={"character_class": resolved_class.value},
            )
        return player

    def get_player(self, player_id: str) -> Optional[Player]:
        with self._lock:
            return self._players.get(player_id)

    def collect_events(self, player_id: str) -> List[DomainEvent]:
        """Drain the player's pending domain events ([] for unknown ids)."""
        with self._lock:
            player = self._players.get(player_id)
            return player.clear_domain_events() if player else []

    # ========================================================================
    # XP & STATS
    # ========================================================================

    def award_xp(self, player_id: str, amount: int) -> LevelChange:
        """
        Add XP to a player and run level-up side effects.

        Raises
        ------
        NotFoundError
            If the player does not exist
        """
        with self._lock:
            player = self._require_player(player_id)
            return self._award_xp(player, amount)

    def award_stats(self, player_id: str, rewards: Mapping[StatKey, int]) -> Dict[Stat, int]:
        """Add stat rewards; unknown players and stat names are ignored."""
        with self._lock:
            player = self._players.get(player_id)
            if player is None:
                logger.debug("Stat award for unknown player ignored")
                return {}
            return player.award_stats(rewards)

    def _award_xp(self, player: Player, amount: int) -> LevelChange:
        change = player.gain_experience(amount)

        if change.leveled_up:
            with LogContext(player_id=player.id, operation="level_up"):
                logger.info(
                    "Player leveled up",
                    extra={"old_level": change.old_level, "new_level": change.new_level},
                )
                player.apply_level_up_bonus()
                for milestone in LEVEL_MILESTONES:
                    if milestone <= change.new_level:
                        self._unlock(player, f"{LEVEL_MILESTONE_ACHIEVEMENT_PREFIX}{milestone}")

        # Measured from the level this award reached, even if a nested
        # milestone reward has since pushed the player higher
        player.refresh_xp_to_next_level(change.new_level)
        return change

    # ========================================================================
    # QUESTS
    # ========================================================================

    def complete_quest(self, player_id: str, quest_id: str) -> Optional[int]:
        """
        Complete a quest for a player.

        Returns the XP awarded, or None when the call was a tolerated no-op
        (unknown player or quest, or a quest that is already completed).
        The quest does not need to be in the player's current quests.
        """
        with self._lock, LogContext(
            player_id=player_id, quest_id=quest_id, operation="complete_quest"
        ):
            player = self._players.get(player_id)
            quest = self._quests.get(quest_id)
            if player is None or quest is None:
                logger.debug(
                    "Quest completion ignored: unknown id",
                    extra={"player_found": player is not None, "quest_found": quest is not None},
                )
                return None
            if quest.is_completed or player.has_completed(quest_id):
                logger.debug("Quest completion ignored: already completed")
                return None

            multiplier = calculate_class_multiplier(player.character_class, quest.category)
            total_xp = calculate_quest_xp(quest.xp_reward, multiplier)

            self._award_xp(player, total_xp)
            player.award_stats(quest.stat_rewards)
            quest.mark_completed()
            player.record_quest_completion(quest_id, total_xp)

            logger.info(
                "Quest completed",
                extra={
                    "xp_awarded": total_xp,
                    "multiplier": multiplier,
                    "category": quest.category.value,
                },
            )

            self._check_achievements(player)
            return total_xp

    def create_task_from_data(self, player_id: str, data: TaskCreationData) -> Quest:
        """
        Turn a custom task into a daily quest assigned to the player.

        `data.final_xp` is used as the reward as-is.

        Raises
        ------
        NotFoundError
            If the player does not exist
        """
        with self._lock:
            player = self._require_player(player_id)

            quest = Quest(
                quest_id=self._new_id(),
                title=data.title,
                description=data.description,
                category=data.category,
                difficulty=data.difficulty,
                quest_type=QuestType.DAILY,
                xp_reward=data.final_xp,
                stat_rewards={
                    calculate_task_stat(data.category): calculate_task_stat_amount(data.final_xp)
                },
                time_estimate=estimate_task_minutes(data.difficulty),
                prerequisites=(),
                urgency=data.urgency,
                bonuses=data.bonuses,
            )
            self._quests[quest.id] = quest
            player.assign_quest(quest.id)
            player.add_domain_event(
                "player.task_created",
                {"player_id": player.id, "quest_id": quest.id, "xp_reward": quest.xp_reward},
            )

        with LogContext(player_id=player_id, quest_id=quest.id, operation="create_task"):
            logger.info(
                "Custom task created",
                extra={
                    "xp_reward": quest.xp_reward,
                    "category": quest.category.value,
                    "difficulty": quest.difficulty.value,
                },
            )
        return quest

    # ========================================================================
    # ACHIEVEMENTS
    # ========================================================================

    def check_achievements(self, player_id: str) -> List[str]:
        """
        Unlock every open achievement whose requirements the player meets.

        Returns the ids unlocked by this call, including those unlocked by
        level-ups along the way. Unknown players are ignored.
        """
        with self._lock:
            player = self._players.get(player_id)
            if player is None:
                return []
            return self._check_achievements(player)

    def unlock_achievement(self, player_id: str, achievement_id: str) -> bool:
        """Unlock directly, bypassing requirements. False if nothing happened."""
        with self._lock:
            player = self._players.get(player_id)
            if player is None:
                return False
            return self._unlock(player, achievement_id)

    def _check_achievements(self, player: Player) -> List[str]:
        before = set(player.achievements)
        with LogContext(player_id=player.id, operation="check_achievements"):
            for achievement in list(self._achievements.values()):
                if not self._unlock_policy.is_open(achievement, player):
                    continue
                if achievement.requirements_met(player):
                    self._unlock(player, achievement.id)
        return [a for a in player.achievements if a not in before]

    def _unlock(self, player: Player, achievement_id: str) -> bool:
        achievement = self._achievements.get(achievement_id)
        if achievement is None or player.has_achievement(achievement_id):
            return False

        self._unlock_policy.record_unlock(achievement, player)
        logger.info(
            "Achievement unlocked",
            extra={
                "achievement_id": achievement.id,
                "title": achievement.title,
                "reward_xp": achievement.rewards.xp,
            },
        )

        self._award_xp(player, achievement.rewards.xp)
        player.award_stats(achievement.rewards.stats)
        return True

    # ========================================================================
    # QUERIES
    # ========================================================================

    def get_quest(self, quest_id: str) -> Optional[Quest]:
        with self._lock:
            return self._quests.get(quest_id)

    def get_achievement(self, achievement_id: str) -> Optional[Achievement]:
        with self._lock:
            return self._achievements.get(achievement_id)

    def get_available_quests(self, player_id: str) -> List[Quest]:
        """Quests the player can pick up: not completed, not assigned, prerequisites met."""
        with self._lock:
            player = self._players.get(player_id)
            if player is None:
                return []
            completed = set(player.completed_quests)
            return [
                quest
                for quest in self._quests.values()
                if not quest.is_completed
                and quest.id not in completed
                and not player.is_assigned(quest.id)
                and quest.prerequisites_met(completed)
            ]

    def get_quests_by_category(self, category: QuestCategory | str) -> List[Quest]:
        resolved = QuestCategory.parse(category)
        if resolved is None:
            return []
        with self._lock:
            return [quest for quest in self._quests.values() if quest.category is resolved]

    def get_unlocked_achievements(self, player_id: str) -> List[Achievement]:
        """Achievements credited to this player, regardless of the global flag."""
        with self._lock:
            player = self._players.get(player_id)
            if player is None:
                return []
            return [
                achievement
                for achievement in self._achievements.values()
                if player.has_achievement(achievement.id)
            ]

    def list_quests(self) -> List[Quest]:
        with self._lock:
            return list(self._quests.values())

    def list_achievements(self) -> List[Achievement]:
        with self._lock:
            return list(self._achievements.values())

    def health_snapshot(self) -> Dict[str, object]:
        with self._lock:
            return {
                "players": len(self._players),
                "quests": len(self._quests),
                "achievements": len(self._achievements),
                "unlock_scope": self._unlock_policy.scope.value,
            }

    # ========================================================================
    # HELPERS
    # ========================================================================

    def _require_player(self, player_id: str) -> Player:
        player = self._players.get(player_id)
        if player is None:
            raise NotFoundError("Player", player_id)
        return player

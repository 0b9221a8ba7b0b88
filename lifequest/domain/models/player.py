"""
Player Domain Model for LifeQuest.

Purpose
-------
Rich domain model representing a user's character with the business rules
for XP accumulation, level changes, stat growth, quest bookkeeping and
achievement credit.

Responsibilities
----------------
- Accumulate XP as a single monotonic counter and derive the level from it
- Keep `xp_to_next_level` consistent with the XP curve
- Apply stat rewards (unknown stat names are ignored)
- Maintain `current_quests` / `completed_quests` / `achievements`
- Emit domain events for important changes

Non-Responsibilities
--------------------
- Level-up side effects that involve other aggregates (achievement
  unlocks); the ProgressionStore orchestrates those
- Persistence

Usage Example
-------------
>>> player = Player(PlayerIdentity("a1b2", "Ada", "🧙"), CharacterClass.SCHOLAR, stats)
>>> change = player.gain_experience(250)
>>> change.leveled_up, change.new_level
(True, 3)
>>> events = player.clear_domain_events()
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Tuple

from lifequest.domain.models.base import (
    AggregateRoot,
    DomainValidationError,
    utcnow,
    validate_non_negative,
    validate_not_empty,
    validate_positive,
)
from lifequest.domain.models.enums import CharacterClass
from lifequest.domain.models.stats import LEVEL_UP_BONUS, PlayerStats, Stat, StatKey
from lifequest.modules.shared.formulas import (
    calculate_level_from_xp,
    calculate_level_progress_percent,
    calculate_xp_to_next_level,
)


# ============================================================================
# VALUE OBJECTS
# ============================================================================


@dataclass(frozen=True)
class PlayerIdentity:
    """
    Immutable value object representing player identity.

    Attributes
    ----------
    player_id : str
        Unique identifier
    name : str
        Display name
    avatar : str
        Avatar glyph shown next to the name
    """

    player_id: str
    name: str
    avatar: str = ""

    def __post_init__(self) -> None:
        validate_not_empty(self.player_id, "player_id")
        validate_not_empty(self.name, "name")


@dataclass(frozen=True)
class LevelChange:
    """Outcome of an XP award."""

    old_level: int
    new_level: int
    xp_awarded: int
    total_xp: int

    @property
    def leveled_up(self) -> bool:
        return self.new_level > self.old_level


@dataclass
class InventoryItem:
    """Item held by a player. Stored for the UI; the engine never reads it."""

    item_id: str
    name: str
    description: str = ""
    item_type: str = "reward"
    rarity: str = "common"
    quantity: int = 1
    acquired_at: datetime = field(default_factory=utcnow)


# ============================================================================
# PLAYER AGGREGATE ROOT
# ============================================================================


class Player(AggregateRoot):
    """
    Player aggregate root with business logic.

    Business Rules
    --------------
    - XP only accumulates; the level is derived from total XP and never
      decreases
    - `completed_quests` is an append-only log without repeats
    - An achievement is credited to a player at most once

    Domain Events
    -------------
    - player.experience_gained
    - player.leveled_up
    - player.stats_awarded
    - player.quest_assigned
    - player.quest_completed
    - player.achievement_unlocked
    """

    def __init__(
        self,
        identity: PlayerIdentity,
        character_class: CharacterClass,
        stats: PlayerStats,
        level: int = 1,
        xp: int = 0,
        xp_to_next_level: Optional[int] = None,
        inventory: Optional[List[InventoryItem]] = None,
        achievements: Optional[List[str]] = None,
        current_quests: Optional[List[str]] = None,
        completed_quests: Optional[List[str]] = None,
        created_at: Optional[datetime] = None,
        last_active: Optional[datetime] = None,
    ) -> None:
        super().__init__(identity.player_id)
        validate_positive(level, "level")
        validate_non_negative(xp, "xp")

        self._identity = identity
        self._character_class = CharacterClass(character_class)
        self._stats = stats
        self._level = level
        self._xp = xp
        self._xp_to_next_level = (
            xp_to_next_level
            if xp_to_next_level is not None
            else calculate_xp_to_next_level(level, xp)
        )
        self.inventory: List[InventoryItem] = list(inventory or [])
        self._achievements: List[str] = _unique(achievements or [])
        self._current_quests: List[str] = _unique(current_quests or [])
        self._completed_quests: List[str] = _unique(completed_quests or [])
        self._created_at = created_at or utcnow()
        self._last_active = last_active or self._created_at

    # ========================================================================
    # PROPERTIES
    # ========================================================================

    @property
    def identity(self) -> PlayerIdentity:
        return self._identity

    @property
    def name(self) -> str:
        return self._identity.name

    @property
    def avatar(self) -> str:
        return self._identity.avatar

    @property
    def character_class(self) -> CharacterClass:
        return self._character_class

    @property
    def level(self) -> int:
        return self._level

    @property
    def xp(self) -> int:
        return self._xp

    @property
    def xp_to_next_level(self) -> int:
        return self._xp_to_next_level

    @property
    def stats(self) -> PlayerStats:
        return self._stats

    @property
    def achievements(self) -> Tuple[str, ...]:
        return tuple(self._achievements)

    @property
    def current_quests(self) -> Tuple[str, ...]:
        return tuple(self._current_quests)

    @property
    def completed_quests(self) -> Tuple[str, ...]:
        return tuple(self._completed_quests)

    @property
    def level_progress_percent(self) -> float:
        return calculate_level_progress_percent(self._level, self._xp, self._xp_to_next_level)

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def last_active(self) -> datetime:
        return self._last_active

    # ========================================================================
    # BUSINESS LOGIC - EXPERIENCE & PROGRESSION
    # ========================================================================

    def gain_experience(self, amount: int) -> LevelChange:
        """
        Add XP and re-derive the level from the new total.

        The level only moves up; an award that lowers the total (no caller
        does this today) leaves the level where it was. `xp_to_next_level`
        is left for `refresh_xp_to_next_level`, which the store calls once
        level-up side effects have settled.
        """
        old_level = self._level
        self._xp += amount
        recomputed = calculate_level_from_xp(self._xp)

        self.add_domain_event(
            "player.experience_gained",
            {"player_id": self.id, "amount": amount, "new_total": self._xp},
        )

        if recomputed > old_level:
            self._level = recomputed
            self.add_domain_event(
                "player.leveled_up",
                {"player_id": self.id, "old_level": old_level, "new_level": recomputed},
            )

        self.touch()
        return LevelChange(
            old_level=old_level,
            new_level=recomputed,
            xp_awarded=amount,
            total_xp=self._xp,
        )

    def refresh_xp_to_next_level(self, level: Optional[int] = None) -> int:
        """Re-derive `xp_to_next_level` for `level` (the current level by default)."""
        basis = self._level if level is None else level
        self._xp_to_next_level = calculate_xp_to_next_level(basis, self._xp)
        return self._xp_to_next_level

    def award_stats(self, rewards: Mapping[StatKey, int]) -> Dict[Stat, int]:
        applied = self._stats.award(rewards)
        if applied:
            self.add_domain_event(
                "player.stats_awarded",
                {
                    "player_id": self.id,
                    "rewards": {stat.value: amount for stat, amount in applied.items()},
                },
            )
        return applied

    def apply_level_up_bonus(self) -> Dict[Stat, int]:
        return self.award_stats(LEVEL_UP_BONUS)

    # ========================================================================
    # BUSINESS LOGIC - QUESTS
    # ========================================================================

    def assign_quest(self, quest_id: str) -> None:
        if quest_id in self._current_quests:
            return
        self._current_quests.append(quest_id)
        self.add_domain_event(
            "player.quest_assigned", {"player_id": self.id, "quest_id": quest_id}
        )
        self.touch()

    def record_quest_completion(self, quest_id: str, xp_awarded: int) -> None:
        """
        Append to the completion log and drop the quest from current quests.

        The quest does not have to be assigned first.

        Raises
        ------
        DomainValidationError
            If the quest is already in the completion log
        """
        if quest_id in self._completed_quests:
            raise DomainValidationError(
                f"Quest {quest_id} already completed by player {self.id}",
                field="completed_quests",
            )

        self._completed_quests.append(quest_id)
        self._current_quests = [q for q in self._current_quests if q != quest_id]
        self.add_domain_event(
            "player.quest_completed",
            {"player_id": self.id, "quest_id": quest_id, "xp_awarded": xp_awarded},
        )
        self.touch()

    def has_completed(self, quest_id: str) -> bool:
        return quest_id in self._completed_quests

    def is_assigned(self, quest_id: str) -> bool:
        return quest_id in self._current_quests

    # ========================================================================
    # BUSINESS LOGIC - ACHIEVEMENTS
    # ========================================================================

    def has_achievement(self, achievement_id: str) -> bool:
        return achievement_id in self._achievements

    def credit_achievement(self, achievement_id: str) -> bool:
        """Record an unlocked achievement; returns False if already credited."""
        if achievement_id in self._achievements:
            return False
        self._achievements.append(achievement_id)
        self.add_domain_event(
            "player.achievement_unlocked",
            {"player_id": self.id, "achievement_id": achievement_id},
        )
        self.touch()
        return True

    def touch(self) -> None:
        self._last_active = utcnow()

    # ========================================================================
    # SERIALIZATION
    # ========================================================================

    def to_dict(self) -> Dict[str, Any]:
        """Snapshot for the presentation layer."""
        return {
            "id": self.id,
            "name": self.name,
            "avatar": self.avatar,
            "level": self._level,
            "xp": self._xp,
            "xp_to_next_level": self._xp_to_next_level,
            "character_class": self._character_class.value,
            "stats": self._stats.as_dict(),
            "inventory": [item.item_id for item in self.inventory],
            "achievements": list(self._achievements),
            "current_quests": list(self._current_quests),
            "completed_quests": list(self._completed_quests),
            "created_at": self._created_at.isoformat(),
            "last_active": self._last_active.isoformat(),
        }

    def __repr__(self) -> str:
        return (
            f"Player(id={self.id!r}, name={self.name!r}, "
            f"class={self._character_class.value}, level={self._level}, xp={self._xp})"
        )


def _unique(ids: List[str]) -> List[str]:
    seen: Dict[str, None] = {}
    for item in ids:
        seen.setdefault(item, None)
    return list(seen)

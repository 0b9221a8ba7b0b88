"""
Domain Enums
============

Type-safe constants for the categorical fields of players, quests and
achievements. Values match the identifiers used by the UI layer and the
YAML catalog, so `Enum("health")` round-trips with stored data.
"""

from __future__ import annotations

import enum
from typing import Optional, Union


class CharacterClass(str, enum.Enum):
    """Player archetype granting category-specific XP multipliers."""

    SCHOLAR = "scholar"
    ATHLETE = "athlete"
    CREATOR = "creator"
    SOCIAL = "social"
    EXPLORER = "explorer"


class QuestCategory(str, enum.Enum):
    """Life area a quest belongs to."""

    HEALTH = "health"
    LEARNING = "learning"
    SOCIAL = "social"
    WORK = "work"
    CREATIVE = "creative"
    PERSONAL = "personal"

    @classmethod
    def parse(cls, value: Union["QuestCategory", str]) -> Optional["QuestCategory"]:
        """Resolve a category name; unknown names give ``None``."""
        if isinstance(value, QuestCategory):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            return None


class QuestDifficulty(str, enum.Enum):
    """
    Quest difficulty.

    EPIC comes from the task creator; LEGENDARY from the catalog vocabulary.
    """

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    EPIC = "epic"
    LEGENDARY = "legendary"


class QuestType(str, enum.Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MAIN = "main"
    SIDE = "side"


class AchievementCategory(str, enum.Enum):
    MILESTONE = "milestone"
    STREAK = "streak"
    SOCIAL = "social"
    SKILL = "skill"
    HIDDEN = "hidden"
    RARE = "rare"


class Rarity(str, enum.Enum):
    COMMON = "common"
    UNCOMMON = "uncommon"
    RARE = "rare"
    EPIC = "epic"
    LEGENDARY = "legendary"


class TaskImportance(str, enum.Enum):
    LIFE_CHANGING = "life-changing"
    REALLY_SHOULD = "really-should"
    WOULD_BE_NICE = "would-be-nice"
    NOT_NEEDED = "not-needed"


class TaskAvoidance(str, enum.Enum):
    REALLY_AVOID = "really-avoid"
    KINDA_DREADING = "kinda-dreading"
    NEUTRAL = "neutral"
    WANT_TO_DO = "want-to-do"


class TaskUrgency(str, enum.Enum):
    TODAY = "today"
    THIS_WEEK = "this-week"
    THIS_MONTH = "this-month"
    NO_DEADLINE = "no-deadline"

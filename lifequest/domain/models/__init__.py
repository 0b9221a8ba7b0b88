"""
Domain models package for LifeQuest.

Purpose
-------
Rich domain models with business logic. These models encapsulate the
progression rules, validation, and state transitions; the progression
store orchestrates them.

Base Classes
------------
- Entity: Objects with identity
- AggregateRoot: Consistency boundaries
- DomainEvent: State change notifications
"""

from .base import (
    AggregateRoot,
    DomainEvent,
    DomainValidationError,
    Entity,
    validate_non_negative,
    validate_not_empty,
    validate_positive,
)
from .enums import (
    AchievementCategory,
    CharacterClass,
    QuestCategory,
    QuestDifficulty,
    QuestType,
    Rarity,
    TaskAvoidance,
    TaskImportance,
    TaskUrgency,
)
from .stats import LEVEL_UP_BONUS, PlayerStats, Stat
from .requirements import (
    LevelReachRequirement,
    QuestCompleteRequirement,
    Requirement,
    StatReachRequirement,
    UnsupportedRequirement,
    XpEarnRequirement,
    requirement_from_dict,
)
from .quest import Quest, TaskBonus, TaskCreationData
from .achievement import Achievement, AchievementReward
from .player import InventoryItem, LevelChange, Player, PlayerIdentity

__all__ = [
    # Base classes
    "Entity",
    "AggregateRoot",
    "DomainEvent",
    "DomainValidationError",
    # Validators
    "validate_positive",
    "validate_non_negative",
    "validate_not_empty",
    # Enums
    "AchievementCategory",
    "CharacterClass",
    "QuestCategory",
    "QuestDifficulty",
    "QuestType",
    "Rarity",
    "TaskAvoidance",
    "TaskImportance",
    "TaskUrgency",
    # Stats
    "Stat",
    "PlayerStats",
    "LEVEL_UP_BONUS",
    # Requirements
    "Requirement",
    "QuestCompleteRequirement",
    "LevelReachRequirement",
    "StatReachRequirement",
    "XpEarnRequirement",
    "UnsupportedRequirement",
    "requirement_from_dict",
    # Domain models
    "Quest",
    "TaskBonus",
    "TaskCreationData",
    "Achievement",
    "AchievementReward",
    "Player",
    "PlayerIdentity",
    "LevelChange",
    "InventoryItem",
]

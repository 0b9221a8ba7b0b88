"""
LifeQuest Progression Constants

Purpose
-------
Provide the balance numbers and lookup tables of the progression system:
the XP curve, class bonuses, task pricing factors, reward magnitudes and
character starting stats.

IMPORTANT:
This module contains GAMEPLAY constants only. Logging and environment
settings belong in lifequest/core/config.

Design Notes
------------
- Values are annotated with typing.Final to signal immutability
- Tables are keyed by the plain string identifiers used in the catalog,
  so this module stays free of domain imports
- Grouped by game system
"""

from __future__ import annotations

from typing import Dict, Final, Tuple

# ============================================================================
# LEVELING SYSTEM
# ============================================================================

XP_BASE: Final[int] = 100  # XP needed to go from level 1 to 2
XP_GROWTH: Final[float] = 1.5  # Per-level growth factor of the curve
MIN_PLAYER_LEVEL: Final[int] = 1

# Levels that auto-unlock the `level_<n>` achievement
LEVEL_MILESTONES: Final[Tuple[int, ...]] = (5, 10, 25, 50, 100)
LEVEL_MILESTONE_ACHIEVEMENT_PREFIX: Final[str] = "level_"

# ============================================================================
# CHARACTER CLASSES
# ============================================================================

PRIMARY_CATEGORY_MULTIPLIER: Final[float] = 1.5
SECONDARY_CATEGORY_MULTIPLIER: Final[float] = 1.2

# class -> category -> XP multiplier; missing pairs are 1.0
CLASS_CATEGORY_BONUSES: Final[Dict[str, Dict[str, float]]] = {
    "scholar": {"learning": PRIMARY_CATEGORY_MULTIPLIER, "work": SECONDARY_CATEGORY_MULTIPLIER},
    "athlete": {"health": PRIMARY_CATEGORY_MULTIPLIER, "personal": SECONDARY_CATEGORY_MULTIPLIER},
    "creator": {"creative": PRIMARY_CATEGORY_MULTIPLIER, "personal": SECONDARY_CATEGORY_MULTIPLIER},
    "social": {"social": PRIMARY_CATEGORY_MULTIPLIER, "work": SECONDARY_CATEGORY_MULTIPLIER},
    "explorer": {"personal": PRIMARY_CATEGORY_MULTIPLIER, "social": SECONDARY_CATEGORY_MULTIPLIER},
}

CLASS_STARTING_STATS: Final[Dict[str, Dict[str, int]]] = {
    "scholar": {"strength": 8, "intelligence": 15, "creativity": 10, "social": 8, "wisdom": 12, "luck": 7},
    "athlete": {"strength": 15, "intelligence": 8, "creativity": 7, "social": 10, "wisdom": 10, "luck": 10},
    "creator": {"strength": 7, "intelligence": 12, "creativity": 15, "social": 8, "wisdom": 10, "luck": 8},
    "social": {"strength": 8, "intelligence": 10, "creativity": 10, "social": 15, "wisdom": 9, "luck": 8},
    "explorer": {"strength": 12, "intelligence": 9, "creativity": 11, "social": 10, "wisdom": 8, "luck": 10},
}

# ============================================================================
# CUSTOM TASKS
# ============================================================================

# Quest category -> stat rewarded by custom tasks
CATEGORY_STAT: Final[Dict[str, str]] = {
    "health": "strength",
    "learning": "intelligence",
    "creative": "creativity",
    "social": "social",
}
DEFAULT_TASK_STAT: Final[str] = "wisdom"

STAT_REWARD_DIVISOR: Final[int] = 20  # One stat point per 20 XP, minimum 1
MIN_TASK_STAT_REWARD: Final[int] = 1

# Difficulty -> estimated minutes
DIFFICULTY_TIME_ESTIMATES: Final[Dict[str, int]] = {
    "easy": 10,
    "medium": 45,
    "hard": 120,
    "epic": 300,
}
DEFAULT_TIME_ESTIMATE: Final[int] = 45

# Task calculator factors
TASK_BASE_XP: Final[Dict[str, int]] = {
    "easy": 15,
    "medium": 45,
    "hard": 115,
    "epic": 250,
}
DEFAULT_TASK_BASE_XP: Final[int] = 45

IMPORTANCE_MULTIPLIERS: Final[Dict[str, float]] = {
    "life-changing": 1.5,
    "really-should": 1.25,
    "would-be-nice": 1.0,
    "not-needed": 0.75,
}

AVOIDANCE_MULTIPLIERS: Final[Dict[str, float]] = {
    "really-avoid": 2.0,
    "kinda-dreading": 1.5,
    "neutral": 1.0,
    "want-to-do": 1.25,
}

URGENCY_MULTIPLIERS: Final[Dict[str, float]] = {
    "today": 2.0,
    "this-week": 1.5,
    "this-month": 1.2,
    "no-deadline": 1.0,
}

# Rewards above this get the "epic reward" motivation line
EPIC_REWARD_THRESHOLD: Final[int] = 100

# Descriptions recorded on a task's bonus list
IMPORTANCE_DESCRIPTIONS: Final[Dict[str, str]] = {
    "life-changing": "+50% XP",
    "really-should": "+25% XP",
    "would-be-nice": "Base XP",
    "not-needed": "-25% XP",
}

AVOIDANCE_DESCRIPTIONS: Final[Dict[str, str]] = {
    "really-avoid": "+100% XP!",
    "kinda-dreading": "+50% XP",
    "neutral": "Base XP",
    "want-to-do": "+25% XP",
}

URGENCY_DESCRIPTIONS: Final[Dict[str, str]] = {
    "today": "2x XP + Urgent!",
    "this-week": "1.5x XP",
    "this-month": "1.2x XP",
    "no-deadline": "Base XP",
}

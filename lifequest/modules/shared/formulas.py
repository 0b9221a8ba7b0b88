"""
LifeQuest Progression Formulas

Purpose
-------
Pure calculation functions for the progression rules: the XP curve, the
class x category multiplier, custom-task reward magnitudes and the
dashboard progress bar.

Design Notes
------------
All formulas:
- Accept parameters explicitly
- Return calculated values
- Have no side effects and no domain or config imports
- Accept either enum members or their string values for categorical inputs

Usage
-----
    from lifequest.modules.shared.formulas import calculate_level_from_xp

    level = calculate_level_from_xp(250)  # 3
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Union

from lifequest.modules.shared.constants import (
    CATEGORY_STAT,
    CLASS_CATEGORY_BONUSES,
    DEFAULT_TASK_STAT,
    DEFAULT_TIME_ESTIMATE,
    DIFFICULTY_TIME_ESTIMATES,
    MIN_PLAYER_LEVEL,
    MIN_TASK_STAT_REWARD,
    STAT_REWARD_DIVISOR,
    XP_BASE,
    XP_GROWTH,
)

Key = Union[Enum, str]


def _key(value: Key) -> str:
    # str-valued enums hash by member name, so tables are looked up by value
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


# ============================================================================
# XP CURVE
# ============================================================================


def calculate_xp_for_level(level: int) -> int:
    """
    XP needed to go from `level` to `level + 1`.

    XP = floor(100 * 1.5^(level - 1))

    Example:
        >>> calculate_xp_for_level(1)
        100
        >>> calculate_xp_for_level(3)
        225
    """
    return int(math.floor(XP_BASE * XP_GROWTH ** (level - 1)))


def calculate_level_from_xp(xp: int) -> int:
    """
    Calculate the level reached with `xp` total experience.

    Accumulates the per-level requirements while the running total is at
    most `xp`; the level is the count of thresholds crossed. XP is one
    cumulative counter, never reset on level up.

    Example:
        >>> calculate_level_from_xp(99)
        1
        >>> calculate_level_from_xp(100)
        2
        >>> calculate_level_from_xp(250)
        3
    """
    level = 1
    accumulated = 0
    while accumulated <= xp:
        accumulated += calculate_xp_for_level(level)
        level += 1
    return max(MIN_PLAYER_LEVEL, level - 1)


def calculate_xp_to_next_level(level: int, xp: int) -> int:
    """
    XP still needed to reach `level + 1`.

    xp_for_level(level + 1) - (xp - xp_for_level(level)), never negative.
    From level 5 up the raw formula dips below zero near the top of each
    level, and the clamp reports those values as 0 (level 5 at 1317 XP
    gives 0 where the raw value is -52).

    Example:
        >>> calculate_xp_to_next_level(1, 0)
        250
        >>> calculate_xp_to_next_level(2, 100)
        275
    """
    remaining = calculate_xp_for_level(level + 1) - (xp - calculate_xp_for_level(level))
    return max(0, remaining)


def calculate_level_progress_percent(level: int, xp: int, xp_to_next_level: int) -> float:
    """
    Progress-bar fill for the dashboard, clamped to [0, 100].

    Example:
        >>> calculate_level_progress_percent(1, 0, 100)
        0.0
    """
    next_requirement = calculate_xp_for_level(level + 1)
    progress = (xp_to_next_level - (next_requirement - xp)) / next_requirement * 100
    return min(100.0, max(0.0, progress))


# ============================================================================
# QUEST REWARDS
# ============================================================================


def calculate_class_multiplier(character_class: Key, category: Key) -> float:
    """
    XP multiplier for a class completing a quest of a category.

    Example:
        >>> calculate_class_multiplier("athlete", "health")
        1.5
        >>> calculate_class_multiplier("scholar", "health")
        1.0
    """
    return CLASS_CATEGORY_BONUSES.get(_key(character_class), {}).get(_key(category), 1.0)


def calculate_quest_xp(xp_reward: int, multiplier: float) -> int:
    """
    Example:
        >>> calculate_quest_xp(100, 1.5)
        150
    """
    return int(math.floor(xp_reward * multiplier))


def calculate_task_stat(category: Key) -> str:
    """Stat a custom task of `category` rewards."""
    return CATEGORY_STAT.get(_key(category), DEFAULT_TASK_STAT)


def calculate_task_stat_amount(final_xp: int) -> int:
    """
    Example:
        >>> calculate_task_stat_amount(90)
        4
        >>> calculate_task_stat_amount(10)
        1
    """
    return max(MIN_TASK_STAT_REWARD, final_xp // STAT_REWARD_DIVISOR)


def estimate_task_minutes(difficulty: Key) -> int:
    return DIFFICULTY_TIME_ESTIMATES.get(_key(difficulty), DEFAULT_TIME_ESTIMATE)

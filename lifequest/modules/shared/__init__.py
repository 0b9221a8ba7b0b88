"""
LifeQuest Shared Module

Purpose
-------
Provides domain-level foundations for the progression module:
- Domain exceptions and error handling
- Gameplay constants and formulas

Kept free of domain-model imports so the domain layer can use the
formulas without an import cycle.

Usage
-----
    from lifequest.modules.shared import (
        NotFoundError,
        calculate_level_from_xp,
    )
"""

from __future__ import annotations

from .exceptions import (
    ErrorSeverity,
    LifeQuestError,
    LifeQuestDomainException,
    NotFoundError,
    ValidationError,
)
from .formulas import (
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

__all__ = [
    # Exceptions
    "ErrorSeverity",
    "LifeQuestError",
    "LifeQuestDomainException",
    "NotFoundError",
    "ValidationError",
    # Formulas
    "calculate_class_multiplier",
    "calculate_level_from_xp",
    "calculate_level_progress_percent",
    "calculate_quest_xp",
    "calculate_task_stat",
    "calculate_task_stat_amount",
    "calculate_xp_for_level",
    "calculate_xp_to_next_level",
    "estimate_task_minutes",
]

"""
Smart task XP calculator.

Prices a custom task before it reaches the store: a base amount by
difficulty multiplied by importance, avoidance and urgency factors. The
result becomes `TaskCreationData.final_xp`; the store never recomputes it.

    final_xp = floor(base * importance * avoidance * urgency)

Every factor above 1.0 is recorded as a `TaskBonus` so the UI can show
where the XP came from, and a motivation line is picked for the summary.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Optional

from lifequest.domain.models.base import DomainValidationError
from lifequest.domain.models.enums import (
    QuestCategory,
    QuestDifficulty,
    TaskAvoidance,
    TaskImportance,
    TaskUrgency,
)
from lifequest.domain.models.quest import TaskBonus, TaskCreationData
from lifequest.modules.shared.constants import (
    AVOIDANCE_DESCRIPTIONS,
    AVOIDANCE_MULTIPLIERS,
    DEFAULT_TASK_BASE_XP,
    EPIC_REWARD_THRESHOLD,
    IMPORTANCE_DESCRIPTIONS,
    IMPORTANCE_MULTIPLIERS,
    TASK_BASE_XP,
    URGENCY_DESCRIPTIONS,
    URGENCY_MULTIPLIERS,
)
from lifequest.modules.shared.exceptions import ValidationError


@dataclass(frozen=True)
class TaskReward:
    base_xp: int
    final_xp: int
    bonuses: List[TaskBonus] = field(default_factory=list)
    motivation: str = ""


def calculate_task_reward(
    difficulty: QuestDifficulty,
    importance: TaskImportance,
    avoidance: TaskAvoidance,
    urgency: TaskUrgency,
) -> TaskReward:
    """
    Price a task.

    Example:
        >>> reward = calculate_task_reward(
        ...     QuestDifficulty.MEDIUM,
        ...     TaskImportance.REALLY_SHOULD,
        ...     TaskAvoidance.KINDA_DREADING,
        ...     TaskUrgency.THIS_WEEK,
        ... )
        >>> reward.final_xp
        126
    """
    difficulty = QuestDifficulty(difficulty)
    importance = TaskImportance(importance)
    avoidance = TaskAvoidance(avoidance)
    urgency = TaskUrgency(urgency)

    base_xp = TASK_BASE_XP.get(difficulty.value, DEFAULT_TASK_BASE_XP)
    importance_multiplier = IMPORTANCE_MULTIPLIERS[importance.value]
    avoidance_multiplier = AVOIDANCE_MULTIPLIERS[avoidance.value]
    urgency_multiplier = URGENCY_MULTIPLIERS[urgency.value]

    bonuses: List[TaskBonus] = []
    if importance_multiplier > 1.0:
        bonuses.append(
            TaskBonus("importance", importance_multiplier, IMPORTANCE_DESCRIPTIONS[importance.value])
        )
    if avoidance_multiplier > 1.0:
        bonuses.append(
            TaskBonus("avoidance", avoidance_multiplier, AVOIDANCE_DESCRIPTIONS[avoidance.value])
        )
    if urgency_multiplier > 1.0:
        bonuses.append(
            TaskBonus("urgency", urgency_multiplier, URGENCY_DESCRIPTIONS[urgency.value])
        )

    final_xp = int(
        math.floor(base_xp * importance_multiplier * avoidance_multiplier * urgency_multiplier)
    )

    return TaskReward(
        base_xp=base_xp,
        final_xp=final_xp,
        bonuses=bonuses,
        motivation=motivation_message(importance, avoidance, urgency, final_xp),
    )


def motivation_message(
    importance: TaskImportance,
    avoidance: TaskAvoidance,
    urgency: TaskUrgency,
    xp: int,
) -> str:
    # First match wins
    if avoidance is TaskAvoidance.REALLY_AVOID and importance is TaskImportance.LIFE_CHANGING:
        return f"🔥 Conquer your biggest challenge! Massive {xp} XP awaits!"
    if avoidance is TaskAvoidance.REALLY_AVOID:
        return f"💪 Face your fears! +100% procrastination bonus = {xp} XP!"
    if urgency is TaskUrgency.TODAY:
        return f"⚡ Urgent mission! Complete today for {xp} XP!"
    if importance is TaskImportance.LIFE_CHANGING:
        return f"🌟 Life-changing task! Transform yourself for {xp} XP!"
    if xp > EPIC_REWARD_THRESHOLD:
        return f"🎯 Epic reward ahead! Earn {xp} XP and level up!"
    return f"✨ Build momentum! {xp} XP towards your next level!"


def build_task_data(
    title: str,
    category: QuestCategory,
    difficulty: QuestDifficulty,
    importance: TaskImportance,
    avoidance: TaskAvoidance,
    urgency: TaskUrgency,
    description: str = "",
    reward: Optional[TaskReward] = None,
) -> TaskCreationData:
    """
    Price a task and package it for `ProgressionStore.create_task_from_data`.

    Raises
    ------
    ValidationError
        If the title is blank or a categorical value is unknown
    """
    if not title or not title.strip():
        raise ValidationError("title", "Task title cannot be blank")

    try:
        priced = reward or calculate_task_reward(difficulty, importance, avoidance, urgency)
        return TaskCreationData(
            title=title.strip(),
            description=description.strip(),
            category=QuestCategory(category),
            difficulty=QuestDifficulty(difficulty),
            importance=TaskImportance(importance),
            avoidance=TaskAvoidance(avoidance),
            urgency=TaskUrgency(urgency),
            final_xp=priced.final_xp,
            base_xp=priced.base_xp,
            bonuses=list(priced.bonuses),
        )
    except (ValueError, DomainValidationError) as exc:
        raise ValidationError("task", str(exc)) from exc

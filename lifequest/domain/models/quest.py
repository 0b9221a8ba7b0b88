"""
Quest Domain Model for LifeQuest.

Purpose
-------
A unit of real-life work a player can complete for rewards. Quests come
from the seed catalog or are synthesized from the task creator.

Business Rules
--------------
- `xp_reward` is fixed at creation; any task bonuses are already baked in
- A quest transitions Active -> Completed exactly once and is never reopened
- `stat_rewards` is a partial mapping; absent stats get nothing
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Optional

from lifequest.domain.models.base import (
    DomainValidationError,
    Entity,
    utcnow,
    validate_non_negative,
    validate_not_empty,
)
from lifequest.domain.models.enums import (
    QuestCategory,
    QuestDifficulty,
    QuestType,
    TaskAvoidance,
    TaskImportance,
    TaskUrgency,
)
from lifequest.domain.models.stats import Stat, StatKey


@dataclass(frozen=True)
class TaskBonus:
    """A multiplier applied while pricing a task. Informational only."""

    bonus_type: str
    multiplier: float
    description: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.bonus_type,
            "multiplier": self.multiplier,
            "description": self.description,
        }


@dataclass(frozen=True)
class TaskCreationData:
    """
    Caller-side description of a custom task.

    `final_xp` is computed by the task calculator before the task reaches
    the store; the store takes it as-is.
    """

    title: str
    description: str
    category: QuestCategory
    difficulty: QuestDifficulty
    importance: TaskImportance
    avoidance: TaskAvoidance
    urgency: TaskUrgency
    final_xp: int
    base_xp: int = 0
    bonuses: List[TaskBonus] = field(default_factory=list)

    def __post_init__(self) -> None:
        validate_not_empty(self.title, "title")
        validate_non_negative(self.final_xp, "final_xp")
        validate_non_negative(self.base_xp, "base_xp")


class Quest(Entity):
    """
    Quest entity.

    Domain Events
    -------------
    None; completion is reported through the completing player.
    """

    def __init__(
        self,
        quest_id: str,
        title: str,
        description: str,
        category: QuestCategory,
        difficulty: QuestDifficulty,
        quest_type: QuestType,
        xp_reward: int,
        stat_rewards: Optional[Mapping[StatKey, int]] = None,
        time_estimate: int = 0,
        prerequisites: Optional[Iterable[str]] = None,
        is_completed: bool = False,
        completed_at: Optional[datetime] = None,
        urgency: Optional[TaskUrgency] = None,
        bonuses: Optional[List[TaskBonus]] = None,
    ) -> None:
        super().__init__(quest_id)
        validate_not_empty(title, "title")
        validate_non_negative(xp_reward, "xp_reward")
        validate_non_negative(time_estimate, "time_estimate")

        self.title = title
        self.description = description
        self.category = QuestCategory(category)
        self.difficulty = QuestDifficulty(difficulty)
        self.quest_type = QuestType(quest_type)
        self.xp_reward = xp_reward
        self.stat_rewards: Dict[Stat, int] = _resolve_stat_rewards(stat_rewards or {})
        self.time_estimate = time_estimate
        self.prerequisites: FrozenSet[str] = frozenset(prerequisites or ())
        self._is_completed = is_completed
        self._completed_at = completed_at
        self.urgency = TaskUrgency(urgency) if urgency is not None else None
        self.bonuses: List[TaskBonus] = list(bonuses or [])

    @property
    def is_completed(self) -> bool:
        return self._is_completed

    @property
    def completed_at(self) -> Optional[datetime]:
        return self._completed_at

    def mark_completed(self, when: Optional[datetime] = None) -> None:
        """
        Transition the quest to Completed.

        Raises
        ------
        DomainValidationError
            If the quest was already completed
        """
        if self._is_completed:
            raise DomainValidationError(
                f"Quest {self.id} is already completed", field="is_completed"
            )
        self._is_completed = True
        self._completed_at = when or utcnow()

    def prerequisites_met(self, completed_quests: Iterable[str]) -> bool:
        return self.prerequisites.issubset(completed_quests)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "category": self.category.value,
            "difficulty": self.difficulty.value,
            "type": self.quest_type.value,
            "xp_reward": self.xp_reward,
            "stat_rewards": {stat.value: amount for stat, amount in self.stat_rewards.items()},
            "time_estimate": self.time_estimate,
            "prerequisites": sorted(self.prerequisites),
            "is_completed": self._is_completed,
            "completed_at": self._completed_at.isoformat() if self._completed_at else None,
            "urgency": self.urgency.value if self.urgency else None,
            "bonuses": [bonus.to_dict() for bonus in self.bonuses],
        }

    def __repr__(self) -> str:
        return (
            f"Quest(id={self.id!r}, title={self.title!r}, "
            f"category={self.category.value}, xp_reward={self.xp_reward}, "
            f"completed={self._is_completed})"
        )


def _resolve_stat_rewards(rewards: Mapping[StatKey, int]) -> Dict[Stat, int]:
    # Unknown stat names are dropped here so they can never be awarded
    resolved: Dict[Stat, int] = {}
    for name, amount in rewards.items():
        stat = Stat.parse(name)
        if stat is not None:
            resolved[stat] = int(amount)
    return resolved

"""
Achievement Domain Model for LifeQuest.

An achievement is a one-time badge with a conjunction of requirements and
a reward payout. `is_unlocked` / `unlocked_at` describe the catalog entry
as a whole, not any one player; per-player credit lives on the Player.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional, Sequence, Tuple

from lifequest.domain.models.base import Entity, utcnow, validate_non_negative, validate_not_empty
from lifequest.domain.models.enums import AchievementCategory, Rarity
from lifequest.domain.models.requirements import Requirement
from lifequest.domain.models.stats import Stat, StatKey

if TYPE_CHECKING:
    from lifequest.domain.models.player import Player


@dataclass(frozen=True)
class AchievementReward:
    xp: int = 0
    stats: Mapping[Stat, int] = field(default_factory=dict)
    items: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        validate_non_negative(self.xp, "rewards.xp")

    @classmethod
    def build(
        cls,
        xp: int = 0,
        stats: Optional[Mapping[StatKey, int]] = None,
        items: Sequence[str] = (),
    ) -> "AchievementReward":
        """Resolve stat names; unknown ones are dropped."""
        resolved: Dict[Stat, int] = {}
        for name, amount in (stats or {}).items():
            stat = Stat.parse(name)
            if stat is not None:
                resolved[stat] = int(amount)
        return cls(xp=int(xp), stats=resolved, items=tuple(items))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "xp": self.xp,
            "stats": {stat.value: amount for stat, amount in self.stats.items()},
            "items": list(self.items),
        }


class Achievement(Entity):
    def __init__(
        self,
        achievement_id: str,
        title: str,
        description: str,
        icon: str,
        category: AchievementCategory,
        requirements: Sequence[Requirement] = (),
        rewards: Optional[AchievementReward] = None,
        rarity: Rarity = Rarity.COMMON,
        is_hidden: bool = False,
        is_unlocked: bool = False,
        unlocked_at: Optional[datetime] = None,
    ) -> None:
        super().__init__(achievement_id)
        validate_not_empty(title, "title")

        self.title = title
        self.description = description
        self.icon = icon
        self.category = AchievementCategory(category)
        self.requirements: List[Requirement] = list(requirements)
        self.rewards = rewards or AchievementReward()
        self.rarity = Rarity(rarity)
        self.is_hidden = is_hidden
        self._is_unlocked = is_unlocked
        self._unlocked_at = unlocked_at

    @property
    def is_unlocked(self) -> bool:
        return self._is_unlocked

    @property
    def unlocked_at(self) -> Optional[datetime]:
        return self._unlocked_at

    def requirements_met(self, player: Player) -> bool:
        """All requirements must hold; an empty list is satisfied."""
        return all(requirement.is_met(player) for requirement in self.requirements)

    def mark_unlocked(self, when: Optional[datetime] = None) -> bool:
        """
        Set the unlock flag, stamping the time only the first time.

        Returns True if this call flipped the flag.
        """
        if self._is_unlocked:
            return False
        self._is_unlocked = True
        self._unlocked_at = when or utcnow()
        return True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "icon": self.icon,
            "category": self.category.value,
            "requirements": [requirement.to_dict() for requirement in self.requirements],
            "rewards": self.rewards.to_dict(),
            "rarity": self.rarity.value,
            "is_hidden": self.is_hidden,
            "is_unlocked": self._is_unlocked,
            "unlocked_at": self._unlocked_at.isoformat() if self._unlocked_at else None,
        }

    def __repr__(self) -> str:
        return f"Achievement(id={self.id!r}, title={self.title!r}, unlocked={self._is_unlocked})"

"""
Achievement requirement kinds.

Each kind is its own class carrying only the fields it needs, and each one
implements `is_met`, so adding a kind means writing its evaluator. An
achievement unlocks only when every one of its requirements is met.

Kinds
-----
- quest_complete: number of completed quests >= value
- level_reach: player level >= value
- stat_reach: the named stat >= value
- xp_earn: cumulative XP >= value
- anything else (including streak_reach, which the engine does not track)
  is kept as `UnsupportedRequirement` and never met.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar, Dict, Mapping

from lifequest.domain.models.base import DomainValidationError
from lifequest.domain.models.stats import Stat

if TYPE_CHECKING:
    from lifequest.domain.models.player import Player


@dataclass(frozen=True)
class Requirement(ABC):
    value: int

    kind: ClassVar[str] = ""

    @abstractmethod
    def is_met(self, player: Player) -> bool:
        ...

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.kind, "value": self.value}


@dataclass(frozen=True)
class QuestCompleteRequirement(Requirement):
    kind: ClassVar[str] = "quest_complete"

    def is_met(self, player: Player) -> bool:
        return len(player.completed_quests) >= self.value


@dataclass(frozen=True)
class LevelReachRequirement(Requirement):
    kind: ClassVar[str] = "level_reach"

    def is_met(self, player: Player) -> bool:
        return player.level >= self.value


@dataclass(frozen=True)
class StatReachRequirement(Requirement):
    stat: Stat = Stat.STRENGTH

    kind: ClassVar[str] = "stat_reach"

    def is_met(self, player: Player) -> bool:
        return player.stats.get(self.stat) >= self.value

    def to_dict(self) -> Dict[str, Any]:
        return {**super().to_dict(), "stat": self.stat.value}


@dataclass(frozen=True)
class XpEarnRequirement(Requirement):
    kind: ClassVar[str] = "xp_earn"

    def is_met(self, player: Player) -> bool:
        return player.xp >= self.value


@dataclass(frozen=True)
class UnsupportedRequirement(Requirement):
    """A requirement kind the engine cannot evaluate; fails closed."""

    raw_kind: str = ""

    def is_met(self, player: Player) -> bool:
        return False

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.raw_kind, "value": self.value}


_KINDS = {
    cls.kind: cls
    for cls in (
        QuestCompleteRequirement,
        LevelReachRequirement,
        XpEarnRequirement,
    )
}


def requirement_from_dict(data: Mapping[str, Any]) -> Requirement:
    """
    Build a requirement from its catalog form.

    >>> requirement_from_dict({"type": "quest_complete", "value": 1})
    QuestCompleteRequirement(value=1)
    """
    if "type" not in data or "value" not in data:
        raise DomainValidationError(
            f"Requirement needs 'type' and 'value', got {dict(data)}",
            field="requirements",
        )

    kind = str(data["type"])
    value = int(data["value"])

    if kind == StatReachRequirement.kind:
        stat = Stat.parse(data.get("stat", ""))
        if stat is None:
            return UnsupportedRequirement(value=value, raw_kind=kind)
        return StatReachRequirement(value=value, stat=stat)

    requirement_cls = _KINDS.get(kind)
    if requirement_cls is None:
        return UnsupportedRequirement(value=value, raw_kind=kind)
    return requirement_cls(value=value)

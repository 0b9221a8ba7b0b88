"""
Player stat block.

Six named non-negative counters. Stat names coming from catalog data or
reward tables are resolved through `Stat.parse`, and field access goes
through an explicit accessor table rather than attribute lookup by string.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Callable, Dict, Mapping, Optional, Tuple, Union

from lifequest.domain.models.base import validate_non_negative


class Stat(str, enum.Enum):
    STRENGTH = "strength"
    INTELLIGENCE = "intelligence"
    CREATIVITY = "creativity"
    SOCIAL = "social"
    WISDOM = "wisdom"
    LUCK = "luck"

    @classmethod
    def parse(cls, name: Union["Stat", str]) -> Optional["Stat"]:
        """Resolve a stat name; unknown names give ``None``."""
        if isinstance(name, Stat):
            return name
        try:
            return cls(str(name).lower())
        except ValueError:
            return None


StatKey = Union[Stat, str]


@dataclass
class PlayerStats:
    strength: int = 0
    intelligence: int = 0
    creativity: int = 0
    social: int = 0
    wisdom: int = 0
    luck: int = 0

    def __post_init__(self) -> None:
        for stat in Stat:
            validate_non_negative(self.get(stat), stat.value)

    def get(self, stat: Stat) -> int:
        getter, _ = _ACCESSORS[stat]
        return getter(self)

    def add(self, stat: Stat, amount: int) -> None:
        getter, setter = _ACCESSORS[stat]
        setter(self, getter(self) + amount)

    def award(self, rewards: Mapping[StatKey, int]) -> Dict[Stat, int]:
        """
        Add every reward whose name resolves to a stat.

        Unknown stat names and zero amounts are skipped without error.
        Returns the rewards actually applied.
        """
        applied: Dict[Stat, int] = {}
        for name, amount in rewards.items():
            stat = Stat.parse(name)
            if stat is None or not amount:
                continue
            self.add(stat, amount)
            applied[stat] = applied.get(stat, 0) + amount
        return applied

    def as_dict(self) -> Dict[str, int]:
        return {stat.value: self.get(stat) for stat in Stat}

    @classmethod
    def from_mapping(cls, values: Mapping[StatKey, int]) -> "PlayerStats":
        resolved: Dict[str, int] = {}
        for name, amount in values.items():
            stat = Stat.parse(name)
            if stat is not None:
                resolved[stat.value] = int(amount)
        return cls(**resolved)

    def copy(self) -> "PlayerStats":
        return PlayerStats(**self.as_dict())


def _setter(field_name: str) -> Callable[[PlayerStats, int], None]:
    def set_value(stats: PlayerStats, value: int) -> None:
        setattr(stats, field_name, value)

    return set_value


_ACCESSORS: Dict[Stat, Tuple[Callable[[PlayerStats], int], Callable[[PlayerStats, int], None]]] = {
    Stat.STRENGTH: (lambda s: s.strength, _setter("strength")),
    Stat.INTELLIGENCE: (lambda s: s.intelligence, _setter("intelligence")),
    Stat.CREATIVITY: (lambda s: s.creativity, _setter("creativity")),
    Stat.SOCIAL: (lambda s: s.social, _setter("social")),
    Stat.WISDOM: (lambda s: s.wisdom, _setter("wisdom")),
    Stat.LUCK: (lambda s: s.luck, _setter("luck")),
}

# Flat +1 to every stat on level up
LEVEL_UP_BONUS: Dict[Stat, int] = {stat: 1 for stat in Stat}

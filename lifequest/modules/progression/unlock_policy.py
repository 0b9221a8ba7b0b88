"""
Achievement Unlock Policies
===========================

Decides whether an achievement is still open for a given player during
achievement evaluation, and records an unlock.

Two policies ship:

- `SharedUnlockPolicy` (default): the achievement's `is_unlocked` flag is
  global. Once any player unlocks it, evaluation skips it for everyone.
- `PerPlayerUnlockPolicy`: only the player's own achievement list counts,
  so every player can earn every achievement once.

The store talks to the interface only; the policy is picked by
`Config.ACHIEVEMENT_UNLOCK_SCOPE`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from lifequest.core.config import UnlockScope
from lifequest.domain.models.achievement import Achievement
from lifequest.domain.models.player import Player


class UnlockPolicy(ABC):
    scope: UnlockScope

    @abstractmethod
    def is_open(self, achievement: Achievement, player: Player) -> bool:
        """Whether evaluation should consider `achievement` for `player`."""

    def record_unlock(self, achievement: Achievement, player: Player) -> bool:
        """
        Mark the achievement unlocked and credit the player.

        The unlock timestamp is set only the first time. Returns False if
        the player already held the achievement.
        """
        achievement.mark_unlocked()
        return player.credit_achievement(achievement.id)


class SharedUnlockPolicy(UnlockPolicy):
    scope = UnlockScope.SHARED

    def is_open(self, achievement: Achievement, player: Player) -> bool:
        return not achievement.is_unlocked and not player.has_achievement(achievement.id)


class PerPlayerUnlockPolicy(UnlockPolicy):
    scope = UnlockScope.PLAYER

    def is_open(self, achievement: Achievement, player: Player) -> bool:
        return not player.has_achievement(achievement.id)


def policy_for_scope(scope: UnlockScope) -> UnlockPolicy:
    if scope is UnlockScope.PLAYER:
        return PerPlayerUnlockPolicy()
    return SharedUnlockPolicy()

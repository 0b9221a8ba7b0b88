"""
Seed catalog loading.

Turns the `quests` and `achievements` sections served by ConfigManager
into domain objects. Every entry is keyed by its id; a malformed entry
aborts loading with `CatalogLoadError` naming the entry.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping

from lifequest.core.config.manager import ConfigManager
from lifequest.core.exceptions import CatalogLoadError, ConfigurationError
from lifequest.core.logging.logger import get_logger
from lifequest.domain.models.achievement import Achievement, AchievementReward
from lifequest.domain.models.base import DomainValidationError
from lifequest.domain.models.enums import (
    AchievementCategory,
    QuestCategory,
    QuestDifficulty,
    QuestType,
    Rarity,
)
from lifequest.domain.models.quest import Quest
from lifequest.domain.models.requirements import UnsupportedRequirement, requirement_from_dict

logger = get_logger(__name__)

QUESTS_SECTION = "quests"
ACHIEVEMENTS_SECTION = "achievements"

# Raised by enum lookups, int() coercion, non-mapping entries and the validators
_ENTRY_ERRORS = (AttributeError, DomainValidationError, KeyError, TypeError, ValueError)


def quest_from_entry(quest_id: str, entry: Mapping[str, Any]) -> Quest:
    try:
        return Quest(
            quest_id=quest_id,
            title=entry["title"],
            description=entry.get("description", ""),
            category=QuestCategory(entry["category"]),
            difficulty=QuestDifficulty(entry["difficulty"]),
            quest_type=QuestType(entry["type"]),
            xp_reward=int(entry["xp_reward"]),
            stat_rewards=entry.get("stat_rewards") or {},
            time_estimate=int(entry.get("time_estimate", 0)),
            prerequisites=entry.get("prerequisites") or [],
        )
    except _ENTRY_ERRORS as exc:
        raise CatalogLoadError(QUESTS_SECTION, quest_id, _describe(exc)) from exc


def achievement_from_entry(achievement_id: str, entry: Mapping[str, Any]) -> Achievement:
    try:
        requirements = [requirement_from_dict(raw) for raw in entry.get("requirements") or []]
        rewards = entry.get("rewards") or {}
        achievement = Achievement(
            achievement_id=achievement_id,
            title=entry["title"],
            description=entry.get("description", ""),
            icon=entry.get("icon", ""),
            category=AchievementCategory(entry["category"]),
            requirements=requirements,
            rewards=AchievementReward.build(
                xp=rewards.get("xp", 0),
                stats=rewards.get("stats"),
                items=rewards.get("items") or (),
            ),
            rarity=Rarity(entry.get("rarity", Rarity.COMMON.value)),
            is_hidden=bool(entry.get("is_hidden", False)),
        )
    except _ENTRY_ERRORS as exc:
        raise CatalogLoadError(ACHIEVEMENTS_SECTION, achievement_id, _describe(exc)) from exc

    unsupported = [r.to_dict() for r in requirements if isinstance(r, UnsupportedRequirement)]
    if unsupported:
        # Still loaded: the achievement just never unlocks through evaluation
        logger.warning(
            "Achievement has requirements that can never be met",
            extra={"achievement_id": achievement_id, "requirements": unsupported},
        )
    return achievement


def load_quests(config_manager: ConfigManager) -> List[Quest]:
    return [
        quest_from_entry(str(quest_id), entry or {})
        for quest_id, entry in _section(config_manager, QUESTS_SECTION).items()
    ]


def load_achievements(config_manager: ConfigManager) -> List[Achievement]:
    return [
        achievement_from_entry(str(achievement_id), entry or {})
        for achievement_id, entry in _section(config_manager, ACHIEVEMENTS_SECTION).items()
    ]


def _section(config_manager: ConfigManager, name: str) -> Dict[str, Any]:
    section = config_manager.get(name, {})
    if not isinstance(section, dict):
        raise ConfigurationError(
            name, f"expected a mapping of id -> entry, got {type(section).__name__}"
        )
    return section


def _describe(exc: Exception) -> str:
    if isinstance(exc, KeyError):
        return f"missing field {exc.args[0]!r}"
    return str(exc)

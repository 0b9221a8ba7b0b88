"""
Progression module: the store, unlock policies, catalog loading and the
custom task calculator.
"""

from .catalog import achievement_from_entry, load_achievements, load_quests, quest_from_entry
from .store import ProgressionStore
from .task_calculator import TaskReward, build_task_data, calculate_task_reward, motivation_message
from .unlock_policy import (
    PerPlayerUnlockPolicy,
    SharedUnlockPolicy,
    UnlockPolicy,
    policy_for_scope,
)

__all__ = [
    "ProgressionStore",
    "UnlockPolicy",
    "SharedUnlockPolicy",
    "PerPlayerUnlockPolicy",
    "policy_for_scope",
    "load_quests",
    "load_achievements",
    "quest_from_entry",
    "achievement_from_entry",
    "TaskReward",
    "calculate_task_reward",
    "build_task_data",
    "motivation_message",
]

"""
Infrastructure exceptions for LifeQuest.

Raised while wiring the engine up (settings, seed catalog), never by game
rules. They share the `LifeQuestError` surface with the domain exceptions so
one handler can log both.
"""

from __future__ import annotations

from lifequest.modules.shared.exceptions import ErrorSeverity, LifeQuestError


class LifeQuestInfrastructureException(LifeQuestError):
    """Base for start-up and configuration failures."""

    severity = ErrorSeverity.CRITICAL


class ConfigurationError(LifeQuestInfrastructureException):
    """A configuration value has the wrong shape, e.g. a catalog section that is not a mapping."""

    code = "CONFIG_ERROR"

    def __init__(self, config_key: str, message: str) -> None:
        self.config_key = config_key
        super().__init__(
            f"Configuration error for {config_key}: {message}",
            details={"config_key": config_key},
        )


class CatalogLoadError(LifeQuestInfrastructureException):
    """
    A seed catalog entry could not be turned into a domain object.

    Args:
        section: "quests" or "achievements"
        entry_id: Id of the offending entry
        reason: What was wrong with it
    """

    code = "CATALOG_LOAD_ERROR"

    def __init__(self, section: str, entry_id: str, reason: str) -> None:
        self.section = section
        self.entry_id = entry_id
        super().__init__(
            f"Invalid {section} catalog entry '{entry_id}': {reason}",
            details={"section": section, "entry_id": entry_id, "reason": reason},
        )

"""
LifeQuest logging.

Importing this package installs the queue-based pipeline on the root
logger; modules only need `get_logger(__name__)` and `LogContext`.
"""

from lifequest.core.logging.logger import (
    LogContext,
    LoggingHealth,
    LogSettings,
    get_log_context,
    get_logger,
    get_logging_health,
    setup_logging,
    shutdown_logging,
)

__all__ = [
    "get_logger",
    "LogContext",
    "get_log_context",
    "LogSettings",
    "LoggingHealth",
    "get_logging_health",
    "setup_logging",
    "shutdown_logging",
]

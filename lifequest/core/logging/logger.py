"""
LifeQuest Logging Subsystem
===========================

Purpose
-------
Structured, non-blocking logging for the progression engine. Engine calls
nest (quest completion -> level up -> milestone unlock -> another level
up), so every record carries the player, quest and a correlation id shared
by the whole call tree.

Pipeline
--------
    logger -> root QueueHandler (+ ContextFilter) -> queue
           -> QueueListener thread -> console handler
                                   -> rotating JSON file (optional)

Console output is JSON in production (or when LOG_JSON is set) and colored
text on a development tty.

Public API
----------
- get_logger(name)
- LogContext(player_id=..., quest_id=..., operation=...)
- get_log_context()
- setup_logging() / shutdown_logging() / get_logging_health()

Dependencies
------------
- lifequest.core.config.config.Config
"""

from __future__ import annotations

import json
import logging
import queue
import sys
import uuid
from contextvars import ContextVar, Token
from dataclasses import dataclass, field
from datetime import datetime, timezone
from logging import Logger
from logging.handlers import QueueHandler, QueueListener, TimedRotatingFileHandler
from pathlib import Path
from typing import Any, Dict, FrozenSet, List, Optional

from lifequest.core.config.config import Config

CONTEXT_FIELDS = ("player_id", "quest_id", "operation", "component", "correlation_id")
MISSING = "-"

_log_context: ContextVar[Dict[str, Any]] = ContextVar("lifequest_log_context", default={})


# ============================================================================
# Settings
# ============================================================================


@dataclass(frozen=True)
class LogSettings:
    """Snapshot of the logging-related `Config` values."""

    level: int
    json_console: bool
    colors: bool
    to_file: bool
    logs_dir: Path
    environment: str

    text_format: str = "%(asctime)s %(levelname)-8s [%(operation)s] %(name)s: %(message)s"
    date_format: str = "%H:%M:%S"
    file_name: str = "lifequest.json.log"
    file_backups: int = 3
    queue_size: int = 5_000

    @classmethod
    def from_config(cls) -> "LogSettings":
        environment = str(Config.ENVIRONMENT).lower()
        production = environment == "production"
        json_console = production if Config.LOG_JSON is None else bool(Config.LOG_JSON)
        # getLevelName maps a known name to its number and anything else to a string
        level = logging.getLevelName(str(Config.LOG_LEVEL).upper())
        return cls(
            level=level if isinstance(level, int) else logging.INFO,
            json_console=json_console,
            colors=Config.LOG_COLORS and not json_console and sys.stdout.isatty(),
            to_file=Config.LOG_TO_FILE,
            logs_dir=Path(Config.LOGS_DIR),
            environment=environment,
        )


# ============================================================================
# Context
# ============================================================================


class ContextFilter(logging.Filter):
    """Stamp the active LogContext onto each record."""

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        context = _log_context.get()
        for name in CONTEXT_FIELDS:
            setattr(record, name, context.get(name) or MISSING)
        if record.component == MISSING:
            record.component = record.name.rsplit(".", 1)[-1]
        return True


class LogContext:
    """
    Bind player/quest/operation fields to every record logged in the block.

    An inner context keeps the outer correlation id and fills unset fields
    from the outer context.

    >>> with LogContext(player_id=player.id, operation="complete_quest"):
    ...     logger.info("Quest completed", extra={"xp_awarded": 10})
    """

    def __init__(
        self,
        player_id: Optional[str] = None,
        quest_id: Optional[str] = None,
        operation: Optional[str] = None,
        component: Optional[str] = None,
        correlation_id: Optional[str] = None,
    ) -> None:
        self._fields = {
            "player_id": player_id,
            "quest_id": quest_id,
            "operation": operation,
            "component": component,
            "correlation_id": correlation_id,
        }
        self._token: Optional[Token[Dict[str, Any]]] = None

    def __enter__(self) -> "LogContext":
        merged = dict(_log_context.get())
        merged.update({k: v for k, v in self._fields.items() if v is not None})
        merged.setdefault("correlation_id", uuid.uuid4().hex[:8])
        self._token = _log_context.set(merged)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._token is not None:
            _log_context.reset(self._token)
            self._token = None


def get_log_context() -> Dict[str, Any]:
    return dict(_log_context.get())


# ============================================================================
# Formatters
# ============================================================================

# Attributes every LogRecord has; anything else came from `extra=`
_RECORD_ATTRS: FrozenSet[str] = frozenset(logging.makeLogRecord({}).__dict__) | {
    "message",
    "asctime",
    "taskName",
}


class JSONFormatter(logging.Formatter):
    """One JSON object per line; `extra` fields nested under "extra"."""

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        payload: Dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        context = {
            name: getattr(record, name)
            for name in CONTEXT_FIELDS
            if getattr(record, name, MISSING) != MISSING
        }
        if context:
            payload["context"] = context

        extra = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RECORD_ATTRS and key not in CONTEXT_FIELDS and not key.startswith("_")
        }
        if extra:
            payload["extra"] = extra
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


class ColoredFormatter(logging.Formatter):
    """Text formatter that colors the level name for terminals."""

    LEVEL_COLORS = {
        logging.DEBUG: "\033[2m",
        logging.INFO: "\033[36m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[1;31m",
    }
    RESET = "\033[0m"

    def formatMessage(self, record: logging.LogRecord) -> str:
        color = self.LEVEL_COLORS.get(record.levelno)
        text = super().formatMessage(record)
        if color is None:
            return text
        return text.replace(record.levelname, f"{color}{record.levelname}{self.RESET}", 1)


# ============================================================================
# Queue plumbing
# ============================================================================


@dataclass
class LoggingHealth:
    initialized: bool = False
    queued: int = 0
    dropped: int = 0
    handler_errors: int = 0
    queue_size: int = 0


@dataclass
class _LoggingState:
    settings: Optional[LogSettings] = None
    queue: Optional["queue.Queue[logging.LogRecord]"] = None
    listener: Optional[QueueListener] = None
    handler: Optional[QueueHandler] = None
    health: LoggingHealth = field(default_factory=LoggingHealth)


_state = _LoggingState()


class _DroppingQueueHandler(QueueHandler):
    """Never blocks the caller: a full queue drops the record."""

    def enqueue(self, record: logging.LogRecord) -> None:  # type: ignore[override]
        try:
            self.queue.put_nowait(record)
            _state.health.queued += 1
        except queue.Full:
            _state.health.dropped += 1


class _CountingQueueListener(QueueListener):
    def handleError(self, record: logging.LogRecord) -> None:
        _state.health.handler_errors += 1
        sys.stderr.write(f"lifequest logging: handler failed for {record.name}\n")


def _sinks(settings: LogSettings) -> List[logging.Handler]:
    console = logging.StreamHandler(sys.stdout)
    if settings.json_console:
        console.setFormatter(JSONFormatter())
    elif settings.colors:
        console.setFormatter(ColoredFormatter(settings.text_format, settings.date_format))
    else:
        console.setFormatter(logging.Formatter(settings.text_format, settings.date_format))
    sinks: List[logging.Handler] = [console]

    if settings.to_file:
        settings.logs_dir.mkdir(parents=True, exist_ok=True)
        file_handler = TimedRotatingFileHandler(
            settings.logs_dir / settings.file_name,
            when="midnight",
            backupCount=settings.file_backups,
            encoding="utf-8",
            utc=True,
        )
        file_handler.setFormatter(JSONFormatter())
        sinks.append(file_handler)

    for sink in sinks:
        sink.setLevel(settings.level)
    return sinks


# ============================================================================
# Lifecycle
# ============================================================================


def setup_logging() -> None:
    """Install the queue pipeline on the root logger. Idempotent."""
    if _state.handler is not None:
        return

    settings = LogSettings.from_config()
    log_queue: "queue.Queue[logging.LogRecord]" = queue.Queue(settings.queue_size)

    listener = _CountingQueueListener(log_queue, *_sinks(settings), respect_handler_level=True)
    handler = _DroppingQueueHandler(log_queue)
    # On the handler, not a logger, so records from every child logger pass through it
    handler.addFilter(ContextFilter())
    handler.setLevel(settings.level)

    root = logging.getLogger()
    root.setLevel(settings.level)
    root.addHandler(handler)
    listener.start()

    _state.settings = settings
    _state.queue = log_queue
    _state.listener = listener
    _state.handler = handler
    _state.health = LoggingHealth(initialized=True)

    logging.getLogger(__name__).debug(
        "Logging configured",
        extra={
            "environment": settings.environment,
            "level": logging.getLevelName(settings.level),
            "json_console": settings.json_console,
            "to_file": settings.to_file,
        },
    )


def shutdown_logging() -> None:
    """Flush the queue and detach the pipeline."""
    if _state.handler is None:
        return

    logging.getLogger().removeHandler(_state.handler)
    if _state.listener is not None:
        _state.listener.stop()
    _state.handler.close()

    _state.handler = None
    _state.listener = None
    _state.queue = None
    _state.health.initialized = False


def get_logging_health() -> LoggingHealth:
    health = _state.health
    health.queue_size = _state.queue.qsize() if _state.queue is not None else 0
    return health


def get_logger(name: str) -> Logger:
    return logging.getLogger(name)


setup_logging()

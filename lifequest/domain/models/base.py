"""
Domain model building blocks.

- `Entity`: identity-based equality for catalog objects (quests,
  achievements) that change state but keep their id
- `AggregateRoot`: an entity that also buffers `DomainEvent`s describing
  what changed, drained by the caller after each operation (the player)
- `DomainValidationError` and small `validate_*` guards used by
  constructors
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ============================================================================
# VALIDATION
# ============================================================================


class DomainValidationError(ValueError):
    """A domain object was built or mutated into an invalid state."""

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field


def validate_not_empty(value: str, field_name: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise DomainValidationError(f"{field_name} cannot be empty", field=field_name)


def validate_non_negative(value: int, field_name: str) -> None:
    if value < 0:
        raise DomainValidationError(f"{field_name} cannot be negative (got {value})", field=field_name)


def validate_positive(value: int, field_name: str) -> None:
    if value < 1:
        raise DomainValidationError(f"{field_name} must be at least 1 (got {value})", field=field_name)


# ============================================================================
# ENTITIES
# ============================================================================


@dataclass(frozen=True)
class DomainEvent:
    """
    Something that happened to an aggregate.

    `event_name` is dotted, aggregate first: ``player.leveled_up``.
    """

    event_name: str
    payload: Dict[str, Any]
    occurred_at: datetime = field(default_factory=utcnow)


class Entity:
    """Equal to another entity of the same type with the same id."""

    def __init__(self, entity_id: str) -> None:
        validate_not_empty(entity_id, "id")
        self._id = entity_id

    @property
    def id(self) -> str:
        return self._id

    def __eq__(self, other: object) -> bool:
        return type(other) is type(self) and other.id == self.id  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self), self._id))


class AggregateRoot(Entity):
    """
    Entity that owns a consistency boundary and records domain events.

    Mutating methods append events with `add_domain_event`; the owner drains
    them with `clear_domain_events` once the operation has finished.
    """

    def __init__(self, entity_id: str) -> None:
        super().__init__(entity_id)
        self._events: List[DomainEvent] = []

    def add_domain_event(self, event_name: str, payload: Dict[str, Any]) -> None:
        self._events.append(DomainEvent(event_name, payload))

    def get_pending_events(self) -> List[DomainEvent]:
        return list(self._events)

    def clear_domain_events(self) -> List[DomainEvent]:
        drained, self._events = self._events, []
        return drained

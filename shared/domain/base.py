"""
Base Domain Classes

Building blocks used by the booking engine domain layer:
- Entity: object with identity (compared by id)
- ValueObject: immutable object compared by value
- Aggregate: consistency boundary that records domain events
- DomainEvent: something that happened, published after commit
"""

from abc import ABC
from dataclasses import dataclass, field
from datetime import datetime
from typing import List
from uuid import UUID, uuid4


@dataclass
class Entity(ABC):
    """
    Base class for entities

    Two entities are the same entity when their ids match, whatever
    the rest of their state looks like.
    """
    id: UUID = field(default_factory=uuid4)

    def __eq__(self, other):
        if not isinstance(other, self.__class__):
            return False
        return self.id == other.id

    def __hash__(self):
        return hash(self.id)


@dataclass(frozen=True)
class ValueObject(ABC):
    """Immutable, identity-less object. Equality is structural."""


@dataclass(eq=False)
class Aggregate(Entity):
    """
    Base class for aggregate roots

    Aggregates guard an invariant (for the engine: slot capacity) and
    queue the events that describe their state changes. The unit of work
    drains the queue and publishes it once the surrounding database
    transaction has committed.
    """
    _events: List['DomainEvent'] = field(default_factory=list, repr=False, init=False)

    def add_event(self, event: 'DomainEvent'):
        self._events.append(event)

    def clear_events(self):
        self._events.clear()

    @property
    def events(self) -> List['DomainEvent']:
        """Snapshot of queued events"""
        return list(self._events)


@dataclass
class DomainEvent:
    """
    Base class for domain events

    Subclasses add their payload as extra fields and are declared with
    ``@dataclass(kw_only=True)`` so payload fields may omit defaults.
    """
    event_id: UUID = field(default_factory=uuid4)
    occurred_at: datetime = field(default_factory=datetime.now)

    @property
    def name(self) -> str:
        return self.__class__.__name__

    def to_dict(self) -> dict:
        """Serializable header of the event (payload excluded)"""
        return {
            'event_id': str(self.event_id),
            'event_type': self.name,
            'occurred_at': self.occurred_at.isoformat(),
        }

"""
Unit of Work Pattern

Wraps one engine use case in a database transaction and publishes the
domain events it collected only after that transaction commits. A
rolled-back use case publishes nothing.
"""

from abc import ABC, abstractmethod
from typing import List
import logging

from django.db import transaction

from shared.domain.base import DomainEvent

logger = logging.getLogger(__name__)


class AbstractUnitOfWork(ABC):
    """Context-manager protocol: commit on clean exit, rollback on error"""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            self.commit()
        else:
            self.rollback()

    @abstractmethod
    def commit(self):
        ...

    @abstractmethod
    def rollback(self):
        ...

    @abstractmethod
    def collect_events(self, aggregate):
        ...

    @abstractmethod
    def record(self, event: DomainEvent):
        ...


class DjangoUnitOfWork(AbstractUnitOfWork):
    """
    Django implementation of Unit of Work

    Usage:
        with DjangoUnitOfWork() as uow:
            capacity = reserve_slot_capacity(slot, party_size)
            booking = BookingRequest.objects.create(...)
            uow.collect_events(capacity)
            uow.record(BookingRequested(...))
        # events are published by the message bus after commit

    Nested units of work run inside a savepoint; their events still wait
    for the outermost commit because ``transaction.on_commit`` does.
    """

    def __init__(self):
        self._events: List[DomainEvent] = []
        self._transaction = None

    def __enter__(self):
        self._transaction = transaction.atomic()
        self._transaction.__enter__()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        try:
            if exc_type is None:
                self.commit()
            else:
                self.rollback()
        finally:
            if self._transaction:
                self._transaction.__exit__(exc_type, exc_val, exc_tb)

    def commit(self):
        events = self._events.copy()
        self._events.clear()
        if events:
            logger.debug(f"Scheduling {len(events)} events for publication after commit")
            transaction.on_commit(lambda: self._publish_events(events))

    def rollback(self):
        if self._events:
            logger.warning(f"Rolling back unit of work, discarding {len(self._events)} events")
        self._events.clear()

    def collect_events(self, aggregate):
        """Move queued events from an aggregate into this unit of work"""
        new_events = aggregate.events
        if new_events:
            self._events.extend(new_events)
            aggregate.clear_events()

    def record(self, event: DomainEvent):
        """Queue an event raised outside an aggregate (e.g. by a handler)"""
        self._events.append(event)

    @property
    def pending_events(self) -> List[DomainEvent]:
        return list(self._events)

    def _publish_events(self, events: List[DomainEvent]):
        from shared.application.message_bus import message_bus

        logger.info(f"Publishing {len(events)} domain events after commit")
        message_bus.publish_events(events)

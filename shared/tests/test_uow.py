"""Unit of work and message bus tests."""

from __future__ import annotations

from dataclasses import dataclass

from django.test import SimpleTestCase, TestCase

from shared.application.message_bus import MessageBus, message_bus
from shared.application.uow import DjangoUnitOfWork
from shared.domain.base import Aggregate, DomainEvent


@dataclass(kw_only=True)
class Pinged(DomainEvent):
    value: int


@dataclass(eq=False)
class Counter(Aggregate):
    hits: int = 0

    def hit(self) -> None:
        self.hits += 1
        self.add_event(Pinged(value=self.hits))


class UnitOfWorkTests(TestCase):
    def setUp(self) -> None:
        self.received: list[Pinged] = []
        message_bus.register_event_handler(Pinged, self.received.append)
        self.addCleanup(message_bus.unregister_event_handler, Pinged, self.received.append)

    def test_events_are_published_after_commit(self) -> None:
        with self.captureOnCommitCallbacks(execute=True):
            with DjangoUnitOfWork() as uow:
                uow.record(Pinged(value=1))
                self.assertEqual(self.received, [])

        self.assertEqual([event.value for event in self.received], [1])

    def test_rollback_discards_events(self) -> None:
        with self.captureOnCommitCallbacks(execute=True) as callbacks:
            with self.assertRaises(RuntimeError):
                with DjangoUnitOfWork() as uow:
                    uow.record(Pinged(value=1))
                    raise RuntimeError("abort")

        self.assertEqual(callbacks, [])
        self.assertEqual(self.received, [])

    def test_collect_events_drains_the_aggregate(self) -> None:
        counter = Counter()
        counter.hit()
        counter.hit()

        with self.captureOnCommitCallbacks(execute=True):
            with DjangoUnitOfWork() as uow:
                uow.collect_events(counter)
                self.assertEqual(len(uow.pending_events), 2)

        self.assertEqual(counter.events, [])
        self.assertEqual([event.value for event in self.received], [1, 2])


class MessageBusTests(SimpleTestCase):
    def test_failing_handler_does_not_stop_others(self) -> None:
        bus = MessageBus()
        seen = []

        def broken(event):
            raise RuntimeError("handler failure")

        bus.register_event_handler(Pinged, broken)
        bus.register_event_handler(Pinged, seen.append)

        bus.publish_events([Pinged(value=3)])

        self.assertEqual(len(seen), 1)

    def test_handlers_are_registered_once(self) -> None:
        bus = MessageBus()
        bus.register_event_handler(Pinged, print)
        bus.register_event_handler(Pinged, print)

        self.assertEqual(bus.handlers_for(Pinged), [print])

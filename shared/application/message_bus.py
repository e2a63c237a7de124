"""
Message Bus

Routes committed domain events to the handlers registered for them.
Handlers are registered by each app's ``AppConfig.ready``.
"""

from typing import Callable, Dict, List, Type
import logging

from shared.domain.base import DomainEvent

logger = logging.getLogger(__name__)

EventHandler = Callable[[DomainEvent], None]


class MessageBus:
    """
    Event dispatcher (one event type, many handlers)

    A failing handler is logged and does not stop the remaining handlers;
    by the time events are published the database work is committed.
    """

    def __init__(self):
        self._event_handlers: Dict[Type[DomainEvent], List[EventHandler]] = {}

    def register_event_handler(self, event_type: Type[DomainEvent], handler: EventHandler):
        handlers = self._event_handlers.setdefault(event_type, [])
        if handler in handlers:
            return
        handlers.append(handler)
        logger.debug(f"Registered {handler.__name__} for {event_type.__name__}")

    def unregister_event_handler(self, event_type: Type[DomainEvent], handler: EventHandler):
        handlers = self._event_handlers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    def handlers_for(self, event_type: Type[DomainEvent]) -> List[EventHandler]:
        return list(self._event_handlers.get(event_type, []))

    def publish_events(self, events: List[DomainEvent]):
        for event in events:
            handlers = self.handlers_for(type(event))
            if not handlers:
                logger.debug(f"No handlers registered for {event.name}")
                continue

            logger.info(f"Publishing event: {event.name} (ID: {event.event_id})")
            for handler in handlers:
                try:
                    handler(event)
                except Exception as e:
                    logger.error(
                        f"Error in event handler {handler.__name__} for event {event.name}: {e}",
                        exc_info=True,
                    )


# Global message bus instance
message_bus = MessageBus()

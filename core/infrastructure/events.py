"""
In-memory event bus implementation.

This is a simple in-memory implementation suitable for a modular monolith.
"""

import asyncio
import logging
from typing import Dict, List, Type

from core.domain.events import DomainEvent, EventBus, EventHandler

logger = logging.getLogger(__name__)


class InMemoryEventBus(EventBus):
    """
    In-memory event bus implementation.

    Handlers run concurrently for each published event. A failing
    handler is logged and never fails the publishing operation.
    """

    def __init__(self):
        """Initialize the event bus."""
        self._handlers: Dict[Type[DomainEvent], List[EventHandler]] = {}

    def subscribe(self, event_type: Type[DomainEvent], handler: EventHandler) -> None:
        """
        Subscribe to a domain event type.

        Args:
            event_type: The type of event to subscribe to
            handler: The handler to call when event is published
        """
        self._handlers.setdefault(event_type, []).append(handler)
        logger.debug("Subscribed %s to %s", handler.__class__.__name__, event_type.__name__)

    def clear(self) -> None:
        """Remove every subscription."""
        self._handlers.clear()

    def handlers_for(self, event_type: Type[DomainEvent]) -> List[EventHandler]:
        return list(self._handlers.get(event_type, []))

    async def publish(self, event: DomainEvent) -> None:
        """
        Publish a domain event.

        Args:
            event: The domain event to publish
        """
        handlers = self.handlers_for(type(event))

        if not handlers:
            logger.debug("No handlers registered for %s", event.event_type)
            return

        logger.debug("Publishing %s to %d handler(s)", event.event_type, len(handlers))

        results = await asyncio.gather(
            *(handler.handle(event) for handler in handlers), return_exceptions=True
        )
        for handler, result in zip(handlers, results):
            if isinstance(result, Exception):
                logger.error(
                    "Error handling %s with %s: %s",
                    event.event_type,
                    handler.__class__.__name__,
                    result,
                    exc_info=result,
                )


# Global event bus instance
event_bus = InMemoryEventBus()

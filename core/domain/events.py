"""
Domain events base classes and infrastructure.

Domain events represent something that happened in the domain.
They are used for decoupling modules and enabling event-driven architecture.
"""

from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any, Dict
from uuid import uuid4

from django.utils import timezone


@dataclass(frozen=True)
class DomainEvent(ABC):
    """
    Base class for all domain events.

    Domain events are immutable value objects that represent
    something that happened in the domain. Subclasses are frozen
    dataclasses declaring their own payload fields.
    """

    def __post_init__(self):
        """Stamp event id and occurrence time."""
        object.__setattr__(self, "event_id", uuid4())
        object.__setattr__(self, "occurred_at", timezone.now())

    @property
    def event_type(self) -> str:
        return type(self).__name__

    @property
    @abstractmethod
    def aggregate_id(self) -> str:
        """Identifier of the aggregate the event belongs to."""

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary for serialization."""
        occurred_at: datetime = self.occurred_at
        return {
            "event_id": str(self.event_id),
            "occurred_at": occurred_at.isoformat(),
            "aggregate_id": self.aggregate_id,
            "event_type": self.event_type,
            "data": {k: str(v) if v is not None else None for k, v in asdict(self).items()},
        }


class EventHandler(ABC):
    """
    Base class for event handlers.

    Event handlers process domain events asynchronously.
    """

    @abstractmethod
    async def handle(self, event: DomainEvent) -> None:
        """
        Handle a domain event.

        Args:
            event: The domain event to handle
        """


class EventBus(ABC):
    """
    Abstract event bus for publishing and subscribing to domain events.
    """

    @abstractmethod
    async def publish(self, event: DomainEvent) -> None:
        """
        Publish a domain event.

        Args:
            event: The domain event to publish
        """

    @abstractmethod
    def subscribe(self, event_type: type, handler: EventHandler) -> None:
        """
        Subscribe to a domain event type.

        Args:
            event_type: The type of event to subscribe to
            handler: The handler to call when event is published
        """

"""
Event handlers for domain events.

These handlers process domain events asynchronously for side effects
like audit logging.
"""

import logging

from accounts.domain.events import (
    ModeratorCreated,
    ModeratorDebtCharged,
    ModeratorDebtCleared,
    ModeratorDeleted,
)
from core.domain.events import DomainEvent, EventHandler
from core.infrastructure.events import event_bus
from keys.domain.events import KeyActivated, KeysDeleted, KeysGenerated
from pricing.domain.events import PricesUpdated

logger = logging.getLogger("gatekeeper.audit")

AUDITED_EVENTS = (
    KeysGenerated,
    KeyActivated,
    KeysDeleted,
    ModeratorCreated,
    ModeratorDeleted,
    ModeratorDebtCharged,
    ModeratorDebtCleared,
    PricesUpdated,
)

_registered = False


class AuditLogEventHandler(EventHandler):
    """Writes every domain event to the audit logger."""

    async def handle(self, event: DomainEvent) -> None:
        """
        Handle domain event for audit logging.

        Args:
            event: Domain event to log
        """
        logger.info(
            "Audit log: %s - %s",
            event.event_type,
            event.aggregate_id,
            extra={
                "event_id": str(event.event_id),
                "event_type": event.event_type,
                "aggregate_id": event.aggregate_id,
                "occurred_at": event.occurred_at.isoformat(),
            },
        )


def register_event_handlers(force: bool = False) -> None:
    """
    Subscribe the audit handler to every domain event.

    Safe to call more than once; only the first call subscribes
    unless force is set.
    """
    global _registered
    if _registered and not force:
        return

    audit_handler = AuditLogEventHandler()
    for event_type in AUDITED_EVENTS:
        event_bus.subscribe(event_type, audit_handler)
    _registered = True
    logger.debug("Registered audit handler for %d event types", len(AUDITED_EVENTS))

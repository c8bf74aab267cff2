"""
Pricing domain events.
"""

from dataclasses import dataclass

from core.domain.events import DomainEvent


@dataclass(frozen=True)
class PricesUpdated(DomainEvent):
    """Event raised when price tiers are upserted."""

    applied: int
    skipped: int
    updated_by: str

    @property
    def aggregate_id(self) -> str:
        return "prices"

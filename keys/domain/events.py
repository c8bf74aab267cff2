"""
Key domain events.

Domain events represent something that happened in the key domain.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from core.domain.events import DomainEvent
from keys.domain.key import mask_key


@dataclass(frozen=True)
class KeysGenerated(DomainEvent):
    """Event raised when a batch of keys is generated."""

    prefix: str
    count: int
    validity_days: int
    unit_price: Decimal
    created_by: str

    @property
    def aggregate_id(self) -> str:
        return self.prefix


@dataclass(frozen=True)
class KeyActivated(DomainEvent):
    """Event raised when a key is activated."""

    key: str
    activation_date: date
    expires: date

    @property
    def aggregate_id(self) -> str:
        return mask_key(self.key)


@dataclass(frozen=True)
class KeysDeleted(DomainEvent):
    """
    Event raised when keys are deleted.

    scope is "key", "prefix" or "creator".
    """

    scope: str
    target: str
    count: int
    deleted_by: str

    @property
    def aggregate_id(self) -> str:
        return mask_key(self.target) if self.scope == "key" else self.target

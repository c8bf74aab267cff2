"""
Account domain events.

Domain events represent something that happened to a moderator account.
"""

import uuid
from dataclasses import dataclass
from decimal import Decimal

from core.domain.events import DomainEvent


@dataclass(frozen=True)
class ModeratorCreated(DomainEvent):
    """Event raised when a moderator account is created."""

    moderator_id: uuid.UUID
    username: str

    @property
    def aggregate_id(self) -> str:
        return str(self.moderator_id)


@dataclass(frozen=True)
class ModeratorDeleted(DomainEvent):
    """Event raised when a moderator and their keys are deleted."""

    moderator_id: uuid.UUID
    username: str
    keys_deleted: int

    @property
    def aggregate_id(self) -> str:
        return str(self.moderator_id)


@dataclass(frozen=True)
class ModeratorDebtCharged(DomainEvent):
    """Event raised when key generation is charged to a moderator."""

    moderator_id: uuid.UUID
    amount: Decimal

    @property
    def aggregate_id(self) -> str:
        return str(self.moderator_id)


@dataclass(frozen=True)
class ModeratorDebtCleared(DomainEvent):
    """Event raised when an admin clears a moderator's debt."""

    moderator_id: uuid.UUID
    cleared_by: str

    @property
    def aggregate_id(self) -> str:
        return str(self.moderator_id)

"""
Account DTOs for API responses.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from accounts.domain.moderator import Moderator
from core.domain.value_objects import Identity


@dataclass
class ModeratorDTO:
    """DTO for moderator account information."""

    id: uuid.UUID
    username: str
    debt: Decimal
    created_at: datetime

    @classmethod
    def from_entity(cls, moderator: Moderator) -> "ModeratorDTO":
        return cls(
            id=moderator.id,
            username=moderator.username,
            debt=moderator.debt,
            created_at=moderator.created_at,
        )


@dataclass
class AccountResultDTO:
    """DTO for a moderator management operation."""

    success: bool
    message: str
    code: str
    moderator: Optional[ModeratorDTO] = None
    keys_deleted: int = 0


@dataclass
class LoginResultDTO:
    """DTO for a successful login."""

    identity: Identity
    token: str


@dataclass
class IdentityDTO:
    """DTO for the current session identity."""

    role: str
    username: str
    account_id: Optional[uuid.UUID] = None
    debt: Optional[Decimal] = None

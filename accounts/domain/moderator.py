"""
Moderator domain entity.

Moderators are stored accounts that generate keys and accrue debt.
The admin is configured out-of-band and has no entity.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from django.contrib.auth.hashers import check_password, make_password
from django.utils import timezone

from core.domain.value_objects import Identity, Role

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 150
PASSWORD_MIN_LENGTH = 6


@dataclass(frozen=True)
class Moderator:
    """
    Moderator domain entity.

    password_hash is a Django password hasher string; the raw
    password is never stored on the entity.
    """

    id: uuid.UUID
    username: str
    password_hash: str
    debt: Decimal
    created_at: datetime
    role: Role = Role.MODERATOR

    def __post_init__(self):
        """Validate moderator entity."""
        if not self.username or len(self.username) < USERNAME_MIN_LENGTH:
            raise ValueError(f"Username must be at least {USERNAME_MIN_LENGTH} characters")
        if len(self.username) > USERNAME_MAX_LENGTH:
            raise ValueError(f"Username must be at most {USERNAME_MAX_LENGTH} characters")
        if self.debt < 0:
            raise ValueError("Debt cannot be negative")
        if self.role != Role.MODERATOR:
            raise ValueError("Stored accounts must be moderators")

    @classmethod
    def create(
        cls,
        username: str,
        password: str,
        moderator_id: Optional[uuid.UUID] = None,
    ) -> "Moderator":
        """
        Create a new Moderator entity with zero debt.

        Args:
            username: Unique login name
            password: Raw password (hashed here)
            moderator_id: Optional UUID (generated if not provided)

        Returns:
            Moderator entity instance

        Raises:
            ValueError: If username or password is too short
        """
        if not password or len(password) < PASSWORD_MIN_LENGTH:
            raise ValueError(f"Password must be at least {PASSWORD_MIN_LENGTH} characters")
        return cls(
            id=moderator_id or uuid.uuid4(),
            username=username,
            password_hash=make_password(password),
            debt=Decimal("0.00"),
            created_at=timezone.now(),
        )

    def check_password(self, raw_password: str) -> bool:
        """
        Verify a raw password against the stored hash.

        Args:
            raw_password: Password to verify

        Returns:
            True if password matches, False otherwise
        """
        return check_password(raw_password, self.password_hash)

    def to_identity(self) -> Identity:
        return Identity.moderator(self.username, self.id)

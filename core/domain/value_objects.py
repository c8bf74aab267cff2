"""
Value objects for the domain.

Value objects are immutable objects that are defined by their attributes
rather than their identity. They have no identity and are compared by value.
"""
import uuid
from abc import ABC
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum
from typing import Any, Dict, Optional

# 100 years; stands in for "unlimited" validity.
UNLIMITED_VALIDITY_DAYS = 36500

KEY_PREFIX_MAX_LENGTH = 10

MONEY_QUANTUM = Decimal("0.01")

# Largest amount a 12-digit, 2-place money column holds
MAX_MONEY = Decimal("9999999999.99")


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for value objects.

    Value objects are immutable and compared by value.
    """

    def __eq__(self, other):
        """Compare value objects by their attributes."""
        if not isinstance(other, self.__class__):
            return False
        return self.__dict__ == other.__dict__

    def __hash__(self):
        """Make value objects hashable."""
        return hash(tuple(sorted(self.__dict__.items())))


@dataclass(frozen=True)
class KeyPrefix(ValueObject):
    """Key prefix value object."""

    value: str

    def __post_init__(self):
        """Validate prefix format."""
        if not self.value or not self.value.strip():
            raise ValueError("Prefix is required")
        if self.value != self.value.strip():
            raise ValueError("Prefix cannot start or end with whitespace")
        if len(self.value) > KEY_PREFIX_MAX_LENGTH:
            raise ValueError(f"Prefix must be at most {KEY_PREFIX_MAX_LENGTH} characters")

    def __str__(self) -> str:
        """Return prefix as string."""
        return self.value


class Role(Enum):
    """Caller role."""

    ADMIN = "admin"
    MODERATOR = "moderator"

    def __str__(self) -> str:
        """Return role as string."""
        return self.value


class KeyStatus(Enum):
    """Lifecycle state of a key."""

    UNACTIVATED = "unactivated"
    ACTIVE = "active"
    EXPIRED = "expired"

    def __str__(self) -> str:
        """Return status as string."""
        return self.value


@dataclass(frozen=True)
class Identity(ValueObject):
    """
    Authenticated caller.

    Either the configured admin (no account) or a stored moderator
    identified by its account id.
    """

    role: Role
    username: str
    account_id: Optional[uuid.UUID] = None

    def __post_init__(self):
        """Validate identity variant."""
        if not self.username:
            raise ValueError("Identity username cannot be empty")
        if self.role == Role.MODERATOR and self.account_id is None:
            raise ValueError("Moderator identity requires an account id")
        if self.role == Role.ADMIN and self.account_id is not None:
            raise ValueError("Admin identity cannot carry an account id")

    @classmethod
    def admin(cls, username: str) -> "Identity":
        """Build the admin identity."""
        return cls(role=Role.ADMIN, username=username)

    @classmethod
    def moderator(cls, username: str, account_id: uuid.UUID) -> "Identity":
        """Build a moderator identity."""
        return cls(role=Role.MODERATOR, username=username, account_id=account_id)

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    @property
    def is_moderator(self) -> bool:
        return self.role == Role.MODERATOR

    def to_payload(self) -> Dict[str, Any]:
        """Serialize for the session token."""
        return {
            "role": self.role.value,
            "username": self.username,
            "account_id": str(self.account_id) if self.account_id else None,
        }

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "Identity":
        """
        Rebuild an identity from a session token payload.

        Raises:
            ValueError: If the payload is malformed
        """
        if not isinstance(payload, dict):
            raise ValueError("Session payload must be an object")
        role = Role(payload.get("role"))
        username = payload.get("username")
        if not isinstance(username, str):
            raise ValueError("Session payload has no username")
        account_id = payload.get("account_id")
        return cls(
            role=role,
            username=username,
            account_id=uuid.UUID(account_id) if account_id else None,
        )

    def __str__(self) -> str:
        return f"{self.role.value}:{self.username}"


def to_money(value) -> Decimal:
    """
    Convert a number or numeric string to a two-place Decimal.

    Raises:
        ValueError: If the value is not a finite number
    """
    if isinstance(value, bool):
        raise ValueError("Amount must be a number")
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation as e:
        raise ValueError(f"Amount must be a number: {value!r}") from e
    if not amount.is_finite():
        raise ValueError(f"Amount must be finite: {value!r}")
    try:
        return amount.quantize(MONEY_QUANTUM, rounding=ROUND_HALF_UP)
    except InvalidOperation as e:
        raise ValueError(f"Amount is too large: {value!r}") from e

"""
Key domain entity.

This is the core domain entity representing a license key.
It carries the lifecycle state machine (unactivated -> active -> expired)
and is independent of infrastructure.
"""

import secrets
from dataclasses import dataclass, replace
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Optional

from django.utils import timezone

from core.domain.exceptions import (
    KeyAlreadyActiveError,
    KeyExpiredError,
    KeyNotActivatedError,
)
from core.domain.value_objects import UNLIMITED_VALIDITY_DAYS, KeyPrefix, KeyStatus

KEY_SUFFIX_BYTES = 16


def generate_key_string(prefix: str) -> str:
    """
    Generate a key in format: PREFIX-<32 uppercase hex chars>.

    Args:
        prefix: Key prefix (e.g., 'TRIAL')

    Returns:
        Generated key string
    """
    return f"{prefix}-{secrets.token_hex(KEY_SUFFIX_BYTES).upper()}"


def mask_key(key: str) -> str:
    """Shorten a key for log output."""
    if len(key) <= 12:
        return key
    return f"{key[:-8]}****{key[-4:]}"


def format_validity(validity_days: int) -> str:
    """
    Human-readable validity.

    Examples: "Unlimited", "2 Year(s)", "1.5 Year(s)", "30 Day(s)".
    """
    if validity_days >= UNLIMITED_VALIDITY_DAYS:
        return "Unlimited"
    if validity_days >= 365:
        years = round(validity_days / 365, 1)
        return f"{years:g} Year(s)"
    return f"{validity_days} Day(s)"


@dataclass(frozen=True)
class Key:
    """
    Key domain entity.

    A key is active iff both activation_date and expires are set.
    Instances are immutable; activate() returns the activated copy.
    """

    key: str
    prefix: str
    validity_days: int
    price: Decimal
    created_by: str
    created_at: datetime
    is_active: bool = False
    activation_date: Optional[date] = None
    expires: Optional[date] = None

    def __post_init__(self):
        """Validate key entity."""
        if not self.key or len(self.key.strip()) == 0:
            raise ValueError("Key cannot be empty")
        if self.validity_days < 1:
            raise ValueError("Validity must be at least 1 day")
        if self.price < 0:
            raise ValueError("Price cannot be negative")
        has_dates = self.activation_date is not None and self.expires is not None
        if self.is_active != has_dates:
            raise ValueError("Active keys must have activation and expiration dates")

    @classmethod
    def create(
        cls,
        prefix: str,
        validity_days: int,
        price: Decimal,
        created_by: str,
        created_at: Optional[datetime] = None,
    ) -> "Key":
        """
        Create a new, unactivated Key entity.

        Args:
            prefix: Key prefix
            validity_days: Requested validity in days
            price: Unit price charged for this key
            created_by: Username of the creator
            created_at: Optional creation time (defaults to now)

        Returns:
            Key entity instance
        """
        prefix = str(KeyPrefix(prefix))
        return cls(
            key=generate_key_string(prefix),
            prefix=prefix,
            validity_days=validity_days,
            price=price,
            created_by=created_by,
            created_at=created_at or timezone.now(),
        )

    @property
    def effective_validity_days(self) -> int:
        """Validity applied at activation, clamped to the unlimited sentinel."""
        return min(self.validity_days, UNLIMITED_VALIDITY_DAYS)

    @property
    def is_unlimited(self) -> bool:
        return self.validity_days >= UNLIMITED_VALIDITY_DAYS

    def activate(self, today: date) -> "Key":
        """
        Activate the key on the given calendar date.

        Args:
            today: Current business date

        Returns:
            Activated copy of the key

        Raises:
            KeyAlreadyActiveError: If the key was already activated
        """
        if self.is_active:
            raise KeyAlreadyActiveError()
        return replace(
            self,
            is_active=True,
            activation_date=today,
            expires=today + timedelta(days=self.effective_validity_days),
        )

    def check_validity(self, today: date) -> date:
        """
        Check that the key is usable on the given date.

        The expiration date itself is still valid.

        Args:
            today: Current business date

        Returns:
            Expiration date

        Raises:
            KeyNotActivatedError: If the key was never activated
            KeyExpiredError: If today is after the expiration date
        """
        if not self.is_active or self.expires is None:
            raise KeyNotActivatedError()
        if today > self.expires:
            raise KeyExpiredError()
        return self.expires

    def status(self, today: date) -> KeyStatus:
        """
        Derive lifecycle status for display.

        Args:
            today: Current business date

        Returns:
            KeyStatus
        """
        if not self.is_active or self.expires is None:
            return KeyStatus.UNACTIVATED
        if today > self.expires:
            return KeyStatus.EXPIRED
        return KeyStatus.ACTIVE

    @property
    def validity_display(self) -> str:
        return format_validity(self.validity_days)

"""
PriceTier domain entity.

A price tier maps a validity duration (in days) to the unit price
charged to moderators for each key of that duration.
"""
from dataclasses import dataclass
from decimal import Decimal

from core.domain.value_objects import MAX_MONEY, UNLIMITED_VALIDITY_DAYS, to_money

# Tiers offered by the dashboard; unset tiers price at 0.
STANDARD_TIERS = (1, 7, 30, 90, 365, UNLIMITED_VALIDITY_DAYS)

FREE = Decimal("0.00")


@dataclass(frozen=True)
class PriceTier:
    """PriceTier domain entity."""

    validity_days: int
    price: Decimal

    def __post_init__(self):
        """Validate price tier."""
        if isinstance(self.validity_days, bool) or not isinstance(self.validity_days, int):
            raise ValueError("Validity must be an integer number of days")
        if self.validity_days < 1:
            raise ValueError("Validity must be at least 1 day")
        if self.price < 0:
            raise ValueError("Price cannot be negative")
        if self.price > MAX_MONEY:
            raise ValueError(f"Price cannot exceed {MAX_MONEY}")

    @classmethod
    def parse(cls, validity_days, price) -> "PriceTier":
        """
        Build a tier from untrusted input.

        Accepts numbers or numeric strings for both fields.

        Args:
            validity_days: Tier duration in days
            price: Unit price

        Returns:
            PriceTier entity

        Raises:
            ValueError: If either value is missing, non-numeric or out of range
        """
        if isinstance(validity_days, bool) or validity_days is None:
            raise ValueError("Validity must be an integer number of days")
        if isinstance(validity_days, float) and not validity_days.is_integer():
            raise ValueError("Validity must be an integer number of days")
        try:
            days = int(str(validity_days).strip()) if isinstance(validity_days, str) else int(validity_days)
        except (TypeError, ValueError) as e:
            raise ValueError(f"Validity must be an integer number of days: {validity_days!r}") from e
        if price is None:
            raise ValueError("Price is required")
        return cls(validity_days=days, price=to_money(price))

    @property
    def is_standard(self) -> bool:
        return self.validity_days in STANDARD_TIERS

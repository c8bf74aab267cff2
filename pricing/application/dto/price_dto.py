"""
Pricing DTOs for API responses.
"""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, List


@dataclass
class PriceTierDTO:
    """DTO for one price tier."""

    validity_days: int
    validity_display: str
    price: Decimal
    configured: bool


@dataclass
class SkippedPriceDTO:
    """DTO for an upsert entry that was rejected."""

    validity_days: Any
    price: Any
    reason: str


@dataclass
class UpsertPricesResultDTO:
    """DTO for a bulk price upsert."""

    success: bool
    applied: int
    message: str
    skipped: List[SkippedPriceDTO] = field(default_factory=list)

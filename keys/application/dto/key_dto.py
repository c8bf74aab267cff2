"""
Key DTOs for API responses.
"""
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from core.domain.exceptions import KeyException
from keys.domain.key import format_validity


@dataclass
class KeyDTO:
    """DTO for a key as listed on the dashboard."""

    key: str
    prefix: str
    validity_days: int
    validity_display: str
    price: Decimal
    is_active: bool
    activation_date: Optional[date]
    expires: Optional[date]
    status: str
    created_by: str
    created_at: datetime


@dataclass
class GeneratedKeyDTO:
    """DTO for one freshly generated key."""

    key: str
    validity_days: int
    price: Decimal

    @property
    def validity_display(self) -> str:
        return format_validity(self.validity_days)


@dataclass
class GenerateKeysResultDTO:
    """DTO for a generated batch."""

    prefix: str
    validity_days: int
    unit_price: Decimal
    total_cost: Decimal
    keys: List[GeneratedKeyDTO] = field(default_factory=list)

    @property
    def filename(self) -> str:
        return f"{self.prefix}_keys.txt"

    def to_text(self) -> str:
        """Render the batch as the downloadable text file."""
        return "\n".join(f"{item.key}\t{item.validity_display}" for item in self.keys)


@dataclass
class ActivationResultDTO:
    """DTO for an activation attempt."""

    success: bool
    message: str
    code: str
    expires: Optional[date] = None

    @classmethod
    def failure(cls, error: KeyException) -> "ActivationResultDTO":
        return cls(success=False, message=error.message, code=error.code)


@dataclass
class VerificationResultDTO:
    """DTO for a verification check."""

    valid: bool
    message: str
    code: str
    expires: Optional[date] = None

    @classmethod
    def failure(cls, error: KeyException) -> "VerificationResultDTO":
        return cls(valid=False, message=error.message, code=error.code)


@dataclass
class DeletionResultDTO:
    """DTO for a delete by key or by prefix."""

    success: bool
    deleted: int
    message: str
    code: str

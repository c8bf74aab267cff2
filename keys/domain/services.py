"""
Key domain services.

Domain services contain business logic that doesn't naturally
fit in a single entity.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from django.utils import timezone

from core.domain.exceptions import ValidationError
from core.domain.value_objects import KeyPrefix
from keys.domain.key import Key

MAX_BATCH_SIZE = 100

# Largest value the validity_days integer column holds
MAX_VALIDITY_DAYS = 2**31 - 1


class KeyBatchFactory:
    """
    Domain service for building key batches.

    Validates generation input and builds the unactivated Key entities
    of one batch. Keys are not persisted here.
    """

    @staticmethod
    def normalize_prefix(prefix) -> str:
        """
        Trim and validate a key prefix.

        Raises:
            ValidationError: If the prefix is empty or too long
        """
        if not isinstance(prefix, str):
            raise ValidationError("Prefix is required")
        try:
            return str(KeyPrefix(prefix.strip()))
        except ValueError as e:
            raise ValidationError(str(e)) from e

    @staticmethod
    def validate(prefix, count, validity_days) -> str:
        """
        Validate a generation request.

        Args:
            prefix: Requested prefix
            count: Number of keys (1..MAX_BATCH_SIZE)
            validity_days: Validity in days (1..MAX_VALIDITY_DAYS)

        Returns:
            Normalized prefix

        Raises:
            ValidationError: If any input is out of range
        """
        normalized = KeyBatchFactory.normalize_prefix(prefix)
        if isinstance(count, bool) or not isinstance(count, int):
            raise ValidationError("Count must be an integer")
        if count < 1 or count > MAX_BATCH_SIZE:
            raise ValidationError(f"Count must be between 1 and {MAX_BATCH_SIZE}")
        if isinstance(validity_days, bool) or not isinstance(validity_days, int):
            raise ValidationError("Validity must be an integer number of days")
        if validity_days < 1:
            raise ValidationError("Validity must be at least 1 day")
        if validity_days > MAX_VALIDITY_DAYS:
            raise ValidationError(f"Validity must be at most {MAX_VALIDITY_DAYS} days")
        return normalized

    @staticmethod
    def build(
        prefix: str,
        count: int,
        validity_days: int,
        unit_price: Decimal,
        created_by: str,
        created_at: Optional[datetime] = None,
    ) -> List[Key]:
        """
        Build a batch of unactivated keys sharing one creation time.

        Args:
            prefix: Normalized prefix
            count: Number of keys
            validity_days: Validity in days
            unit_price: Price recorded on every key
            created_by: Creator username
            created_at: Optional creation time

        Returns:
            List of Key entities
        """
        created_at = created_at or timezone.now()
        return [
            Key.create(
                prefix=prefix,
                validity_days=validity_days,
                price=unit_price,
                created_by=created_by,
                created_at=created_at,
            )
            for _ in range(count)
        ]

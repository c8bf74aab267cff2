"""
Django implementation of LedgerRepository port.

Every mutation is a single UPDATE with an F() expression, so concurrent
charges never lose an increment.
"""
import uuid
from decimal import Decimal
from typing import Optional

from asgiref.sync import sync_to_async
from django.db.models import DecimalField, F, Value
from django.db.models.functions import Greatest

from accounts.infrastructure.models import Moderator as ModeratorModel
from accounts.ports.ledger_repository import LedgerRepository
from core.domain.exceptions import ValidationError
from core.domain.value_objects import MAX_MONEY
from core.infrastructure.database import translate_storage_errors


class DjangoLedgerRepository(LedgerRepository):
    """Django ORM implementation of LedgerRepository."""

    @sync_to_async
    @translate_storage_errors
    def charge(self, moderator_id: uuid.UUID, amount: Decimal) -> bool:
        """
        Atomically add an amount to a moderator's debt.

        Args:
            moderator_id: Moderator UUID
            amount: Non-negative amount (may be 0)

        Returns:
            True if the moderator exists, False otherwise

        Raises:
            ValidationError: If the new debt would exceed MAX_MONEY
        """
        if amount < 0:
            raise ValueError("Charge amount cannot be negative")
        updated = ModeratorModel.objects.filter(id=moderator_id, debt__lte=MAX_MONEY - amount).update(
            debt=F("debt") + amount
        )
        if updated:
            return True
        if ModeratorModel.objects.filter(id=moderator_id).exists():
            raise ValidationError(f"Debt cannot exceed {MAX_MONEY}; clear it before generating more keys")
        return False

    @sync_to_async
    @translate_storage_errors
    def refund(self, moderator_id: uuid.UUID, amount: Decimal) -> bool:
        """Atomically subtract a previous charge, never going below 0."""
        updated = ModeratorModel.objects.filter(id=moderator_id).update(
            debt=Greatest(
                F("debt") - amount,
                Value(Decimal("0.00")),
                output_field=DecimalField(max_digits=12, decimal_places=2),
            )
        )
        return updated == 1

    @sync_to_async
    @translate_storage_errors
    def clear(self, moderator_id: uuid.UUID) -> bool:
        """Atomically set a moderator's debt to 0."""
        updated = ModeratorModel.objects.filter(id=moderator_id).update(debt=Decimal("0.00"))
        return updated == 1

    @sync_to_async
    @translate_storage_errors
    def get_debt(self, moderator_id: uuid.UUID) -> Optional[Decimal]:
        """Read the current debt."""
        return (
            ModeratorModel.objects.filter(id=moderator_id)
            .values_list("debt", flat=True)
            .first()
        )

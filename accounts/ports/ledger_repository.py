"""
Ledger repository port (interface).

Moderator debt is only ever changed through atomic storage-level
operations defined here; callers never read-modify-write it.
"""
import uuid
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Optional


class LedgerRepository(ABC):
    """Abstract repository for moderator debt balances."""

    @abstractmethod
    async def charge(self, moderator_id: uuid.UUID, amount: Decimal) -> bool:
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
        pass

    @abstractmethod
    async def refund(self, moderator_id: uuid.UUID, amount: Decimal) -> bool:
        """
        Atomically subtract a previous charge, never going below 0.

        Used only to compensate a charge whose keys could not be stored;
        the debt may have been cleared in between.

        Returns:
            True if the moderator exists, False otherwise
        """
        pass

    @abstractmethod
    async def clear(self, moderator_id: uuid.UUID) -> bool:
        """
        Atomically set a moderator's debt to 0.

        Returns:
            True if the moderator exists, False otherwise
        """
        pass

    @abstractmethod
    async def get_debt(self, moderator_id: uuid.UUID) -> Optional[Decimal]:
        """
        Read the current debt.

        Returns:
            Debt, or None if the moderator does not exist
        """
        pass

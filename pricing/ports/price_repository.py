"""
Price repository port (interface).

This defines the contract for price tier persistence operations.
Implementations are in the infrastructure layer.
"""
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import List

from pricing.domain.price_tier import PriceTier


class PriceRepository(ABC):
    """
    Abstract repository for PriceTier entities.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    """

    @abstractmethod
    async def price_for(self, validity_days: int) -> Decimal:
        """
        Get the unit price for a validity tier.

        Args:
            validity_days: Tier duration in days

        Returns:
            Configured price, or 0 when the tier is not configured
        """
        pass

    @abstractmethod
    async def upsert(self, tiers: List[PriceTier]) -> int:
        """
        Create or overwrite tiers.

        Args:
            tiers: Validated price tiers

        Returns:
            Number of tiers written
        """
        pass

    @abstractmethod
    async def list_all(self) -> List[PriceTier]:
        """
        List configured tiers ordered by validity.

        Returns:
            List of PriceTier entities
        """
        pass

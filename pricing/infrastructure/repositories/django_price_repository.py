"""
Django implementation of PriceRepository port.

This adapter converts between domain entities and Django ORM models.
"""
from decimal import Decimal
from typing import List

from asgiref.sync import sync_to_async
from django.db import transaction

from core.infrastructure.database import translate_storage_errors
from pricing.domain.price_tier import FREE, PriceTier
from pricing.infrastructure.models import Price as PriceModel
from pricing.ports.price_repository import PriceRepository


class DjangoPriceRepository(PriceRepository):
    """Django ORM implementation of PriceRepository."""

    def _to_domain(self, model: PriceModel) -> PriceTier:
        """
        Convert Django model to domain entity.

        Args:
            model: Django Price model

        Returns:
            PriceTier domain entity
        """
        return PriceTier(validity_days=model.validity_days, price=model.price)

    @sync_to_async
    @translate_storage_errors
    def price_for(self, validity_days: int) -> Decimal:
        """
        Get the unit price for a validity tier.

        Args:
            validity_days: Tier duration in days

        Returns:
            Configured price, or 0 when the tier is not configured
        """
        price = (
            PriceModel.objects.filter(validity_days=validity_days)
            .values_list("price", flat=True)
            .first()
        )
        return FREE if price is None else price

    @sync_to_async
    @translate_storage_errors
    def upsert(self, tiers: List[PriceTier]) -> int:
        """
        Create or overwrite tiers in one transaction.

        Args:
            tiers: Validated price tiers

        Returns:
            Number of tiers written
        """
        with transaction.atomic():
            for tier in tiers:
                PriceModel.objects.update_or_create(
                    validity_days=tier.validity_days,
                    defaults={"price": tier.price},
                )
        return len(tiers)

    @sync_to_async
    @translate_storage_errors
    def list_all(self) -> List[PriceTier]:
        """
        List configured tiers ordered by validity.

        Returns:
            List of PriceTier entities
        """
        return [self._to_domain(model) for model in PriceModel.objects.order_by("validity_days")]

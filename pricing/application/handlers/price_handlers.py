"""
Price table handlers.
"""

import logging
from typing import List

from accounts.domain.services import AccessPolicy
from core.infrastructure.events import event_bus
from keys.domain.key import format_validity
from pricing.application.commands.upsert_prices import UpsertPricesCommand
from pricing.application.dto.price_dto import PriceTierDTO, SkippedPriceDTO, UpsertPricesResultDTO
from pricing.application.queries.list_prices import ListPricesQuery
from pricing.domain.events import PricesUpdated
from pricing.domain.price_tier import FREE, STANDARD_TIERS, PriceTier
from pricing.ports.price_repository import PriceRepository

logger = logging.getLogger(__name__)


class UpsertPricesHandler:
    """Handler for UpsertPricesCommand."""

    def __init__(self, price_repository: PriceRepository):
        """Initialize handler with repository."""
        self.price_repository = price_repository

    async def handle(self, command: UpsertPricesCommand) -> UpsertPricesResultDTO:
        """
        Handle upsert prices command.

        Invalid entries (missing, non-numeric or negative price, validity
        below 1) are skipped and reported; valid entries are still written.
        When the same tier appears twice the last entry wins.

        Args:
            command: UpsertPricesCommand

        Returns:
            UpsertPricesResultDTO

        Raises:
            PermissionDeniedError: If the requester is not the admin
            StorageError: If the store fails
        """
        requester = AccessPolicy.require_admin(command.requester)

        tiers = {}
        skipped = []
        for entry in command.entries:
            validity_days = entry.get("validity_days") if isinstance(entry, dict) else None
            price = entry.get("price") if isinstance(entry, dict) else None
            try:
                tier = PriceTier.parse(validity_days, price)
            except ValueError as e:
                logger.warning("Skipping invalid price data: %s=%s (%s)", validity_days, price, e)
                skipped.append(SkippedPriceDTO(validity_days=validity_days, price=price, reason=str(e)))
                continue
            tiers[tier.validity_days] = tier

        applied = await self.price_repository.upsert(list(tiers.values())) if tiers else 0

        logger.info("Prices updated by %s: %d applied, %d skipped", requester, applied, len(skipped))
        await event_bus.publish(
            PricesUpdated(applied=applied, skipped=len(skipped), updated_by=requester.username)
        )
        return UpsertPricesResultDTO(
            success=True,
            applied=applied,
            message="Prices updated successfully.",
            skipped=skipped,
        )


class ListPricesHandler:
    """Handler for ListPricesQuery."""

    def __init__(self, price_repository: PriceRepository):
        """Initialize handler with repository."""
        self.price_repository = price_repository

    async def handle(self, query: ListPricesQuery) -> List[PriceTierDTO]:
        """
        Handle list prices query.

        Standard tiers are always listed, at price 0 when not configured;
        any other configured tier is listed too.

        Returns:
            List of PriceTierDTO sorted by validity
        """
        AccessPolicy.require_authenticated(query.requester)
        configured = {tier.validity_days: tier.price for tier in await self.price_repository.list_all()}
        all_days = sorted(set(STANDARD_TIERS) | set(configured))
        return [
            PriceTierDTO(
                validity_days=days,
                validity_display=format_validity(days),
                price=configured.get(days, FREE),
                configured=days in configured,
            )
            for days in all_days
        ]

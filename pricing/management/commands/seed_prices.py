"""
Django management command to seed the standard price tiers.

Creates every standard tier (1, 7, 30, 90, 365 days and unlimited) that
is not configured yet. Existing tiers are left alone unless --overwrite
is given.
"""

import logging

from asgiref.sync import async_to_sync
from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from core.domain.value_objects import Identity
from keys.domain.key import format_validity
from pricing.application.commands.upsert_prices import UpsertPricesCommand
from pricing.application.handlers.price_handlers import UpsertPricesHandler
from pricing.domain.price_tier import STANDARD_TIERS
from pricing.infrastructure.repositories.django_price_repository import DjangoPriceRepository

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    """Command to seed price tiers."""

    help = "Create the standard price tiers (optionally at a given price)"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument(
            "--price",
            type=str,
            default="0",
            help="Unit price for each seeded tier (default: 0)",
        )
        parser.add_argument(
            "--overwrite",
            action="store_true",
            help="Also reset tiers that are already configured",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        result, seeded = async_to_sync(self.seed)(options["price"], options["overwrite"])

        if result is None:
            # pylint: disable=no-member
            self.stdout.write(self.style.WARNING("All standard tiers are already configured"))
            return
        if result.skipped:
            raise CommandError(f"Invalid price: {result.skipped[0].reason}")

        for days in seeded:
            self.stdout.write(f"   {format_validity(days)}: {options['price']}")
        # pylint: disable=no-member
        self.stdout.write(self.style.SUCCESS(f"Seeded {result.applied} price tier(s)"))

    async def seed(self, price: str, overwrite: bool):
        """Upsert the standard tiers that need seeding."""
        repository = DjangoPriceRepository()
        if overwrite:
            seeded = list(STANDARD_TIERS)
        else:
            configured = {tier.validity_days for tier in await repository.list_all()}
            seeded = [days for days in STANDARD_TIERS if days not in configured]
        if not seeded:
            return None, seeded

        handler = UpsertPricesHandler(price_repository=repository)
        result = await handler.handle(
            UpsertPricesCommand(
                requester=Identity.admin(settings.ADMIN_USERNAME),
                entries=[{"validity_days": days, "price": price} for days in seeded],
            )
        )
        return result, seeded

"""
GenerateKeysHandler.

Handler for generating a batch of keys, charging moderators per key.
"""

import logging
from decimal import Decimal

from accounts.domain.events import ModeratorDebtCharged
from accounts.domain.services import AccessPolicy
from accounts.ports.ledger_repository import LedgerRepository
from core.domain.exceptions import ModeratorNotFoundError, StorageError, ValidationError
from core.domain.value_objects import MAX_MONEY, MONEY_QUANTUM, Identity
from core.infrastructure.events import event_bus
from core.metrics import keys_generated_total, moderator_debt_charged_total
from keys.application.commands.generate_keys import GenerateKeysCommand
from keys.application.dto.key_dto import GeneratedKeyDTO, GenerateKeysResultDTO
from keys.domain.events import KeysGenerated
from keys.domain.services import KeyBatchFactory
from keys.ports.key_repository import KeyRepository
from pricing.domain.price_tier import FREE
from pricing.ports.price_repository import PriceRepository

logger = logging.getLogger(__name__)


class GenerateKeysHandler:
    """Handler for GenerateKeysCommand."""

    def __init__(
        self,
        key_repository: KeyRepository,
        price_repository: PriceRepository,
        ledger_repository: LedgerRepository,
    ):
        """Initialize handler with repositories."""
        self.key_repository = key_repository
        self.price_repository = price_repository
        self.ledger_repository = ledger_repository

    async def handle(self, command: GenerateKeysCommand) -> GenerateKeysResultDTO:
        """
        Handle generate keys command.

        Moderators are charged count * tier price before the keys are
        written; the admin is never charged. If the keys cannot be written
        the charge is refunded.

        Args:
            command: GenerateKeysCommand

        Returns:
            GenerateKeysResultDTO with the new keys and total cost

        Raises:
            ValidationError: If prefix, count or validity is out of range, the
                total cost is too large, or the charge would exceed the debt limit
            AuthenticationError: If there is no requester
            ModeratorNotFoundError: If the moderator account no longer exists
            StorageError: If the store fails
        """
        requester = AccessPolicy.require_authenticated(command.requester)
        prefix = KeyBatchFactory.validate(command.prefix, command.count, command.validity_days)

        if requester.is_moderator:
            unit_price = await self.price_repository.price_for(command.validity_days)
        else:
            unit_price = FREE
        unit_price = Decimal(unit_price).quantize(MONEY_QUANTUM)
        total_cost = (unit_price * command.count).quantize(MONEY_QUANTUM)
        if total_cost > MAX_MONEY:
            raise ValidationError(f"Total cost cannot exceed {MAX_MONEY}")

        keys = KeyBatchFactory.build(
            prefix=prefix,
            count=command.count,
            validity_days=command.validity_days,
            unit_price=unit_price,
            created_by=requester.username,
        )

        if requester.is_moderator:
            await self._charge(requester, total_cost)

        try:
            saved = await self.key_repository.save_all(keys)
        except StorageError:
            if requester.is_moderator:
                await self._refund(requester, total_cost)
            raise

        keys_generated_total.labels(role=requester.role.value).inc(len(saved))
        logger.info(
            "Generated %d key(s) with prefix %s for %s",
            len(saved),
            prefix,
            requester,
            extra={"prefix": prefix, "count": len(saved), "total_cost": str(total_cost)},
        )

        await event_bus.publish(
            KeysGenerated(
                prefix=prefix,
                count=len(saved),
                validity_days=command.validity_days,
                unit_price=unit_price,
                created_by=requester.username,
            )
        )

        return GenerateKeysResultDTO(
            prefix=prefix,
            validity_days=command.validity_days,
            unit_price=unit_price,
            total_cost=total_cost,
            keys=[
                GeneratedKeyDTO(key=key.key, validity_days=key.validity_days, price=key.price)
                for key in saved
            ],
        )

    async def _charge(self, requester: Identity, total_cost: Decimal) -> None:
        if not await self.ledger_repository.charge(requester.account_id, total_cost):
            logger.warning("Moderator %s no longer exists; no keys generated", requester)
            raise ModeratorNotFoundError()
        moderator_debt_charged_total.inc(float(total_cost))
        await event_bus.publish(
            ModeratorDebtCharged(moderator_id=requester.account_id, amount=total_cost)
        )

    async def _refund(self, requester: Identity, total_cost: Decimal) -> None:
        try:
            await self.ledger_repository.refund(requester.account_id, total_cost)
        except StorageError:
            logger.error(
                "Could not refund %s to %s after a failed key insert",
                total_cost,
                requester,
                exc_info=True,
            )
            return
        logger.warning("Refunded %s to %s after a failed key insert", total_cost, requester)

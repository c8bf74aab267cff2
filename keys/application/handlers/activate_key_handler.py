"""
ActivateKeyHandler.

Handler for one-shot key activation.
"""

import logging

from core.domain.exceptions import (
    KeyAlreadyActiveError,
    KeyException,
    KeyNotFoundError,
    ValidationError,
)
from core.infrastructure.events import event_bus
from core.metrics import key_activation_failures_total, keys_activated_total
from core.ports.time_source import TimeSource
from keys.application.commands.activate_key import ActivateKeyCommand
from keys.application.dto.key_dto import ActivationResultDTO
from keys.domain.events import KeyActivated
from keys.domain.key import mask_key
from keys.ports.key_repository import KeyRepository

logger = logging.getLogger(__name__)

ACTIVATED_MESSAGE = "Key activated successfully."


class ActivateKeyHandler:
    """Handler for ActivateKeyCommand."""

    def __init__(self, key_repository: KeyRepository, time_source: TimeSource):
        """Initialize handler with repository and clock."""
        self.key_repository = key_repository
        self.time_source = time_source

    async def handle(self, command: ActivateKeyCommand) -> ActivationResultDTO:
        """
        Handle activate key command.

        The key is written with a conditional update, so of two
        concurrent activations exactly one succeeds.

        Args:
            command: ActivateKeyCommand

        Returns:
            ActivationResultDTO; failures carry KEY_NOT_FOUND or
            KEY_ALREADY_ACTIVE

        Raises:
            ValidationError: If no key was given
            StorageError: If the store fails
        """
        if not command.key:
            raise ValidationError("Key is required")

        try:
            key = await self.key_repository.find_by_key(command.key)
            if key is None:
                raise KeyNotFoundError()
            today = await self.time_source.today()
            activated = key.activate(today)
            won = await self.key_repository.mark_activated(
                activated.key, activated.activation_date, activated.expires
            )
            if not won:
                raise KeyAlreadyActiveError()
        except KeyException as e:
            key_activation_failures_total.labels(reason=e.code).inc()
            logger.info("Activation of %s rejected: %s", mask_key(command.key), e.code)
            return ActivationResultDTO.failure(e)

        keys_activated_total.inc()
        logger.info(
            "Activated %s until %s",
            mask_key(activated.key),
            activated.expires.isoformat(),
        )
        await event_bus.publish(
            KeyActivated(
                key=activated.key,
                activation_date=activated.activation_date,
                expires=activated.expires,
            )
        )
        return ActivationResultDTO(
            success=True,
            message=ACTIVATED_MESSAGE,
            code="KEY_ACTIVATED",
            expires=activated.expires,
        )

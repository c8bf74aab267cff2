"""
Key deletion handlers.

Moderators only reach keys they created; the owner filter is part of
the delete query, so another creator's key reads as not found.
"""

import logging

from accounts.domain.services import AccessPolicy
from core.domain.exceptions import KeyNotFoundError, ValidationError
from core.infrastructure.events import event_bus
from core.metrics import keys_deleted_total
from keys.application.commands.delete_keys import DeleteKeyCommand, DeleteKeysByPrefixCommand
from keys.application.dto.key_dto import DeletionResultDTO
from keys.domain.events import KeysDeleted
from keys.domain.key import mask_key
from keys.domain.services import KeyBatchFactory
from keys.ports.key_repository import KeyRepository

logger = logging.getLogger(__name__)


class DeleteKeyHandler:
    """Handler for DeleteKeyCommand."""

    def __init__(self, key_repository: KeyRepository):
        """Initialize handler with repository."""
        self.key_repository = key_repository

    async def handle(self, command: DeleteKeyCommand) -> DeletionResultDTO:
        """
        Handle delete key command.

        Args:
            command: DeleteKeyCommand

        Returns:
            DeletionResultDTO; success is False when nothing matched
        """
        requester = AccessPolicy.require_authenticated(command.requester)
        if not command.key:
            raise ValidationError("Key is required")

        deleted = await self.key_repository.delete_key(
            command.key, owner=AccessPolicy.key_owner_filter(requester)
        )
        if deleted == 0:
            error = KeyNotFoundError()
            return DeletionResultDTO(success=False, deleted=0, message=error.message, code=error.code)

        keys_deleted_total.labels(scope="key").inc(deleted)
        logger.info("Key %s deleted by %s", mask_key(command.key), requester)
        await event_bus.publish(
            KeysDeleted(scope="key", target=command.key, count=deleted, deleted_by=requester.username)
        )
        return DeletionResultDTO(
            success=True,
            deleted=deleted,
            message=f"Key {command.key} deleted.",
            code="KEY_DELETED",
        )


class DeleteKeysByPrefixHandler:
    """Handler for DeleteKeysByPrefixCommand."""

    def __init__(self, key_repository: KeyRepository):
        """Initialize handler with repository."""
        self.key_repository = key_repository

    async def handle(self, command: DeleteKeysByPrefixCommand) -> DeletionResultDTO:
        """
        Handle delete keys by prefix command.

        Only exact prefix matches are deleted. Zero matches is a
        successful result with deleted == 0.

        Args:
            command: DeleteKeysByPrefixCommand

        Returns:
            DeletionResultDTO
        """
        requester = AccessPolicy.require_authenticated(command.requester)
        prefix = KeyBatchFactory.normalize_prefix(command.prefix)

        deleted = await self.key_repository.delete_by_prefix(
            prefix, owner=AccessPolicy.key_owner_filter(requester)
        )
        if deleted:
            keys_deleted_total.labels(scope="prefix").inc(deleted)
            await event_bus.publish(
                KeysDeleted(scope="prefix", target=prefix, count=deleted, deleted_by=requester.username)
            )
        logger.info("%d key(s) with prefix %s deleted by %s", deleted, prefix, requester)
        return DeletionResultDTO(
            success=True,
            deleted=deleted,
            message=f'{deleted} keys with prefix "{prefix}" deleted.',
            code="KEYS_DELETED" if deleted else "NO_KEYS_MATCHED",
        )

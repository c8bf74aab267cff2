"""
Moderator management handlers.

All of these are admin-only except GetModeratorHandler, which also
lets a moderator read their own account, and WhoAmIHandler.
"""

import logging
from typing import List

from accounts.application.commands.moderator_commands import (
    ClearDebtCommand,
    CreateModeratorCommand,
    DeleteModeratorCommand,
)
from accounts.application.dto.account_dto import AccountResultDTO, IdentityDTO, ModeratorDTO
from accounts.application.queries.moderator_queries import (
    GetModeratorQuery,
    ListModeratorsQuery,
    WhoAmIQuery,
)
from accounts.domain.events import ModeratorCreated, ModeratorDebtCleared, ModeratorDeleted
from accounts.domain.moderator import Moderator
from accounts.domain.services import AccessPolicy
from accounts.ports.ledger_repository import LedgerRepository
from accounts.ports.moderator_repository import ModeratorRepository
from core.domain.exceptions import (
    AuthenticationError,
    ModeratorAlreadyExistsError,
    ModeratorNotFoundError,
    ValidationError,
)
from core.infrastructure.events import event_bus
from core.metrics import keys_deleted_total

logger = logging.getLogger(__name__)


class CreateModeratorHandler:
    """Handler for CreateModeratorCommand."""

    def __init__(self, moderator_repository: ModeratorRepository):
        """Initialize handler with repository."""
        self.moderator_repository = moderator_repository

    async def handle(self, command: CreateModeratorCommand) -> AccountResultDTO:
        """
        Handle create moderator command.

        Args:
            command: CreateModeratorCommand

        Returns:
            AccountResultDTO with the new moderator

        Raises:
            PermissionDeniedError: If the requester is not the admin
            ValidationError: If username or password is missing or too short
            ModeratorAlreadyExistsError: If the username is taken or is the admin's own username
        """
        requester = AccessPolicy.require_admin(command.requester)
        username = (command.username or "").strip()
        if not username or not command.password:
            raise ValidationError("Username and password are required.")
        # The admin's username is reserved: keys are owned by creator username
        if username == requester.username:
            raise ModeratorAlreadyExistsError()
        try:
            moderator = Moderator.create(username=username, password=command.password)
        except ValueError as e:
            raise ValidationError(str(e)) from e

        moderator = await self.moderator_repository.add(moderator)
        logger.info("Moderator %s created", moderator.username)
        await event_bus.publish(ModeratorCreated(moderator_id=moderator.id, username=moderator.username))
        return AccountResultDTO(
            success=True,
            message=f'Moderator "{moderator.username}" created successfully.',
            code="MODERATOR_CREATED",
            moderator=ModeratorDTO.from_entity(moderator),
        )


class DeleteModeratorHandler:
    """Handler for DeleteModeratorCommand."""

    def __init__(self, moderator_repository: ModeratorRepository):
        """Initialize handler with repository."""
        self.moderator_repository = moderator_repository

    async def handle(self, command: DeleteModeratorCommand) -> AccountResultDTO:
        """
        Handle delete moderator command.

        The account and every key whose creator is its username are
        removed together.

        Args:
            command: DeleteModeratorCommand

        Returns:
            AccountResultDTO; success is False if the moderator does not exist
        """
        requester = AccessPolicy.require_admin(command.requester)
        moderator = await self.moderator_repository.find_by_id(command.moderator_id)
        keys_deleted = None
        if moderator is not None:
            keys_deleted = await self.moderator_repository.delete_with_keys(moderator.id)
        if keys_deleted is None:
            error = ModeratorNotFoundError()
            return AccountResultDTO(success=False, message=error.message, code=error.code)

        if keys_deleted:
            keys_deleted_total.labels(scope="creator").inc(keys_deleted)
        logger.info(
            "Moderator %s deleted by %s with %d key(s)",
            moderator.username,
            requester,
            keys_deleted,
        )
        await event_bus.publish(
            ModeratorDeleted(
                moderator_id=moderator.id,
                username=moderator.username,
                keys_deleted=keys_deleted,
            )
        )
        return AccountResultDTO(
            success=True,
            message=f'Moderator "{moderator.username}" and all their keys have been deleted.',
            code="MODERATOR_DELETED",
            keys_deleted=keys_deleted,
        )


class ClearDebtHandler:
    """Handler for ClearDebtCommand."""

    def __init__(self, ledger_repository: LedgerRepository):
        """Initialize handler with repository."""
        self.ledger_repository = ledger_repository

    async def handle(self, command: ClearDebtCommand) -> AccountResultDTO:
        """
        Handle clear debt command.

        Args:
            command: ClearDebtCommand

        Returns:
            AccountResultDTO; success is False if the moderator does not exist
        """
        requester = AccessPolicy.require_admin(command.requester)
        if not await self.ledger_repository.clear(command.moderator_id):
            error = ModeratorNotFoundError()
            return AccountResultDTO(success=False, message=error.message, code=error.code)

        logger.info("Debt of moderator %s cleared by %s", command.moderator_id, requester)
        await event_bus.publish(
            ModeratorDebtCleared(moderator_id=command.moderator_id, cleared_by=requester.username)
        )
        return AccountResultDTO(success=True, message="Debt cleared successfully.", code="DEBT_CLEARED")


class ListModeratorsHandler:
    """Handler for ListModeratorsQuery."""

    def __init__(self, moderator_repository: ModeratorRepository):
        """Initialize handler with repository."""
        self.moderator_repository = moderator_repository

    async def handle(self, query: ListModeratorsQuery) -> List[ModeratorDTO]:
        AccessPolicy.require_admin(query.requester)
        moderators = await self.moderator_repository.list_all()
        return [ModeratorDTO.from_entity(moderator) for moderator in moderators]


class GetModeratorHandler:
    """Handler for GetModeratorQuery."""

    def __init__(self, moderator_repository: ModeratorRepository):
        """Initialize handler with repository."""
        self.moderator_repository = moderator_repository

    async def handle(self, query: GetModeratorQuery) -> ModeratorDTO:
        """
        Handle get moderator query.

        Raises:
            PermissionDeniedError: If a moderator asks for another account
            ModeratorNotFoundError: If the account does not exist
        """
        AccessPolicy.require_account_access(query.requester, query.moderator_id)
        moderator = await self.moderator_repository.find_by_id(query.moderator_id)
        if moderator is None:
            raise ModeratorNotFoundError()
        return ModeratorDTO.from_entity(moderator)


class WhoAmIHandler:
    """Handler for WhoAmIQuery."""

    def __init__(self, ledger_repository: LedgerRepository):
        """Initialize handler with repository."""
        self.ledger_repository = ledger_repository

    async def handle(self, query: WhoAmIQuery) -> IdentityDTO:
        """
        Describe the session identity; moderators also get their debt.

        Raises:
            AuthenticationError: If there is no identity, or the
                moderator account was deleted after login
        """
        identity = AccessPolicy.require_authenticated(query.requester)
        if identity.is_admin:
            return IdentityDTO(role=identity.role.value, username=identity.username)

        debt = await self.ledger_repository.get_debt(identity.account_id)
        if debt is None:
            raise AuthenticationError("Account no longer exists.")
        return IdentityDTO(
            role=identity.role.value,
            username=identity.username,
            account_id=identity.account_id,
            debt=debt,
        )

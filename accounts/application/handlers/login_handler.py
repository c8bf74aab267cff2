"""
LoginHandler.

Handler for dashboard login. The configured admin is checked first,
then stored moderators.
"""

import logging

from accounts.application.commands.login import LoginCommand
from accounts.application.dto.account_dto import LoginResultDTO
from accounts.domain.services import admin_credentials_match
from accounts.ports.moderator_repository import ModeratorRepository
from core.domain.exceptions import AuthenticationError
from core.domain.value_objects import Identity
from core.infrastructure.session import SessionSigner

logger = logging.getLogger(__name__)


class LoginHandler:
    """Handler for LoginCommand."""

    def __init__(
        self,
        moderator_repository: ModeratorRepository,
        signer: SessionSigner,
        admin_username: str,
        admin_password: str,
    ):
        """
        Initialize handler.

        Args:
            moderator_repository: Moderator repository
            signer: Session token signer
            admin_username: Configured admin username
            admin_password: Configured admin password
        """
        self.moderator_repository = moderator_repository
        self.signer = signer
        self.admin_username = admin_username
        self.admin_password = admin_password

    async def handle(self, command: LoginCommand) -> LoginResultDTO:
        """
        Handle login command.

        Args:
            command: LoginCommand

        Returns:
            LoginResultDTO with the identity and a signed session token

        Raises:
            AuthenticationError: If the credentials match no account
        """
        username = command.username or ""
        password = command.password or ""
        if not username or not password:
            raise AuthenticationError()

        if admin_credentials_match(username, password, self.admin_username, self.admin_password):
            identity = Identity.admin(self.admin_username)
        else:
            moderator = await self.moderator_repository.find_by_username(username)
            if moderator is None or not moderator.check_password(password):
                logger.info("Login failed for %s", username)
                raise AuthenticationError()
            identity = moderator.to_identity()

        logger.info("Login succeeded for %s", identity)
        return LoginResultDTO(identity=identity, token=self.signer.issue(identity))

"""
Moderator repository port (interface).

This defines the contract for moderator account persistence operations.
Implementations are in the infrastructure layer.
"""
import uuid
from abc import ABC, abstractmethod
from typing import List, Optional

from accounts.domain.moderator import Moderator


class ModeratorRepository(ABC):
    """
    Abstract repository for Moderator entities.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    """

    @abstractmethod
    async def add(self, moderator: Moderator) -> Moderator:
        """
        Insert a new moderator.

        Args:
            moderator: Moderator entity to insert

        Returns:
            Saved moderator entity

        Raises:
            ModeratorAlreadyExistsError: If the username is taken
        """
        pass

    @abstractmethod
    async def find_by_id(self, moderator_id: uuid.UUID) -> Optional[Moderator]:
        """
        Find a moderator by ID.

        Args:
            moderator_id: Moderator UUID

        Returns:
            Moderator entity or None if not found
        """
        pass

    @abstractmethod
    async def find_by_username(self, username: str) -> Optional[Moderator]:
        """
        Find a moderator by username.

        Args:
            username: Login name

        Returns:
            Moderator entity or None if not found
        """
        pass

    @abstractmethod
    async def list_all(self) -> List[Moderator]:
        """
        List moderators, newest first.

        Returns:
            List of Moderator entities
        """
        pass

    @abstractmethod
    async def delete_with_keys(self, moderator_id: uuid.UUID) -> Optional[int]:
        """
        Delete a moderator and every key they created, in one transaction.

        Args:
            moderator_id: Moderator UUID

        Returns:
            Number of keys deleted, or None if the moderator does not exist
        """
        pass

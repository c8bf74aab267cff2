"""
Key repository port (interface).

This defines the contract for key persistence operations.
Implementations are in the infrastructure layer.
"""
from abc import ABC, abstractmethod
from datetime import date
from typing import List, Optional

from keys.domain.key import Key


class KeyRepository(ABC):
    """
    Abstract repository for Key entities.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.

    Methods taking an ``owner`` restrict the operation to keys whose
    creator is that username; ``None`` means no restriction.
    """

    @abstractmethod
    async def save_all(self, keys: List[Key]) -> List[Key]:
        """
        Insert a batch of new keys in one write.

        Args:
            keys: Key entities to insert

        Returns:
            Saved key entities

        Raises:
            StorageError: If the batch could not be written
        """
        pass

    @abstractmethod
    async def find_by_key(self, key: str) -> Optional[Key]:
        """
        Find a key by key string.

        Args:
            key: Key string

        Returns:
            Key entity or None if not found
        """
        pass

    @abstractmethod
    async def mark_activated(self, key: str, activation_date: date, expires: date) -> bool:
        """
        Activate a key only if it is not active yet.

        Args:
            key: Key string
            activation_date: Activation date
            expires: Expiration date

        Returns:
            True if this call activated the key, False if no
            unactivated key matched
        """
        pass

    @abstractmethod
    async def list_keys(self, owner: Optional[str] = None, search: Optional[str] = None) -> List[Key]:
        """
        List keys, newest first.

        Args:
            owner: Restrict to keys created by this username
            search: Case-insensitive substring of the key or prefix, or of
                the creator when the listing is not restricted to an owner

        Returns:
            List of Key entities
        """
        pass

    @abstractmethod
    async def delete_key(self, key: str, owner: Optional[str] = None) -> int:
        """
        Delete one key by exact match.

        Returns:
            Number of keys deleted (0 or 1)
        """
        pass

    @abstractmethod
    async def delete_by_prefix(self, prefix: str, owner: Optional[str] = None) -> int:
        """
        Delete every key whose prefix equals the given prefix exactly.

        Returns:
            Number of keys deleted
        """
        pass

    @abstractmethod
    async def delete_by_creator(self, username: str) -> int:
        """
        Delete every key created by a username.

        Returns:
            Number of keys deleted
        """
        pass

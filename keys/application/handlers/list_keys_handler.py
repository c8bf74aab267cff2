"""
ListKeysHandler.

Handler for listing keys with their derived status.
"""

from typing import List

from accounts.domain.services import AccessPolicy
from core.ports.time_source import TimeSource
from keys.application.dto.key_dto import KeyDTO
from keys.application.queries.list_keys import ListKeysQuery
from keys.ports.key_repository import KeyRepository


class ListKeysHandler:
    """Handler for ListKeysQuery."""

    def __init__(self, key_repository: KeyRepository, time_source: TimeSource):
        """Initialize handler with repository and clock."""
        self.key_repository = key_repository
        self.time_source = time_source

    async def handle(self, query: ListKeysQuery) -> List[KeyDTO]:
        """
        Handle list keys query.

        Admins see every key, moderators only their own.

        Args:
            query: ListKeysQuery

        Returns:
            List of KeyDTO, newest first
        """
        requester = AccessPolicy.require_authenticated(query.requester)
        search = query.search.strip() if query.search else None
        keys = await self.key_repository.list_keys(
            owner=AccessPolicy.key_owner_filter(requester),
            search=search or None,
        )
        if not keys:
            return []

        today = await self.time_source.today()
        return [
            KeyDTO(
                key=key.key,
                prefix=key.prefix,
                validity_days=key.validity_days,
                validity_display=key.validity_display,
                price=key.price,
                is_active=key.is_active,
                activation_date=key.activation_date,
                expires=key.expires,
                status=key.status(today).value,
                created_by=key.created_by,
                created_at=key.created_at,
            )
            for key in keys
        ]

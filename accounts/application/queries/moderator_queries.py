"""
Moderator queries.
"""

import uuid
from dataclasses import dataclass

from core.domain.value_objects import Identity


@dataclass
class ListModeratorsQuery:
    """Query for every moderator account."""

    requester: Identity


@dataclass
class GetModeratorQuery:
    """Query for one moderator account."""

    moderator_id: uuid.UUID
    requester: Identity


@dataclass
class WhoAmIQuery:
    """Query for the current session identity."""

    requester: Identity

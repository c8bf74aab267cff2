"""
Moderator management commands.
"""

import uuid
from dataclasses import dataclass

from core.domain.value_objects import Identity


@dataclass
class CreateModeratorCommand:
    """Command to create a moderator account."""

    username: str
    password: str
    requester: Identity


@dataclass
class DeleteModeratorCommand:
    """Command to delete a moderator and every key they created."""

    moderator_id: uuid.UUID
    requester: Identity


@dataclass
class ClearDebtCommand:
    """Command to reset a moderator's debt to 0."""

    moderator_id: uuid.UUID
    requester: Identity

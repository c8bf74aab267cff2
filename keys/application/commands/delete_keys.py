"""
Key deletion commands.
"""

from dataclasses import dataclass

from core.domain.value_objects import Identity


@dataclass
class DeleteKeyCommand:
    """Command to delete one key by exact match."""

    key: str
    requester: Identity


@dataclass
class DeleteKeysByPrefixCommand:
    """Command to delete every key with an exact prefix."""

    prefix: str
    requester: Identity

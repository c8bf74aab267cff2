"""
GenerateKeysCommand.

Command to generate a batch of keys.
"""

from dataclasses import dataclass

from core.domain.value_objects import Identity


@dataclass
class GenerateKeysCommand:
    """Command to generate keys for a requester."""

    prefix: str
    count: int
    validity_days: int
    requester: Identity

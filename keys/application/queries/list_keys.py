"""
ListKeysQuery.

Query to list the keys visible to a requester.
"""

from dataclasses import dataclass
from typing import Optional

from core.domain.value_objects import Identity


@dataclass
class ListKeysQuery:
    """Query for keys visible to the requester."""

    requester: Identity
    search: Optional[str] = None

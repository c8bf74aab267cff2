"""
ListPricesQuery.
"""

from dataclasses import dataclass

from core.domain.value_objects import Identity


@dataclass
class ListPricesQuery:
    """Query for the price table."""

    requester: Identity

"""
UpsertPricesCommand.

Command to create or overwrite price tiers.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from core.domain.value_objects import Identity


@dataclass
class UpsertPricesCommand:
    """
    Command to upsert price tiers.

    Each entry is a mapping with "validity_days" and "price"; entries
    are validated one by one.
    """

    requester: Identity
    entries: List[Dict[str, Any]] = field(default_factory=list)

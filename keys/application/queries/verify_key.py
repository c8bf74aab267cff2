"""
VerifyKeyQuery.

Query to check whether a key is currently valid.
"""

from dataclasses import dataclass


@dataclass
class VerifyKeyQuery:
    """Query for key validity."""

    key: str

"""
ActivateKeyCommand.

Command to activate a key from a public client.
"""

from dataclasses import dataclass


@dataclass
class ActivateKeyCommand:
    """Command to activate a key."""

    key: str

"""
LoginCommand.

Command to authenticate a dashboard user.
"""

from dataclasses import dataclass


@dataclass
class LoginCommand:
    """Command carrying login credentials."""

    username: str
    password: str

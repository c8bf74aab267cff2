"""
Signed session tokens.

The dashboard session is a timestamped, signed token carrying the caller's
Identity. It is stored in an HTTP-only cookie; nothing is kept server side.
"""

import logging
from typing import Optional

from django.conf import settings
from django.core import signing

from core.domain.value_objects import Identity

logger = logging.getLogger(__name__)

SESSION_SALT = "gatekeeper.session"


class SessionSigner:
    """Issues and resolves session tokens."""

    def __init__(self, max_age: Optional[int] = None, salt: str = SESSION_SALT):
        """
        Initialize signer.

        Args:
            max_age: Token lifetime in seconds (defaults to AUTH_SESSION_MAX_AGE)
            salt: Signing namespace
        """
        self.max_age = settings.AUTH_SESSION_MAX_AGE if max_age is None else max_age
        self.salt = salt

    def issue(self, identity: Identity) -> str:
        """
        Create a session token for an identity.

        Args:
            identity: Authenticated identity

        Returns:
            Signed token string
        """
        return signing.dumps(identity.to_payload(), salt=self.salt, compress=True)

    def resolve(self, token: Optional[str]) -> Optional[Identity]:
        """
        Resolve a session token.

        Missing, expired, tampered or malformed tokens resolve to None.

        Args:
            token: Raw cookie value

        Returns:
            Identity or None when the caller is not authenticated
        """
        if not token:
            return None
        try:
            payload = signing.loads(token, salt=self.salt, max_age=self.max_age)
        except signing.SignatureExpired:
            logger.debug("Session token expired")
            return None
        except signing.BadSignature:
            logger.warning("Rejected session token with bad signature")
            return None
        try:
            return Identity.from_payload(payload)
        except (ValueError, TypeError) as e:
            logger.warning("Rejected malformed session payload: %s", e)
            return None

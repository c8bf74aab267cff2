"""
Account domain services.

AccessPolicy holds the per-operation authorization rules for the two
identity variants.
"""
import secrets
import uuid
from typing import Optional

from core.domain.exceptions import AuthenticationError, PermissionDeniedError
from core.domain.value_objects import Identity


class AccessPolicy:
    """
    Authorization rules.

    Admins may do everything. Moderators may generate keys, see and
    delete their own keys, and view their own account.
    """

    @staticmethod
    def require_authenticated(identity: Optional[Identity]) -> Identity:
        """
        Raises:
            AuthenticationError: If there is no identity
        """
        if identity is None:
            raise AuthenticationError("Authentication required.")
        return identity

    @staticmethod
    def require_admin(identity: Optional[Identity]) -> Identity:
        """
        Raises:
            AuthenticationError: If there is no identity
            PermissionDeniedError: If the identity is not the admin
        """
        identity = AccessPolicy.require_authenticated(identity)
        if not identity.is_admin:
            raise PermissionDeniedError()
        return identity

    @staticmethod
    def key_owner_filter(identity: Identity) -> Optional[str]:
        """
        Creator filter applied to key queries.

        Returns:
            None for the admin (all keys), the username for moderators
        """
        return None if identity.is_admin else identity.username

    @staticmethod
    def require_account_access(identity: Optional[Identity], account_id: uuid.UUID) -> Identity:
        """
        Allow the admin, or a moderator reading their own account.

        Raises:
            PermissionDeniedError: If a moderator asks for another account
        """
        identity = AccessPolicy.require_authenticated(identity)
        if identity.is_admin or identity.account_id == account_id:
            return identity
        raise PermissionDeniedError()


def admin_credentials_match(
    username: str, password: str, admin_username: str, admin_password: str
) -> bool:
    """
    Compare login input with the configured admin credentials.

    Both comparisons always run.
    """
    username_ok = secrets.compare_digest(username.encode(), admin_username.encode())
    password_ok = secrets.compare_digest(password.encode(), admin_password.encode())
    return username_ok and password_ok

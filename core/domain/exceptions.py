"""
Domain exceptions.

Domain exceptions represent business rule violations
and domain-specific error conditions.
"""


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    def __init__(self, message: str, code: str = None):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class ValidationError(DomainException):
    """Raised when operation input is missing or malformed."""

    def __init__(self, message: str = "Invalid input"):
        super().__init__(message, code="VALIDATION_ERROR")


class KeyException(DomainException):
    """Base exception for key lifecycle errors."""

    pass


class KeyNotFoundError(KeyException):
    """Raised when no key record matches."""

    def __init__(self, message: str = "Key not found."):
        super().__init__(message, code="KEY_NOT_FOUND")


class KeyAlreadyActiveError(KeyException):
    """Raised when activating a key that was already activated."""

    def __init__(self, message: str = "Key already activated."):
        super().__init__(message, code="KEY_ALREADY_ACTIVE")


class KeyNotActivatedError(KeyException):
    """Raised when verifying a key that was never activated."""

    def __init__(self, message: str = "Key not activated."):
        super().__init__(message, code="KEY_NOT_ACTIVATED")


class KeyExpiredError(KeyException):
    """Raised when verifying a key past its expiration date."""

    def __init__(self, message: str = "Key has expired."):
        super().__init__(message, code="KEY_EXPIRED")


class AccountException(DomainException):
    """Base exception for moderator account errors."""

    pass


class ModeratorNotFoundError(AccountException):
    """Raised when a moderator account does not exist."""

    def __init__(self, message: str = "Moderator not found."):
        super().__init__(message, code="MODERATOR_NOT_FOUND")


class ModeratorAlreadyExistsError(AccountException):
    """Raised when a moderator username is already taken."""

    def __init__(self, message: str = "Moderator with this username already exists."):
        super().__init__(message, code="MODERATOR_ALREADY_EXISTS")


class AuthenticationError(DomainException):
    """Raised when login credentials are rejected."""

    def __init__(self, message: str = "Login failed. Please check your credentials."):
        super().__init__(message, code="AUTHENTICATION_FAILED")


class PermissionDeniedError(DomainException):
    """Raised when an identity may not perform an operation."""

    def __init__(self, message: str = "You do not have permission to perform this action."):
        super().__init__(message, code="PERMISSION_DENIED")


class StorageError(DomainException):
    """Raised when the backing store fails."""

    def __init__(self, message: str = "Storage operation failed"):
        super().__init__(message, code="STORAGE_ERROR")

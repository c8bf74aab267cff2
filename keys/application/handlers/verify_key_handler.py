"""
VerifyKeyHandler.

Handler for read-only key verification.
"""

from core.domain.exceptions import (
    KeyException,
    KeyNotActivatedError,
    KeyNotFoundError,
    ValidationError,
)
from core.metrics import key_verifications_total
from core.ports.time_source import TimeSource
from keys.application.dto.key_dto import VerificationResultDTO
from keys.application.queries.verify_key import VerifyKeyQuery
from keys.ports.key_repository import KeyRepository

VALID_MESSAGE = "Key is active."


class VerifyKeyHandler:
    """Handler for VerifyKeyQuery. Never writes to the store."""

    def __init__(self, key_repository: KeyRepository, time_source: TimeSource):
        """Initialize handler with repository and clock."""
        self.key_repository = key_repository
        self.time_source = time_source

    async def handle(self, query: VerifyKeyQuery) -> VerificationResultDTO:
        """
        Handle verify key query.

        Args:
            query: VerifyKeyQuery

        Returns:
            VerificationResultDTO; invalid results carry KEY_NOT_FOUND,
            KEY_NOT_ACTIVATED or KEY_EXPIRED

        Raises:
            ValidationError: If no key was given
            StorageError: If the store fails
        """
        if not query.key:
            raise ValidationError("Key is required")

        try:
            key = await self.key_repository.find_by_key(query.key)
            if key is None:
                raise KeyNotFoundError()
            if not key.is_active:
                raise KeyNotActivatedError()
            expires = key.check_validity(await self.time_source.today())
        except KeyException as e:
            key_verifications_total.labels(outcome=e.code).inc()
            return VerificationResultDTO.failure(e)

        key_verifications_total.labels(outcome="KEY_VALID").inc()
        return VerificationResultDTO(valid=True, message=VALID_MESSAGE, code="KEY_VALID", expires=expires)

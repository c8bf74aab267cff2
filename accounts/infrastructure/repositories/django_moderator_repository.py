"""
Django implementation of ModeratorRepository port.

This adapter converts between domain entities and Django ORM models.
"""
import uuid
from typing import List, Optional

from asgiref.sync import sync_to_async
from django.db import IntegrityError, transaction

from accounts.domain.moderator import Moderator
from accounts.infrastructure.models import Moderator as ModeratorModel
from accounts.ports.moderator_repository import ModeratorRepository
from core.domain.exceptions import ModeratorAlreadyExistsError
from core.infrastructure.database import translate_storage_errors
from keys.infrastructure.models import Key as KeyModel


class DjangoModeratorRepository(ModeratorRepository):
    """
    Django ORM implementation of ModeratorRepository.

    This adapter:
    1. Converts Django models to domain entities
    2. Converts domain entities to Django models
    3. Implements repository interface
    """

    def _to_domain(self, model: ModeratorModel) -> Moderator:
        """
        Convert Django model to domain entity.

        Args:
            model: Django Moderator model

        Returns:
            Moderator domain entity
        """
        return Moderator(
            id=model.id,
            username=model.username,
            password_hash=model.password,
            debt=model.debt,
            created_at=model.created_at,
        )

    def _to_model(self, moderator: Moderator) -> ModeratorModel:
        """
        Convert domain entity to an unsaved Django model.

        Args:
            moderator: Moderator domain entity

        Returns:
            Django Moderator model
        """
        return ModeratorModel(
            id=moderator.id,
            username=moderator.username,
            password=moderator.password_hash,
            role=moderator.role.value,
            debt=moderator.debt,
            created_at=moderator.created_at,
        )

    @sync_to_async
    @translate_storage_errors
    def add(self, moderator: Moderator) -> Moderator:
        """
        Insert a new moderator.

        Args:
            moderator: Moderator entity to insert

        Returns:
            Saved moderator entity

        Raises:
            ModeratorAlreadyExistsError: If the username is taken
        """
        if ModeratorModel.objects.filter(username=moderator.username).exists():
            raise ModeratorAlreadyExistsError()
        model = self._to_model(moderator)
        try:
            with transaction.atomic():
                model.save(force_insert=True)
        except IntegrityError as e:
            # Lost a race with a concurrent insert of the same username.
            raise ModeratorAlreadyExistsError() from e
        return self._to_domain(model)

    @sync_to_async
    @translate_storage_errors
    def find_by_id(self, moderator_id: uuid.UUID) -> Optional[Moderator]:
        """
        Find a moderator by ID.

        Args:
            moderator_id: Moderator UUID

        Returns:
            Moderator entity or None if not found
        """
        try:
            return self._to_domain(ModeratorModel.objects.get(id=moderator_id))
        except ModeratorModel.DoesNotExist:
            return None

    @sync_to_async
    @translate_storage_errors
    def find_by_username(self, username: str) -> Optional[Moderator]:
        """
        Find a moderator by username.

        Args:
            username: Login name

        Returns:
            Moderator entity or None if not found
        """
        try:
            return self._to_domain(ModeratorModel.objects.get(username=username))
        except ModeratorModel.DoesNotExist:
            return None

    @sync_to_async
    @translate_storage_errors
    def list_all(self) -> List[Moderator]:
        """List moderators, newest first."""
        return [self._to_domain(model) for model in ModeratorModel.objects.order_by("-created_at")]

    @sync_to_async
    @translate_storage_errors
    def delete_with_keys(self, moderator_id: uuid.UUID) -> Optional[int]:
        """
        Delete a moderator and every key they created, in one transaction.

        Args:
            moderator_id: Moderator UUID

        Returns:
            Number of keys deleted, or None if the moderator does not exist
        """
        with transaction.atomic():
            model = ModeratorModel.objects.select_for_update().filter(id=moderator_id).first()
            if model is None:
                return None
            keys_deleted, _ = KeyModel.objects.filter(created_by=model.username).delete()
            model.delete()
        return keys_deleted

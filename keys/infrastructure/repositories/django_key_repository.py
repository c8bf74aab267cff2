"""
Django implementation of KeyRepository port.

This adapter converts between domain entities and Django ORM models.
"""
from datetime import date
from typing import List, Optional

from asgiref.sync import sync_to_async
from django.db import transaction
from django.db.models import Q

from core.infrastructure.database import translate_storage_errors
from keys.domain.key import Key
from keys.infrastructure.models import Key as KeyModel
from keys.ports.key_repository import KeyRepository


class DjangoKeyRepository(KeyRepository):
    """
    Django ORM implementation of KeyRepository.

    This adapter:
    1. Converts Django models to domain entities
    2. Converts domain entities to Django models
    3. Implements repository interface
    """

    def _to_domain(self, model: KeyModel) -> Key:
        """
        Convert Django model to domain entity.

        Args:
            model: Django Key model

        Returns:
            Key domain entity
        """
        return Key(
            key=model.key,
            prefix=model.prefix,
            validity_days=model.validity_days,
            price=model.price,
            created_by=model.created_by,
            created_at=model.created_at,
            is_active=model.is_active,
            activation_date=model.activation_date,
            expires=model.expires,
        )

    def _to_model(self, key: Key) -> KeyModel:
        """
        Convert domain entity to an unsaved Django model.

        Args:
            key: Key domain entity

        Returns:
            Django Key model
        """
        return KeyModel(
            key=key.key,
            prefix=key.prefix,
            validity_days=key.validity_days,
            price=key.price,
            created_by=key.created_by,
            created_at=key.created_at,
            is_active=key.is_active,
            activation_date=key.activation_date,
            expires=key.expires,
        )

    @staticmethod
    def _owned(queryset, owner: Optional[str]):
        if owner is None:
            return queryset
        return queryset.filter(created_by=owner)

    @sync_to_async
    @translate_storage_errors
    def save_all(self, keys: List[Key]) -> List[Key]:
        """
        Insert a batch of new keys in one write.

        Args:
            keys: Key entities to insert

        Returns:
            Saved key entities
        """
        with transaction.atomic():
            models = KeyModel.objects.bulk_create([self._to_model(key) for key in keys])
        return [self._to_domain(model) for model in models]

    @sync_to_async
    @translate_storage_errors
    def find_by_key(self, key: str) -> Optional[Key]:
        """
        Find a key by key string.

        Args:
            key: Key string

        Returns:
            Key entity or None if not found
        """
        try:
            model = KeyModel.objects.get(key=key)
            return self._to_domain(model)
        except KeyModel.DoesNotExist:
            return None

    @sync_to_async
    @translate_storage_errors
    def mark_activated(self, key: str, activation_date: date, expires: date) -> bool:
        """
        Activate a key with a single conditional UPDATE.

        Returns:
            True if exactly this call flipped the key to active
        """
        updated = KeyModel.objects.filter(key=key, is_active=False).update(
            is_active=True,
            activation_date=activation_date,
            expires=expires,
        )
        return updated == 1

    @sync_to_async
    @translate_storage_errors
    def list_keys(self, owner: Optional[str] = None, search: Optional[str] = None) -> List[Key]:
        """
        List keys, newest first.

        Args:
            owner: Restrict to keys created by this username
            search: Case-insensitive substring of the key or prefix, or of
                the creator when the listing is not restricted to an owner

        Returns:
            List of Key entities
        """
        queryset = self._owned(KeyModel.objects.all(), owner)
        if search:
            condition = Q(key__icontains=search) | Q(prefix__icontains=search)
            if owner is None:
                condition |= Q(created_by__icontains=search)
            queryset = queryset.filter(condition)
        return [self._to_domain(model) for model in queryset.order_by("-created_at", "key")]

    @sync_to_async
    @translate_storage_errors
    def delete_key(self, key: str, owner: Optional[str] = None) -> int:
        """Delete one key by exact match."""
        deleted, _ = self._owned(KeyModel.objects.filter(key=key), owner).delete()
        return deleted

    @sync_to_async
    @translate_storage_errors
    def delete_by_prefix(self, prefix: str, owner: Optional[str] = None) -> int:
        """Delete keys whose prefix equals the given prefix exactly."""
        deleted, _ = self._owned(KeyModel.objects.filter(prefix=prefix), owner).delete()
        return deleted

    @sync_to_async
    @translate_storage_errors
    def delete_by_creator(self, username: str) -> int:
        """Delete every key created by a username."""
        deleted, _ = KeyModel.objects.filter(created_by=username).delete()
        return deleted

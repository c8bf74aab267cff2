"""
Serializers for dashboard API endpoints.
"""

from rest_framework import serializers

from keys.domain.services import MAX_BATCH_SIZE, MAX_VALIDITY_DAYS


class LoginRequestSerializer(serializers.Serializer):
    """Serializer for login request."""

    username = serializers.CharField(required=True, trim_whitespace=False)
    password = serializers.CharField(required=True, trim_whitespace=False)


class IdentitySerializer(serializers.Serializer):
    """Serializer for the current session identity."""

    role = serializers.CharField()
    username = serializers.CharField()
    account_id = serializers.UUIDField(allow_null=True, required=False)
    debt = serializers.DecimalField(max_digits=12, decimal_places=2, allow_null=True, required=False)


class GenerateKeysRequestSerializer(serializers.Serializer):
    """Serializer for generate keys request."""

    prefix = serializers.CharField(required=True, max_length=10)
    count = serializers.IntegerField(required=True, min_value=1, max_value=MAX_BATCH_SIZE)
    validity_days = serializers.IntegerField(required=True, min_value=1, max_value=MAX_VALIDITY_DAYS)


class GeneratedKeySerializer(serializers.Serializer):
    """Serializer for one generated key."""

    key = serializers.CharField()
    validity_days = serializers.IntegerField()
    validity_display = serializers.CharField()
    price = serializers.DecimalField(max_digits=12, decimal_places=2)


class GenerateKeysResponseSerializer(serializers.Serializer):
    """Serializer for a generated batch."""

    prefix = serializers.CharField()
    validity_days = serializers.IntegerField()
    unit_price = serializers.DecimalField(max_digits=12, decimal_places=2)
    total_cost = serializers.DecimalField(max_digits=12, decimal_places=2)
    keys = GeneratedKeySerializer(many=True)


class KeySerializer(serializers.Serializer):
    """Serializer for KeyDTO."""

    key = serializers.CharField()
    prefix = serializers.CharField()
    validity_days = serializers.IntegerField()
    validity_display = serializers.CharField()
    price = serializers.DecimalField(max_digits=12, decimal_places=2)
    is_active = serializers.BooleanField()
    activation_date = serializers.DateField(allow_null=True)
    expires = serializers.DateField(allow_null=True)
    status = serializers.CharField()
    created_by = serializers.CharField()
    created_at = serializers.DateTimeField()


class DeletionResultSerializer(serializers.Serializer):
    """Serializer for DeletionResultDTO."""

    success = serializers.BooleanField()
    deleted = serializers.IntegerField()
    message = serializers.CharField()
    code = serializers.CharField()


class CreateModeratorRequestSerializer(serializers.Serializer):
    """Serializer for create moderator request; length rules live in the domain."""

    username = serializers.CharField(required=True, max_length=150)
    password = serializers.CharField(required=True, trim_whitespace=False, write_only=True)


class ModeratorSerializer(serializers.Serializer):
    """Serializer for ModeratorDTO."""

    id = serializers.UUIDField()
    username = serializers.CharField()
    debt = serializers.DecimalField(max_digits=12, decimal_places=2)
    created_at = serializers.DateTimeField()


class AccountResultSerializer(serializers.Serializer):
    """Serializer for AccountResultDTO."""

    success = serializers.BooleanField()
    message = serializers.CharField()
    code = serializers.CharField()
    moderator = ModeratorSerializer(allow_null=True, required=False)
    keys_deleted = serializers.IntegerField()


class PriceTierSerializer(serializers.Serializer):
    """Serializer for PriceTierDTO."""

    validity_days = serializers.IntegerField()
    validity_display = serializers.CharField()
    price = serializers.DecimalField(max_digits=12, decimal_places=2)
    configured = serializers.BooleanField()


class UpsertPricesRequestSerializer(serializers.Serializer):
    """
    Serializer for upsert prices request.

    Entries are validated one by one by the handler, so a bad entry
    does not reject the whole request.
    """

    prices = serializers.ListField(child=serializers.DictField(), allow_empty=True)


class SkippedPriceSerializer(serializers.Serializer):
    """Serializer for a rejected price entry."""

    validity_days = serializers.JSONField()
    price = serializers.JSONField()
    reason = serializers.CharField()


class UpsertPricesResultSerializer(serializers.Serializer):
    """Serializer for UpsertPricesResultDTO."""

    success = serializers.BooleanField()
    applied = serializers.IntegerField()
    message = serializers.CharField()
    skipped = SkippedPriceSerializer(many=True)

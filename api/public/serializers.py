"""
Serializers for the public key API.
"""

from rest_framework import serializers


class KeyRequestSerializer(serializers.Serializer):
    """Serializer for activate and verify requests."""

    key = serializers.CharField(required=True, allow_blank=False)


class ActivateKeyResponseSerializer(serializers.Serializer):
    """Serializer for a successful activation."""

    success = serializers.BooleanField()
    message = serializers.CharField()
    expires = serializers.DateField()


class VerifyKeyResponseSerializer(serializers.Serializer):
    """Serializer for a verification result. expires is only sent when valid."""

    valid = serializers.BooleanField()
    message = serializers.CharField()
    expires = serializers.DateField(required=False)

    def to_representation(self, instance):
        data = super().to_representation(instance)
        if not data.get("valid") or data.get("expires") is None:
            data.pop("expires", None)
        return data


class PublicErrorSerializer(serializers.Serializer):
    """Serializer for public API errors."""

    error = serializers.CharField()

"""
Django admin configuration for keys app.
"""
from django.contrib import admin

from keys.domain.key import format_validity
from keys.infrastructure.models import Key


@admin.register(Key)
class KeyAdmin(admin.ModelAdmin):
    """Admin interface for Key model."""

    list_display = [
        "key",
        "prefix",
        "validity",
        "price",
        "is_active",
        "expires",
        "created_by",
        "created_at",
    ]
    list_filter = ["is_active", "prefix", "created_by"]
    search_fields = ["key", "prefix", "created_by"]
    readonly_fields = ["key", "activation_date", "expires", "is_active", "created_at"]
    fieldsets = (
        (
            "Basic Information",
            {
                "fields": ("key", "prefix", "validity_days", "price", "created_by"),
            },
        ),
        (
            "Activation",
            {
                "fields": ("is_active", "activation_date", "expires"),
            },
        ),
        (
            "Timestamps",
            {
                "fields": ("created_at",),
                "classes": ("collapse",),
            },
        ),
    )

    def validity(self, obj):
        """Display validity the way the dashboard does."""
        return format_validity(obj.validity_days)

    validity.short_description = "Validity"

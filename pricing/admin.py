"""
Django admin configuration for pricing app.
"""
from django.contrib import admin

from keys.domain.key import format_validity
from pricing.infrastructure.models import Price


@admin.register(Price)
class PriceAdmin(admin.ModelAdmin):
    """Admin interface for Price model."""

    list_display = ["validity_days", "validity", "price", "updated_at"]
    ordering = ["validity_days"]

    def validity(self, obj):
        return format_validity(obj.validity_days)

    validity.short_description = "Tier"

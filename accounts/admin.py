"""
Django admin configuration for accounts app.
"""
from django.contrib import admin

from accounts.infrastructure.models import Moderator


@admin.register(Moderator)
class ModeratorAdmin(admin.ModelAdmin):
    """Admin interface for Moderator model."""

    list_display = ["username", "debt", "key_count", "created_at"]
    search_fields = ["username"]
    readonly_fields = ["id", "password", "role", "created_at"]
    ordering = ["-created_at"]

    def key_count(self, obj):
        """Display number of keys created by this moderator."""
        from keys.infrastructure.models import Key

        return Key.objects.filter(created_by=obj.username).count()

    key_count.short_description = "Keys"

    def has_add_permission(self, request):
        """Moderators are created through the dashboard API or create_moderator."""
        return False

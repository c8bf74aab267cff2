"""
Custom schema extensions for drf-spectacular to document session cookie authentication.
"""

from django.conf import settings
from drf_spectacular.extensions import OpenApiAuthenticationExtension


class SessionIdentityAuthenticationExtension(OpenApiAuthenticationExtension):
    """Extension to add session cookie authentication to OpenAPI schema."""

    target_class = "api.authentication.SessionIdentityAuthentication"
    name = "SessionCookieAuth"

    def get_security_definition(self, auto_schema):
        """Return security scheme definition."""
        return {
            "type": "apiKey",
            "in": "cookie",
            "name": settings.AUTH_SESSION_COOKIE_NAME,
            "description": "Signed session cookie issued by POST /api/dashboard/login.",
        }

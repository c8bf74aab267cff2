"""
DRF authentication backed by the signed session cookie.
"""

from django.conf import settings
from rest_framework.authentication import BaseAuthentication

from core.infrastructure.session import SessionSigner


class SessionIdentityAuthentication(BaseAuthentication):
    """
    Authenticate with the identity resolved by SessionIdentityMiddleware.

    request.user becomes the Identity value. When the middleware did not
    run, the cookie is resolved here.
    """

    def authenticate(self, request):
        """
        Returns:
            (Identity, None) or None when the request carries no valid session
        """
        django_request = request._request
        if hasattr(django_request, "identity"):
            identity = django_request.identity
        else:
            token = request.COOKIES.get(settings.AUTH_SESSION_COOKIE_NAME)
            identity = SessionSigner().resolve(token)
            django_request.identity = identity
        if identity is None:
            return None
        return identity, None

    def authenticate_header(self, request):
        return f'Cookie realm="{settings.AUTH_SESSION_COOKIE_NAME}"'

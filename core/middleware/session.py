"""
Session identity middleware.

Resolves the signed dashboard session cookie into a request-scoped
Identity. The identity lives on the request only; there is no
process-wide session state.
"""

import logging
from typing import Callable

from django.conf import settings
from django.http import HttpRequest, HttpResponse

from core.infrastructure.session import SessionSigner

logger = logging.getLogger(__name__)


class SessionIdentityMiddleware:
    """
    Middleware that attaches the caller identity to the request.

    This middleware:
    1. Reads the auth session cookie
    2. Verifies its signature and age
    3. Sets request.identity (None when not authenticated)
    """

    def __init__(self, get_response: Callable):
        """Initialize middleware."""
        self.get_response = get_response
        self.signer = SessionSigner()

    def __call__(self, request: HttpRequest) -> HttpResponse:
        """
        Process request and set identity.

        Args:
            request: HTTP request

        Returns:
            HTTP response
        """
        token = request.COOKIES.get(settings.AUTH_SESSION_COOKIE_NAME)
        request.identity = self.signer.resolve(token)  # type: ignore[attr-defined]
        if request.identity is not None:
            logger.debug("Resolved session identity %s", request.identity)
        return self.get_response(request)

"""
Public key API views.

These endpoints are used by client software to:
- Activate a key (once)
- Verify a key
They take no session; errors use the flat {"error": message} body.
"""

import logging

from asgiref.sync import async_to_sync
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.exceptions import APIException, ParseError
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.public.serializers import (
    ActivateKeyResponseSerializer,
    KeyRequestSerializer,
    PublicErrorSerializer,
    VerifyKeyResponseSerializer,
)
from core.infrastructure.time_source import get_time_source
from core.instrumentation import Status, StatusCode, get_tracer
from core.metrics import errors_total
from keys.application.commands.activate_key import ActivateKeyCommand
from keys.application.handlers.activate_key_handler import ActivateKeyHandler
from keys.application.handlers.verify_key_handler import VerifyKeyHandler
from keys.application.queries.verify_key import VerifyKeyQuery
from keys.infrastructure.repositories.django_key_repository import DjangoKeyRepository

logger = logging.getLogger(__name__)

# Initialize repositories (in production, use DI container)
_key_repo = DjangoKeyRepository()
_time_source = get_time_source()

tracer = get_tracer(__name__)

KEY_REQUIRED = "Key is required"


class PublicKeyAPIView(APIView):
    """Base view for the session-less public API."""

    authentication_classes = []
    permission_classes = []

    def handle_exception(self, exc):
        """Render failures as {"error": message}."""
        if isinstance(exc, ParseError):
            return Response({"error": KEY_REQUIRED}, status=status.HTTP_400_BAD_REQUEST)
        if isinstance(exc, APIException):
            return Response({"error": str(exc.detail)}, status=exc.status_code)
        errors_total.labels(error_type=type(exc).__name__, endpoint=type(self).__name__).inc()
        logger.error("%s failed: %s", type(self).__name__, type(exc).__name__, exc_info=exc)
        return Response(
            {"error": "Internal Server Error"},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    @staticmethod
    def _read_key(request: Request):
        serializer = KeyRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return None
        return serializer.validated_data["key"]


class ActivateKeyView(PublicKeyAPIView):
    """View for activating keys."""

    @extend_schema(
        operation_id="activate_key",
        summary="Activate Key",
        description=(
            "Activate an unused key. The expiration date is the activation date "
            "plus the key's validity. A key can be activated only once."
        ),
        tags=["Public API"],
        request=KeyRequestSerializer,
        responses={
            200: ActivateKeyResponseSerializer,
            400: PublicErrorSerializer,
            404: PublicErrorSerializer,
            500: PublicErrorSerializer,
        },
    )
    def post(self, request: Request) -> Response:
        """Activate a key."""
        return async_to_sync(self._handle_activate_key)(request)

    async def _handle_activate_key(self, request: Request) -> Response:
        """Async handler for activate key."""
        with tracer.start_as_current_span("activate_key") as span:
            span.set_attribute("operation", "activate_key")

            key = self._read_key(request)
            if not key:
                span.set_attribute("error", "validation_failed")
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                return Response({"error": KEY_REQUIRED}, status=status.HTTP_400_BAD_REQUEST)

            handler = ActivateKeyHandler(key_repository=_key_repo, time_source=_time_source)
            result = await handler.handle(ActivateKeyCommand(key=key))

            span.set_attribute("result.code", result.code)
            if not result.success:
                span.set_status(Status(StatusCode.ERROR, result.code))
                return Response({"error": result.message}, status=status.HTTP_404_NOT_FOUND)

            span.set_status(Status(StatusCode.OK))
            return Response(ActivateKeyResponseSerializer(result).data, status=status.HTTP_200_OK)


class VerifyKeyView(PublicKeyAPIView):
    """View for verifying keys."""

    @extend_schema(
        operation_id="verify_key",
        summary="Verify Key",
        description=(
            "Check whether a key is activated and not expired. Invalid keys are "
            "reported with valid=false and a 200 status."
        ),
        tags=["Public API"],
        request=KeyRequestSerializer,
        responses={
            200: VerifyKeyResponseSerializer,
            400: PublicErrorSerializer,
            500: PublicErrorSerializer,
        },
    )
    def post(self, request: Request) -> Response:
        """Verify a key."""
        return async_to_sync(self._handle_verify_key)(request)

    async def _handle_verify_key(self, request: Request) -> Response:
        """Async handler for verify key."""
        with tracer.start_as_current_span("verify_key") as span:
            span.set_attribute("operation", "verify_key")

            key = self._read_key(request)
            if not key:
                span.set_attribute("error", "validation_failed")
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                return Response({"error": KEY_REQUIRED}, status=status.HTTP_400_BAD_REQUEST)

            handler = VerifyKeyHandler(key_repository=_key_repo, time_source=_time_source)
            result = await handler.handle(VerifyKeyQuery(key=key))

            span.set_attribute("result.code", result.code)
            span.set_status(Status(StatusCode.OK))
            return Response(VerifyKeyResponseSerializer(result).data, status=status.HTTP_200_OK)

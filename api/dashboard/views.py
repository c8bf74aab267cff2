"""
Dashboard API views.

These endpoints back the admin/moderator dashboard:
- Session login/logout
- Key generation, listing and deletion
- Moderator management and debt clearing (admin)
- Price table (admin writes)
All of them except login/logout require the session cookie.
"""

import logging

from asgiref.sync import async_to_sync
from django.conf import settings
from django.http import HttpResponse
from django.utils.http import content_disposition_header
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.application.commands.login import LoginCommand
from accounts.application.commands.moderator_commands import (
    ClearDebtCommand,
    CreateModeratorCommand,
    DeleteModeratorCommand,
)
from accounts.application.handlers.login_handler import LoginHandler
from accounts.application.handlers.moderator_handlers import (
    ClearDebtHandler,
    CreateModeratorHandler,
    DeleteModeratorHandler,
    GetModeratorHandler,
    ListModeratorsHandler,
    WhoAmIHandler,
)
from accounts.application.queries.moderator_queries import (
    GetModeratorQuery,
    ListModeratorsQuery,
    WhoAmIQuery,
)
from accounts.infrastructure.repositories.django_ledger_repository import DjangoLedgerRepository
from accounts.infrastructure.repositories.django_moderator_repository import (
    DjangoModeratorRepository,
)
from api.dashboard.serializers import (
    AccountResultSerializer,
    CreateModeratorRequestSerializer,
    DeletionResultSerializer,
    GenerateKeysRequestSerializer,
    GenerateKeysResponseSerializer,
    IdentitySerializer,
    KeySerializer,
    LoginRequestSerializer,
    ModeratorSerializer,
    PriceTierSerializer,
    UpsertPricesRequestSerializer,
    UpsertPricesResultSerializer,
)
from api.authentication import SessionIdentityAuthentication
from api.permissions import IsAdminIdentity, IsAuthenticatedIdentity
from core.infrastructure.session import SessionSigner
from core.infrastructure.time_source import get_time_source
from core.instrumentation import Status, StatusCode, get_tracer
from keys.application.commands.delete_keys import DeleteKeyCommand, DeleteKeysByPrefixCommand
from keys.application.commands.generate_keys import GenerateKeysCommand
from keys.application.handlers.generate_keys_handler import GenerateKeysHandler
from keys.application.handlers.key_deletion_handlers import (
    DeleteKeyHandler,
    DeleteKeysByPrefixHandler,
)
from keys.application.handlers.list_keys_handler import ListKeysHandler
from keys.application.queries.list_keys import ListKeysQuery
from keys.infrastructure.repositories.django_key_repository import DjangoKeyRepository
from pricing.application.commands.upsert_prices import UpsertPricesCommand
from pricing.application.handlers.price_handlers import ListPricesHandler, UpsertPricesHandler
from pricing.application.queries.list_prices import ListPricesQuery
from pricing.infrastructure.repositories.django_price_repository import DjangoPriceRepository

logger = logging.getLogger(__name__)

# Initialize repositories (in production, use DI container)
_key_repo = DjangoKeyRepository()
_moderator_repo = DjangoModeratorRepository()
_ledger_repo = DjangoLedgerRepository()
_price_repo = DjangoPriceRepository()
_time_source = get_time_source()

tracer = get_tracer(__name__)


def _validation_error(serializer) -> Response:
    """Render serializer errors in the error envelope."""
    return Response(
        {
            "error": {
                "code": "VALIDATION_ERROR",
                "message": "Invalid request",
                "fields": serializer.errors,
            }
        },
        status=status.HTTP_400_BAD_REQUEST,
    )


class DashboardAPIView(APIView):
    """Base view for session-authenticated dashboard endpoints."""

    authentication_classes = [SessionIdentityAuthentication]
    permission_classes = [IsAuthenticatedIdentity]


class LoginView(DashboardAPIView):
    """View for dashboard login."""

    permission_classes = [AllowAny]

    @extend_schema(
        operation_id="login",
        summary="Log In",
        description=(
            "Authenticate as the configured admin or a moderator. "
            "On success the signed session cookie is set."
        ),
        tags=["Dashboard Session"],
        request=LoginRequestSerializer,
        responses={
            200: IdentitySerializer,
            400: {"description": "Bad Request"},
            401: {"description": "Invalid credentials"},
        },
    )
    def post(self, request: Request) -> Response:
        """Log in and set the session cookie."""
        return async_to_sync(self._handle_login)(request)

    async def _handle_login(self, request: Request) -> Response:
        """Async handler for login."""
        with tracer.start_as_current_span("login") as span:
            serializer = LoginRequestSerializer(data=request.data)
            if not serializer.is_valid():
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                return _validation_error(serializer)

            handler = LoginHandler(
                moderator_repository=_moderator_repo,
                signer=SessionSigner(),
                admin_username=settings.ADMIN_USERNAME,
                admin_password=settings.ADMIN_PASSWORD,
            )
            result = await handler.handle(
                LoginCommand(
                    username=serializer.validated_data["username"],
                    password=serializer.validated_data["password"],
                )
            )
            span.set_attribute("role", result.identity.role.value)

            response = Response(
                IdentitySerializer(
                    {
                        "role": result.identity.role.value,
                        "username": result.identity.username,
                        "account_id": result.identity.account_id,
                    }
                ).data,
                status=status.HTTP_200_OK,
            )
            response.set_cookie(
                settings.AUTH_SESSION_COOKIE_NAME,
                result.token,
                max_age=settings.AUTH_SESSION_MAX_AGE,
                httponly=True,
                secure=settings.AUTH_SESSION_COOKIE_SECURE,
                samesite="Lax",
                path="/",
            )
            return response


class LogoutView(DashboardAPIView):
    """View for dashboard logout."""

    permission_classes = [AllowAny]

    @extend_schema(
        operation_id="logout",
        summary="Log Out",
        description="Delete the session cookie.",
        tags=["Dashboard Session"],
        request=None,
        responses={200: {"description": "Logged out"}},
    )
    def post(self, request: Request) -> Response:
        """Delete the session cookie."""
        response = Response({"message": "Logged out."}, status=status.HTTP_200_OK)
        response.delete_cookie(settings.AUTH_SESSION_COOKIE_NAME, path="/", samesite="Lax")
        return response


class MeView(DashboardAPIView):
    """View for the current identity."""

    @extend_schema(
        operation_id="me",
        summary="Current Identity",
        description="Return the session identity; moderators also get their current debt.",
        tags=["Dashboard Session"],
        responses={200: IdentitySerializer, 401: {"description": "Not authenticated"}},
    )
    def get(self, request: Request) -> Response:
        """Describe the session identity."""
        return async_to_sync(self._handle_me)(request)

    async def _handle_me(self, request: Request) -> Response:
        """Async handler for me."""
        handler = WhoAmIHandler(ledger_repository=_ledger_repo)
        result = await handler.handle(WhoAmIQuery(requester=request.user))
        return Response(IdentitySerializer(result).data, status=status.HTTP_200_OK)


class KeysView(DashboardAPIView):
    """View for listing and generating keys."""

    @extend_schema(
        operation_id="list_keys",
        summary="List Keys",
        description="List keys visible to the caller, newest first.",
        tags=["Dashboard Keys"],
        parameters=[
            OpenApiParameter(
                name="search",
                type=str,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Case-insensitive substring of the key or prefix (admins: also the creator)",
            ),
        ],
        responses={200: KeySerializer(many=True)},
    )
    def get(self, request: Request) -> Response:
        """List keys."""
        return async_to_sync(self._handle_list_keys)(request)

    async def _handle_list_keys(self, request: Request) -> Response:
        """Async handler for list keys."""
        handler = ListKeysHandler(key_repository=_key_repo, time_source=_time_source)
        keys = await handler.handle(
            ListKeysQuery(requester=request.user, search=request.query_params.get("search"))
        )
        return Response(KeySerializer(keys, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="generate_keys",
        summary="Generate Keys",
        description=(
            "Generate a batch of keys. Moderators are charged count x tier price. "
            "With ?download=txt the batch is returned as <prefix>_keys.txt."
        ),
        tags=["Dashboard Keys"],
        parameters=[
            OpenApiParameter(
                name="download",
                type=str,
                location=OpenApiParameter.QUERY,
                required=False,
                enum=["txt"],
                description="Return the batch as a text file",
            ),
        ],
        request=GenerateKeysRequestSerializer,
        responses={
            201: GenerateKeysResponseSerializer,
            200: OpenApiResponse(response=OpenApiTypes.STR, description="Text file download"),
            400: {"description": "Bad Request"},
            404: {"description": "Moderator account no longer exists"},
        },
    )
    def post(self, request: Request) -> Response:
        """Generate keys."""
        return async_to_sync(self._handle_generate_keys)(request)

    async def _handle_generate_keys(self, request: Request):
        """Async handler for generate keys."""
        with tracer.start_as_current_span("generate_keys") as span:
            serializer = GenerateKeysRequestSerializer(data=request.data)
            if not serializer.is_valid():
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                return _validation_error(serializer)

            span.set_attribute("prefix", serializer.validated_data["prefix"])
            span.set_attribute("count", serializer.validated_data["count"])
            span.set_attribute("role", request.user.role.value)

            handler = GenerateKeysHandler(
                key_repository=_key_repo,
                price_repository=_price_repo,
                ledger_repository=_ledger_repo,
            )
            result = await handler.handle(
                GenerateKeysCommand(
                    prefix=serializer.validated_data["prefix"],
                    count=serializer.validated_data["count"],
                    validity_days=serializer.validated_data["validity_days"],
                    requester=request.user,
                )
            )
            span.set_status(Status(StatusCode.OK))

            if request.query_params.get("download") == "txt":
                return HttpResponse(
                    result.to_text(),
                    content_type="text/plain; charset=utf-8",
                    headers={
                        "Content-Disposition": content_disposition_header(
                            as_attachment=True, filename=result.filename
                        )
                    },
                )
            return Response(
                GenerateKeysResponseSerializer(result).data, status=status.HTTP_201_CREATED
            )


class KeyDetailView(DashboardAPIView):
    """View for deleting one key."""

    @extend_schema(
        operation_id="delete_key",
        summary="Delete Key",
        description="Delete one key. Moderators can only delete keys they created.",
        tags=["Dashboard Keys"],
        request=None,
        responses={200: DeletionResultSerializer, 404: DeletionResultSerializer},
    )
    def delete(self, request: Request, key: str) -> Response:
        """Delete a key."""
        return async_to_sync(self._handle_delete_key)(request, key)

    async def _handle_delete_key(self, request: Request, key: str) -> Response:
        """Async handler for delete key."""
        handler = DeleteKeyHandler(key_repository=_key_repo)
        result = await handler.handle(DeleteKeyCommand(key=key, requester=request.user))
        return Response(
            DeletionResultSerializer(result).data,
            status=status.HTTP_200_OK if result.success else status.HTTP_404_NOT_FOUND,
        )


class KeysByPrefixView(DashboardAPIView):
    """View for deleting keys by exact prefix."""

    @extend_schema(
        operation_id="delete_keys_by_prefix",
        summary="Delete Keys By Prefix",
        description="Delete every key whose prefix equals the given prefix exactly.",
        tags=["Dashboard Keys"],
        request=None,
        responses={200: DeletionResultSerializer},
    )
    def delete(self, request: Request, prefix: str) -> Response:
        """Delete keys by prefix."""
        return async_to_sync(self._handle_delete_by_prefix)(request, prefix)

    async def _handle_delete_by_prefix(self, request: Request, prefix: str) -> Response:
        """Async handler for delete by prefix."""
        handler = DeleteKeysByPrefixHandler(key_repository=_key_repo)
        result = await handler.handle(DeleteKeysByPrefixCommand(prefix=prefix, requester=request.user))
        return Response(DeletionResultSerializer(result).data, status=status.HTTP_200_OK)


class ModeratorsView(DashboardAPIView):
    """View for listing and creating moderators (admin only)."""

    permission_classes = [IsAdminIdentity]

    @extend_schema(
        operation_id="list_moderators",
        summary="List Moderators",
        tags=["Dashboard Moderators"],
        responses={200: ModeratorSerializer(many=True)},
    )
    def get(self, request: Request) -> Response:
        """List moderators."""
        return async_to_sync(self._handle_list_moderators)(request)

    async def _handle_list_moderators(self, request: Request) -> Response:
        """Async handler for list moderators."""
        handler = ListModeratorsHandler(moderator_repository=_moderator_repo)
        moderators = await handler.handle(ListModeratorsQuery(requester=request.user))
        return Response(ModeratorSerializer(moderators, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="create_moderator",
        summary="Create Moderator",
        tags=["Dashboard Moderators"],
        request=CreateModeratorRequestSerializer,
        responses={
            201: AccountResultSerializer,
            400: {"description": "Bad Request"},
            409: {"description": "Username already exists"},
        },
    )
    def post(self, request: Request) -> Response:
        """Create a moderator."""
        return async_to_sync(self._handle_create_moderator)(request)

    async def _handle_create_moderator(self, request: Request) -> Response:
        """Async handler for create moderator."""
        serializer = CreateModeratorRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return _validation_error(serializer)

        handler = CreateModeratorHandler(moderator_repository=_moderator_repo)
        result = await handler.handle(
            CreateModeratorCommand(
                username=serializer.validated_data["username"],
                password=serializer.validated_data["password"],
                requester=request.user,
            )
        )
        return Response(AccountResultSerializer(result).data, status=status.HTTP_201_CREATED)


class ModeratorDetailView(DashboardAPIView):
    """View for reading and deleting one moderator."""

    def get_permissions(self):
        if self.request.method == "DELETE":
            return [IsAdminIdentity()]
        return [IsAuthenticatedIdentity()]

    @extend_schema(
        operation_id="get_moderator",
        summary="Get Moderator",
        description="Admins can read any moderator; moderators only themselves.",
        tags=["Dashboard Moderators"],
        responses={200: ModeratorSerializer, 403: {"description": "Forbidden"}, 404: {"description": "Not found"}},
    )
    def get(self, request: Request, moderator_id) -> Response:
        """Get a moderator."""
        return async_to_sync(self._handle_get_moderator)(request, moderator_id)

    async def _handle_get_moderator(self, request: Request, moderator_id) -> Response:
        """Async handler for get moderator."""
        handler = GetModeratorHandler(moderator_repository=_moderator_repo)
        moderator = await handler.handle(
            GetModeratorQuery(moderator_id=moderator_id, requester=request.user)
        )
        return Response(ModeratorSerializer(moderator).data, status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="delete_moderator",
        summary="Delete Moderator",
        description="Delete a moderator and every key they created.",
        tags=["Dashboard Moderators"],
        request=None,
        responses={200: AccountResultSerializer, 404: AccountResultSerializer},
    )
    def delete(self, request: Request, moderator_id) -> Response:
        """Delete a moderator."""
        return async_to_sync(self._handle_delete_moderator)(request, moderator_id)

    async def _handle_delete_moderator(self, request: Request, moderator_id) -> Response:
        """Async handler for delete moderator."""
        handler = DeleteModeratorHandler(moderator_repository=_moderator_repo)
        result = await handler.handle(
            DeleteModeratorCommand(moderator_id=moderator_id, requester=request.user)
        )
        return Response(
            AccountResultSerializer(result).data,
            status=status.HTTP_200_OK if result.success else status.HTTP_404_NOT_FOUND,
        )


class ClearDebtView(DashboardAPIView):
    """View for clearing a moderator's debt (admin only)."""

    permission_classes = [IsAdminIdentity]

    @extend_schema(
        operation_id="clear_moderator_debt",
        summary="Clear Moderator Debt",
        tags=["Dashboard Moderators"],
        request=None,
        responses={200: AccountResultSerializer, 404: AccountResultSerializer},
    )
    def post(self, request: Request, moderator_id) -> Response:
        """Clear debt."""
        return async_to_sync(self._handle_clear_debt)(request, moderator_id)

    async def _handle_clear_debt(self, request: Request, moderator_id) -> Response:
        """Async handler for clear debt."""
        handler = ClearDebtHandler(ledger_repository=_ledger_repo)
        result = await handler.handle(ClearDebtCommand(moderator_id=moderator_id, requester=request.user))
        return Response(
            AccountResultSerializer(result).data,
            status=status.HTTP_200_OK if result.success else status.HTTP_404_NOT_FOUND,
        )


class PricesView(DashboardAPIView):
    """View for the price table."""

    def get_permissions(self):
        if self.request.method == "PUT":
            return [IsAdminIdentity()]
        return [IsAuthenticatedIdentity()]

    @extend_schema(
        operation_id="list_prices",
        summary="List Prices",
        description="Standard tiers (unset ones at 0) plus any other configured tier.",
        tags=["Dashboard Prices"],
        responses={200: PriceTierSerializer(many=True)},
    )
    def get(self, request: Request) -> Response:
        """List prices."""
        return async_to_sync(self._handle_list_prices)(request)

    async def _handle_list_prices(self, request: Request) -> Response:
        """Async handler for list prices."""
        handler = ListPricesHandler(price_repository=_price_repo)
        tiers = await handler.handle(ListPricesQuery(requester=request.user))
        return Response(PriceTierSerializer(tiers, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="upsert_prices",
        summary="Update Prices",
        description="Create or overwrite tiers. Invalid entries are skipped and reported.",
        tags=["Dashboard Prices"],
        request=UpsertPricesRequestSerializer,
        responses={200: UpsertPricesResultSerializer, 400: {"description": "Bad Request"}},
    )
    def put(self, request: Request) -> Response:
        """Upsert prices."""
        return async_to_sync(self._handle_upsert_prices)(request)

    async def _handle_upsert_prices(self, request: Request) -> Response:
        """Async handler for upsert prices."""
        serializer = UpsertPricesRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return _validation_error(serializer)

        handler = UpsertPricesHandler(price_repository=_price_repo)
        result = await handler.handle(
            UpsertPricesCommand(requester=request.user, entries=serializer.validated_data["prices"])
        )
        return Response(UpsertPricesResultSerializer(result).data, status=status.HTTP_200_OK)

"""
App configuration for the Gatekeeper service.
"""

import logging
import os
import sys

from django.apps import AppConfig

logger = logging.getLogger(__name__)

SKIPPED_COMMANDS = ("migrate", "makemigrations", "collectstatic", "check")


class GatekeeperServiceConfig(AppConfig):
    """App configuration for GatekeeperService."""

    name = "GatekeeperService"
    verbose_name = "Gatekeeper License Key Service"

    def ready(self):
        """Called when Django starts."""
        # Registers the OpenAPI auth extension with drf-spectacular
        import core.schema_extensions  # noqa: F401

        self.register_event_handlers()

        if len(sys.argv) > 1 and sys.argv[1] in SKIPPED_COMMANDS:
            return

        # Django's reloader imports the project twice
        if os.environ.get("RUN_MAIN") == "false":
            return

        self.setup_observability()

    def setup_observability(self):
        """Setup tracing after apps are ready."""
        from core.instrumentation import otel_enabled, setup_opentelemetry

        if not otel_enabled():
            return
        try:
            setup_opentelemetry()
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.warning("Failed to setup OpenTelemetry: %s", e)

    def register_event_handlers(self):
        """Subscribe the audit log handler to domain events."""
        from core.infrastructure.event_handlers import register_event_handlers

        register_event_handlers()

"""
Django management command to create a moderator account.
"""

import logging

from asgiref.sync import async_to_sync
from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from accounts.application.commands.moderator_commands import CreateModeratorCommand
from accounts.application.handlers.moderator_handlers import CreateModeratorHandler
from accounts.infrastructure.repositories.django_moderator_repository import (
    DjangoModeratorRepository,
)
from core.domain.exceptions import DomainException
from core.domain.value_objects import Identity

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    """Command to create a moderator."""

    help = "Create a moderator account for the dashboard"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument("username", type=str, help="Moderator username")
        parser.add_argument("password", type=str, help="Moderator password")

    def handle(self, *args, **options):
        """Execute the command."""
        handler = CreateModeratorHandler(moderator_repository=DjangoModeratorRepository())
        command = CreateModeratorCommand(
            username=options["username"],
            password=options["password"],
            requester=Identity.admin(settings.ADMIN_USERNAME),
        )
        try:
            result = async_to_sync(handler.handle)(command)
        except DomainException as e:
            raise CommandError(e.message) from e

        # pylint: disable=no-member
        self.stdout.write(self.style.SUCCESS(result.message))
        self.stdout.write(f"   ID: {result.moderator.id}")

"""
Pytest configuration and shared fixtures.
"""

import uuid
from datetime import date, datetime, time, timezone as dt_timezone
from decimal import Decimal

import pytest
from asgiref.sync import sync_to_async
from django.conf import settings
from django.contrib.auth.hashers import make_password
from django.utils import timezone

from accounts.infrastructure.models import Moderator as ModeratorModel
from accounts.infrastructure.repositories.django_ledger_repository import DjangoLedgerRepository
from accounts.infrastructure.repositories.django_moderator_repository import (
    DjangoModeratorRepository,
)
from core.domain.value_objects import Identity
from core.infrastructure.event_handlers import register_event_handlers
from core.infrastructure.events import event_bus
from core.infrastructure.session import SessionSigner
from core.ports.time_source import TimeSource
from keys.domain.key import generate_key_string
from keys.infrastructure.models import Key as KeyModel
from keys.infrastructure.repositories.django_key_repository import DjangoKeyRepository
from pricing.infrastructure.models import Price as PriceModel
from pricing.infrastructure.repositories.django_price_repository import DjangoPriceRepository


class FixedTimeSource(TimeSource):
    """Time source frozen at noon UTC of a given date; move it with set_date()."""

    def __init__(self, today: date):
        self.set_date(today)

    def set_date(self, today: date) -> None:
        self._now = datetime.combine(today, time(12, 0), tzinfo=dt_timezone.utc)

    async def now(self) -> datetime:
        return self._now


@pytest.fixture(autouse=True)
def reset_event_bus():
    """Start every test with only the audit handler subscribed."""
    event_bus.clear()
    register_event_handlers(force=True)
    yield
    event_bus.clear()
    register_event_handlers(force=True)


@pytest.fixture
def time_source():
    """Fixture for a time source fixed at 2025-01-01."""
    return FixedTimeSource(date(2025, 1, 1))


@pytest.fixture
def key_repository():
    """Fixture for KeyRepository."""
    return DjangoKeyRepository()


@pytest.fixture
def price_repository():
    """Fixture for PriceRepository."""
    return DjangoPriceRepository()


@pytest.fixture
def ledger_repository():
    """Fixture for LedgerRepository."""
    return DjangoLedgerRepository()


@pytest.fixture
def moderator_repository():
    """Fixture for ModeratorRepository."""
    return DjangoModeratorRepository()


@pytest.fixture
def admin_identity():
    """Fixture for the admin identity."""
    return Identity.admin(settings.ADMIN_USERNAME)


@pytest.fixture
def db_moderator(db):
    """Fixture for a Moderator saved in database (password: secret123)."""
    return ModeratorModel.objects.create(
        username="alice",
        password=make_password("secret123"),
        debt=Decimal("0.00"),
        created_at=timezone.now(),
    )


@pytest.fixture
def other_moderator(db):
    """Fixture for a second Moderator saved in database."""
    return ModeratorModel.objects.create(
        username="bob",
        password=make_password("hunter22"),
        debt=Decimal("0.00"),
        created_at=timezone.now(),
    )


@pytest.fixture
def moderator_identity(db_moderator):
    """Fixture for the identity of db_moderator."""
    return Identity.moderator(db_moderator.username, db_moderator.id)


@pytest.fixture
def db_prices(db):
    """Fixture for a configured price table."""
    for validity_days, price in ((1, "0.50"), (7, "2.50"), (30, "8.00")):
        PriceModel.objects.create(validity_days=validity_days, price=Decimal(price))


def make_key(prefix="TRIAL", validity_days=7, created_by="admin", **fields):
    """Save a key row directly through the ORM."""
    values = {
        "key": generate_key_string(prefix),
        "prefix": prefix,
        "validity_days": validity_days,
        "price": Decimal("0.00"),
        "created_by": created_by,
        "created_at": timezone.now(),
    }
    values.update(fields)
    return KeyModel.objects.create(**values)


@pytest.fixture
def db_key(db):
    """Fixture for an unactivated 7-day TRIAL key created by the admin."""
    return make_key()


@pytest.fixture
def active_key(db):
    """Fixture for a key activated on 2025-01-01 that expires on 2025-01-08."""
    return make_key(
        is_active=True,
        activation_date=date(2025, 1, 1),
        expires=date(2025, 1, 8),
    )


@pytest.fixture
def api_client():
    """Fixture for DRF API client."""
    from rest_framework.test import APIClient

    return APIClient()


def login_client(identity):
    """Return an API client carrying a valid session cookie for identity."""
    from rest_framework.test import APIClient

    client = APIClient()
    client.cookies[settings.AUTH_SESSION_COOKIE_NAME] = SessionSigner().issue(identity)
    return client


@pytest.fixture
def admin_client(admin_identity):
    """Fixture for an API client logged in as the admin."""
    return login_client(admin_identity)


@pytest.fixture
def moderator_client(moderator_identity):
    """Fixture for an API client logged in as db_moderator."""
    return login_client(moderator_identity)


@pytest.fixture
def fixed_time(monkeypatch, time_source):
    """Route the API views through the fixed time source."""
    monkeypatch.setattr("api.public.views._time_source", time_source)
    monkeypatch.setattr("api.dashboard.views._time_source", time_source)
    return time_source


@pytest.fixture
def unknown_moderator_id():
    return uuid.uuid4()


@pytest.fixture
def key_factory(db):
    """Fixture returning make_key for tests that need custom key rows."""
    return make_key


@pytest.fixture
def async_key_factory(db):
    """Fixture returning make_key wrapped for use inside async tests."""
    return sync_to_async(make_key)


@pytest.fixture
def client_for():
    """Fixture returning login_client for tests that log in as a custom identity."""
    return login_client

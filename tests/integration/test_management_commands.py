"""
Integration tests for management commands.
"""
from decimal import Decimal
from io import StringIO

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError

from accounts.infrastructure.models import Moderator
from pricing.infrastructure.models import Price


@pytest.mark.django_db
@pytest.mark.integration
class TestSeedPrices:
    """Tests for the seed_prices command."""

    def test_seeds_standard_tiers(self):
        """Test every standard tier is created at the given price."""
        out = StringIO()
        call_command("seed_prices", price="1.00", stdout=out)

        assert "Seeded 6 price tier(s)" in out.getvalue()
        assert sorted(Price.objects.values_list("validity_days", flat=True)) == [1, 7, 30, 90, 365, 36500]
        assert set(Price.objects.values_list("price", flat=True)) == {Decimal("1.00")}

    def test_keeps_configured_tiers(self, db_prices):
        """Test configured tiers are not reset without --overwrite."""
        out = StringIO()
        call_command("seed_prices", stdout=out)

        assert "Seeded 3 price tier(s)" in out.getvalue()
        assert Price.objects.get(validity_days=7).price == Decimal("2.50")
        assert Price.objects.get(validity_days=90).price == Decimal("0.00")

    def test_nothing_to_seed(self):
        """Test a second run reports that all tiers exist."""
        call_command("seed_prices", stdout=StringIO())
        out = StringIO()
        call_command("seed_prices", stdout=out)

        assert "All standard tiers are already configured" in out.getvalue()

    def test_overwrite(self, db_prices):
        """Test --overwrite resets every standard tier."""
        call_command("seed_prices", price="5", overwrite=True, stdout=StringIO())

        assert Price.objects.get(validity_days=7).price == Decimal("5.00")
        assert Price.objects.count() == 6

    def test_invalid_price(self):
        """Test a bad price fails the command and writes nothing."""
        with pytest.raises(CommandError, match="Invalid price"):
            call_command("seed_prices", price="abc", stdout=StringIO())
        assert not Price.objects.exists()


@pytest.mark.django_db
@pytest.mark.integration
class TestCreateModerator:
    """Tests for the create_moderator command."""

    def test_creates_moderator(self):
        """Test a moderator is created with a hashed password."""
        out = StringIO()
        call_command("create_moderator", "carol", "secret123", stdout=out)

        moderator = Moderator.objects.get(username="carol")
        assert 'Moderator "carol" created successfully.' in out.getvalue()
        assert str(moderator.id) in out.getvalue()
        assert moderator.password != "secret123"
        assert moderator.debt == Decimal("0.00")

    def test_duplicate_username(self, db_moderator):
        """Test an existing username is a command error."""
        with pytest.raises(CommandError):
            call_command("create_moderator", "alice", "secret123", stdout=StringIO())

    def test_admin_username_rejected(self):
        """Test the configured admin username is reserved."""
        with pytest.raises(CommandError, match="already exists"):
            call_command("create_moderator", "admin", "secret123", stdout=StringIO())
        assert not Moderator.objects.exists()

    def test_short_password(self):
        """Test the password length rule applies."""
        with pytest.raises(CommandError):
            call_command("create_moderator", "carol", "123", stdout=StringIO())
        assert not Moderator.objects.exists()

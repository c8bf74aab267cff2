"""
Unit tests for Key domain entity.
"""
import re
from datetime import date, timedelta
from decimal import Decimal

import pytest
from django.utils import timezone

from core.domain.exceptions import KeyAlreadyActiveError, KeyExpiredError, KeyNotActivatedError
from core.domain.value_objects import UNLIMITED_VALIDITY_DAYS, KeyStatus
from keys.domain.key import Key, format_validity, generate_key_string, mask_key


def new_key(validity_days=7, **kwargs):
    return Key.create(
        prefix="TRIAL",
        validity_days=validity_days,
        price=Decimal("0.00"),
        created_by="admin",
        **kwargs,
    )


class TestKeyGeneration:
    """Tests for key string generation."""

    def test_key_format(self):
        """Test key is prefix, dash and 32 uppercase hex chars."""
        key = generate_key_string("TRIAL")
        assert re.fullmatch(r"TRIAL-[0-9A-F]{32}", key)

    def test_keys_are_unique(self):
        """Test two generated keys differ."""
        assert generate_key_string("A") != generate_key_string("A")

    def test_create_is_unactivated(self):
        """Test new keys are inactive with no dates."""
        key = new_key()
        assert key.prefix == "TRIAL"
        assert key.key.startswith("TRIAL-")
        assert key.is_active is False
        assert key.activation_date is None
        assert key.expires is None

    def test_create_rejects_long_prefix(self):
        """Test prefixes longer than 10 characters are rejected."""
        with pytest.raises(ValueError, match="at most 10"):
            Key.create(prefix="ABCDEFGHIJK", validity_days=1, price=Decimal("0"), created_by="admin")

    def test_active_key_requires_dates(self):
        """Test the active flag and the dates must agree."""
        with pytest.raises(ValueError):
            Key(
                key="TRIAL-1",
                prefix="TRIAL",
                validity_days=7,
                price=Decimal("0"),
                created_by="admin",
                created_at=timezone.now(),
                is_active=True,
            )


class TestKeyLifecycle:
    """Tests for the unactivated -> active -> expired state machine."""

    def test_activate_sets_expiration(self):
        """Test activation on 2025-01-01 of a 7 day key expires on 2025-01-08."""
        activated = new_key().activate(date(2025, 1, 1))
        assert activated.is_active is True
        assert activated.activation_date == date(2025, 1, 1)
        assert activated.expires == date(2025, 1, 8)

    def test_activate_returns_copy(self):
        """Test the original entity is left untouched."""
        key = new_key()
        key.activate(date(2025, 1, 1))
        assert key.is_active is False

    def test_activate_twice_fails(self):
        """Test a key can only be activated once."""
        activated = new_key().activate(date(2025, 1, 1))
        with pytest.raises(KeyAlreadyActiveError):
            activated.activate(date(2025, 1, 2))

    def test_validity_is_clamped_to_unlimited(self):
        """Test validity above the unlimited sentinel is clamped at activation."""
        activated = new_key(validity_days=50000).activate(date(2025, 1, 1))
        assert activated.expires == date(2025, 1, 1) + timedelta(days=UNLIMITED_VALIDITY_DAYS)
        assert activated.validity_days == 50000

    def test_valid_on_expiration_day(self):
        """Test the expiration date itself is still valid."""
        activated = new_key().activate(date(2025, 1, 1))
        assert activated.check_validity(date(2025, 1, 8)) == date(2025, 1, 8)

    def test_expired_after_expiration_day(self):
        """Test the day after expiration is expired."""
        activated = new_key().activate(date(2025, 1, 1))
        with pytest.raises(KeyExpiredError):
            activated.check_validity(date(2025, 1, 9))

    def test_unactivated_key_is_not_valid(self):
        """Test validity check on an unactivated key."""
        with pytest.raises(KeyNotActivatedError):
            new_key().check_validity(date(2025, 1, 1))

    def test_status(self):
        """Test derived status across the lifecycle."""
        key = new_key()
        assert key.status(date(2025, 1, 1)) == KeyStatus.UNACTIVATED
        activated = key.activate(date(2025, 1, 1))
        assert activated.status(date(2025, 1, 8)) == KeyStatus.ACTIVE
        assert activated.status(date(2025, 1, 9)) == KeyStatus.EXPIRED


class TestFormatting:
    """Tests for display helpers."""

    @pytest.mark.parametrize(
        "days,expected",
        [
            (1, "1 Day(s)"),
            (30, "30 Day(s)"),
            (364, "364 Day(s)"),
            (365, "1 Year(s)"),
            (730, "2 Year(s)"),
            (547, "1.5 Year(s)"),
            (36500, "Unlimited"),
            (99999, "Unlimited"),
        ],
    )
    def test_format_validity(self, days, expected):
        """Test validity display."""
        assert format_validity(days) == expected

    def test_mask_key(self):
        """Test masked keys keep the prefix and the last four chars."""
        key = "TRIAL-0123456789ABCDEF0123456789ABCDEF"
        masked = mask_key(key)
        assert masked == "TRIAL-0123456789ABCDEF01234567****CDEF"
        assert mask_key("SHORT-1") == "SHORT-1"

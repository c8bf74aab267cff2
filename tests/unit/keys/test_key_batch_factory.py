"""
Unit tests for KeyBatchFactory and the generated batch DTO.
"""
from decimal import Decimal

import pytest

from core.domain.exceptions import ValidationError
from keys.application.dto.key_dto import GeneratedKeyDTO, GenerateKeysResultDTO
from keys.domain.services import MAX_BATCH_SIZE, MAX_VALIDITY_DAYS, KeyBatchFactory


class TestKeyBatchFactory:
    """Tests for generation input validation and batch building."""

    def test_validate_trims_prefix(self):
        """Test surrounding whitespace is removed from the prefix."""
        assert KeyBatchFactory.validate("  TRIAL ", 1, 7) == "TRIAL"

    @pytest.mark.parametrize("prefix", ["", "   ", None, "ABCDEFGHIJK"])
    def test_invalid_prefix(self, prefix):
        """Test empty and too long prefixes are rejected."""
        with pytest.raises(ValidationError):
            KeyBatchFactory.validate(prefix, 1, 7)

    @pytest.mark.parametrize("count", [0, -1, MAX_BATCH_SIZE + 1, "5", True])
    def test_invalid_count(self, count):
        """Test count must be an integer between 1 and 100."""
        with pytest.raises(ValidationError):
            KeyBatchFactory.validate("TRIAL", count, 7)

    @pytest.mark.parametrize("validity_days", [0, -7, 1.5, None, MAX_VALIDITY_DAYS + 1, 10**20])
    def test_invalid_validity(self, validity_days):
        """Test validity must be a positive integer."""
        with pytest.raises(ValidationError):
            KeyBatchFactory.validate("TRIAL", 1, validity_days)

    def test_boundaries_accepted(self):
        """Test the smallest and largest batch sizes pass."""
        assert KeyBatchFactory.validate("A", 1, 1) == "A"
        assert KeyBatchFactory.validate("ABCDEFGHIJ", MAX_BATCH_SIZE, 36500) == "ABCDEFGHIJ"
        assert KeyBatchFactory.validate("A", 1, MAX_VALIDITY_DAYS) == "A"

    def test_build(self):
        """Test build returns distinct unactivated keys sharing one creation time."""
        keys = KeyBatchFactory.build(
            prefix="TRIAL",
            count=5,
            validity_days=7,
            unit_price=Decimal("2.50"),
            created_by="alice",
        )
        assert len(keys) == 5
        assert len({key.key for key in keys}) == 5
        assert len({key.created_at for key in keys}) == 1
        assert all(key.price == Decimal("2.50") for key in keys)
        assert all(key.created_by == "alice" for key in keys)
        assert not any(key.is_active for key in keys)


class TestGenerateKeysResultDTO:
    """Tests for the downloadable batch."""

    def test_text_download(self):
        """Test the text file has one tab separated line per key."""
        result = GenerateKeysResultDTO(
            prefix="TRIAL",
            validity_days=365,
            unit_price=Decimal("0.00"),
            total_cost=Decimal("0.00"),
            keys=[
                GeneratedKeyDTO(key="TRIAL-AAA", validity_days=365, price=Decimal("0.00")),
                GeneratedKeyDTO(key="TRIAL-BBB", validity_days=365, price=Decimal("0.00")),
            ],
        )
        assert result.filename == "TRIAL_keys.txt"
        assert result.to_text() == "TRIAL-AAA\t1 Year(s)\nTRIAL-BBB\t1 Year(s)"

"""
Integration tests for repository implementations.
"""

import asyncio
import uuid
from datetime import date
from decimal import Decimal

import pytest

from accounts.domain.moderator import Moderator
from core.domain.exceptions import ModeratorAlreadyExistsError, ValidationError
from core.domain.value_objects import MAX_MONEY
from keys.domain.key import Key
from pricing.domain.price_tier import FREE, PriceTier


def build_key(prefix="TRIAL", created_by="admin", validity_days=7):
    return Key.create(
        prefix=prefix,
        validity_days=validity_days,
        price=Decimal("0.00"),
        created_by=created_by,
    )


@pytest.mark.django_db(transaction=True)
@pytest.mark.integration
class TestKeyRepository:
    """Integration tests for KeyRepository."""

    @pytest.mark.asyncio
    async def test_save_all_and_find(self, key_repository):
        """Test saving a batch and finding a key."""
        keys = [build_key() for _ in range(3)]

        saved = await key_repository.save_all(keys)
        assert len(saved) == 3

        found = await key_repository.find_by_key(keys[0].key)
        assert found is not None
        assert found.prefix == "TRIAL"
        assert found.is_active is False
        assert found.expires is None

    @pytest.mark.asyncio
    async def test_find_not_found(self, key_repository):
        """Test finding a non-existent key."""
        assert await key_repository.find_by_key("NOPE-0000") is None

    @pytest.mark.asyncio
    async def test_mark_activated_once(self, key_repository):
        """Test the conditional update only succeeds for the first caller."""
        key = build_key()
        await key_repository.save_all([key])

        first = await key_repository.mark_activated(key.key, date(2025, 1, 1), date(2025, 1, 8))
        second = await key_repository.mark_activated(key.key, date(2025, 1, 2), date(2025, 1, 9))

        assert first is True
        assert second is False
        stored = await key_repository.find_by_key(key.key)
        assert stored.activation_date == date(2025, 1, 1)
        assert stored.expires == date(2025, 1, 8)

    @pytest.mark.asyncio
    async def test_list_keys_scoped_and_searched(self, key_repository):
        """Test owner filter and case-insensitive search."""
        mine = build_key(created_by="alice")
        theirs = build_key(created_by="bob")
        await key_repository.save_all([mine, theirs])

        assert {key.key for key in await key_repository.list_keys()} == {mine.key, theirs.key}
        assert [key.key for key in await key_repository.list_keys(owner="alice")] == [mine.key]

        suffix = mine.key.split("-", 1)[1][:8].lower()
        found = await key_repository.list_keys(search=suffix)
        assert mine.key in {key.key for key in found}

    @pytest.mark.asyncio
    async def test_search_by_prefix_and_creator(self, key_repository):
        """Test search covers the prefix, and the creator only when unscoped."""
        mine = build_key(prefix="PRO", created_by="alice")
        theirs = build_key(prefix="TRIAL", created_by="bob")
        await key_repository.save_all([mine, theirs])

        assert [key.key for key in await key_repository.list_keys(search="pro")] == [mine.key]
        assert [key.key for key in await key_repository.list_keys(search="BOB")] == [theirs.key]
        assert await key_repository.list_keys(owner="alice", search="alice") == []

    @pytest.mark.asyncio
    async def test_delete_respects_owner(self, key_repository):
        """Test a moderator cannot delete another moderator's key."""
        key = build_key(created_by="bob")
        await key_repository.save_all([key])

        assert await key_repository.delete_key(key.key, owner="alice") == 0
        assert await key_repository.delete_key(key.key) == 1
        assert await key_repository.find_by_key(key.key) is None

    @pytest.mark.asyncio
    async def test_delete_by_exact_prefix(self, key_repository):
        """Test prefix deletion does not touch longer prefixes."""
        await key_repository.save_all([build_key("AB"), build_key("AB"), build_key("ABC")])

        assert await key_repository.delete_by_prefix("AB") == 2
        remaining = await key_repository.list_keys()
        assert [key.prefix for key in remaining] == ["ABC"]


@pytest.mark.django_db(transaction=True)
@pytest.mark.integration
class TestPriceRepository:
    """Integration tests for PriceRepository."""

    @pytest.mark.asyncio
    async def test_unconfigured_tier_is_free(self, price_repository):
        """Test a missing tier prices at 0."""
        assert await price_repository.price_for(7) == FREE

    @pytest.mark.asyncio
    async def test_upsert_overwrites(self, price_repository):
        """Test upsert creates and then overwrites a tier."""
        await price_repository.upsert([PriceTier(7, Decimal("2.50")), PriceTier(30, Decimal("8"))])
        await price_repository.upsert([PriceTier(7, Decimal("3.00"))])

        assert await price_repository.price_for(7) == Decimal("3.00")
        tiers = await price_repository.list_all()
        assert [(tier.validity_days, tier.price) for tier in tiers] == [
            (7, Decimal("3.00")),
            (30, Decimal("8.00")),
        ]


@pytest.mark.django_db(transaction=True)
@pytest.mark.integration
class TestLedgerRepository:
    """Integration tests for LedgerRepository."""

    @pytest.mark.asyncio
    async def test_charge_and_clear(self, ledger_repository, db_moderator):
        """Test charges accumulate and clear resets to 0."""
        assert await ledger_repository.charge(db_moderator.id, Decimal("12.50")) is True
        assert await ledger_repository.charge(db_moderator.id, Decimal("0.50")) is True
        assert await ledger_repository.get_debt(db_moderator.id) == Decimal("13.00")

        assert await ledger_repository.clear(db_moderator.id) is True
        assert await ledger_repository.get_debt(db_moderator.id) == Decimal("0.00")

    @pytest.mark.asyncio
    async def test_concurrent_charges_are_not_lost(self, ledger_repository, db_moderator):
        """Test concurrent increments all land."""
        await asyncio.gather(
            *(ledger_repository.charge(db_moderator.id, Decimal("1.25")) for _ in range(10))
        )
        assert await ledger_repository.get_debt(db_moderator.id) == Decimal("12.50")

    @pytest.mark.asyncio
    async def test_unknown_account(self, ledger_repository, unknown_moderator_id):
        """Test operations on a missing account report failure."""
        assert await ledger_repository.charge(unknown_moderator_id, Decimal("1")) is False
        assert await ledger_repository.clear(unknown_moderator_id) is False
        assert await ledger_repository.get_debt(unknown_moderator_id) is None

    @pytest.mark.asyncio
    async def test_charge_over_limit(self, ledger_repository, db_moderator):
        """Test a charge that would overflow the debt column is rejected."""
        await ledger_repository.charge(db_moderator.id, MAX_MONEY - Decimal("1.00"))

        with pytest.raises(ValidationError):
            await ledger_repository.charge(db_moderator.id, Decimal("2.00"))
        assert await ledger_repository.get_debt(db_moderator.id) == MAX_MONEY - Decimal("1.00")

    @pytest.mark.asyncio
    async def test_refund_after_clear_stays_at_zero(self, ledger_repository, db_moderator):
        """Test a refund never makes the debt negative."""
        await ledger_repository.charge(db_moderator.id, Decimal("5.00"))
        await ledger_repository.clear(db_moderator.id)

        assert await ledger_repository.refund(db_moderator.id, Decimal("5.00")) is True
        assert await ledger_repository.get_debt(db_moderator.id) == Decimal("0.00")

    @pytest.mark.asyncio
    async def test_refund(self, ledger_repository, db_moderator):
        """Test refund reverses a charge."""
        await ledger_repository.charge(db_moderator.id, Decimal("5.00"))
        assert await ledger_repository.refund(db_moderator.id, Decimal("5.00")) is True
        assert await ledger_repository.get_debt(db_moderator.id) == Decimal("0.00")


@pytest.mark.django_db(transaction=True)
@pytest.mark.integration
class TestModeratorRepository:
    """Integration tests for ModeratorRepository."""

    @pytest.mark.asyncio
    async def test_add_and_find(self, moderator_repository):
        """Test adding and finding a moderator."""
        moderator = Moderator.create(username="carol", password="secret123")

        saved = await moderator_repository.add(moderator)
        assert saved.id == moderator.id

        by_id = await moderator_repository.find_by_id(moderator.id)
        by_name = await moderator_repository.find_by_username("carol")
        assert by_id.username == "carol"
        assert by_name.id == moderator.id
        assert by_name.check_password("secret123")

    @pytest.mark.asyncio
    async def test_duplicate_username(self, moderator_repository, db_moderator):
        """Test usernames are unique."""
        with pytest.raises(ModeratorAlreadyExistsError):
            await moderator_repository.add(Moderator.create(username="alice", password="secret123"))

    @pytest.mark.asyncio
    async def test_delete_with_keys(self, moderator_repository, key_repository, db_moderator):
        """Test deleting a moderator removes exactly their keys."""
        await key_repository.save_all(
            [build_key(created_by="alice"), build_key(created_by="alice"), build_key()]
        )

        assert await moderator_repository.delete_with_keys(db_moderator.id) == 2
        assert await moderator_repository.find_by_id(db_moderator.id) is None
        remaining = await key_repository.list_keys()
        assert [key.created_by for key in remaining] == ["admin"]

    @pytest.mark.asyncio
    async def test_delete_unknown(self, moderator_repository):
        """Test deleting a missing moderator returns None."""
        assert await moderator_repository.delete_with_keys(uuid.uuid4()) is None

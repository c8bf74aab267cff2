"""
Integration tests for the dashboard API endpoints.
"""

from decimal import Decimal

import pytest
from django.conf import settings
from django.urls import reverse

from accounts.infrastructure.models import Moderator
from core.infrastructure.session import SessionSigner
from keys.infrastructure.models import Key
from pricing.infrastructure.models import Price


@pytest.mark.django_db
@pytest.mark.integration
class TestSessionAPI:
    """Integration tests for login, logout and the current identity."""

    def test_admin_login_sets_cookie(self, api_client):
        """Test admin login issues the session cookie."""
        response = api_client.post(
            reverse("dashboard-login"), {"username": "admin", "password": "password"}, format="json"
        )

        assert response.status_code == 200
        assert response.json()["role"] == "admin"
        cookie = response.cookies[settings.AUTH_SESSION_COOKIE_NAME]
        assert cookie["httponly"]
        assert SessionSigner().resolve(cookie.value).is_admin

    def test_login_then_me(self, api_client, db_moderator):
        """Test the cookie from login authenticates later requests."""
        api_client.post(
            reverse("dashboard-login"), {"username": "alice", "password": "secret123"}, format="json"
        )

        response = api_client.get(reverse("dashboard-me"))

        assert response.status_code == 200
        assert response.json() == {
            "role": "moderator",
            "username": "alice",
            "account_id": str(db_moderator.id),
            "debt": 0.0,
        }

    def test_login_failure(self, api_client, db_moderator):
        """Test wrong credentials give 401 and no cookie."""
        response = api_client.post(
            reverse("dashboard-login"), {"username": "alice", "password": "nope"}, format="json"
        )

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "AUTHENTICATION_FAILED"
        assert settings.AUTH_SESSION_COOKIE_NAME not in response.cookies

    def test_login_missing_fields(self, api_client):
        """Test login input validation."""
        response = api_client.post(reverse("dashboard-login"), {"username": "admin"}, format="json")

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"
        assert "password" in response.json()["error"]["fields"]

    def test_logout_clears_cookie(self, admin_client):
        """Test logout expires the cookie."""
        response = admin_client.post(reverse("dashboard-logout"))

        assert response.status_code == 200
        assert response.cookies[settings.AUTH_SESSION_COOKIE_NAME].value == ""

    @pytest.mark.parametrize("cookie", [None, "garbage", "a:b:c"])
    def test_unauthenticated(self, api_client, cookie):
        """Test missing or invalid sessions get 401."""
        if cookie is not None:
            api_client.cookies[settings.AUTH_SESSION_COOKIE_NAME] = cookie

        response = api_client.get(reverse("dashboard-keys"))

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "NOT_AUTHENTICATED"

    def test_me_for_deleted_moderator(self, moderator_client, db_moderator):
        """Test a session outliving its account is rejected."""
        Moderator.objects.filter(id=db_moderator.id).delete()

        response = moderator_client.get(reverse("dashboard-me"))

        assert response.status_code == 401


@pytest.mark.django_db
@pytest.mark.integration
class TestKeysAPI:
    """Integration tests for key generation, listing and deletion."""

    def test_moderator_generates_and_is_charged(self, moderator_client, db_moderator, db_prices):
        """Test 5 keys at 2.50 cost 12.50."""
        response = moderator_client.post(
            reverse("dashboard-keys"),
            {"prefix": "PRO", "count": 5, "validity_days": 7},
            format="json",
        )

        assert response.status_code == 201
        data = response.json()
        assert data["total_cost"] == 12.5
        assert data["unit_price"] == 2.5
        assert len(data["keys"]) == 5
        assert data["keys"][0]["validity_display"] == "7 Day(s)"
        db_moderator.refresh_from_db()
        assert db_moderator.debt == Decimal("12.50")
        assert Key.objects.filter(created_by="alice").count() == 5

    def test_generate_large_validity(self, admin_client, api_client, fixed_time):
        """Test validity beyond unlimited is stored as given and clamped at activation."""
        response = admin_client.post(
            reverse("dashboard-keys"), {"prefix": "BIG", "count": 1, "validity_days": 50000}, format="json"
        )

        assert response.status_code == 201
        key = response.json()["keys"][0]["key"]
        assert Key.objects.get(key=key).validity_days == 50000
        activated = api_client.post(reverse("activate-key"), {"key": key}, format="json")
        assert activated.json()["expires"] == "2124-12-08"

    def test_generate_download(self, admin_client):
        """Test the batch can be downloaded as a text file."""
        response = admin_client.post(
            reverse("dashboard-keys") + "?download=txt",
            {"prefix": "TRIAL", "count": 2, "validity_days": 36500},
            format="json",
        )

        assert response.status_code == 200
        assert response["Content-Type"].startswith("text/plain")
        assert 'filename="TRIAL_keys.txt"' in response["Content-Disposition"]
        lines = response.content.decode().split("\n")
        assert len(lines) == 2
        assert all(line.startswith("TRIAL-") and line.endswith("\tUnlimited") for line in lines)

    @pytest.mark.parametrize(
        "payload",
        [
            {"prefix": "", "count": 1, "validity_days": 7},
            {"prefix": "ABCDEFGHIJK", "count": 1, "validity_days": 7},
            {"prefix": "A", "count": 0, "validity_days": 7},
            {"prefix": "A", "count": 101, "validity_days": 7},
            {"prefix": "A", "count": 1, "validity_days": 0},
            {"prefix": "BIG", "count": 1, "validity_days": 10**20},
            {"prefix": "A", "count": 1},
        ],
    )
    def test_generate_validation(self, admin_client, payload):
        """Test out of range input is a 400 and writes nothing."""
        response = admin_client.post(reverse("dashboard-keys"), payload, format="json")

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"
        assert Key.objects.count() == 0

    def test_list_scoped_to_moderator(self, moderator_client, admin_client, key_factory, fixed_time):
        """Test moderators list only their keys; the admin lists all."""
        own = key_factory(created_by="alice")
        key_factory(created_by="bob")

        mine = moderator_client.get(reverse("dashboard-keys")).json()
        everything = admin_client.get(reverse("dashboard-keys")).json()

        assert [item["key"] for item in mine] == [own.key]
        assert mine[0]["status"] == "unactivated"
        assert len(everything) == 2

    def test_list_search(self, admin_client, key_factory, fixed_time):
        """Test search narrows the list by key substring."""
        wanted = key_factory(prefix="FIND")
        key_factory(prefix="SKIP")

        response = admin_client.get(reverse("dashboard-keys"), {"search": "find-"})

        assert [item["key"] for item in response.json()] == [wanted.key]

    def test_search_by_prefix_and_creator(self, admin_client, moderator_client, key_factory, fixed_time):
        """Test search matches prefixes, and creators for the admin only."""
        by_alice = key_factory(prefix="PRO", created_by="alice")
        by_bob = key_factory(prefix="TRIAL", created_by="bob")

        by_prefix = admin_client.get(reverse("dashboard-keys"), {"search": "tri"}).json()
        by_creator = admin_client.get(reverse("dashboard-keys"), {"search": "ALI"}).json()
        moderator_view = moderator_client.get(reverse("dashboard-keys"), {"search": "ali"}).json()

        assert [item["key"] for item in by_prefix] == [by_bob.key]
        assert [item["key"] for item in by_creator] == [by_alice.key]
        assert moderator_view == []

    def test_delete_key(self, admin_client, db_key):
        """Test deleting one key."""
        response = admin_client.delete(reverse("dashboard-key-detail", args=[db_key.key]))

        assert response.status_code == 200
        assert response.json()["deleted"] == 1
        assert not Key.objects.filter(key=db_key.key).exists()

    def test_moderator_cannot_delete_foreign_key(self, moderator_client, db_key):
        """Test another creator's key looks not found."""
        response = moderator_client.delete(reverse("dashboard-key-detail", args=[db_key.key]))

        assert response.status_code == 404
        assert response.json()["message"] == "Key not found."
        assert Key.objects.filter(key=db_key.key).exists()

    def test_delete_by_prefix(self, admin_client, key_factory):
        """Test exact prefix deletion."""
        key_factory(prefix="AB")
        key_factory(prefix="ABC")

        response = admin_client.delete(reverse("dashboard-keys-by-prefix", args=["AB"]))

        assert response.status_code == 200
        assert response.json()["message"] == '1 keys with prefix "AB" deleted.'
        assert list(Key.objects.values_list("prefix", flat=True)) == ["ABC"]


@pytest.mark.django_db
@pytest.mark.integration
class TestModeratorsAPI:
    """Integration tests for moderator management."""

    def test_create_and_list(self, admin_client):
        """Test the admin creates a moderator."""
        response = admin_client.post(
            reverse("dashboard-moderators"), {"username": "carol", "password": "secret123"}, format="json"
        )

        assert response.status_code == 201
        assert response.json()["message"] == 'Moderator "carol" created successfully.'
        listed = admin_client.get(reverse("dashboard-moderators")).json()
        assert [item["username"] for item in listed] == ["carol"]
        assert "password" not in listed[0]

    def test_duplicate_username(self, admin_client, db_moderator):
        """Test usernames are unique."""
        response = admin_client.post(
            reverse("dashboard-moderators"), {"username": "alice", "password": "secret123"}, format="json"
        )

        assert response.status_code == 409

    def test_admin_username_rejected(self, admin_client, key_factory):
        """Test the admin's username cannot become a moderator account."""
        key_factory(created_by="admin")

        response = admin_client.post(
            reverse("dashboard-moderators"), {"username": "admin", "password": "secret123"}, format="json"
        )

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "MODERATOR_ALREADY_EXISTS"
        assert not Moderator.objects.exists()
        assert Key.objects.filter(created_by="admin").count() == 1

    def test_short_password(self, admin_client):
        """Test the password length rule."""
        response = admin_client.post(
            reverse("dashboard-moderators"), {"username": "carol", "password": "123"}, format="json"
        )

        assert response.status_code == 400

    def test_moderator_forbidden(self, moderator_client, db_moderator):
        """Test moderators cannot manage accounts or clear debt."""
        assert moderator_client.get(reverse("dashboard-moderators")).status_code == 403
        clear = moderator_client.post(reverse("dashboard-moderator-clear-debt", args=[db_moderator.id]))
        assert clear.status_code == 403
        assert clear.json()["error"]["code"] == "PERMISSION_DENIED"

    def test_moderator_reads_own_account(self, moderator_client, db_moderator, other_moderator):
        """Test moderators can read only themselves."""
        own = moderator_client.get(reverse("dashboard-moderator-detail", args=[db_moderator.id]))
        other = moderator_client.get(reverse("dashboard-moderator-detail", args=[other_moderator.id]))

        assert own.status_code == 200
        assert own.json()["username"] == "alice"
        assert other.status_code == 403

    def test_delete_cascades(self, admin_client, db_moderator, key_factory):
        """Test deleting a moderator deletes their keys."""
        key_factory(created_by="alice")
        key_factory(created_by="alice")

        response = admin_client.delete(reverse("dashboard-moderator-detail", args=[db_moderator.id]))

        assert response.status_code == 200
        assert response.json()["keys_deleted"] == 2
        assert not Moderator.objects.filter(id=db_moderator.id).exists()
        assert not Key.objects.filter(created_by="alice").exists()

    def test_delete_unknown(self, admin_client, unknown_moderator_id):
        """Test deleting a missing moderator."""
        response = admin_client.delete(reverse("dashboard-moderator-detail", args=[unknown_moderator_id]))

        assert response.status_code == 404

    def test_clear_debt(self, admin_client, db_moderator):
        """Test the admin clears a moderator's debt."""
        Moderator.objects.filter(id=db_moderator.id).update(debt=Decimal("12.50"))

        response = admin_client.post(reverse("dashboard-moderator-clear-debt", args=[db_moderator.id]))

        assert response.status_code == 200
        assert response.json()["message"] == "Debt cleared successfully."
        db_moderator.refresh_from_db()
        assert db_moderator.debt == Decimal("0.00")


@pytest.mark.django_db
@pytest.mark.integration
class TestPricesAPI:
    """Integration tests for the price table."""

    def test_list_prices(self, moderator_client, db_prices):
        """Test every identity can read prices."""
        response = moderator_client.get(reverse("dashboard-prices"))

        assert response.status_code == 200
        tiers = {item["validity_days"]: item for item in response.json()}
        assert tiers[7]["price"] == 2.5
        assert tiers[365]["price"] == 0.0
        assert tiers[365]["configured"] is False

    def test_upsert_prices(self, admin_client):
        """Test partial-success upsert."""
        response = admin_client.put(
            reverse("dashboard-prices"),
            {"prices": [{"validity_days": 7, "price": "2.50"}, {"validity_days": 30, "price": "x"}]},
            format="json",
        )

        assert response.status_code == 200
        data = response.json()
        assert data["applied"] == 1
        assert data["skipped"][0]["validity_days"] == 30
        assert Price.objects.get(validity_days=7).price == Decimal("2.50")

    def test_oversized_price_is_skipped(self, admin_client):
        """Test a price too large to store is skipped and the table stays readable."""
        response = admin_client.put(
            reverse("dashboard-prices"),
            {"prices": [{"validity_days": 7, "price": "2.50"}, {"validity_days": 30, "price": "1e13"}]},
            format="json",
        )

        assert response.status_code == 200
        assert response.json()["applied"] == 1
        assert [item["validity_days"] for item in response.json()["skipped"]] == [30]
        listed = admin_client.get(reverse("dashboard-prices"))
        assert listed.status_code == 200
        assert {item["validity_days"]: item["price"] for item in listed.json()}[30] == 0.0

    def test_moderator_cannot_upsert(self, moderator_client):
        """Test price changes are admin only."""
        response = moderator_client.put(
            reverse("dashboard-prices"), {"prices": [{"validity_days": 7, "price": 1}]}, format="json"
        )

        assert response.status_code == 403
        assert not Price.objects.exists()

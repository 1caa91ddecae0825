"""Tests for admin management, role resolution and the customer directory."""

import pytest
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain
from storefront.access.admin import Admin
from storefront.access.directory import create_customer, delete_customer, list_customers
from storefront.access.management import AddAdmin, RemoveAdmin, check_admin_credentials
from storefront.access.profile import Profile, SaveProfile
from storefront.access.roles import current_user


def _add_admin(username="owner@aishwarya.in", password="s3cret!"):
    return current_domain.process(AddAdmin(username=username, password=password), asynchronous=False)


class TestAdminManagement:
    def test_add_stores_hash_not_password(self):
        admin_id = _add_admin()
        admin = current_domain.repository_for(Admin).get(admin_id)
        assert admin.password_hash != "s3cret!"
        assert admin.password_hash.startswith("pbkdf2_sha256$")

    def test_credentials(self):
        _add_admin()
        assert check_admin_credentials("owner@aishwarya.in", "s3cret!") is True
        assert check_admin_credentials("owner@aishwarya.in", "wrong") is False
        assert check_admin_credentials("nobody@aishwarya.in", "s3cret!") is False

    def test_username_and_password_required(self):
        with pytest.raises(ValidationError) as exc_info:
            _add_admin(username="", password="")
        assert exc_info.value.messages["admin"] == ["Username and password are required."]

    def test_short_password_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            _add_admin(password="12345")
        assert "password" in exc_info.value.messages

    def test_duplicate_username_rejected(self):
        _add_admin()
        with pytest.raises(ValidationError) as exc_info:
            _add_admin(password="another-one")
        assert exc_info.value.messages["username"] == ["An admin with that username already exists."]

    def test_remove(self):
        admin_id = _add_admin()
        current_domain.process(RemoveAdmin(admin_id=admin_id), asynchronous=False)
        with pytest.raises(ObjectNotFoundError):
            current_domain.repository_for(Admin).get(admin_id)


class TestRolePrecedence:
    def test_unknown_token(self):
        assert current_user("not-a-token") is None
        assert current_user(None) is None

    def test_defaults_to_customer(self, identity_provider):
        _, token = identity_provider.register("meera@example.com")
        user = current_user(token)
        assert user.role == "customer"
        assert user.is_admin is False

    def test_metadata_role(self, identity_provider):
        _, token = identity_provider.register("staff@example.com", role="admin")
        assert current_user(token).role == "admin"

    def test_profile_beats_metadata(self, identity_provider):
        user, token = identity_provider.register("staff@example.com", role="admin")
        current_domain.process(SaveProfile(user_id=user.id, role="customer"), asynchronous=False)
        assert current_user(token).role == "customer"

    def test_admin_record_beats_everything(self, identity_provider):
        user, token = identity_provider.register("owner@aishwarya.in")
        current_domain.process(SaveProfile(user_id=user.id, role="customer"), asynchronous=False)
        _add_admin(username="owner@aishwarya.in")
        assert current_user(token).is_admin is True


class TestCustomerDirectory:
    def test_create_adds_user_and_profile(self, identity_provider):
        created = create_customer("meera@example.com", "secret123", full_name="Meera Iyer")
        assert created["id"] in identity_provider.users
        profile = current_domain.repository_for(Profile).for_user(created["id"])
        assert profile.full_name == "Meera Iyer"
        assert profile.role == "customer"

    def test_create_requires_email_and_password(self):
        with pytest.raises(ValidationError) as exc_info:
            create_customer("", "")
        assert "customer" in exc_info.value.messages

    def test_duplicate_email_rejected(self):
        create_customer("meera@example.com", "secret123")
        with pytest.raises(ValidationError) as exc_info:
            create_customer("meera@example.com", "secret123")
        assert "email" in exc_info.value.messages

    def test_listing_aggregates_orders(self, identity_provider, add_product, fill_cart, shipping):
        from storefront.checkout.service import place_order

        created = create_customer("meera@example.com", "secret123", full_name="Meera Iyer")
        identity_provider.create_user("anon@example.com", "secret123")
        fill_cart(created["id"], add_product(price="1,200"), add_product(name="Kurti", price="850"))
        place_order(created["id"], shipping)

        customers = {c["email"]: c for c in list_customers()}

        assert customers["meera@example.com"]["name"] == "Meera Iyer"
        assert customers["meera@example.com"]["orders"] == 1
        assert customers["meera@example.com"]["total_spent"] == 2050
        assert customers["anon@example.com"]["name"] == "No name set"
        assert customers["anon@example.com"]["orders"] == 0

    def test_delete_removes_user_and_profile(self, identity_provider):
        created = create_customer("meera@example.com", "secret123", full_name="Meera Iyer")
        delete_customer(created["id"])
        assert created["id"] not in identity_provider.users
        assert current_domain.repository_for(Profile).for_user(created["id"]) is None

    def test_delete_unknown_user(self):
        with pytest.raises(ValidationError):
            delete_customer("missing-user")

    def test_delete_requires_id(self):
        with pytest.raises(ValidationError):
            delete_customer("")

"""Tests for picking the address checkout starts from."""

from datetime import UTC, datetime, timedelta

from storefront.addresses.address import SavedAddress, resolve_default


def _address(days_ago, is_default=False, city="Chennai"):
    address = SavedAddress.create(
        owner_id="user-001",
        address="12 Temple Street",
        city=city,
        pincode="600004",
        is_default=is_default,
    )
    address.created_at = datetime.now(UTC) - timedelta(days=days_ago)
    return address


class TestResolveDefault:
    def test_no_addresses(self):
        assert resolve_default([]) is None

    def test_flagged_default_wins(self):
        older_default = _address(10, is_default=True, city="Madurai")
        newer = _address(1, city="Coimbatore")
        assert resolve_default([newer, older_default]) is older_default

    def test_falls_back_to_newest(self):
        oldest = _address(30)
        newest = _address(1, city="Salem")
        middle = _address(5)
        assert resolve_default([oldest, newest, middle]) is newest

    def test_single_address(self):
        only = _address(3)
        assert resolve_default([only]) is only


class TestSavedAddress:
    def test_trims_fields(self):
        address = SavedAddress.create(owner_id="user-001", address="  12 Temple Street ", city=" Chennai", pincode="600004 ")
        assert address.address == "12 Temple Street"
        assert address.city == "Chennai"
        assert address.pincode == "600004"

    def test_to_dict(self):
        data = _address(0, is_default=True).to_dict()
        assert data["is_default"] is True
        assert data["city"] == "Chennai"

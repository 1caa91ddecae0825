"""Tests for listed-price parsing and totals."""

import pytest
from protean.exceptions import ValidationError
from storefront.shared.money import format_amount, parse_amount, total_of


class TestParseAmount:
    def test_strips_thousands_separators(self):
        assert parse_amount("1,200") == 1200.0

    def test_indian_grouping(self):
        assert parse_amount("1,25,000") == 125000.0

    def test_accepts_numbers(self):
        assert parse_amount(850) == 850.0
        assert parse_amount(99.5) == 99.5

    def test_decimal_string(self):
        assert parse_amount(" 1,499.50 ") == 1499.5

    def test_blank_is_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_amount("  ")
        assert "price" in exc_info.value.messages

    def test_garbage_is_rejected(self):
        with pytest.raises(ValidationError):
            parse_amount("twelve hundred")

    def test_negative_is_rejected(self):
        with pytest.raises(ValidationError):
            parse_amount("-5")

    @pytest.mark.parametrize("value", ["nan", "inf", "-inf", float("nan"), float("inf")])
    def test_non_finite_is_rejected(self, value):
        with pytest.raises(ValidationError) as exc_info:
            parse_amount(value)
        assert "price" in exc_info.value.messages

    def test_error_names_the_field(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_amount("abc", field="discount_price")
        assert "discount_price" in exc_info.value.messages


class TestTotals:
    def test_cart_total_with_separators(self):
        assert total_of(["1,200", "850"]) == 2050

    def test_empty_total_is_zero(self):
        assert total_of([]) == 0

    def test_rounds_to_paise(self):
        assert total_of(["0.10", "0.20"]) == 0.3


class TestFormatAmount:
    def test_whole_rupees(self):
        assert format_amount(1200.0) == "1,200"

    def test_with_paise(self):
        assert format_amount(1499.5) == "1,499.50"

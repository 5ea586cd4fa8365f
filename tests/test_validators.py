"""
==============================================================================
Validator Tests
==============================================================================

Tests for console input validators.

==============================================================================
"""

from decimal import Decimal

import pytest

from shopcatalog.utils.validators import (
    PageNumberValidator,
    PriceValidator,
    ProductIdValidator,
    RatingValidator,
    TextValidator,
)


class TestProductIdValidator:
    """Tests for ProductIdValidator."""

    def test_valid_id_is_kept_verbatim(self):
        """Test IDs keep their case."""
        assert ProductIdValidator().validate("Ab-12") == (True, "Ab-12", None)

    @pytest.mark.parametrize("raw", ["", "   ", None, " P-1", "P-1 ", "x" * 51])
    def test_invalid_ids(self, raw):
        """Test empty, padded and overlong IDs are rejected."""
        is_valid, value, error = ProductIdValidator().validate(raw)
        assert not is_valid
        assert value is None
        assert error

    def test_is_valid_shortcut(self):
        """Test the boolean helper."""
        assert ProductIdValidator().is_valid("P-1")
        assert not ProductIdValidator().is_valid("")


class TestTextValidator:
    """Tests for TextValidator."""

    def test_strips_whitespace(self):
        """Test accepted values are stripped."""
        assert TextValidator("Name").validate("  Lamp ") == (True, "Lamp", None)

    def test_empty_message_names_field(self):
        """Test the error names the field."""
        assert TextValidator("Product Name").validate("  ") == (
            False, None, "Product Name cannot be empty."
        )


class TestPriceValidator:
    """Tests for PriceValidator."""

    def test_decimal_is_exact(self):
        """Test prices parse to exact decimals."""
        assert PriceValidator().validate("19.99") == (True, Decimal("19.99"), None)

    @pytest.mark.parametrize("raw", ["", "abc", "0", "-5", "NaN", "Infinity", "1,50"])
    def test_invalid_prices(self, raw):
        """Test non-numeric, non-positive and non-finite prices are rejected."""
        is_valid, value, _ = PriceValidator().validate(raw)
        assert not is_valid
        assert value is None


class TestRatingValidator:
    """Tests for RatingValidator."""

    @pytest.mark.parametrize("raw, expected", [("1", 1), (" 5 ", 5), ("3", 3)])
    def test_valid_ratings(self, raw, expected):
        """Test ratings inside 1-5."""
        assert RatingValidator().validate(raw) == (True, expected, None)

    @pytest.mark.parametrize("raw", ["0", "6", "4.5", "five", ""])
    def test_invalid_ratings(self, raw):
        """Test ratings outside 1-5 or not integers."""
        is_valid, value, error = RatingValidator().validate(raw)
        assert not is_valid
        assert value is None
        assert "between 1 and 5" in error


class TestPageNumberValidator:
    """Tests for PageNumberValidator."""

    def test_valid_page(self):
        """Test positive integers are accepted."""
        assert PageNumberValidator().validate("2") == (True, 2, None)

    @pytest.mark.parametrize("raw", ["0", "-1", "x", ""])
    def test_invalid_pages(self, raw):
        """Test non-positive and non-numeric pages are rejected."""
        assert not PageNumberValidator().validate(raw)[0]

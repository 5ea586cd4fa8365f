"""
==============================================================================
Validation Utilities Module
==============================================================================

Validation classes for raw console input.

This module implements:
- ProductIdValidator: Validates product IDs
- TextValidator: Validates required free-text fields
- PriceValidator: Parses and validates prices
- RatingValidator: Parses and validates review ratings
- PageNumberValidator: Parses page numbers for catalog navigation

Every validator returns a tuple of (is_valid, normalized_value, error_message)
so the console can re-prompt with the error text.

==============================================================================
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Optional, Tuple


class ProductIdValidator:
    """
    Validator for product IDs.

    IDs are case-sensitive and kept exactly as typed, apart from
    surrounding whitespace which is rejected rather than trimmed.

    Example:
        >>> validator = ProductIdValidator()
        >>> validator.validate("P-100")
        (True, 'P-100', None)
    """

    MAX_LENGTH = 50

    def validate(self, product_id: Optional[str]) -> Tuple[bool, Optional[str], Optional[str]]:
        """
        Validate a product ID.

        Args:
            product_id: Raw ID input

        Returns:
            Tuple of (is_valid, product_id, error_message)
        """
        if not product_id or not product_id.strip():
            return False, None, "Product ID cannot be empty."

        if product_id != product_id.strip():
            return False, None, "Product ID cannot start or end with spaces."

        if len(product_id) > self.MAX_LENGTH:
            return False, None, f"Product ID must be at most {self.MAX_LENGTH} characters."

        return True, product_id, None

    def is_valid(self, product_id: Optional[str]) -> bool:
        """Quick validation check."""
        is_valid, _, _ = self.validate(product_id)
        return is_valid


class TextValidator:
    """
    Validator for required text fields (name, description, category, ...).
    """

    def __init__(self, field_name: str) -> None:
        self.field_name = field_name

    def validate(self, value: Optional[str]) -> Tuple[bool, Optional[str], Optional[str]]:
        if value is None or not value.strip():
            return False, None, f"{self.field_name} cannot be empty."
        return True, value.strip(), None


class PriceValidator:
    """
    Validator for product prices.

    Prices are parsed as Decimal so that currency values round-trip
    exactly; zero and negative prices are rejected.
    """

    def validate(self, value: Optional[str]) -> Tuple[bool, Optional[Decimal], Optional[str]]:
        """
        Parse and validate a price.

        Args:
            value: Raw price input, e.g. "19.99"

        Returns:
            Tuple of (is_valid, price, error_message)
        """
        error = "Invalid price. Please enter a positive decimal number."

        if not value or not value.strip():
            return False, None, error

        try:
            price = Decimal(value.strip())
        except InvalidOperation:
            return False, None, error

        if not price.is_finite() or price <= 0:
            return False, None, error

        return True, price, None


class RatingValidator:
    """
    Validator for review ratings (1-5 inclusive).
    """

    MIN_RATING = 1
    MAX_RATING = 5

    def validate(self, value: Optional[str]) -> Tuple[bool, Optional[int], Optional[str]]:
        error = (
            f"Invalid rating. Please enter a number between "
            f"{self.MIN_RATING} and {self.MAX_RATING}."
        )

        try:
            rating = int((value or "").strip())
        except ValueError:
            return False, None, error

        if rating < self.MIN_RATING or rating > self.MAX_RATING:
            return False, None, error

        return True, rating, None


class PageNumberValidator:
    """
    Validator for page numbers typed during catalog navigation.

    Only checks that the input is a positive integer; whether the page
    exists is decided by the paginator.
    """

    def validate(self, value: Optional[str]) -> Tuple[bool, Optional[int], Optional[str]]:
        try:
            page = int((value or "").strip())
        except ValueError:
            return False, None, "Page number must be a whole number."

        if page < 1:
            return False, None, "Page number must be at least 1."

        return True, page, None

"""
==============================================================================
Utilities Package
==============================================================================

Utility classes for the console layer.

Modules:
--------
- validators: Product ID, text, price, rating and page number validation

==============================================================================
"""

from .validators import (
    PageNumberValidator,
    PriceValidator,
    ProductIdValidator,
    RatingValidator,
    TextValidator,
)

__all__ = [
    "PageNumberValidator",
    "PriceValidator",
    "ProductIdValidator",
    "RatingValidator",
    "TextValidator",
]

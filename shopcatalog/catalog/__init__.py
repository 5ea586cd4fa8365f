"""
==============================================================================
Catalog Package - Product Management
==============================================================================

Product catalog with nested reviews, JSON persistence and query helpers.

Classes:
--------
- Product, Review: Pydantic models for catalog records
- CatalogStore: Catalog store with durable save-on-mutation
- SortKey, PageResult: Query inputs and outputs

Functions:
----------
- sort_products, paginate, search_products, average_rating

==============================================================================
"""

from .models import Product, Review
from .store import CatalogStore
from .query import (
    PageResult,
    SortKey,
    average_rating,
    paginate,
    search_products,
    sort_products,
)

__all__ = [
    "Product",
    "Review",
    "CatalogStore",
    "PageResult",
    "SortKey",
    "average_rating",
    "paginate",
    "search_products",
    "sort_products",
]

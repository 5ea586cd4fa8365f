"""
==============================================================================
Catalog Query Module
==============================================================================

Stateless query helpers over a catalog snapshot.

Functions:
----------
- sort_products: stable ascending sort by name, price or category
- paginate: 1-based page slicing with invalid-page signalling
- search_products: case-insensitive substring search on ID and name
- average_rating: mean review rating (0.0 without reviews)

All functions take a snapshot (see CatalogStore.get_all) and never touch
the store itself.

==============================================================================
"""

from __future__ import annotations

import logging
import math
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence, Union

from pydantic import BaseModel, Field

from .models import Product, Review


# Module logger
logger = logging.getLogger(__name__)


class SortKey(str, Enum):
    """Fields the catalog can be sorted by."""
    NAME = "name"
    PRICE = "price"
    CATEGORY = "category"

    @classmethod
    def parse(cls, value: Optional[Union[str, "SortKey"]]) -> "SortKey":
        """
        Resolve a user-supplied sort key.

        Matching is case-insensitive; anything unrecognized sorts by name.
        """
        if isinstance(value, cls):
            return value

        normalized = (value or "").strip().lower()
        for key in cls:
            if key.value == normalized:
                return key

        if normalized:
            logger.debug(f"Unknown sort key '{value}', sorting by name")
        return cls.NAME


_SORT_FIELDS: Dict[SortKey, Callable[[Product], object]] = {
    SortKey.NAME: lambda p: p.name.casefold(),
    SortKey.PRICE: lambda p: p.price,
    SortKey.CATEGORY: lambda p: p.category.casefold(),
}


class PageResult(BaseModel):
    """
    One page of a sorted product listing.

    ``valid`` is False when the requested page is outside
    ``[1, total_pages]``; ``items`` is then empty. A valid page can
    still be empty when the catalog itself is empty.
    """
    items: List[Product] = Field(default_factory=list)
    page: int
    page_size: int = Field(ge=1)
    total_items: int = Field(ge=0)
    total_pages: int = Field(ge=0)
    valid: bool = Field(default=True)

    @property
    def has_next(self) -> bool:
        return self.valid and self.page < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.valid and self.page > 1


def sort_products(
    products: Sequence[Product],
    key: Union[str, SortKey, None] = SortKey.NAME
) -> List[Product]:
    """
    Sort products ascending by the selected field.

    String fields compare case-insensitively, price compares numerically.
    The sort is stable: products with equal keys keep their snapshot order.

    Args:
        products: Catalog snapshot
        key: "name", "price" or "category" (anything else sorts by name)

    Returns:
        New sorted list
    """
    sort_key = SortKey.parse(key)
    return sorted(products, key=_SORT_FIELDS[sort_key])


def paginate(products: Sequence[Product], page: int, page_size: int) -> PageResult:
    """
    Slice a sorted listing into 1-based pages.

    Args:
        products: Sorted products
        page: Requested page number (1-based)
        page_size: Products per page, must be positive

    Returns:
        PageResult with the page items and total page count. Pages
        outside ``[1, total_pages]`` come back with ``valid=False``.

    Raises:
        ValueError: If page_size is less than 1
    """
    if page_size < 1:
        raise ValueError(f"page_size must be positive, got {page_size}")

    total_items = len(products)
    total_pages = math.ceil(total_items / page_size)

    if page < 1 or (total_pages > 0 and page > total_pages):
        logger.debug(f"Invalid page number {page} (total pages: {total_pages})")
        return PageResult(
            items=[],
            page=page,
            page_size=page_size,
            total_items=total_items,
            total_pages=total_pages,
            valid=False,
        )

    start = (page - 1) * page_size
    return PageResult(
        items=list(products[start:start + page_size]),
        page=page,
        page_size=page_size,
        total_items=total_items,
        total_pages=total_pages,
    )


def search_products(products: Sequence[Product], keyword: Optional[str]) -> List[Product]:
    """
    Find products whose ID or name contains the keyword.

    Matching is case-insensitive. An empty keyword matches every product.
    Results keep snapshot order.
    """
    needle = (keyword or "").casefold()
    return [
        product for product in products
        if needle in product.id.casefold() or needle in product.name.casefold()
    ]


def average_rating(reviews: Sequence[Review]) -> float:
    """Mean rating across reviews, 0.0 when there are none."""
    if not reviews:
        return 0.0
    return sum(review.rating for review in reviews) / len(reviews)

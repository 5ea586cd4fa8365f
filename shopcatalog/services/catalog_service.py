"""
==============================================================================
Catalog Service Module
==============================================================================

Business logic between the interactive console and the catalog store.

This module implements:
- CatalogService: Product CRUD with insert-only adds
- Sorted, paginated catalog listings
- Keyword search
- Review creation (persisted) and review aggregates

Policy:
-------
The store is deliberately permissive (add is an upsert). Rejecting
duplicate IDs and reporting unknown IDs happens here, as AppException,
so the console can show one consistent message for each case.

==============================================================================
"""

from __future__ import annotations

import logging
from collections import Counter
from decimal import Decimal
from typing import Dict, List, Optional

from shopcatalog.catalog import (
    CatalogStore,
    PageResult,
    Product,
    Review,
    average_rating,
    paginate,
    search_products,
    sort_products,
)
from shopcatalog.core import exceptions


# Module logger
logger = logging.getLogger(__name__)


class CatalogService:
    """
    Catalog management service used by the console menu.

    Attributes:
        _store: Catalog store receiving every mutation
        _default_page_size: Page size used when the caller passes none

    Example:
        >>> service = CatalogService(CatalogStore(Path("data/products.json")))
        >>> service.add_product(Product(id="P-1", name="Widget", price=Decimal("9.99"),
        ...                             description="Small widget", category="Tools"))
        >>> page = service.list_products(sort_by="price", page=1)
        >>> service.add_review("P-1", user="ana", rating=5, comment="Great")
    """

    def __init__(self, store: CatalogStore, default_page_size: int = 5) -> None:
        """
        Initialize the catalog service.

        Args:
            store: Catalog store
            default_page_size: Products per page for listings
        """
        self._store = store
        self._default_page_size = default_page_size

    @property
    def store(self) -> CatalogStore:
        return self._store

    # =========================================================================
    # PRODUCT OPERATIONS
    # =========================================================================

    def product_exists(self, product_id: str) -> bool:
        return self._store.exists(product_id)

    def add_product(self, product: Product) -> Product:
        """
        Add a new product.

        Raises:
            AppException: PRODUCT_EXISTS if the ID is already in the catalog
        """
        if self._store.exists(product.id):
            logger.warning(f"Product with ID {product.id} already exists")
            raise exceptions.product_exists(product.id)

        self._store.add_product(product)
        logger.info(
            f"✅ Product added: ID={product.id}, Name={product.name}, "
            f"Price={product.price}, Category={product.category}"
        )
        return product

    def get_product(self, product_id: str) -> Product:
        """
        Get a product by ID.

        Raises:
            AppException: PRODUCT_NOT_FOUND if the ID is unknown
        """
        product = self._store.get_product_by_id(product_id)
        if product is None:
            raise exceptions.product_not_found(product_id)
        return product

    def update_product(
        self,
        product_id: str,
        name: str,
        price: Decimal,
        description: str,
        category: Optional[str] = None
    ) -> Product:
        """
        Replace a product's attributes, keeping its ID and reviews.

        Args:
            product_id: Product to update
            name: New name
            price: New price
            description: New description
            category: New category (None or blank keeps the current one)

        Raises:
            AppException: PRODUCT_NOT_FOUND if the ID is unknown
        """
        current = self.get_product(product_id)

        updated = Product(
            id=current.id,
            name=name,
            price=price,
            description=description,
            category=category if category and category.strip() else current.category,
            reviews=current.reviews,
        )

        if not self._store.update_product(updated):
            raise exceptions.product_not_found(product_id)

        logger.info(f"✅ Product {product_id} updated")
        return updated

    def remove_product(self, product_id: str) -> None:
        """
        Remove a product by ID.

        Raises:
            AppException: PRODUCT_NOT_FOUND if the ID is unknown
        """
        if not self._store.remove_product(product_id):
            logger.warning(f"Remove failed: product {product_id} not found")
            raise exceptions.product_not_found(product_id)

        logger.info(f"✅ Product {product_id} removed")

    # =========================================================================
    # LISTING AND SEARCH
    # =========================================================================

    def list_products(
        self,
        sort_by: str = "name",
        page: int = 1,
        page_size: Optional[int] = None
    ) -> PageResult:
        """
        Get one page of the catalog, sorted.

        Args:
            sort_by: "name", "price" or "category"
            page: 1-based page number
            page_size: Products per page (service default if None)

        Returns:
            PageResult; check ``valid`` before rendering items
        """
        snapshot = self._store.get_all()
        ordered = sort_products(snapshot, sort_by)
        result = paginate(ordered, page, page_size or self._default_page_size)

        if not result.valid:
            logger.warning(f"Invalid page number {page} (total pages: {result.total_pages})")

        return result

    def search(self, keyword: str) -> List[Product]:
        """Search products by ID or name."""
        results = search_products(self._store.get_all(), keyword)
        logger.info(f"Search '{keyword}' matched {len(results)} products")
        return results

    # =========================================================================
    # REVIEWS
    # =========================================================================

    def add_review(self, product_id: str, user: str, rating: int, comment: str) -> Review:
        """
        Add a review to a product and persist it.

        Raises:
            AppException: PRODUCT_NOT_FOUND if the ID is unknown
        """
        product = self.get_product(product_id)
        review = Review(user=user, rating=rating, comment=comment)

        product.add_review(review)
        self._store.update_product(product)

        logger.info(f"✅ Review added to {product_id} by {review.user} ({review.rating}/5)")
        return review

    def get_reviews(self, product_id: str) -> List[Review]:
        """
        Get a product's reviews in the order they were added.

        Raises:
            AppException: PRODUCT_NOT_FOUND if the ID is unknown
        """
        return self.get_product(product_id).reviews

    def get_average_rating(self, product_id: str) -> float:
        """
        Get a product's mean rating (0.0 without reviews).

        Raises:
            AppException: PRODUCT_NOT_FOUND if the ID is unknown
        """
        return average_rating(self.get_reviews(product_id))

    # =========================================================================
    # UTILITY METHODS
    # =========================================================================

    def get_stats(self) -> Dict:
        """Get catalog statistics."""
        snapshot = self._store.get_all()
        categories = Counter(product.category for product in snapshot)

        return {
            "total_products": len(snapshot),
            "total_reviews": sum(len(product.reviews) for product in snapshot),
            "categories": dict(categories),
        }

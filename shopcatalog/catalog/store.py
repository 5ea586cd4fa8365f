"""
==============================================================================
Catalog Store Module
==============================================================================

In-memory product catalog backed by a JSON file.

Features:
---------
- Products keyed by ID, each owning its ordered list of reviews
- Upsert / update-only-existing / remove semantics
- Whole-catalog save after every mutation (temp file + atomic rename)
- Snapshots for read-only consumers (the query layer)

JSON Structure:
--------------
{
  "P-100": {
    "id": "P-100",
    "name": "Widget",
    "price": "19.99",
    "description": "A useful widget",
    "category": "Tools",
    "reviews": [
      {"user": "ana", "rating": 5, "comment": "Great", "date": "2024-05-01T10:30:00"}
    ]
  }
}

The backing file is owned by one process for its whole lifetime; concurrent
writers are not detected.

==============================================================================
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import ValidationError

from shopcatalog.core import exceptions
from .models import Product


# Module logger
logger = logging.getLogger(__name__)


class CatalogStore:
    """
    Product catalog store with durable JSON persistence.

    The catalog is loaded once on construction. A missing file gives an
    empty catalog; a file that exists but cannot be deserialized raises
    AppException(CATALOG_CORRUPT) instead of silently starting empty.

    Reads hand out copies, so the only way to change stored state is
    through the mutating methods, and each of those saves the file.

    Example:
        >>> store = CatalogStore(Path("data/products.json"))
        >>> store.add_product(product)
        >>> store.get_product_by_id("P-100")
        >>> snapshot = store.get_all()
    """

    def __init__(self, products_file: Path) -> None:
        """
        Initialize catalog from JSON file.

        Args:
            products_file: Path to products.json

        Raises:
            AppException: CATALOG_CORRUPT if the file exists but is not valid
                UTF-8 JSON in the catalog shape; STORAGE_READ_FAILED if it
                cannot be read at all
        """
        self._products_file = Path(products_file)
        self._products: Dict[str, Product] = {}

        self._load()

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    @property
    def products_file(self) -> Path:
        """Path of the backing file."""
        return self._products_file

    def __len__(self) -> int:
        return len(self._products)

    # =========================================================================
    # LOADING / SAVING
    # =========================================================================

    def _load(self) -> None:
        """Load products from JSON file."""
        path = self._products_file

        if not path.exists():
            logger.warning(f"⚠️ Products file not found: {path}, starting with an empty catalog")
            return

        try:
            raw = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            logger.error(f"Products file {path} is not valid UTF-8: {e}")
            raise exceptions.catalog_corrupt(str(path), f"not valid UTF-8 ({e.reason})") from e
        except OSError as e:
            logger.error(f"❌ Failed to read catalog from {path}: {e}")
            raise exceptions.storage_read_failed(str(path), str(e)) from e

        if not raw.strip():
            logger.info(f"Products file {path} is empty")
            return

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in {path}: {e}")
            raise exceptions.catalog_corrupt(str(path), f"invalid JSON ({e})") from e

        if data is None:
            return

        if not isinstance(data, dict):
            logger.error(f"Products file {path} does not hold an object keyed by product ID")
            raise exceptions.catalog_corrupt(str(path), "expected an object keyed by product ID")

        products: Dict[str, Product] = {}
        for key, record in data.items():
            try:
                product = Product.model_validate(record)
            except ValidationError as e:
                logger.error(f"Invalid product record '{key}' in {path}: {e}")
                raise exceptions.catalog_corrupt(
                    str(path),
                    f"invalid product record '{key}' ({e.error_count()} validation errors)"
                ) from e

            if product.id != key:
                raise exceptions.catalog_corrupt(
                    str(path),
                    f"record keyed '{key}' carries product ID '{product.id}'"
                )

            products[key] = product

        self._products = products
        logger.info(f"✅ Loaded {len(self._products)} products from {path}")

    def _save(self) -> None:
        """
        Write the whole catalog to the backing file.

        Data goes to a temporary file in the same directory which is then
        renamed over the backing file, so a crash mid-write leaves the
        previous version intact.

        Raises:
            AppException: STORAGE_WRITE_FAILED on any OS error. The
                in-memory catalog has already changed at that point.
        """
        path = self._products_file
        payload = {
            product_id: product.model_dump(mode="json")
            for product_id, product in self._products.items()
        }

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(payload, f, indent=2, ensure_ascii=False)
                    f.write("\n")
                os.replace(tmp_name, path)
            except Exception:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            logger.error(f"❌ Failed to save catalog to {path}: {e}")
            raise exceptions.storage_write_failed(str(path), str(e)) from e

        logger.debug(f"Saved {len(payload)} products to {path}")

    # =========================================================================
    # MUTATIONS
    # =========================================================================

    def add_product(self, product: Product) -> None:
        """
        Insert or overwrite the product keyed by ``product.id``.

        No duplicate check happens here; callers that want insert-only
        semantics check ``exists`` first.
        """
        self._products[product.id] = product.model_copy(deep=True)
        self._save()
        logger.debug(f"Upserted product {product.id}")

    def update_product(self, product: Product) -> bool:
        """
        Overwrite an existing product.

        Returns:
            True if the product existed and was replaced, False otherwise
        """
        if product.id not in self._products:
            return False

        self._products[product.id] = product.model_copy(deep=True)
        self._save()
        logger.debug(f"Updated product {product.id}")
        return True

    def remove_product(self, product_id: str) -> bool:
        """
        Remove a product by ID.

        Returns:
            True if a product was removed, False if the ID was unknown
        """
        if self._products.pop(product_id, None) is None:
            return False

        self._save()
        logger.debug(f"Removed product {product_id}")
        return True

    # =========================================================================
    # READS
    # =========================================================================

    def get_product_by_id(self, product_id: str) -> Optional[Product]:
        """Get a copy of the product, or None if the ID is unknown."""
        product = self._products.get(product_id)
        if product is None:
            return None
        return product.model_copy(deep=True)

    def exists(self, product_id: str) -> bool:
        """Check whether a product ID is in the catalog."""
        return product_id in self._products

    def get_all(self) -> List[Product]:
        """Get a snapshot of all products in insertion order."""
        return [product.model_copy(deep=True) for product in self._products.values()]

"""
==============================================================================
Pytest Configuration and Fixtures
==============================================================================

Provides temporary catalog files, stores, services and sample products.

==============================================================================
"""

import json
from decimal import Decimal
from pathlib import Path
from typing import Callable, List

import pytest

from shopcatalog.catalog import CatalogStore, Product, Review
from shopcatalog.config import get_settings
from shopcatalog.services import CatalogService


# ============================================================================
# SETTINGS FIXTURES
# ============================================================================

@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path: Path):
    """Point settings at the temp directory and reset the cached instance."""
    monkeypatch.setenv("SHOPCATALOG_PRODUCTS_FILE", str(tmp_path / "data" / "products.json"))
    monkeypatch.setenv("SHOPCATALOG_LOG_FILE", str(tmp_path / "logs" / "shopcatalog.log"))
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# ============================================================================
# PRODUCT FIXTURES
# ============================================================================

@pytest.fixture
def make_product() -> Callable[..., Product]:
    """Factory for products with sensible defaults."""
    def _make(
        product_id: str = "P-1",
        name: str = "Widget",
        price: str = "9.99",
        description: str = "A small widget",
        category: str = "Tools",
        reviews: List[Review] = None,
    ) -> Product:
        return Product(
            id=product_id,
            name=name,
            price=Decimal(price),
            description=description,
            category=category,
            reviews=reviews or [],
        )

    return _make


@pytest.fixture
def sample_products(make_product) -> List[Product]:
    """Seven products across three categories, in insertion order."""
    return [
        make_product("P-1", "Widget", "9.99", "Small widget", "Tools"),
        make_product("P-2", "anvil", "120.00", "Heavy anvil", "Tools"),
        make_product("P-3", "Chair", "45.50", "Wooden chair", "Furniture"),
        make_product("P-4", "banana", "0.25", "Ripe banana", "Grocery"),
        make_product("P-5", "Desk", "210", "Standing desk", "Furniture"),
        make_product("P-6", "Apple", "0.40", "Green apple", "Grocery"),
        make_product("P-7", "Hammer", "15.00", "Claw hammer", "tools"),
    ]


# ============================================================================
# STORE / SERVICE FIXTURES
# ============================================================================

@pytest.fixture
def products_file(tmp_path: Path) -> Path:
    """Path to a catalog file that does not exist yet."""
    return tmp_path / "data" / "products.json"


@pytest.fixture
def store(products_file: Path) -> CatalogStore:
    """Empty store backed by a temp file."""
    return CatalogStore(products_file)


@pytest.fixture
def populated_store(store: CatalogStore, sample_products: List[Product]) -> CatalogStore:
    """Store holding the sample products."""
    for product in sample_products:
        store.add_product(product)
    return store


@pytest.fixture
def service(populated_store: CatalogStore) -> CatalogService:
    """Service over the populated store, five products per page."""
    return CatalogService(populated_store, default_page_size=5)


@pytest.fixture
def write_catalog(products_file: Path) -> Callable[[object], Path]:
    """Write raw content (str or JSON-able object) to the catalog file."""
    def _write(content) -> Path:
        products_file.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, str):
            products_file.write_text(content, encoding="utf-8")
        else:
            products_file.write_text(json.dumps(content), encoding="utf-8")
        return products_file

    return _write

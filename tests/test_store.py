"""
==============================================================================
Catalog Store Tests
==============================================================================

Tests for loading, mutating and persisting the catalog.

==============================================================================
"""

import json
from datetime import datetime
from decimal import Decimal
from pathlib import Path

import pytest

from shopcatalog.catalog import CatalogStore, Review
from shopcatalog.catalog import store as store_module
from shopcatalog.core import AppException


class TestLoading:
    """Tests for reading the backing file on construction."""

    def test_missing_file_gives_empty_catalog(self, products_file):
        """Test a missing file is not an error."""
        store = CatalogStore(products_file)
        assert len(store) == 0
        assert store.get_all() == []
        assert not products_file.exists()

    def test_blank_file_gives_empty_catalog(self, write_catalog):
        """Test an empty file loads as an empty catalog."""
        store = CatalogStore(write_catalog("   \n"))
        assert len(store) == 0

    def test_null_document_gives_empty_catalog(self, write_catalog):
        """Test a JSON null document loads as an empty catalog."""
        store = CatalogStore(write_catalog("null"))
        assert len(store) == 0

    def test_invalid_json_is_fatal(self, write_catalog):
        """Test malformed JSON raises instead of starting empty."""
        path = write_catalog('{"P-1": {"id": "P-1", ')
        with pytest.raises(AppException) as exc_info:
            CatalogStore(path)
        assert exc_info.value.code == "CATALOG_CORRUPT"
        assert exc_info.value.is_fatal

    def test_non_object_document_is_fatal(self, write_catalog):
        """Test a top-level list is rejected."""
        path = write_catalog([{"id": "P-1"}])
        with pytest.raises(AppException) as exc_info:
            CatalogStore(path)
        assert exc_info.value.code == "CATALOG_CORRUPT"

    def test_invalid_record_is_fatal(self, write_catalog):
        """Test a record with an out-of-range rating is rejected."""
        path = write_catalog({
            "P-1": {
                "id": "P-1", "name": "Widget", "price": "1.00",
                "description": "d", "category": "c",
                "reviews": [{"user": "u", "rating": 9, "comment": "x",
                             "date": "2024-01-01T00:00:00"}],
            }
        })
        with pytest.raises(AppException) as exc_info:
            CatalogStore(path)
        assert exc_info.value.code == "CATALOG_CORRUPT"

    def test_key_must_match_product_id(self, write_catalog):
        """Test a record filed under another product's key is rejected."""
        path = write_catalog({
            "P-1": {"id": "P-2", "name": "Widget", "price": "1.00",
                    "description": "d", "category": "c", "reviews": []}
        })
        with pytest.raises(AppException) as exc_info:
            CatalogStore(path)
        assert exc_info.value.code == "CATALOG_CORRUPT"

    def test_corrupt_file_is_left_untouched(self, write_catalog):
        """Test a failed load never rewrites the file."""
        path = write_catalog("not json")
        with pytest.raises(AppException):
            CatalogStore(path)
        assert path.read_text(encoding="utf-8") == "not json"

    def test_invalid_utf8_is_fatal(self, products_file):
        """Test undecodable bytes are reported as a corrupt catalog."""
        products_file.parent.mkdir(parents=True, exist_ok=True)
        products_file.write_bytes(b'{"P-1": "\xff\xfe"}')

        with pytest.raises(AppException) as exc_info:
            CatalogStore(products_file)

        assert exc_info.value.code == "CATALOG_CORRUPT"
        assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)
        assert exc_info.value.is_fatal

    def test_read_error_is_fatal(self, write_catalog, monkeypatch):
        """Test an OS error while reading stops the load."""
        path = write_catalog({})

        def fail_read(self, *args, **kwargs):
            raise PermissionError("permission denied")

        monkeypatch.setattr(Path, "read_text", fail_read)

        with pytest.raises(AppException) as exc_info:
            CatalogStore(path)

        assert exc_info.value.code == "STORAGE_READ_FAILED"
        assert isinstance(exc_info.value.__cause__, PermissionError)
        assert exc_info.value.is_fatal


class TestMutations:
    """Tests for add / update / remove semantics."""

    def test_add_product_persists(self, store, products_file, make_product):
        """Test add writes the whole catalog keyed by ID."""
        store.add_product(make_product("P-1"))

        data = json.loads(products_file.read_text(encoding="utf-8"))
        assert list(data) == ["P-1"]
        assert data["P-1"]["name"] == "Widget"
        assert data["P-1"]["price"] == "9.99"
        assert data["P-1"]["reviews"] == []

    def test_add_is_an_upsert(self, store, make_product):
        """Test adding an existing ID overwrites it silently."""
        store.add_product(make_product("P-1", name="Old"))
        store.add_product(make_product("P-1", name="New"))

        assert len(store) == 1
        assert store.get_product_by_id("P-1").name == "New"

    def test_add_twice_is_idempotent(self, store, products_file, make_product):
        """Test the same product added twice equals adding it once."""
        product = make_product("P-1")
        store.add_product(product)
        once = products_file.read_text(encoding="utf-8")
        store.add_product(product)

        assert products_file.read_text(encoding="utf-8") == once
        assert store.get_all() == [product]

    def test_add_stores_a_copy(self, store, make_product):
        """Test later changes to the caller's object do not leak in."""
        product = make_product("P-1")
        store.add_product(product)
        product.name = "Changed"

        assert store.get_product_by_id("P-1").name == "Widget"

    def test_update_existing(self, populated_store, make_product):
        """Test update replaces an existing product."""
        updated = make_product("P-3", name="Armchair", price="99.00")
        assert populated_store.update_product(updated) is True
        assert populated_store.get_product_by_id("P-3").name == "Armchair"

    def test_update_missing_is_noop(self, populated_store, products_file, make_product):
        """Test update never creates a product."""
        before = products_file.read_text(encoding="utf-8")

        assert populated_store.update_product(make_product("P-404")) is False
        assert not populated_store.exists("P-404")
        assert len(populated_store) == 7
        assert products_file.read_text(encoding="utf-8") == before

    def test_remove_existing(self, populated_store, products_file):
        """Test remove deletes and persists."""
        assert populated_store.remove_product("P-2") is True
        assert not populated_store.exists("P-2")

        data = json.loads(products_file.read_text(encoding="utf-8"))
        assert "P-2" not in data

    def test_remove_missing_does_not_save(self, populated_store, monkeypatch):
        """Test removing an unknown ID skips the save."""
        saves = []
        monkeypatch.setattr(populated_store, "_save", lambda: saves.append(1))

        assert populated_store.remove_product("P-404") is False
        assert saves == []


class TestReads:
    """Tests for lookups and snapshots."""

    def test_get_missing_returns_none(self, populated_store):
        """Test absence is a value, not an exception."""
        assert populated_store.get_product_by_id("P-404") is None

    def test_ids_are_case_sensitive(self, populated_store):
        """Test lookups do not fold case."""
        assert populated_store.exists("P-1")
        assert not populated_store.exists("p-1")

    def test_get_all_keeps_insertion_order(self, populated_store, sample_products):
        """Test snapshot order matches insertion order."""
        assert [p.id for p in populated_store.get_all()] == [p.id for p in sample_products]

    def test_snapshot_is_isolated(self, populated_store):
        """Test mutating the snapshot leaves the store unchanged."""
        snapshot = populated_store.get_all()
        snapshot[0].name = "Mutated"
        snapshot[0].reviews.append(Review(user="x", rating=1, comment="y"))
        snapshot.clear()

        product = populated_store.get_product_by_id("P-1")
        assert product.name == "Widget"
        assert product.reviews == []
        assert len(populated_store) == 7


class TestRoundTrip:
    """Tests for save then reload through a fresh store."""

    def test_reload_preserves_everything(self, store, products_file, make_product):
        """Test every field, including reviews and their order, survives a reload."""
        reviews = [
            Review(user="ana", rating=5, comment="Great", date=datetime(2024, 5, 1, 10, 30, 15, 123456)),
            Review(user="bo", rating=2, comment="Meh", date=datetime(2024, 5, 2, 8, 0)),
        ]
        original = make_product("P-1", price="19.999999999999999999", reviews=reviews)
        store.add_product(original)
        store.add_product(make_product("P-2", name="Gadget"))

        reloaded = CatalogStore(products_file)

        assert reloaded.get_all() == store.get_all()
        product = reloaded.get_product_by_id("P-1")
        assert product.price == Decimal("19.999999999999999999")
        assert [r.user for r in product.reviews] == ["ana", "bo"]
        assert product.reviews[0].date == datetime(2024, 5, 1, 10, 30, 15, 123456)

    def test_padded_id_survives_reload(self, store, products_file, make_product):
        """Test IDs with surrounding spaces are stored and reloaded verbatim."""
        store.add_product(make_product(" P-1 ", name="  Widget  "))

        assert store.exists(" P-1 ")
        assert not store.exists("P-1")

        reloaded = CatalogStore(products_file)
        product = reloaded.get_product_by_id(" P-1 ")
        assert product.id == " P-1 "
        assert product.name == "Widget"


class TestWriteFailure:
    """Tests for I/O errors while saving."""

    def test_save_error_is_propagated(self, store, products_file, make_product, monkeypatch):
        """Test a failed save raises and leaves memory ahead of disk."""
        def fail_replace(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr(store_module.os, "replace", fail_replace)

        with pytest.raises(AppException) as exc_info:
            store.add_product(make_product("P-1"))

        assert exc_info.value.code == "STORAGE_WRITE_FAILED"
        assert isinstance(exc_info.value.__cause__, OSError)
        assert store.exists("P-1")
        assert not products_file.exists()

    def test_temp_file_is_cleaned_up(self, store, products_file, make_product, monkeypatch):
        """Test no temp file is left behind after a failed save."""
        def fail_replace(src, dst):
            raise OSError("read-only file system")

        monkeypatch.setattr(store_module.os, "replace", fail_replace)

        with pytest.raises(AppException):
            store.add_product(make_product("P-1"))

        assert list(products_file.parent.iterdir()) == []

    def test_serialization_error_cleans_up(self, store, products_file, make_product, monkeypatch):
        """Test a non-I/O failure mid-write removes the temp file and propagates."""
        def fail_dump(*args, **kwargs):
            raise ValueError("cannot serialize")

        monkeypatch.setattr(store_module.json, "dump", fail_dump)

        with pytest.raises(ValueError):
            store.add_product(make_product("P-1"))

        assert list(products_file.parent.iterdir()) == []

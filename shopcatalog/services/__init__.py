"""
==============================================================================
Services Package - Business Logic Layer
==============================================================================

Service classes implementing catalog business logic.

Architecture Pattern: Service Layer
----------------------------------

    ┌─────────────────┐
    │  Console Menu   │
    └────────┬────────┘
             │
    ┌────────▼────────┐
    │    Service      │  ← Business Logic (duplicate / not-found policy)
    └────────┬────────┘
             │
    ┌────────▼────────┐
    │  CatalogStore   │  ← Data Access (JSON file)
    └─────────────────┘

Usage:
------
    from shopcatalog.services import CatalogService

    service = CatalogService(store, default_page_size=5)
    page = service.list_products(sort_by="price", page=2)

==============================================================================
"""

from .catalog_service import CatalogService

__all__ = [
    "CatalogService",
]

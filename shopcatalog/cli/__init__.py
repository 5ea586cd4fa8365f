"""
==============================================================================
Console Package
==============================================================================

Interactive console menu for browsing and editing the catalog.

==============================================================================
"""

from .menu import CatalogMenu, PromptCancelled

__all__ = [
    "CatalogMenu",
    "PromptCancelled",
]

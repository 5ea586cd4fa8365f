"""
==============================================================================
Configuration Package
==============================================================================

Centralized configuration management using Pydantic Settings.

Usage:
------
    from shopcatalog.config import get_settings, Settings

    settings = get_settings()
    print(settings.products_path)
    print(settings.page_size)

==============================================================================
"""

from .settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]

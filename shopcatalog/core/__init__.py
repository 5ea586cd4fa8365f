"""
==============================================================================
Core Package
==============================================================================

Core infrastructure shared by every layer of the application.

This package provides:
- AppException with a machine-readable error code
- Exception factory functions for common error scenarios

Usage:
------
    from shopcatalog.core import AppException

    # Or use exception factory functions via module
    from shopcatalog.core import exceptions
    raise exceptions.product_not_found("P-100")

==============================================================================
"""

from .exceptions import AppException

__all__ = [
    "AppException",
]

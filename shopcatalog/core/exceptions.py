"""
Application Exception Handling

Single AppException class for all failure scenarios of the catalog manager.

Expected outcomes (a product id that is not in the catalog, a page number
outside the available range) are plain return values in the store and the
query layer. AppException is reserved for failures the caller has to report:
a corrupt backing file, a failed save, or a caller-side policy rejection.
"""

from datetime import datetime
from typing import Any, Dict, Optional


class AppException(Exception):
    """
    Unified application exception for all error scenarios.

    Usage:
        raise AppException("Product not found", "PRODUCT_NOT_FOUND")
        raise AppException("Backing file is corrupt", "CATALOG_CORRUPT", {"path": "data/products.json"})

    Error Codes:
        Storage:
            - CATALOG_CORRUPT (fatal at startup)
            - STORAGE_READ_FAILED (fatal at startup)
            - STORAGE_WRITE_FAILED

        Product:
            - PRODUCT_NOT_FOUND
            - PRODUCT_EXISTS
    """

    def __init__(
        self,
        message: str,
        code: str,
        details: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize application exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code (e.g., "PRODUCT_NOT_FOUND")
            details: Additional error context (optional)
        """
        self.message = message
        self.code = code
        self.details = details or {}
        self.timestamp = datetime.now().isoformat()
        super().__init__(self.message)

    @property
    def is_fatal(self) -> bool:
        """Errors that must stop the application instead of being reported."""
        return self.code in ("CATALOG_CORRUPT", "STORAGE_READ_FAILED")

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for structured logging."""
        error_dict = {
            "success": False,
            "error": {
                "code": self.code,
                "message": self.message,
                "timestamp": self.timestamp
            }
        }

        if self.details:
            error_dict["error"]["details"] = self.details

        return error_dict


# ============================================
# CONVENIENCE FACTORY FUNCTIONS
# ============================================

def catalog_corrupt(path: str, reason: str) -> AppException:
    """Create corrupt backing file exception."""
    return AppException(
        f"Product catalog file '{path}' is corrupt: {reason}",
        "CATALOG_CORRUPT",
        {"path": path, "reason": reason}
    )


def storage_read_failed(path: str, reason: str) -> AppException:
    """Create failed load exception."""
    return AppException(
        f"Could not read product catalog from '{path}': {reason}",
        "STORAGE_READ_FAILED",
        {"path": path, "reason": reason}
    )


def storage_write_failed(path: str, reason: str) -> AppException:
    """Create failed save exception."""
    return AppException(
        f"Could not save product catalog to '{path}': {reason}",
        "STORAGE_WRITE_FAILED",
        {"path": path, "reason": reason}
    )


def product_not_found(product_id: Optional[str] = None) -> AppException:
    """Create product not found exception."""
    details = {"product_id": product_id} if product_id else {}
    message = f"Product with ID {product_id} not found" if product_id else "Product not found"
    return AppException(message, "PRODUCT_NOT_FOUND", details)


def product_exists(product_id: str) -> AppException:
    """Create product id already exists exception."""
    return AppException(
        f"Product with ID {product_id} already exists",
        "PRODUCT_EXISTS",
        {"product_id": product_id}
    )

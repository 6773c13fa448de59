"""
Cart error kinds, message keys and collaborator exceptions.

Message keys resolve to user-facing strings through storefront.i18n.
"""
from enum import Enum

# Notification message keys
MSG_OUT_OF_STOCK = "out_of_stock"
MSG_ADD_PRODUCT_FAILED = "add_product_failed"
MSG_REMOVE_PRODUCT_FAILED = "remove_product_failed"
MSG_UPDATE_AMOUNT_FAILED = "update_amount_failed"


class CartErrorKind(str, Enum):
    """Why a cart operation was aborted."""
    OUT_OF_STOCK = "out_of_stock"
    ADD_FAILED = "add_failed"
    REMOVE_FAILED = "remove_failed"
    UPDATE_FAILED = "update_failed"

    @property
    def message_key(self) -> str:
        return _MESSAGE_KEYS[self]


_MESSAGE_KEYS = {
    CartErrorKind.OUT_OF_STOCK: MSG_OUT_OF_STOCK,
    CartErrorKind.ADD_FAILED: MSG_ADD_PRODUCT_FAILED,
    CartErrorKind.REMOVE_FAILED: MSG_REMOVE_PRODUCT_FAILED,
    CartErrorKind.UPDATE_FAILED: MSG_UPDATE_AMOUNT_FAILED,
}


class StorefrontError(Exception):
    """Base error for the storefront collaborators."""


class ApiError(StorefrontError):
    """Catalog/stock service request failed or returned an unusable payload."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ProductNotFound(ApiError):
    """Catalog or stock service has no record for the product."""

    def __init__(self, product_id: int):
        super().__init__(f"Product {product_id} not found", status_code=404)
        self.product_id = product_id


class StorageError(StorefrontError):
    """Persistence slot is not available."""

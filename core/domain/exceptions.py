"""
Domain exceptions.

Each carries the HTTP status the API layer answers with; the messages are
shopper-facing and never contain stored contact details or credentials.
"""
from typing import Iterable, Optional

from .enums import OrderStatus


class BackoError(Exception):
    """Base class for expected, user-facing failures."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class NotFoundError(BackoError):
    """Store or order could not be located."""

    status_code = 404


class StoreNotFoundError(NotFoundError):
    def __init__(self, message: str = "Store not found. Please check the URL and try again."):
        super().__init__(message)


class OrderNotFoundError(NotFoundError):
    def __init__(
        self,
        message: str = (
            "Order not found. Please check your order number and try again. "
            "Make sure you enter the exact order number."
        ),
    ):
        super().__init__(message)


class IntegrationMissingError(BackoError):
    """The merchant has no usable Shopify or WooCommerce connection."""

    status_code = 404

    def __init__(
        self,
        message: str = "This store has not connected Shopify or WooCommerce yet. Please contact the store.",
    ):
        super().__init__(message)


class IdentityMismatchError(BackoError):
    """The supplied contact value matches neither the order's email nor its phone."""

    status_code = 401

    def __init__(self, checked_fields: Optional[Iterable[str]] = None):
        fields = list(checked_fields) if checked_fields is not None else ["email", "phone number"]
        checked = " or ".join(fields) if fields else "contact details"
        super().__init__(
            f"Email or phone number does not match this order. Please verify your details "
            f"(checked against the order's {checked})."
        )
        self.checked_fields = fields


class NotReturnableError(BackoError):
    """Order exists and belongs to the shopper but has not been delivered."""

    status_code = 400

    def __init__(self, status: OrderStatus):
        label = status.value if isinstance(status, OrderStatus) else str(status)
        super().__init__(
            f"This order is currently {label}. Only delivered orders can be returned. "
            f"Please wait until your order is delivered."
        )
        self.status = status


class ValidationError(BackoError):
    """Malformed input."""

    status_code = 400


class UnauthorizedError(BackoError):
    """Missing or invalid shared secret."""

    status_code = 401

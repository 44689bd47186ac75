"""
Order Status Enum.

The five canonical order states every platform vocabulary maps into.
"""
from enum import Enum


class OrderStatus(str, Enum):
    """Canonical order status values."""

    PENDING = "Pending"
    PROCESSING = "Processing"
    IN_TRANSIT = "In Transit"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"

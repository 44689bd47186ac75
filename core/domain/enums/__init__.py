"""Domain enums."""

from .order_status import OrderStatus
from .payment_method import PaymentMethod
from .platform import OrderSource, Platform

__all__ = ["OrderSource", "OrderStatus", "PaymentMethod", "Platform"]

"""Domain layer - pure domain models and interfaces."""

from .entities import CanonicalOrder, CanonicalProduct, CustomerInfo, Merchant, OrderItem
from .enums import OrderSource, OrderStatus, PaymentMethod, Platform
from .repositories import MerchantRepository, OrderKey, OrderRepository, ProductRepository
from .value_objects import OrderIdentifier

__all__ = [
    "CanonicalOrder",
    "CanonicalProduct",
    "CustomerInfo",
    "Merchant",
    "MerchantRepository",
    "OrderIdentifier",
    "OrderItem",
    "OrderKey",
    "OrderRepository",
    "OrderSource",
    "OrderStatus",
    "PaymentMethod",
    "Platform",
    "ProductRepository",
]

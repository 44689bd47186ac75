"""Domain entities."""

from .customer import UpstreamCustomerRecord
from .merchant import Merchant, ShopifyConnection, WooCommerceConnection
from .order import GUEST_NAME, CanonicalOrder, CustomerInfo, OrderItem, ShippingAddress
from .product import CanonicalProduct

__all__ = [
    "GUEST_NAME",
    "CanonicalOrder",
    "CanonicalProduct",
    "CustomerInfo",
    "Merchant",
    "OrderItem",
    "ShippingAddress",
    "ShopifyConnection",
    "UpstreamCustomerRecord",
    "WooCommerceConnection",
]

"""Domain repository interfaces."""

from .merchant_repository import MerchantRepository
from .order_repository import OrderKey, OrderRepository
from .product_repository import ProductRepository

__all__ = ["MerchantRepository", "OrderKey", "OrderRepository", "ProductRepository"]

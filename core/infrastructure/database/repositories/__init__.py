"""SQLAlchemy repository implementations."""

from .sqlalchemy_merchant_repository import SQLAlchemyMerchantRepository
from .sqlalchemy_order_repository import SQLAlchemyOrderRepository
from .sqlalchemy_product_repository import SQLAlchemyProductRepository

__all__ = ["SQLAlchemyMerchantRepository", "SQLAlchemyOrderRepository", "SQLAlchemyProductRepository"]

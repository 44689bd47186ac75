"""
SQLAlchemy ORM Models.

Maps merchants, cached orders and products to database tables.
"""
from datetime import datetime, timezone
import uuid

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import declarative_base


Base = declarative_base()


def _uuid() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# =============================================================================
# MERCHANT MODEL
# =============================================================================

class MerchantModel(Base):
    """
    Merchant (tenant) database model.

    Holds the store identity and the Shopify/WooCommerce credentials.
    """

    __tablename__ = "merchants"

    id = Column(String(36), primary_key=True, default=_uuid)

    # Store identity
    store_name = Column(String(255), nullable=False, default="")
    store_url = Column(String(500), nullable=False, default="", index=True)
    is_store_setup = Column(Boolean, nullable=False, default=False, index=True)

    # Shopify connection
    shopify_shop_domain = Column(String(255), nullable=False, default="")
    shopify_access_token = Column(String(255), nullable=False, default="")
    shopify_is_connected = Column(Boolean, nullable=False, default=False)

    # WooCommerce connection
    wc_store_url = Column(String(500), nullable=False, default="")
    wc_consumer_key = Column(String(255), nullable=False, default="")
    wc_consumer_secret = Column(String(255), nullable=False, default="")
    wc_secret_key = Column(String(255), nullable=False, default="", index=True)
    wc_is_connected = Column(Boolean, nullable=False, default=False)

    # Timestamps
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False)

    def __repr__(self):
        return f"<MerchantModel(id={self.id}, store_url={self.store_url})>"


# =============================================================================
# ORDER MODEL
# =============================================================================

class OrderModel(Base):
    """
    Cached order database model.

    One row per (merchant, platform order); items and address are JSON.
    """

    __tablename__ = "orders"

    id = Column(String(36), primary_key=True, default=_uuid)
    merchant_id = Column(String(36), ForeignKey("merchants.id"), nullable=False, index=True)

    # Identifiers
    platform = Column(String(20), nullable=True)  # NULL for manual orders
    platform_order_id = Column(String(64), nullable=True)
    order_number = Column(String(64), nullable=False)
    order_number_normalized = Column(String(64), nullable=False)

    # Customer
    customer_name = Column(String(255), nullable=False, default="Guest")
    customer_email = Column(String(255), nullable=False, default="")
    customer_phone = Column(String(64), nullable=False, default="")
    upstream_customer_id = Column(String(64), nullable=True)

    # Order data
    items = Column(JSON, nullable=False, default=list)
    amount = Column(Numeric(15, 2), nullable=False, default=0)
    payment_method = Column(String(20), nullable=False, default="Prepaid")
    status = Column(String(20), nullable=False, default="Pending", index=True)
    placed_date = Column(DateTime(timezone=True), nullable=True)
    delivered_date = Column(DateTime(timezone=True), nullable=True)
    shipping_address = Column(JSON, nullable=True)
    notes = Column(Text, nullable=False, default="")

    # Timestamps
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False)

    __table_args__ = (
        Index("ix_orders_merchant_platform_id", "merchant_id", "platform", "platform_order_id"),
        Index("ix_orders_merchant_number", "merchant_id", "order_number_normalized"),
        Index("ix_orders_placed_date", "placed_date"),
    )

    def __repr__(self):
        return f"<OrderModel(id={self.id}, order_number={self.order_number}, status={self.status})>"


# =============================================================================
# PRODUCT MODEL
# =============================================================================

class ProductModel(Base):
    """Product catalogue entry synced from a platform."""

    __tablename__ = "products"

    id = Column(String(36), primary_key=True, default=_uuid)
    merchant_id = Column(String(36), ForeignKey("merchants.id"), nullable=False, index=True)

    platform = Column(String(20), nullable=False)
    platform_product_id = Column(String(64), nullable=False)

    name = Column(String(500), nullable=False)
    sku = Column(String(255), nullable=False, default="")
    price = Column(Numeric(15, 2), nullable=False, default=0)
    stock_quantity = Column(Integer, nullable=False, default=0)
    status = Column(String(20), nullable=False, default="active")
    description = Column(Text, nullable=False, default="")
    image_urls = Column(JSON, nullable=False, default=list)
    tags = Column(JSON, nullable=False, default=list)

    last_synced_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False)

    __table_args__ = (
        UniqueConstraint("merchant_id", "platform", "platform_product_id", name="uq_products_platform_id"),
    )

    def __repr__(self):
        return f"<ProductModel(id={self.id}, name={self.name})>"

"""
Canonical order entity.

CRITICAL: This file must contain ZERO imports from:
- sqlalchemy
- pydantic
- fastapi
"""
from dataclasses import dataclass, field, replace
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from ..enums import OrderSource, OrderStatus, PaymentMethod, Platform


GUEST_NAME = "Guest"


@dataclass
class CustomerInfo:
    """Shopper contact details as resolved for one order."""
    name: str = GUEST_NAME
    email: str = ""
    phone: str = ""

    def filled_from(self, previous: "CustomerInfo") -> "CustomerInfo":
        """Copy with blank fields (and the guest placeholder) taken from `previous`."""
        name = self.name if self.name and self.name != GUEST_NAME else previous.name
        return CustomerInfo(
            name=name or GUEST_NAME,
            email=self.email or previous.email,
            phone=self.phone or previous.phone,
        )


@dataclass
class ShippingAddress:
    """Structured delivery address."""
    street: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""
    country: str = ""

    def is_empty(self) -> bool:
        return not any((self.street, self.city, self.state, self.zip_code, self.country))


@dataclass
class OrderItem:
    """Individual line item within an order."""
    product_name: str
    quantity: int = 1
    price: Decimal = Decimal("0")


@dataclass
class CanonicalOrder:
    """
    Platform-neutral order.

    Materialized per request from Shopify, WooCommerce or the local cache.
    `order_number` is the shopper-facing number ("#1001", "1001");
    `platform_order_id` is the platform's internal id.
    """
    order_number: str
    platform_order_id: Optional[str] = None
    customer: CustomerInfo = field(default_factory=CustomerInfo)
    items: List[OrderItem] = field(default_factory=list)
    amount: Decimal = Decimal("0")
    payment_method: PaymentMethod = PaymentMethod.PREPAID
    status: OrderStatus = OrderStatus.PENDING
    placed_date: Optional[datetime] = None
    delivered_date: Optional[datetime] = None
    shipping_address: Optional[ShippingAddress] = None
    source: OrderSource = OrderSource.API

    # Metadata
    platform: Optional[Platform] = None  # None for manual/local orders
    notes: str = ""
    merchant_id: Optional[str] = None
    local_id: Optional[str] = None  # Database id once persisted
    upstream_customer_id: Optional[str] = None

    @property
    def dedup_key(self) -> str:
        """Key used when merging API and database listings."""
        return self.order_number or self.local_id or self.platform_order_id or ""

    @property
    def is_returnable(self) -> bool:
        return self.status == OrderStatus.DELIVERED

    def with_source(self, source: OrderSource) -> "CanonicalOrder":
        return replace(self, source=source)

"""Application DTOs for Order operations."""

from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from core.domain.entities import CanonicalOrder


class OrderItemDTO(BaseModel):
    """DTO for order item."""

    product_name: str = Field(..., alias="productName", description="Product name")
    quantity: int = Field(default=1, ge=0, description="Quantity ordered")
    price: Decimal = Field(default=Decimal("0"), description="Unit price")

    model_config = {"frozen": True, "populate_by_name": True}


class CustomerDTO(BaseModel):
    """DTO for the resolved customer of an order."""

    name: str = Field(default="Guest", description="Customer display name")
    email: str = Field(default="", description="Customer email")
    phone: str = Field(default="", description="Customer phone")

    model_config = {"frozen": True}


class ShippingAddressDTO(BaseModel):
    street: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = Field(default="", alias="zipCode")
    country: str = ""

    model_config = {"frozen": True, "populate_by_name": True}


class FindOrderRequest(BaseModel):
    """Request DTO for the public return-portal order lookup."""

    order_id: str = Field(..., alias="orderId", min_length=1, description="Order number as shown to the shopper")
    email_or_phone: str = Field(..., alias="emailOrPhone", min_length=1, description="Email or phone used at checkout")
    store_url: str = Field(..., alias="storeUrl", min_length=1, description="Store URL of the return portal")

    model_config = {"frozen": True, "populate_by_name": True}


class PublicOrderDTO(BaseModel):
    """Order as shown on the return portal."""

    order_number: str = Field(..., alias="orderNumber")
    order_date: str = Field(..., alias="orderDate", description="ISO 8601 placed date")
    items: List[OrderItemDTO] = Field(default_factory=list)
    total: Decimal = Field(default=Decimal("0"))
    customer: CustomerDTO

    model_config = {"frozen": True, "populate_by_name": True}

    @classmethod
    def from_entity(cls, order: CanonicalOrder) -> "PublicOrderDTO":
        placed = order.placed_date or datetime.now(timezone.utc)
        return cls(
            order_number=order.order_number,
            order_date=placed.isoformat(),
            items=[_item_dto(item) for item in order.items],
            total=order.amount,
            customer=_customer_dto(order),
        )


class OrderDTO(BaseModel):
    """Response DTO for a merchant order listing entry."""

    id: Optional[str] = Field(None, description="Local database id, if cached")
    platform_order_id: Optional[str] = Field(None, alias="platformOrderId")
    order_number: str = Field(..., alias="orderNumber")
    platform: Optional[str] = None
    customer: CustomerDTO
    items: List[OrderItemDTO] = Field(default_factory=list)
    amount: Decimal = Field(default=Decimal("0"))
    payment_method: str = Field(..., alias="paymentMethod")
    status: str
    placed_date: Optional[datetime] = Field(None, alias="placedDate")
    delivered_date: Optional[datetime] = Field(None, alias="deliveredDate")
    shipping_address: Optional[ShippingAddressDTO] = Field(None, alias="shippingAddress")
    notes: str = ""
    source: str

    model_config = {"frozen": True, "populate_by_name": True}

    @classmethod
    def from_entity(cls, order: CanonicalOrder) -> "OrderDTO":
        address = order.shipping_address
        return cls(
            id=order.local_id,
            platform_order_id=order.platform_order_id,
            order_number=order.order_number,
            platform=order.platform.value if order.platform else None,
            customer=_customer_dto(order),
            items=[_item_dto(item) for item in order.items],
            amount=order.amount,
            payment_method=order.payment_method.value,
            status=order.status.value,
            placed_date=order.placed_date,
            delivered_date=order.delivered_date,
            shipping_address=ShippingAddressDTO(
                street=address.street,
                city=address.city,
                state=address.state,
                zip_code=address.zip_code,
                country=address.country,
            ) if address else None,
            notes=order.notes,
            source=order.source.value,
        )


class OrderListDTO(BaseModel):
    total: int
    orders: List[OrderDTO] = Field(default_factory=list)

    model_config = {"frozen": True}


def _item_dto(item) -> OrderItemDTO:
    return OrderItemDTO(product_name=item.product_name, quantity=item.quantity, price=item.price)


def _customer_dto(order: CanonicalOrder) -> CustomerDTO:
    return CustomerDTO(
        name=order.customer.name,
        email=order.customer.email,
        phone=order.customer.phone,
    )

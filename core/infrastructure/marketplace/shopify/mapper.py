"""Shopify Admin REST JSON to canonical entity mapper."""

from typing import Any, Dict, List, Optional

from core.domain.entities import (
    GUEST_NAME,
    CanonicalOrder,
    CanonicalProduct,
    CustomerInfo,
    OrderItem,
    ShippingAddress,
    UpstreamCustomerRecord,
)
from core.domain.enums import OrderSource, PaymentMethod, Platform
from core.domain.services import (
    OrderContext,
    PriorityResolver,
    dig,
    enriched,
    joined_name,
    map_shopify_order_status,
    order_field,
)
from core.infrastructure.marketplace.common import (
    as_id,
    as_text,
    parse_datetime,
    parse_decimal,
    parse_int,
)


# Enriched customer record first, then the order snapshot
EMAIL_RESOLVER = PriorityResolver([
    enriched("email"),
    order_field("email"),
    order_field("customer", "email"),
    order_field("billing_address", "email"),
    order_field("shipping_address", "email"),
])

PHONE_RESOLVER = PriorityResolver([
    enriched("phone"),
    order_field("phone"),
    order_field("customer", "phone"),
    order_field("shipping_address", "phone"),
    order_field("billing_address", "phone"),
])

NAME_RESOLVER = PriorityResolver([
    enriched("full_name"),
    joined_name("customer"),
    order_field("email"),
    order_field("shipping_address", "name"),
    order_field("billing_address", "name"),
], default=GUEST_NAME)


class ShopifyOrderMapper:
    """Mapper for converting Shopify order/product JSON to domain entities."""

    @staticmethod
    def to_canonical_order(
        shopify_order: Dict[str, Any],
        customer: Optional[UpstreamCustomerRecord] = None,
    ) -> CanonicalOrder:
        """Convert a Shopify order payload.

        Args:
            shopify_order: Raw order JSON from the Admin API
            customer: Enriched customer record, if one was fetched

        Returns:
            CanonicalOrder with source=api
        """
        context = OrderContext(order=shopify_order, customer=customer)
        fulfillments = shopify_order.get("fulfillments") or []

        return CanonicalOrder(
            order_number=ShopifyOrderMapper.order_number(shopify_order),
            platform_order_id=as_id(shopify_order.get("id")),
            customer=CustomerInfo(
                name=NAME_RESOLVER.resolve(context),
                email=EMAIL_RESOLVER.resolve(context),
                phone=PHONE_RESOLVER.resolve(context),
            ),
            items=[
                ShopifyOrderMapper._map_line_item(item)
                for item in shopify_order.get("line_items") or []
            ],
            amount=parse_decimal(shopify_order.get("total_price")),
            payment_method=(
                PaymentMethod.COD
                if shopify_order.get("financial_status") == "pending"
                else PaymentMethod.PREPAID
            ),
            status=map_shopify_order_status(shopify_order),
            placed_date=parse_datetime(shopify_order.get("created_at")),
            delivered_date=parse_datetime(fulfillments[0].get("created_at")) if fulfillments else None,
            shipping_address=ShopifyOrderMapper._map_address(
                shopify_order.get("shipping_address") or shopify_order.get("billing_address")
            ),
            source=OrderSource.API,
            platform=Platform.SHOPIFY,
            notes=as_text(shopify_order.get("note")),
            upstream_customer_id=ShopifyOrderMapper.customer_id(shopify_order),
        )

    @staticmethod
    def order_number(shopify_order: Dict[str, Any]) -> str:
        # "#1001" display name, else the bare number
        return as_text(shopify_order.get("name")) or as_text(shopify_order.get("order_number"))

    @staticmethod
    def order_identifiers(shopify_order: Dict[str, Any]) -> List[str]:
        values = (shopify_order.get("name"), shopify_order.get("order_number"), shopify_order.get("id"))
        return [as_text(v) for v in values if as_text(v)]

    @staticmethod
    def customer_id(shopify_order: Dict[str, Any]) -> Optional[str]:
        return as_id(dig(shopify_order, "customer", "id"))

    @staticmethod
    def order_email(shopify_order: Dict[str, Any]) -> str:
        return EMAIL_RESOLVER.resolve(OrderContext(order=shopify_order))

    @staticmethod
    def to_canonical_product(shopify_product: Dict[str, Any]) -> CanonicalProduct:
        product_id = as_id(shopify_product.get("id"))
        if not product_id:
            raise ValueError("Shopify product data must contain 'id'")

        variants = shopify_product.get("variants") or []
        first_variant = variants[0] if variants else {}
        tags = as_text(shopify_product.get("tags"))

        return CanonicalProduct(
            platform_product_id=product_id,
            name=as_text(shopify_product.get("title")) or "Untitled Product",
            platform=Platform.SHOPIFY,
            sku=as_text(first_variant.get("sku")),
            price=parse_decimal(first_variant.get("price")),
            stock_quantity=sum(parse_int(v.get("inventory_quantity")) for v in variants),
            status="active" if shopify_product.get("status") == "active" else "draft",
            description=as_text(shopify_product.get("body_html")),
            image_urls=[
                img.get("src") for img in shopify_product.get("images") or [] if img.get("src")
            ],
            tags=[t.strip() for t in tags.split(",") if t.strip()],
        )

    @staticmethod
    def _map_line_item(item: Dict[str, Any]) -> OrderItem:
        return OrderItem(
            product_name=as_text(item.get("name")) or as_text(item.get("title")) or "Product",
            quantity=parse_int(item.get("quantity"), default=1),
            price=parse_decimal(item.get("price")),
        )

    @staticmethod
    def _map_address(address: Optional[Dict[str, Any]]) -> Optional[ShippingAddress]:
        if not address:
            return None
        return ShippingAddress(
            street=as_text(address.get("address1")),
            city=as_text(address.get("city")),
            state=as_text(address.get("province")),
            zip_code=as_text(address.get("zip")),
            country=as_text(address.get("country")),
        )

"""WooCommerce REST / plugin JSON to canonical entity mapper."""

from typing import Any, Dict, List, Optional

from core.application.interfaces import IWebhookPayloadMapper
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
    enriched,
    joined_name,
    map_woocommerce_status,
    order_field,
)
from core.infrastructure.marketplace.common import (
    as_id,
    as_text,
    parse_datetime,
    parse_decimal,
    parse_int,
)


EMAIL_RESOLVER = PriorityResolver([
    enriched("email"),
    order_field("billing", "email"),
    order_field("shipping", "email"),
])

PHONE_RESOLVER = PriorityResolver([
    enriched("phone"),
    order_field("billing", "phone"),
    order_field("shipping", "phone"),
])

NAME_RESOLVER = PriorityResolver([
    enriched("full_name"),
    joined_name("billing"),
    order_field("billing", "company"),
    joined_name("shipping"),
], default=GUEST_NAME)

_ADDRESS_FIELDS = ("address_1", "city", "state", "postcode", "country")


def _payment_method(method: Any) -> PaymentMethod:
    return PaymentMethod.COD if "cod" in as_text(method).lower() else PaymentMethod.PREPAID


def _map_address(address: Optional[Dict[str, Any]]) -> Optional[ShippingAddress]:
    if not address or not any(as_text(address.get(f)) for f in _ADDRESS_FIELDS):
        return None
    street = f"{as_text(address.get('address_1'))} {as_text(address.get('address_2'))}".strip()
    return ShippingAddress(
        street=street,
        city=as_text(address.get("city")),
        state=as_text(address.get("state")),
        zip_code=as_text(address.get("postcode")),
        country=as_text(address.get("country")),
    )


class WooCommerceOrderMapper:
    """Mapper for converting WooCommerce REST JSON to domain entities."""

    @staticmethod
    def to_canonical_order(
        wc_order: Dict[str, Any],
        customer: Optional[UpstreamCustomerRecord] = None,
    ) -> CanonicalOrder:
        """Convert a wc/v3 order payload.

        Args:
            wc_order: Raw order JSON
            customer: Enriched customer record, if one was fetched

        Returns:
            CanonicalOrder with source=api
        """
        context = OrderContext(order=wc_order, customer=customer)

        return CanonicalOrder(
            order_number=as_text(wc_order.get("number")) or as_text(wc_order.get("id")),
            platform_order_id=as_id(wc_order.get("id")),
            customer=CustomerInfo(
                name=NAME_RESOLVER.resolve(context),
                email=EMAIL_RESOLVER.resolve(context),
                phone=PHONE_RESOLVER.resolve(context),
            ),
            items=[
                OrderItem(
                    product_name=as_text(item.get("name")) or "Product",
                    quantity=parse_int(item.get("quantity"), default=1),
                    price=parse_decimal(item.get("price")),
                )
                for item in wc_order.get("line_items") or []
            ],
            amount=parse_decimal(wc_order.get("total")),
            payment_method=_payment_method(wc_order.get("payment_method")),
            status=map_woocommerce_status(wc_order.get("status")),
            placed_date=parse_datetime(wc_order.get("date_created_gmt") or wc_order.get("date_created")),
            delivered_date=parse_datetime(
                wc_order.get("date_completed_gmt") or wc_order.get("date_completed")
            ),
            shipping_address=_map_address(wc_order.get("shipping")) or _map_address(wc_order.get("billing")),
            source=OrderSource.API,
            platform=Platform.WOOCOMMERCE,
            notes=as_text(wc_order.get("customer_note")),
            upstream_customer_id=WooCommerceOrderMapper.customer_id(wc_order),
        )

    @staticmethod
    def order_identifiers(wc_order: Dict[str, Any]) -> List[str]:
        values = (wc_order.get("number"), wc_order.get("id"))
        return [as_text(v) for v in values if as_text(v)]

    @staticmethod
    def customer_id(wc_order: Dict[str, Any]) -> Optional[str]:
        # Guest checkouts report customer_id 0
        return as_id(wc_order.get("customer_id"))

    @staticmethod
    def order_email(wc_order: Dict[str, Any]) -> str:
        return EMAIL_RESOLVER.resolve(OrderContext(order=wc_order))

    @staticmethod
    def to_canonical_product(wc_product: Dict[str, Any]) -> CanonicalProduct:
        product_id = as_id(wc_product.get("id"))
        if not product_id:
            raise ValueError("WooCommerce product data must contain 'id'")

        return CanonicalProduct(
            platform_product_id=product_id,
            name=as_text(wc_product.get("name")) or "Untitled Product",
            platform=Platform.WOOCOMMERCE,
            sku=as_text(wc_product.get("sku")),
            price=parse_decimal(wc_product.get("price")),
            stock_quantity=parse_int(wc_product.get("stock_quantity")),
            status="active" if wc_product.get("status") == "publish" else "draft",
            description=as_text(wc_product.get("description")),
            image_urls=[
                img.get("src") or img.get("url")
                for img in wc_product.get("images") or []
                if img.get("src") or img.get("url")
            ],
            tags=[as_text(t.get("name")) for t in wc_product.get("tags") or [] if as_text(t.get("name"))],
        )


class WooCommerceWebhookMapper(IWebhookPayloadMapper):
    """
    Mapper for the Backo WordPress plugin payloads.

    The plugin flattens orders (`order_id`, `order_number`, `customer`,
    `billing_address`, `shipping_address`, `items`) and products
    (`product_id`, `name`, `stock_quantity`, ...).
    """

    def to_order(self, data: Dict[str, Any]) -> CanonicalOrder:
        order_id = as_id(data.get("order_id"))
        order_number = as_text(data.get("order_number"))
        if not order_id and not order_number:
            raise ValueError("Order ID or Order Number is required")

        customer = data.get("customer") or {}
        name = as_text(customer.get("name")) or (
            f"{as_text(customer.get('first_name'))} {as_text(customer.get('last_name'))}".strip()
        )

        return CanonicalOrder(
            order_number=order_number or order_id,
            platform_order_id=order_id or order_number,
            customer=CustomerInfo(
                name=name or GUEST_NAME,
                email=as_text(customer.get("email")),
                phone=as_text(customer.get("phone")),
            ),
            items=[
                OrderItem(
                    product_name=as_text(item.get("name")) or "Product",
                    quantity=parse_int(item.get("quantity"), default=1) or 1,
                    price=parse_decimal(item.get("price") or item.get("subtotal")),
                )
                for item in data.get("items") or []
            ],
            amount=parse_decimal(data.get("total")),
            payment_method=_payment_method(data.get("payment_method")),
            status=map_woocommerce_status(data.get("status")),
            placed_date=parse_datetime(data.get("date_created")),
            shipping_address=(
                _map_address(data.get("shipping_address")) or _map_address(data.get("billing_address"))
            ),
            source=OrderSource.API,
            platform=Platform.WOOCOMMERCE,
            notes=f"Synced from WooCommerce webhook. Order ID: {order_id or order_number}",
        )

    def to_product(self, data: Dict[str, Any]) -> CanonicalProduct:
        product_id = as_id(data.get("product_id"))
        if not product_id:
            raise ValueError("Product ID is required")

        images = data.get("images") or []
        return CanonicalProduct(
            platform_product_id=product_id,
            name=as_text(data.get("name")) or "Untitled Product",
            platform=Platform.WOOCOMMERCE,
            sku=as_text(data.get("sku")),
            price=parse_decimal(data.get("price")),
            stock_quantity=parse_int(data.get("stock_quantity")),
            status="active" if as_text(data.get("status") or "publish") == "publish" else "draft",
            description=as_text(data.get("description")),
            image_urls=[
                img.get("src") if isinstance(img, dict) else str(img)
                for img in images
                if (img.get("src") if isinstance(img, dict) else img)
            ],
            tags=[as_text(t) for t in data.get("tags") or [] if as_text(t)],
        )

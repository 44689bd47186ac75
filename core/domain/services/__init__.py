"""Domain services - pure functions over platform payloads."""

from .customer_resolution import OrderContext, PriorityResolver, dig, enriched, joined_name, order_field
from .status_mapper import map_shopify_order_status, map_shopify_status, map_woocommerce_status

__all__ = [
    "OrderContext",
    "PriorityResolver",
    "dig",
    "enriched",
    "joined_name",
    "map_shopify_order_status",
    "map_shopify_status",
    "map_woocommerce_status",
    "order_field",
]

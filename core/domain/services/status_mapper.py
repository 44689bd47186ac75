"""
Canonical status mapping.

Pure functions from a platform's status vocabulary to `OrderStatus`.
Precedence: Cancelled > fulfillment signal > financial signal > Pending.
"""
from typing import Any, Dict, Iterable, Optional

from ..enums import OrderStatus


_SHOPIFY_DELIVERED_FULFILLMENT_STATES = {"success", "open", ""}
_SHOPIFY_PROCESSING_FINANCIAL_STATES = {"paid", "authorized"}

_WOOCOMMERCE_STATUS_MAP = {
    "pending": OrderStatus.PENDING,
    "processing": OrderStatus.PROCESSING,
    "on-hold": OrderStatus.PROCESSING,
    "completed": OrderStatus.DELIVERED,
    "cancelled": OrderStatus.CANCELLED,
    "refunded": OrderStatus.CANCELLED,
    "failed": OrderStatus.CANCELLED,
}


def map_shopify_status(
    fulfillment_status: Optional[str],
    financial_status: Optional[str],
    cancelled_at: Optional[str] = None,
    fulfillments: Optional[Iterable[Dict[str, Any]]] = None,
) -> OrderStatus:
    """
    Map Shopify order fields to a canonical status.

    The summary `fulfillment_status` wins when it is fulfilled or partial.
    Otherwise a fulfillment record counts as delivered when its status is
    success, open or blank.
    """
    if cancelled_at:
        return OrderStatus.CANCELLED

    if fulfillment_status == "fulfilled":
        return OrderStatus.DELIVERED
    if fulfillment_status == "partial":
        return OrderStatus.IN_TRANSIT

    for fulfillment in fulfillments or ():
        if (fulfillment.get("status") or "") in _SHOPIFY_DELIVERED_FULFILLMENT_STATES:
            return OrderStatus.DELIVERED

    if (financial_status or "") in _SHOPIFY_PROCESSING_FINANCIAL_STATES:
        return OrderStatus.PROCESSING

    return OrderStatus.PENDING


def map_shopify_order_status(order: Dict[str, Any]) -> OrderStatus:
    return map_shopify_status(
        order.get("fulfillment_status"),
        order.get("financial_status"),
        order.get("cancelled_at"),
        order.get("fulfillments"),
    )


def map_woocommerce_status(status: Optional[str]) -> OrderStatus:
    return _WOOCOMMERCE_STATUS_MAP.get((status or "").strip().lower(), OrderStatus.PENDING)

"""
Reconciliation of live platform orders with the local cache.

API orders are authoritative: they seed the result, and a cached order is
added only when no API order shares its dedup key.
"""
from datetime import datetime, timezone
from typing import Iterable, List

from core.domain.entities import CanonicalOrder


_EPOCH = 0.0


def placed_sort_key(order: CanonicalOrder) -> float:
    """Timestamp of placed_date; missing or unusable dates sort as the epoch."""
    placed = order.placed_date
    if not isinstance(placed, datetime):
        return _EPOCH
    if placed.tzinfo is None:
        placed = placed.replace(tzinfo=timezone.utc)
    try:
        return placed.timestamp()
    except (OverflowError, OSError, ValueError):
        return _EPOCH


def merge_orders(
    api_orders: Iterable[CanonicalOrder],
    db_orders: Iterable[CanonicalOrder],
) -> List[CanonicalOrder]:
    """
    Merge API and database listings.

    Dedup key is the order number, else the local id (else the platform id).
    First occurrence wins, so API entries shadow cached ones. The result is
    sorted by placed date, newest first.
    """
    merged = {}
    for order in list(api_orders) + list(db_orders):
        # keyless orders are never merged with each other
        merged.setdefault(order.dedup_key or f"__keyless_{id(order)}", order)

    return sorted(merged.values(), key=placed_sort_key, reverse=True)

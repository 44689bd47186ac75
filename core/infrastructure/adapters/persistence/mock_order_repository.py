"""
Mock Order Repository Implementation.

This is an in-memory implementation for testing and demos.
"""
from dataclasses import replace
from typing import Dict, List, Optional, Tuple
import logging
import uuid

from core.domain.entities import CanonicalOrder
from core.domain.enums import OrderSource
from core.domain.repositories import OrderKey, OrderRepository
from core.domain.value_objects import normalize_order_number
from core.application.services.reconciliation import placed_sort_key


logger = logging.getLogger(__name__)


class MockOrderRepository(OrderRepository):
    """
    In-memory implementation of OrderRepository.

    Rows are keyed by local id and looked up with the same rules as the
    SQL repository.
    """

    def __init__(self):
        """Initialize empty storage."""
        self._storage: Dict[str, CanonicalOrder] = {}
        logger.info("MockOrderRepository initialized (in-memory storage)")

    def add(self, merchant_id: str, order: CanonicalOrder) -> CanonicalOrder:
        """Seed a cached order directly (test helper)."""
        stored = replace(
            order,
            merchant_id=merchant_id,
            local_id=order.local_id or str(uuid.uuid4()),
            source=OrderSource.DATABASE,
        )
        self._storage[stored.local_id] = stored
        return stored

    async def find_order(self, key: OrderKey) -> Optional[CanonicalOrder]:
        return self._find(key)

    async def upsert_order(self, key: OrderKey, order: CanonicalOrder) -> Tuple[CanonicalOrder, bool]:
        existing = self._find(key)
        local_id = existing.local_id if existing else str(uuid.uuid4())
        customer = order.customer.filled_from(existing.customer) if existing else order.customer
        stored = replace(
            order,
            customer=customer,
            merchant_id=key.merchant_id,
            local_id=local_id,
            source=OrderSource.DATABASE,
        )
        self._storage[local_id] = stored
        logger.info(f"✅ Order {'updated' if existing else 'saved'} in mock repository: {order.order_number}")
        return stored, existing is None

    async def list_orders(self, merchant_id: str, limit: int = 1000) -> List[CanonicalOrder]:
        orders = [o for o in self._storage.values() if o.merchant_id == merchant_id]
        orders.sort(key=placed_sort_key, reverse=True)
        return orders[:limit]

    async def delete_orders_without_platform_id(self, merchant_id: str) -> int:
        doomed = [
            local_id for local_id, o in self._storage.items()
            if o.merchant_id == merchant_id and not o.platform_order_id
        ]
        for local_id in doomed:
            del self._storage[local_id]
        return len(doomed)

    def _find(self, key: OrderKey) -> Optional[CanonicalOrder]:
        rows = [o for o in self._storage.values() if o.merchant_id == key.merchant_id]

        if key.platform_order_id:
            for order in rows:
                if order.platform_order_id == key.platform_order_id and order.platform == key.platform:
                    return order

        if key.normalized_number:
            for order in rows:
                if normalize_order_number(order.order_number) != key.normalized_number:
                    continue
                if order.platform is None or (key.platform is not None and order.platform == key.platform):
                    return order

        return None

    def clear(self):
        """Clear all orders (for testing)."""
        self._storage.clear()

    def count(self) -> int:
        return len(self._storage)

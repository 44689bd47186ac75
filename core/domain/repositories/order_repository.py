"""Repository interface for locally cached orders."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..entities import CanonicalOrder
from ..enums import Platform
from ..value_objects import normalize_order_number


@dataclass(frozen=True)
class OrderKey:
    """
    Upsert key of a cached order.

    The platform order id is tried first; the normalized order number is
    the fallback for rows written before the id was known.
    """
    merchant_id: str
    platform: Optional[Platform] = None
    platform_order_id: Optional[str] = None
    order_number: Optional[str] = None

    @property
    def normalized_number(self) -> str:
        return normalize_order_number(self.order_number or "")

    @classmethod
    def for_order(cls, merchant_id: str, order: CanonicalOrder) -> "OrderKey":
        return cls(
            merchant_id=merchant_id,
            platform=order.platform,
            platform_order_id=order.platform_order_id,
            order_number=order.order_number,
        )


class OrderRepository(ABC):
    """Abstract repository for the local order cache."""

    @abstractmethod
    async def find_order(self, key: OrderKey) -> Optional[CanonicalOrder]:
        """Find a cached order.

        Args:
            key: Merchant plus platform id and/or order number

        Returns:
            CanonicalOrder (source=database) if found, None otherwise
        """
        pass

    @abstractmethod
    async def upsert_order(self, key: OrderKey, order: CanonicalOrder) -> Tuple[CanonicalOrder, bool]:
        """Insert or update the cached copy of an order.

        Args:
            key: Lookup key for the existing row
            order: Fresh canonical data

        Returns:
            (stored order, True if a new row was created)
        """
        pass

    @abstractmethod
    async def list_orders(self, merchant_id: str, limit: int = 1000) -> List[CanonicalOrder]:
        """List cached orders of a merchant, newest first."""
        pass

    @abstractmethod
    async def delete_orders_without_platform_id(self, merchant_id: str) -> int:
        """Remove cached orders that were never linked to a platform order.

        Returns:
            Number of deleted rows
        """
        pass

"""Repository interface for the local product catalogue."""

from abc import ABC, abstractmethod
from typing import List

from ..entities import CanonicalProduct


class ProductRepository(ABC):

    @abstractmethod
    async def upsert_product(self, merchant_id: str, product: CanonicalProduct) -> bool:
        """Insert or update by (merchant, platform, platform product id).

        Returns:
            True if a new row was created
        """
        pass

    @abstractmethod
    async def list_products(self, merchant_id: str) -> List[CanonicalProduct]:
        pass

"""In-memory product repository."""
from dataclasses import replace
from typing import Dict, List, Tuple

from core.domain.entities import CanonicalProduct
from core.domain.repositories import ProductRepository


class MockProductRepository(ProductRepository):

    def __init__(self):
        self._storage: Dict[Tuple[str, str, str], CanonicalProduct] = {}

    async def upsert_product(self, merchant_id: str, product: CanonicalProduct) -> bool:
        key = (merchant_id, product.platform.value, product.platform_product_id)
        created = key not in self._storage
        self._storage[key] = replace(product, merchant_id=merchant_id)
        return created

    async def list_products(self, merchant_id: str) -> List[CanonicalProduct]:
        return sorted(
            (p for (m, _, _), p in self._storage.items() if m == merchant_id),
            key=lambda p: p.name,
        )

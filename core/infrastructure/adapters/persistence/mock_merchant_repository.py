"""In-memory merchant repository for tests and local runs."""
from typing import Dict, List, Optional

from core.domain.entities import Merchant
from core.domain.repositories import MerchantRepository


class MockMerchantRepository(MerchantRepository):

    def __init__(self, merchants: Optional[List[Merchant]] = None):
        self._storage: Dict[str, Merchant] = {m.id: m for m in merchants or []}
        # Lookup counter, lets tests observe credential caching
        self.reads = 0

    async def get_by_id(self, merchant_id: str) -> Optional[Merchant]:
        self.reads += 1
        return self._storage.get(merchant_id)

    async def find_by_store_url(self, store_url: str) -> Optional[Merchant]:
        self.reads += 1
        return next((m for m in self._storage.values() if m.store_url == store_url), None)

    async def list_with_store_setup(self) -> List[Merchant]:
        self.reads += 1
        return [m for m in self._storage.values() if m.is_store_setup]

    async def find_by_webhook_secret(self, secret_key: str) -> Optional[Merchant]:
        self.reads += 1
        if not secret_key:
            return None
        return next(
            (
                m for m in self._storage.values()
                if m.woocommerce.secret_key == secret_key and m.woocommerce.is_connected
            ),
            None,
        )

    async def list_connected(self) -> List[Merchant]:
        return [m for m in self._storage.values() if m.connected_platforms()]

    async def save(self, merchant: Merchant) -> None:
        self._storage[merchant.id] = merchant

"""
TTL cache in front of the merchant store.

Keyed by merchant id. Lookups by store URL or webhook secret always hit
the repository but prime the id cache with what they return.
"""
import logging
import time
from typing import Callable, Dict, List, Optional, Tuple

from core.application.interfaces import ICredentialStore
from core.domain.entities import Merchant
from core.domain.repositories import MerchantRepository


logger = logging.getLogger(__name__)


class CredentialCache(ICredentialStore):

    def __init__(
        self,
        repository: MerchantRepository,
        ttl_seconds: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.repository = repository
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[str, Tuple[float, Merchant]] = {}

    def _remember(self, merchant: Optional[Merchant]) -> Optional[Merchant]:
        if merchant is not None and self.ttl_seconds > 0:
            self._entries[merchant.id] = (self._clock() + self.ttl_seconds, merchant)
        return merchant

    async def get_store_credentials(self, merchant_id: str) -> Optional[Merchant]:
        entry = self._entries.get(merchant_id)
        if entry is not None:
            expires_at, merchant = entry
            if self._clock() < expires_at:
                return merchant
            del self._entries[merchant_id]

        merchant = await self.repository.get_by_id(merchant_id)
        if merchant is None:
            logger.info(f"Merchant not found: {merchant_id}")
        return self._remember(merchant)

    async def find_by_store_url(self, store_url: str) -> Optional[Merchant]:
        return self._remember(await self.repository.find_by_store_url(store_url))

    async def list_with_store_setup(self) -> List[Merchant]:
        merchants = await self.repository.list_with_store_setup()
        for merchant in merchants:
            self._remember(merchant)
        return merchants

    async def find_by_webhook_secret(self, secret_key: str) -> Optional[Merchant]:
        return self._remember(await self.repository.find_by_webhook_secret(secret_key))

    def invalidate(self, merchant_id: str) -> None:
        self._entries.pop(merchant_id, None)

    def clear(self) -> None:
        self._entries.clear()

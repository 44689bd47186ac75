"""Repository interface for merchants and their stored platform credentials."""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..entities import Merchant


class MerchantRepository(ABC):

    @abstractmethod
    async def get_by_id(self, merchant_id: str) -> Optional[Merchant]:
        pass

    @abstractmethod
    async def find_by_store_url(self, store_url: str) -> Optional[Merchant]:
        """Exact (byte-for-byte) match on the stored store URL."""
        pass

    @abstractmethod
    async def list_with_store_setup(self) -> List[Merchant]:
        """Merchants that finished store setup."""
        pass

    @abstractmethod
    async def find_by_webhook_secret(self, secret_key: str) -> Optional[Merchant]:
        """Merchant whose connected WooCommerce store uses this webhook secret."""
        pass

    @abstractmethod
    async def list_connected(self) -> List[Merchant]:
        """Merchants with at least one usable platform connection."""
        pass

    @abstractmethod
    async def save(self, merchant: Merchant) -> None:
        pass

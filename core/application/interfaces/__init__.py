"""Application layer interfaces."""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from backo_sdk import ConnectionCheck
from core.domain.entities import CanonicalOrder, CanonicalProduct, Merchant, UpstreamCustomerRecord
from core.domain.enums import Platform


class IUpstreamAdapter(ABC):
    """
    Interface for one connected storefront (a Shopify or WooCommerce store).

    An adapter is bound to a single merchant's credentials when it is
    created, so the fetch operations take no credential arguments.
    """

    platform: Platform

    @abstractmethod
    async def fetch_orders(self) -> List[Dict[str, Any]]:
        """
        Fetch every order, walking all pages up to the record cap.

        Returns:
            Raw platform order payloads

        Raises:
            UpstreamTransportError: On network/status/body failures
            UpstreamAuthError: When the credentials are rejected
        """
        pass

    @abstractmethod
    async def fetch_products(self) -> List[Dict[str, Any]]:
        pass

    @abstractmethod
    async def fetch_customers(self) -> List[Dict[str, Any]]:
        pass

    @abstractmethod
    async def fetch_customer_by_id(self, customer_id: str) -> Optional[UpstreamCustomerRecord]:
        """
        Fetch one customer record.

        Returns:
            Customer record, or None when the platform reports 404
        """
        pass

    @abstractmethod
    async def verify_connection(self) -> ConnectionCheck:
        pass

    @abstractmethod
    def convert_order(
        self,
        raw: Dict[str, Any],
        customer: Optional[UpstreamCustomerRecord] = None,
    ) -> CanonicalOrder:
        """
        Convert a raw platform order into the canonical shape.

        Args:
            raw: Platform order payload
            customer: Enriched customer record; its non-blank values win

        Returns:
            CanonicalOrder with source=api
        """
        pass

    @abstractmethod
    def convert_product(self, raw: Dict[str, Any]) -> CanonicalProduct:
        pass

    @abstractmethod
    def order_identifiers(self, raw: Dict[str, Any]) -> List[str]:
        """Values a shopper may type to refer to this order (name, number, id)."""
        pass

    @abstractmethod
    def customer_id(self, raw: Dict[str, Any]) -> Optional[str]:
        """Upstream customer id of the order, None for guest checkouts."""
        pass

    @abstractmethod
    def order_email(self, raw: Dict[str, Any]) -> str:
        """Best email available on the order itself, without enrichment."""
        pass


class IUpstreamAdapterFactory(ABC):
    """Builds adapters from a merchant's stored connections."""

    @abstractmethod
    def for_merchant(self, merchant: Merchant) -> List[IUpstreamAdapter]:
        """Adapters for every usable connection, Shopify first."""
        pass

    @abstractmethod
    def for_platform(self, merchant: Merchant, platform: Platform) -> IUpstreamAdapter:
        pass


class IWebhookPayloadMapper(ABC):
    """Converts storefront-plugin webhook payloads into canonical entities."""

    @abstractmethod
    def to_order(self, data: Dict[str, Any]) -> CanonicalOrder:
        """
        Raises:
            ValueError: When the payload carries no order id or number
        """
        pass

    @abstractmethod
    def to_product(self, data: Dict[str, Any]) -> CanonicalProduct:
        """
        Raises:
            ValueError: When the payload carries no product id
        """
        pass


class ICredentialStore(ABC):
    """
    Read access to merchants and their platform credentials.

    Implementations may cache; callers must not rely on seeing writes
    made by others before the cache entry expires.
    """

    @abstractmethod
    async def get_store_credentials(self, merchant_id: str) -> Optional[Merchant]:
        pass

    @abstractmethod
    async def find_by_store_url(self, store_url: str) -> Optional[Merchant]:
        pass

    @abstractmethod
    async def list_with_store_setup(self) -> List[Merchant]:
        pass

    @abstractmethod
    async def find_by_webhook_secret(self, secret_key: str) -> Optional[Merchant]:
        pass


__all__ = ["ICredentialStore", "IUpstreamAdapter", "IUpstreamAdapterFactory", "IWebhookPayloadMapper"]

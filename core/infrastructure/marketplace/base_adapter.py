"""
Base upstream adapter.

Pairs an SDK client (network) with a static mapper (conversion). Platform
adapters only choose the two.
"""
from typing import Any, Dict, List, Optional

from backo_sdk import ConnectionCheck
from core.application.interfaces import IUpstreamAdapter
from core.domain.entities import CanonicalOrder, CanonicalProduct, UpstreamCustomerRecord


class MarketplaceAdapter(IUpstreamAdapter):

    mapper: Any = None

    def __init__(self, client):
        self.client = client

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.client!r})"

    async def fetch_orders(self) -> List[Dict[str, Any]]:
        return await self.client.fetch_orders()

    async def fetch_products(self) -> List[Dict[str, Any]]:
        return await self.client.fetch_products()

    async def fetch_customers(self) -> List[Dict[str, Any]]:
        return await self.client.fetch_customers()

    async def fetch_customer_by_id(self, customer_id: str) -> Optional[UpstreamCustomerRecord]:
        payload = await self.client.fetch_customer_by_id(customer_id)
        if payload is None:
            return None
        return UpstreamCustomerRecord.from_payload(payload, fallback_id=customer_id)

    async def verify_connection(self) -> ConnectionCheck:
        return await self.client.verify_connection()

    def convert_order(self, raw: Dict[str, Any],
                      customer: Optional[UpstreamCustomerRecord] = None) -> CanonicalOrder:
        return self.mapper.to_canonical_order(raw, customer)

    def convert_product(self, raw: Dict[str, Any]) -> CanonicalProduct:
        return self.mapper.to_canonical_product(raw)

    def order_identifiers(self, raw: Dict[str, Any]) -> List[str]:
        return self.mapper.order_identifiers(raw)

    def customer_id(self, raw: Dict[str, Any]) -> Optional[str]:
        return self.mapper.customer_id(raw)

    def order_email(self, raw: Dict[str, Any]) -> str:
        return self.mapper.order_email(raw)

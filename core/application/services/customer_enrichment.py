"""
Customer enrichment cache.

Some platform orders carry a customer id but no usable email (Shopify
strips contact details from orders under restricted scopes). The cache
fetches each referenced customer at most once per logical operation.
"""
import logging
from typing import Any, Dict, Optional

from backo_sdk import UpstreamError
from core.application.interfaces import IUpstreamAdapter
from core.domain.entities import UpstreamCustomerRecord


logger = logging.getLogger(__name__)


class CustomerEnrichmentCache:
    """
    Per-operation map: upstream customer id -> customer record (or None).

    Create one per listing/lookup/sync run; never share between requests.
    A 404 and a failed lookup are both cached as None so the same id is
    never queried twice.
    """

    def __init__(self, adapter: IUpstreamAdapter):
        self.adapter = adapter
        self._records: Dict[str, Optional[UpstreamCustomerRecord]] = {}
        self.lookups = 0

    async def get(self, customer_id: str) -> Optional[UpstreamCustomerRecord]:
        key = str(customer_id)
        if key in self._records:
            return self._records[key]

        self.lookups += 1
        try:
            record = await self.adapter.fetch_customer_by_id(key)
        except UpstreamError as e:
            logger.warning(
                f"{self.adapter.platform.value}: customer {key} lookup failed, "
                f"continuing without enrichment: {e}"
            )
            record = None

        self._records[key] = record
        return record

    async def enrich(self, raw_order: Dict[str, Any], force: bool = False) -> Optional[UpstreamCustomerRecord]:
        """
        Customer record for an order, when enrichment applies.

        Enrichment applies when the order has a customer id and either its
        own email is blank or `force` is set (return-portal lookups).
        """
        customer_id = self.adapter.customer_id(raw_order)
        if not customer_id:
            return None
        if not force and self.adapter.order_email(raw_order):
            return None
        return await self.get(customer_id)

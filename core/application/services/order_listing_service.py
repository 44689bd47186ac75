"""
Merchant order listing.

Live platform orders merged with the local cache. Every live order is
written through to the cache so the listing keeps working from the
database when a platform is unreachable.
"""
import logging
from typing import List

from backo_sdk import UpstreamError
from core.application.interfaces import ICredentialStore, IUpstreamAdapter, IUpstreamAdapterFactory
from core.application.services.customer_enrichment import CustomerEnrichmentCache
from core.application.services.reconciliation import merge_orders
from core.domain.entities import CanonicalOrder, Merchant
from core.domain.exceptions import NotFoundError
from core.domain.repositories import OrderKey, OrderRepository


logger = logging.getLogger(__name__)


async def fetch_canonical_orders(adapter: IUpstreamAdapter, merchant_id: str) -> List[CanonicalOrder]:
    """Fetch and convert all orders of one platform, enriching blank emails."""
    cache = CustomerEnrichmentCache(adapter)
    orders = []
    for raw in await adapter.fetch_orders():
        customer = await cache.enrich(raw)
        order = adapter.convert_order(raw, customer=customer)
        order.merchant_id = merchant_id
        orders.append(order)

    if cache.lookups:
        logger.info(f"{adapter.platform.value}: {cache.lookups} customer lookups for {len(orders)} orders")
    return orders


class OrderListingService:

    def __init__(
        self,
        credential_store: ICredentialStore,
        adapter_factory: IUpstreamAdapterFactory,
        order_repository: OrderRepository,
    ):
        self.credential_store = credential_store
        self.adapter_factory = adapter_factory
        self.order_repository = order_repository

    async def _get_merchant(self, merchant_id: str) -> Merchant:
        merchant = await self.credential_store.get_store_credentials(merchant_id)
        if merchant is None:
            raise NotFoundError(f"Merchant not found: {merchant_id}")
        return merchant

    async def list_orders(self, merchant_id: str) -> List[CanonicalOrder]:
        """
        List a merchant's orders.

        Args:
            merchant_id: Merchant (tenant) id

        Returns:
            Live orders first-priority, cached orders filling the gaps,
            newest first

        Raises:
            NotFoundError: Unknown merchant
        """
        merchant = await self._get_merchant(merchant_id)

        api_orders: List[CanonicalOrder] = []
        for adapter in self.adapter_factory.for_merchant(merchant):
            try:
                api_orders.extend(await fetch_canonical_orders(adapter, merchant.id))
            except UpstreamError as e:
                logger.warning(
                    f"{adapter.platform.value} unavailable for merchant {merchant.id}, "
                    f"serving cached orders: {e}"
                )

        for order in api_orders:
            stored, _created = await self.order_repository.upsert_order(
                OrderKey.for_order(merchant.id, order), order
            )
            order.local_id = stored.local_id

        db_orders = await self.order_repository.list_orders(merchant.id)
        merged = merge_orders(api_orders, db_orders)

        logger.info(
            f"Merchant {merchant.id}: {len(api_orders)} live + {len(db_orders)} cached "
            f"-> {len(merged)} orders"
        )
        return merged

"""
Store Sync Service.

Pulls products and orders from every connected platform of a merchant and
upserts them into the local cache.
"""
import logging
from typing import List

from backo_sdk import ConnectionCheck, UpstreamError
from core.application.dtos import MerchantSyncReport, PlatformSyncReport
from core.application.interfaces import IUpstreamAdapter, IUpstreamAdapterFactory
from core.application.services.customer_enrichment import CustomerEnrichmentCache
from core.domain.entities import Merchant
from core.domain.enums import Platform
from core.domain.exceptions import NotFoundError
from core.domain.repositories import MerchantRepository, OrderKey, OrderRepository, ProductRepository


logger = logging.getLogger(__name__)

# raised by the mappers on a malformed record
BAD_RECORD_ERRORS = (ValueError, TypeError, KeyError, AttributeError)


class StoreSyncService:
    """
    Store sync orchestration.

    A failure on one platform is recorded in the report and does not stop
    the other platform; a bad record is counted and skipped.
    """

    def __init__(
        self,
        merchant_repository: MerchantRepository,
        adapter_factory: IUpstreamAdapterFactory,
        order_repository: OrderRepository,
        product_repository: ProductRepository,
    ):
        self.merchant_repository = merchant_repository
        self.adapter_factory = adapter_factory
        self.order_repository = order_repository
        self.product_repository = product_repository

    async def sync_merchant(self, merchant_id: str, delete_unlinked_orders: bool = False) -> MerchantSyncReport:
        merchant = await self.merchant_repository.get_by_id(merchant_id)
        if merchant is None:
            raise NotFoundError(f"Merchant not found: {merchant_id}")
        return await self._sync(merchant, delete_unlinked_orders)

    async def sync_all(self, delete_unlinked_orders: bool = False) -> List[MerchantSyncReport]:
        merchants = await self.merchant_repository.list_connected()
        logger.info(f"Syncing {len(merchants)} connected merchants")
        return [await self._sync(m, delete_unlinked_orders) for m in merchants]

    async def _sync(self, merchant: Merchant, delete_unlinked_orders: bool) -> MerchantSyncReport:
        report = MerchantSyncReport(merchant_id=merchant.id, store_name=merchant.store_name)

        if delete_unlinked_orders:
            report.deleted_unlinked_orders = await self.order_repository.delete_orders_without_platform_id(
                merchant.id
            )
            logger.info(f"Merchant {merchant.id}: deleted {report.deleted_unlinked_orders} unlinked orders")

        for adapter in self.adapter_factory.for_merchant(merchant):
            report.platforms.append(await self._sync_platform(merchant, adapter))

        return report

    async def _sync_platform(self, merchant: Merchant, adapter: IUpstreamAdapter) -> PlatformSyncReport:
        platform_report = PlatformSyncReport(platform=adapter.platform.value)
        try:
            await self._sync_products(merchant, adapter, platform_report)
            await self._sync_orders(merchant, adapter, platform_report)
        except UpstreamError as e:
            logger.error(f"{adapter.platform.value} sync failed for merchant {merchant.id}: {e}")
            platform_report.error = str(e)
            return platform_report

        logger.info(
            f"✅ {adapter.platform.value} sync for merchant {merchant.id}: "
            f"products +{platform_report.products.created}/~{platform_report.products.updated} "
            f"orders +{platform_report.orders.created}/~{platform_report.orders.updated}"
        )
        return platform_report

    async def _sync_products(self, merchant: Merchant, adapter: IUpstreamAdapter,
                             report: PlatformSyncReport) -> None:
        for raw in await adapter.fetch_products():
            try:
                product = adapter.convert_product(raw)
            except BAD_RECORD_ERRORS as e:
                report.products.errors += 1
                logger.warning(f"Skipping product {raw.get('id')}: {e}")
                continue
            product.merchant_id = merchant.id
            if await self.product_repository.upsert_product(merchant.id, product):
                report.products.created += 1
            else:
                report.products.updated += 1

    async def _sync_orders(self, merchant: Merchant, adapter: IUpstreamAdapter,
                           report: PlatformSyncReport) -> None:
        cache = CustomerEnrichmentCache(adapter)
        for raw in await adapter.fetch_orders():
            try:
                order = adapter.convert_order(raw, customer=await cache.enrich(raw))
            except BAD_RECORD_ERRORS as e:
                report.orders.errors += 1
                logger.warning(f"Skipping order {raw.get('id')}: {e}")
                continue
            order.merchant_id = merchant.id
            _stored, created = await self.order_repository.upsert_order(
                OrderKey.for_order(merchant.id, order), order
            )
            if created:
                report.orders.created += 1
            else:
                report.orders.updated += 1

    async def verify_connection(self, merchant_id: str, platform: Platform) -> ConnectionCheck:
        """Probe one platform connection with the stored credentials."""
        merchant = await self.merchant_repository.get_by_id(merchant_id)
        if merchant is None:
            raise NotFoundError(f"Merchant not found: {merchant_id}")

        connection = merchant.connection_for(platform)
        if connection is None or not connection.is_usable:
            return ConnectionCheck(success=False, error=f"{platform.value} is not connected for this store")

        check = await self.adapter_factory.for_platform(merchant, platform).verify_connection()
        logger.info(f"Connection check {platform.value} for merchant {merchant_id}: success={check.success}")
        return check

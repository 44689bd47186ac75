"""Tests for merchant order listings with cache write-through."""

import pytest

from backo_sdk import UpstreamTransportError
from core.application.services import CredentialCache, OrderListingService
from core.domain.entities import CanonicalOrder
from core.domain.enums import OrderSource, Platform
from core.domain.exceptions import NotFoundError
from core.infrastructure.adapters.persistence.mock_merchant_repository import MockMerchantRepository
from core.infrastructure.adapters.persistence.mock_order_repository import MockOrderRepository
from core.infrastructure.marketplace.shopify import ShopifyAdapter
from core.infrastructure.marketplace.woocommerce import WooCommerceAdapter
from tests.mocks.fakes import FakeAdapterFactory, FakePlatformClient
from tests.mocks.payloads import shopify_order, woocommerce_order


def build_service(merchant, shopify_client, woo_client, repository):
    factory = FakeAdapterFactory({
        Platform.SHOPIFY: ShopifyAdapter(shopify_client),
        Platform.WOOCOMMERCE: WooCommerceAdapter(woo_client),
    })
    store = CredentialCache(MockMerchantRepository([merchant]))
    return OrderListingService(credential_store=store, adapter_factory=factory, order_repository=repository)


class TestOrderListing:

    @pytest.mark.asyncio
    async def test_live_orders_written_through(self, merchant):
        repository = MockOrderRepository()
        service = build_service(
            merchant,
            FakePlatformClient(orders=[shopify_order()]),
            FakePlatformClient(orders=[woocommerce_order()]),
            repository,
        )

        orders = await service.list_orders(merchant.id)

        assert {o.order_number for o in orders} == {"#1001", "2001"}
        assert all(o.source == OrderSource.API for o in orders)
        assert all(o.local_id for o in orders)
        assert repository.count() == 2

    @pytest.mark.asyncio
    async def test_repeated_listing_does_not_duplicate_cache(self, merchant):
        repository = MockOrderRepository()
        service = build_service(
            merchant, FakePlatformClient(orders=[shopify_order()]), FakePlatformClient(), repository
        )

        first = await service.list_orders(merchant.id)
        second = await service.list_orders(merchant.id)

        assert repository.count() == 1
        assert first[0].local_id == second[0].local_id

    @pytest.mark.asyncio
    async def test_cached_only_orders_included(self, merchant):
        repository = MockOrderRepository()
        repository.add(merchant.id, CanonicalOrder(order_number="MANUAL-1"))
        service = build_service(
            merchant, FakePlatformClient(orders=[shopify_order()]), FakePlatformClient(), repository
        )

        orders = await service.list_orders(merchant.id)

        sources = {o.order_number: o.source for o in orders}
        assert sources == {"#1001": OrderSource.API, "MANUAL-1": OrderSource.DATABASE}
        # undated manual order sorts last
        assert orders[-1].order_number == "MANUAL-1"

    @pytest.mark.asyncio
    async def test_platform_outage_serves_cache(self, merchant):
        repository = MockOrderRepository()
        healthy = build_service(
            merchant, FakePlatformClient(orders=[shopify_order()]), FakePlatformClient(), repository
        )
        await healthy.list_orders(merchant.id)

        down = build_service(
            merchant,
            FakePlatformClient(error=UpstreamTransportError("shopify down")),
            FakePlatformClient(),
            repository,
        )
        orders = await down.list_orders(merchant.id)

        assert [(o.order_number, o.source) for o in orders] == [("#1001", OrderSource.DATABASE)]

    @pytest.mark.asyncio
    async def test_failed_customer_lookup_keeps_cached_contact(self, merchant):
        repository = MockOrderRepository()
        shop = FakePlatformClient(
            orders=[shopify_order(email="")],
            customers={"901": {"id": 901, "email": "rec@x.com", "phone": "+1 555 0100"}},
        )
        service = build_service(merchant, shop, FakePlatformClient(), repository)

        [first] = await service.list_orders(merchant.id)
        assert first.customer.email == "rec@x.com"

        shop.customer_error = UpstreamTransportError("timeout")
        await service.list_orders(merchant.id)

        [stored] = await repository.list_orders(merchant.id)
        assert stored.customer.email == "rec@x.com"
        assert stored.customer.phone == "+1 555 0100"
        assert stored.customer.name == "Jane Doe"

    @pytest.mark.asyncio
    async def test_unknown_merchant(self, merchant):
        service = build_service(merchant, FakePlatformClient(), FakePlatformClient(), MockOrderRepository())
        with pytest.raises(NotFoundError):
            await service.list_orders("nope")

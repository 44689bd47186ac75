"""Tests for the per-operation customer enrichment cache."""

import pytest

from backo_sdk import UpstreamTransportError
from core.application.services import CustomerEnrichmentCache, fetch_canonical_orders
from core.infrastructure.marketplace.shopify import ShopifyAdapter
from core.infrastructure.marketplace.woocommerce import WooCommerceAdapter
from tests.mocks.fakes import FakePlatformClient
from tests.mocks.payloads import shopify_order, woocommerce_order


class TestCustomerEnrichmentCache:

    @pytest.mark.asyncio
    async def test_each_customer_fetched_at_most_once(self):
        orders = [
            shopify_order(number=n, order_id=n, email=None, customer_id=cid)
            for n, cid in [(1, 901), (2, 901), (3, 902), (4, 901), (5, 902)]
        ]
        client = FakePlatformClient(
            orders=orders,
            customers={"901": {"id": 901, "email": "a@example.com"}, "902": {"id": 902, "email": "b@example.com"}},
        )

        converted = await fetch_canonical_orders(ShopifyAdapter(client), "m-1")

        assert sorted(client.customer_lookups) == ["901", "902"]
        assert [o.customer.email for o in converted] == [
            "a@example.com", "a@example.com", "b@example.com", "a@example.com", "b@example.com",
        ]
        assert all(o.merchant_id == "m-1" for o in converted)

    @pytest.mark.asyncio
    async def test_orders_with_email_are_not_enriched(self):
        client = FakePlatformClient()
        cache = CustomerEnrichmentCache(ShopifyAdapter(client))

        assert await cache.enrich(shopify_order()) is None
        assert client.customer_lookups == []

    @pytest.mark.asyncio
    async def test_force_enriches_orders_with_email(self):
        client = FakePlatformClient(customers={"901": {"id": 901, "email": "record@example.com"}})
        cache = CustomerEnrichmentCache(ShopifyAdapter(client))

        record = await cache.enrich(shopify_order(), force=True)

        assert record.email == "record@example.com"
        assert client.customer_lookups == ["901"]

    @pytest.mark.asyncio
    async def test_guest_orders_are_skipped(self):
        client = FakePlatformClient()
        cache = CustomerEnrichmentCache(WooCommerceAdapter(client))

        assert await cache.enrich(woocommerce_order(email="", customer_id=0)) is None
        assert cache.lookups == 0

    @pytest.mark.asyncio
    async def test_missing_and_failed_lookups_are_cached(self):
        client = FakePlatformClient(customer_error=UpstreamTransportError("timeout"))
        cache = CustomerEnrichmentCache(ShopifyAdapter(client))

        assert await cache.get("901") is None
        assert await cache.get("901") is None
        assert cache.lookups == 1

        client.customer_error = None
        assert await cache.get("404") is None
        assert await cache.get("404") is None
        assert client.customer_lookups == ["901", "404"]

    @pytest.mark.asyncio
    async def test_woocommerce_billing_fallback(self):
        client = FakePlatformClient(
            customers={"17": {"id": 17, "first_name": "Sam", "email": "", "billing": {"email": "bill@example.com"}}}
        )
        record = await CustomerEnrichmentCache(WooCommerceAdapter(client)).get("17")
        assert record.email == "bill@example.com"

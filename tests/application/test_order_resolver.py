"""
Tests for the return-portal order lookup.

Real adapters and mappers run on top of in-memory platform clients.
"""
import pytest

from backo_sdk import UpstreamTransportError
from core.application.services import CredentialCache, OrderResolver
from core.domain.enums import OrderStatus, Platform
from core.domain.exceptions import (
    IdentityMismatchError,
    IntegrationMissingError,
    NotReturnableError,
    OrderNotFoundError,
    StoreNotFoundError,
    ValidationError,
)
from core.infrastructure.adapters.persistence.mock_merchant_repository import MockMerchantRepository
from core.infrastructure.marketplace.shopify import ShopifyAdapter
from core.infrastructure.marketplace.woocommerce import WooCommerceAdapter
from tests.mocks.fakes import FakeAdapterFactory, FakePlatformClient
from tests.mocks.payloads import make_merchant, shopify_order, woocommerce_order


STORE_URL = "https://returns.example.com"


def build_resolver(merchant, shopify_client=None, woo_client=None) -> OrderResolver:
    adapters = {}
    if shopify_client is not None:
        adapters[Platform.SHOPIFY] = ShopifyAdapter(shopify_client)
    if woo_client is not None:
        adapters[Platform.WOOCOMMERCE] = WooCommerceAdapter(woo_client)
    store = CredentialCache(MockMerchantRepository([merchant]))
    return OrderResolver(credential_store=store, adapter_factory=FakeAdapterFactory(adapters))


class TestFindOrder:

    @pytest.mark.asyncio
    async def test_delivered_order_found_on_shopify(self, merchant):
        shopify = FakePlatformClient(orders=[shopify_order(number=1000, order_id=1), shopify_order()])
        resolver = build_resolver(merchant, shopify, FakePlatformClient())

        order = await resolver.find_order("1001", "JANE@example.com", STORE_URL)

        assert order.order_number == "#1001"
        assert order.status == OrderStatus.DELIVERED
        assert order.merchant_id == merchant.id

    @pytest.mark.asyncio
    async def test_public_dto(self, merchant):
        resolver = build_resolver(merchant, FakePlatformClient(orders=[shopify_order()]))

        dto = await resolver.resolve_public_order("#1001", "jane@example.com", STORE_URL)
        data = dto.model_dump(by_alias=True, mode="json")

        assert data["orderNumber"] == "#1001"
        assert data["orderDate"].startswith("2024-03-01T15:00:00")
        assert data["customer"]["email"] == "jane@example.com"
        assert [i["productName"] for i in data["items"]] == ["Linen Shirt - M", "Socks"]

    @pytest.mark.asyncio
    async def test_email_recovered_from_customer_record(self, merchant):
        raw = shopify_order(email=None)
        raw["customer"]["email"] = None
        shopify = FakePlatformClient(
            orders=[raw, shopify_order(number=1002, order_id=2, email=None)],
            customers={"901": {"id": 901, "first_name": "Jane", "last_name": "Doe", "email": "jane@example.com"}},
        )
        resolver = build_resolver(merchant, shopify)

        order = await resolver.find_order("#1001", "jane@example.com", STORE_URL)

        assert order.customer.email == "jane@example.com"
        # both orders reference customer 901, fetched once
        assert shopify.customer_lookups == ["901"]

    @pytest.mark.asyncio
    async def test_phone_match_across_formats(self, merchant):
        woo = FakePlatformClient(orders=[woocommerce_order()])
        resolver = build_resolver(merchant, FakePlatformClient(), woo)

        order = await resolver.find_order("2001", "+92 300 1234567", STORE_URL)

        assert order.platform == Platform.WOOCOMMERCE

    @pytest.mark.asyncio
    async def test_identity_mismatch_stops_search(self, merchant):
        woo = FakePlatformClient(orders=[woocommerce_order(number="1001", email="jane@example.com")])
        resolver = build_resolver(merchant, FakePlatformClient(orders=[shopify_order()]), woo)

        with pytest.raises(IdentityMismatchError) as exc_info:
            await resolver.find_order("1001", "someone@else.com", STORE_URL)

        assert exc_info.value.status_code == 401
        assert exc_info.value.checked_fields == ["email"]
        assert "jane@example.com" not in exc_info.value.message
        assert woo.order_fetches == 0

    @pytest.mark.asyncio
    async def test_not_delivered(self, merchant):
        shopify = FakePlatformClient(orders=[shopify_order(fulfillment_status=None, financial_status="paid")])
        resolver = build_resolver(merchant, shopify)

        with pytest.raises(NotReturnableError) as exc_info:
            await resolver.find_order("1001", "jane@example.com", STORE_URL)

        assert exc_info.value.status == OrderStatus.PROCESSING
        assert "Processing" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_not_found_on_any_platform(self, merchant):
        shopify = FakePlatformClient(orders=[shopify_order()])
        woo = FakePlatformClient(orders=[woocommerce_order()])
        resolver = build_resolver(merchant, shopify, woo)

        with pytest.raises(OrderNotFoundError):
            await resolver.find_order("9999", "jane@example.com", STORE_URL)

        assert shopify.order_fetches == 1
        assert woo.order_fetches == 1

    @pytest.mark.asyncio
    async def test_no_connected_platform(self):
        merchant = make_merchant(shopify=False, woocommerce=False)
        resolver = build_resolver(merchant)

        with pytest.raises(IntegrationMissingError):
            await resolver.find_order("1001", "jane@example.com", STORE_URL)

    @pytest.mark.asyncio
    async def test_shopify_outage_falls_back_to_woocommerce(self, merchant):
        shopify = FakePlatformClient(error=UpstreamTransportError("Request timed out after 30s"))
        woo = FakePlatformClient(orders=[woocommerce_order()])
        resolver = build_resolver(merchant, shopify, woo)

        order = await resolver.find_order("2001", "sam@example.com", STORE_URL)

        assert order.platform == Platform.WOOCOMMERCE

    @pytest.mark.asyncio
    async def test_every_platform_failing_reraises(self, merchant):
        shopify = FakePlatformClient(error=UpstreamTransportError("shopify down"))
        woo = FakePlatformClient(error=UpstreamTransportError("woo down"))
        resolver = build_resolver(merchant, shopify, woo)

        with pytest.raises(UpstreamTransportError, match="woo down"):
            await resolver.find_order("2001", "sam@example.com", STORE_URL)

    @pytest.mark.asyncio
    async def test_partial_outage_without_match_is_not_found(self, merchant):
        shopify = FakePlatformClient(error=UpstreamTransportError("shopify down"))
        resolver = build_resolver(merchant, shopify, FakePlatformClient(orders=[]))

        with pytest.raises(OrderNotFoundError):
            await resolver.find_order("2001", "sam@example.com", STORE_URL)

    @pytest.mark.asyncio
    async def test_customer_lookup_failure_does_not_abort(self, merchant):
        shopify = FakePlatformClient(
            orders=[shopify_order()],
            customer_error=UpstreamTransportError("customer endpoint down"),
        )
        resolver = build_resolver(merchant, shopify)

        order = await resolver.find_order("1001", "jane@example.com", STORE_URL)

        assert order.customer.email == "jane@example.com"

    @pytest.mark.parametrize("order_id, contact", [("", "jane@example.com"), ("1001", "  ")])
    @pytest.mark.asyncio
    async def test_blank_input(self, merchant, order_id, contact):
        resolver = build_resolver(merchant, FakePlatformClient())
        with pytest.raises(ValidationError):
            await resolver.find_order(order_id, contact, STORE_URL)


class TestResolveMerchant:

    @pytest.mark.asyncio
    async def test_normalized_url_match(self, merchant):
        resolver = build_resolver(merchant)
        found = await resolver.resolve_merchant("http://www.RETURNS.example.com/")
        assert found.id == merchant.id

    @pytest.mark.asyncio
    async def test_unknown_store(self, merchant):
        with pytest.raises(StoreNotFoundError):
            await build_resolver(merchant).resolve_merchant("https://other.example.com")

    @pytest.mark.asyncio
    async def test_store_setup_incomplete(self):
        merchant = make_merchant(is_store_setup=False)
        with pytest.raises(StoreNotFoundError):
            await build_resolver(merchant).resolve_merchant(STORE_URL)

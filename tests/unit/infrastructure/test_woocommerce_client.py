"""Tests for the WooCommerce REST client."""

import pytest

from backo_sdk import UpstreamAuthError, UpstreamTransportError
from backo_sdk.woocommerce import WooCommerceAPI, clean_store_url
from tests.mocks.fakes import FakeTransport, json_response


def make_client(transport: FakeTransport, store_url: str = "https://shop.example.com/", **kwargs) -> WooCommerceAPI:
    return WooCommerceAPI(store_url, "ck_key", "cs_secret", transport=transport, **kwargs)


@pytest.mark.parametrize(
    "url, expected",
    [
        ("https://shop.example.com/", "https://shop.example.com"),
        ("shop.example.com", "https://shop.example.com"),
        (" https://shop.example.com/wp-admin ", "https://shop.example.com"),
        ("", ""),
    ],
)
def test_clean_store_url(url, expected):
    assert clean_store_url(url) == expected


class TestWooCommercePagination:

    @pytest.mark.asyncio
    async def test_walks_total_pages(self):
        transport = FakeTransport().add(
            "/orders",
            json_response([{"id": 1}, {"id": 2}], headers={"X-WP-TotalPages": "2"}),
            json_response([{"id": 3}], headers={"X-WP-TotalPages": "2"}),
        )
        orders = await make_client(transport).fetch_orders()

        assert [o["id"] for o in orders] == [1, 2, 3]
        assert transport.calls[0].url == "https://shop.example.com/wp-json/wc/v3/orders"
        assert transport.calls[0].params == {"per_page": 100, "page": 1, "status": "any"}
        assert transport.calls[1].params["page"] == 2
        assert transport.calls[0].headers["Authorization"].startswith("Basic ")

    @pytest.mark.asyncio
    async def test_stops_at_record_cap(self):
        page = json_response([{"id": i} for i in range(3)], headers={"X-WP-TotalPages": "99"})
        transport = FakeTransport().add("/orders", page)

        orders = await make_client(transport, max_records=7, page_size=3).fetch_orders()

        assert len(orders) == 7
        assert len(transport.calls) == 3

    @pytest.mark.asyncio
    async def test_customers_without_status_filter(self):
        transport = FakeTransport().add("/customers", json_response([{"id": 9, "email": "a@x.com"}]))

        customers = await make_client(transport).fetch_customers()

        assert customers == [{"id": 9, "email": "a@x.com"}]
        assert transport.calls[0].params == {"per_page": 100, "page": 1}

    @pytest.mark.asyncio
    async def test_non_list_payload(self):
        transport = FakeTransport().add("/orders", json_response({"code": "rest_no_route"}))
        with pytest.raises(UpstreamTransportError):
            await make_client(transport).fetch_orders()

    @pytest.mark.asyncio
    async def test_unauthorized(self):
        transport = FakeTransport().add("/orders", json_response({"code": "woocommerce_rest_cannot_view"}, status=401))
        with pytest.raises(UpstreamAuthError) as exc_info:
            await make_client(transport).fetch_orders()
        assert "cs_secret" not in str(exc_info.value)


class TestWooCommerceLookups:

    @pytest.mark.asyncio
    async def test_customer_by_id_and_404(self):
        transport = FakeTransport().add("/customers/17", json_response({"id": 17, "email": "sam@example.com"}))
        client = make_client(transport)

        assert (await client.fetch_customer_by_id("17"))["email"] == "sam@example.com"
        assert await client.fetch_customer_by_id("18") is None

    @pytest.mark.asyncio
    async def test_verify_connection_rejects_incomplete_url(self):
        check = await make_client(FakeTransport(), store_url="localhost").verify_connection()
        assert not check.success
        assert "Invalid store URL" in check.error

    @pytest.mark.asyncio
    async def test_verify_connection(self):
        transport = FakeTransport().add("/products", json_response([]))
        check = await make_client(transport).verify_connection()

        assert check.success
        assert transport.calls[0].params == {"per_page": 1}

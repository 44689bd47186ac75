"""Integration tests for the SQLAlchemy repositories on in-memory SQLite."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from core.domain.entities import CanonicalOrder, CanonicalProduct, CustomerInfo, OrderItem, ShippingAddress
from core.domain.enums import OrderSource, OrderStatus, Platform
from core.domain.repositories import OrderKey
from core.infrastructure.database import config as db_config
from core.infrastructure.database.repositories import (
    SQLAlchemyMerchantRepository,
    SQLAlchemyOrderRepository,
    SQLAlchemyProductRepository,
)
from tests.mocks.payloads import make_merchant


def shopify_canonical(status: OrderStatus = OrderStatus.DELIVERED) -> CanonicalOrder:
    return CanonicalOrder(
        order_number="#1001",
        platform_order_id="5550001",
        customer=CustomerInfo(name="Jane Doe", email="jane@example.com"),
        items=[OrderItem(product_name="Shirt", quantity=2, price=Decimal("19.95"))],
        amount=Decimal("39.90"),
        status=status,
        placed_date=datetime(2024, 3, 1, 15, 0, tzinfo=timezone.utc),
        shipping_address=ShippingAddress(street="1 Main St", city="Springfield"),
        platform=Platform.SHOPIFY,
    )


@pytest.fixture
def merchant_repository(test_session_factory):
    return SQLAlchemyMerchantRepository(test_session_factory)


@pytest.fixture
def order_repository(test_session_factory):
    return SQLAlchemyOrderRepository(test_session_factory)


class TestSQLAlchemyMerchantRepository:

    @pytest.mark.asyncio
    async def test_save_and_lookups(self, merchant_repository):
        await merchant_repository.save(make_merchant(shopify=True, woocommerce=True))
        await merchant_repository.save(make_merchant("m-2", store_url="https://b.example.com", shopify=False))

        merchant = await merchant_repository.get_by_id("m-1")
        assert merchant.shopify.access_token == "shpat_test"
        assert merchant.connected_platforms() == [Platform.SHOPIFY, Platform.WOOCOMMERCE]

        assert (await merchant_repository.find_by_store_url("https://returns.example.com")).id == "m-1"
        assert await merchant_repository.find_by_store_url("returns.example.com") is None
        assert (await merchant_repository.find_by_webhook_secret("wh-secret")).id == "m-1"
        assert await merchant_repository.find_by_webhook_secret("") is None
        assert [m.id for m in await merchant_repository.list_connected()] == ["m-1"]
        assert len(await merchant_repository.list_with_store_setup()) == 2

    @pytest.mark.asyncio
    async def test_save_updates_existing(self, merchant_repository):
        merchant = make_merchant()
        await merchant_repository.save(merchant)
        merchant.store_name = "Renamed"
        await merchant_repository.save(merchant)

        assert (await merchant_repository.get_by_id("m-1")).store_name == "Renamed"


class TestSQLAlchemyOrderRepository:

    @pytest.mark.asyncio
    async def test_upsert_round_trip(self, merchant_repository, order_repository):
        await merchant_repository.save(make_merchant())
        order = shopify_canonical()

        stored, created = await order_repository.upsert_order(OrderKey.for_order("m-1", order), order)

        assert created
        assert stored.local_id
        assert stored.source == OrderSource.DATABASE
        assert stored.items[0].price == Decimal("19.95")
        assert stored.amount == Decimal("39.90")
        assert stored.placed_date == order.placed_date
        assert stored.shipping_address.city == "Springfield"

    @pytest.mark.asyncio
    async def test_upsert_updates_by_platform_id(self, merchant_repository, order_repository):
        await merchant_repository.save(make_merchant())
        order = shopify_canonical(OrderStatus.PROCESSING)
        first, _ = await order_repository.upsert_order(OrderKey.for_order("m-1", order), order)

        order = shopify_canonical(OrderStatus.DELIVERED)
        second, created = await order_repository.upsert_order(OrderKey.for_order("m-1", order), order)

        assert not created
        assert second.local_id == first.local_id
        assert second.status == OrderStatus.DELIVERED
        assert len(await order_repository.list_orders("m-1")) == 1

    @pytest.mark.asyncio
    async def test_blank_contact_keeps_stored_values(self, merchant_repository, order_repository):
        await merchant_repository.save(make_merchant())
        order = shopify_canonical()
        order.customer = CustomerInfo(name="Jane Doe", email="jane@example.com", phone="+1 555 0100")
        await order_repository.upsert_order(OrderKey.for_order("m-1", order), order)

        order = shopify_canonical()
        order.customer = CustomerInfo()
        stored, _ = await order_repository.upsert_order(OrderKey.for_order("m-1", order), order)

        assert stored.customer == CustomerInfo(name="Jane Doe", email="jane@example.com", phone="+1 555 0100")

    @pytest.mark.asyncio
    async def test_manual_row_adopted_by_order_number(self, merchant_repository, order_repository):
        await merchant_repository.save(make_merchant())
        manual = CanonicalOrder(order_number="1001")
        manual_row, _ = await order_repository.upsert_order(OrderKey("m-1", order_number="1001"), manual)

        order = shopify_canonical()
        linked, created = await order_repository.upsert_order(OrderKey.for_order("m-1", order), order)

        assert not created
        assert linked.local_id == manual_row.local_id
        assert linked.platform_order_id == "5550001"

    @pytest.mark.asyncio
    async def test_other_platform_rows_not_adopted(self, merchant_repository, order_repository):
        await merchant_repository.save(make_merchant())
        woo = CanonicalOrder(order_number="1001", platform_order_id="1001", platform=Platform.WOOCOMMERCE)
        await order_repository.upsert_order(OrderKey.for_order("m-1", woo), woo)

        order = shopify_canonical()
        _stored, created = await order_repository.upsert_order(OrderKey.for_order("m-1", order), order)

        assert created

    @pytest.mark.asyncio
    async def test_find_and_delete_unlinked(self, merchant_repository, order_repository):
        await merchant_repository.save(make_merchant())
        await order_repository.upsert_order(OrderKey("m-1", order_number="SEED"), CanonicalOrder(order_number="SEED"))
        order = shopify_canonical()
        await order_repository.upsert_order(OrderKey.for_order("m-1", order), order)

        found = await order_repository.find_order(OrderKey("m-1", order_number="#seed"))
        assert found.order_number == "SEED"

        assert await order_repository.delete_orders_without_platform_id("m-1") == 1
        assert [o.order_number for o in await order_repository.list_orders("m-1")] == ["#1001"]


class TestSQLAlchemyProductRepository:

    @pytest.mark.asyncio
    async def test_upsert(self, merchant_repository, test_session_factory):
        await merchant_repository.save(make_merchant())
        repository = SQLAlchemyProductRepository(test_session_factory)
        product = CanonicalProduct(platform_product_id="42", name="Shirt", platform=Platform.SHOPIFY, tags=["linen"])

        assert await repository.upsert_product("m-1", product) is True
        product.price = Decimal("12.50")
        assert await repository.upsert_product("m-1", product) is False

        [stored] = await repository.list_products("m-1")
        assert stored.price == Decimal("12.50")
        assert stored.tags == ["linen"]


class _UnavailableEngine:

    def begin(self):
        raise OSError("connection refused")


class TestInitDatabase:

    @pytest.mark.asyncio
    async def test_retries_until_database_is_up(self, monkeypatch, test_engine):
        engines = [_UnavailableEngine(), _UnavailableEngine(), test_engine]
        monkeypatch.setattr(db_config, "get_engine", lambda: engines.pop(0))

        await db_config.init_database(max_attempts=3, retry_delay=0)

        assert engines == []

    @pytest.mark.asyncio
    async def test_last_failure_propagates(self, monkeypatch):
        attempts = []

        def unavailable():
            attempts.append(1)
            return _UnavailableEngine()

        monkeypatch.setattr(db_config, "get_engine", unavailable)

        with pytest.raises(OSError):
            await db_config.init_database(max_attempts=2, retry_delay=0)
        assert len(attempts) == 2

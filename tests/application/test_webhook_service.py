"""Tests for the WooCommerce plugin webhook service."""

import pytest

from core.application.services import CredentialCache, WooCommerceWebhookService
from core.domain.enums import OrderStatus, Platform
from core.domain.exceptions import UnauthorizedError, ValidationError
from core.domain.repositories import OrderKey
from core.infrastructure.adapters.persistence.mock_merchant_repository import MockMerchantRepository
from core.infrastructure.adapters.persistence.mock_order_repository import MockOrderRepository
from core.infrastructure.adapters.persistence.mock_product_repository import MockProductRepository
from core.infrastructure.marketplace.woocommerce import WooCommerceWebhookMapper
from tests.mocks.payloads import make_merchant


ORDER_DATA = {
    "order_id": 123,
    "order_number": "1234",
    "status": "processing",
    "total": "45.50",
    "customer": {"name": "Ali Raza", "email": "ali@example.com", "phone": "0321-5551234"},
    "items": [{"name": "Cap", "quantity": 1, "price": "45.50"}],
}


@pytest.fixture
def orders():
    return MockOrderRepository()


@pytest.fixture
def products():
    return MockProductRepository()


@pytest.fixture
def service(orders, products):
    merchants = MockMerchantRepository([
        make_merchant(woocommerce=True, secret_key="wh-secret"),
        make_merchant(merchant_id="m-2", woocommerce=False, secret_key="disconnected"),
    ])
    return WooCommerceWebhookService(
        credential_store=CredentialCache(merchants),
        payload_mapper=WooCommerceWebhookMapper(),
        order_repository=orders,
        product_repository=products,
    )


class TestWebhookAuth:

    @pytest.mark.asyncio
    async def test_missing_secret(self, service):
        with pytest.raises(UnauthorizedError, match="required"):
            await service.handle("", "order", ORDER_DATA)

    @pytest.mark.parametrize("secret", ["wrong", "disconnected"])
    @pytest.mark.asyncio
    async def test_invalid_secret(self, service, secret):
        with pytest.raises(UnauthorizedError, match="Invalid secret key"):
            await service.handle(secret, "order", ORDER_DATA)


class TestWebhookPayloads:

    @pytest.mark.asyncio
    async def test_order_created_then_updated(self, service, orders):
        created = await service.handle("wh-secret", "order", ORDER_DATA)
        updated = await service.handle("wh-secret", "ORDER", {**ORDER_DATA, "status": "completed"})

        assert created.message == "order synced successfully"
        assert created.data["action"] == "created"
        assert updated.data["action"] == "updated"
        assert orders.count() == 1

        stored = await orders.find_order(
            OrderKey(merchant_id="m-1", platform=Platform.WOOCOMMERCE, platform_order_id="123")
        )
        assert stored.status == OrderStatus.DELIVERED
        assert stored.customer.email == "ali@example.com"

    @pytest.mark.asyncio
    async def test_product(self, service, products):
        result = await service.handle("wh-secret", "product", {"product_id": 9, "name": "Cap", "price": "12"})

        assert result.data == {"productId": "9", "name": "Cap", "action": "created"}
        assert [p.name for p in await products.list_products("m-1")] == ["Cap"]

    @pytest.mark.asyncio
    async def test_customer_is_acknowledged(self, service):
        result = await service.handle("wh-secret", "customer", {"customer_id": 5, "email": "c@example.com"})
        assert result.data["action"] == "received"

    @pytest.mark.parametrize(
        "webhook_type, data",
        [
            (None, ORDER_DATA),
            ("order", None),
            ("refund", ORDER_DATA),
            ("order", {"status": "completed"}),
            ("product", {"name": "no id"}),
            ("customer", {"name": "nobody"}),
        ],
    )
    @pytest.mark.asyncio
    async def test_invalid_payloads(self, service, webhook_type, data):
        with pytest.raises(ValidationError):
            await service.handle("wh-secret", webhook_type, data)

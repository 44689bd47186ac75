"""Pytest configuration and fixtures for integration tests."""

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from api.dependencies import (
    get_order_listing_service,
    get_order_resolver,
    get_store_sync_service,
    get_webhook_service,
)
from api.main import app
from core.application.services import (
    CredentialCache,
    OrderListingService,
    OrderResolver,
    StoreSyncService,
    WooCommerceWebhookService,
)
from core.domain.enums import Platform
from core.infrastructure.adapters.persistence.mock_merchant_repository import MockMerchantRepository
from core.infrastructure.adapters.persistence.mock_order_repository import MockOrderRepository
from core.infrastructure.adapters.persistence.mock_product_repository import MockProductRepository
from core.infrastructure.database.models import Base
from core.infrastructure.marketplace.shopify import ShopifyAdapter
from core.infrastructure.marketplace.woocommerce import WooCommerceAdapter, WooCommerceWebhookMapper
from tests.mocks.fakes import FakeAdapterFactory, FakePlatformClient
from tests.mocks.payloads import make_merchant, shopify_order, woocommerce_order


# Use in-memory SQLite for testing
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture(scope="function")
async def test_engine():
    """Create test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    # Cleanup
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def test_session_factory(test_engine):
    """Create test session factory."""
    session_factory = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False
    )
    yield session_factory


@pytest.fixture
def shopify_client() -> FakePlatformClient:
    return FakePlatformClient(orders=[shopify_order(), shopify_order(number=1002, order_id=2, fulfillment_status=None)])


@pytest.fixture
def woo_client() -> FakePlatformClient:
    return FakePlatformClient(orders=[woocommerce_order()])


@pytest.fixture
def order_repository() -> MockOrderRepository:
    return MockOrderRepository()


@pytest.fixture
def test_client(shopify_client, woo_client, order_repository) -> TestClient:
    """FastAPI test client wired to in-memory stores and fake platforms."""
    merchants = MockMerchantRepository([
        make_merchant(shopify=True, woocommerce=True),
        make_merchant("m-empty", store_url="https://empty.example.com", shopify=False, woocommerce=False,
                      secret_key="unused"),
    ])
    products = MockProductRepository()
    store = CredentialCache(merchants)
    factory = FakeAdapterFactory({
        Platform.SHOPIFY: ShopifyAdapter(shopify_client),
        Platform.WOOCOMMERCE: WooCommerceAdapter(woo_client),
    })

    app.dependency_overrides[get_order_resolver] = lambda: OrderResolver(store, factory)
    app.dependency_overrides[get_order_listing_service] = lambda: OrderListingService(
        store, factory, order_repository
    )
    app.dependency_overrides[get_store_sync_service] = lambda: StoreSyncService(
        merchants, factory, order_repository, products
    )
    app.dependency_overrides[get_webhook_service] = lambda: WooCommerceWebhookService(
        store, WooCommerceWebhookMapper(), order_repository, products
    )

    client = TestClient(app)
    yield client

    # Cleanup
    app.dependency_overrides.clear()

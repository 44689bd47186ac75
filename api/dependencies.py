"""
FastAPI Dependencies.

Provides dependency injection for the resolver, listing, sync and webhook
services.
"""
from __future__ import annotations

import logging
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables ONCE before any settings objects are created
_PROJECT_ROOT = Path(__file__).resolve().parents[1]
load_dotenv(dotenv_path=_PROJECT_ROOT / ".env")

from core.settings import get_app_settings
from core.application.services import (
    CredentialCache,
    OrderListingService,
    OrderResolver,
    StoreSyncService,
    WooCommerceWebhookService,
)
from core.infrastructure.database.config import get_session_factory
from core.infrastructure.database.repositories import (
    SQLAlchemyMerchantRepository,
    SQLAlchemyOrderRepository,
    SQLAlchemyProductRepository,
)
from core.infrastructure.marketplace import MarketplaceRegistry
from core.infrastructure.marketplace.woocommerce import WooCommerceWebhookMapper


logger = logging.getLogger(__name__)


# =============================================================================
# SINGLETON INSTANCES
# =============================================================================

_merchant_repository = None
_order_repository = None
_product_repository = None
_credential_store = None
_adapter_factory = None
_order_resolver = None
_order_listing_service = None
_store_sync_service = None
_webhook_service = None


# =============================================================================
# REPOSITORIES
# =============================================================================

def get_merchant_repository():
    global _merchant_repository
    if _merchant_repository is None:
        _merchant_repository = SQLAlchemyMerchantRepository(get_session_factory())
        logger.info("Created SQLAlchemyMerchantRepository instance")
    return _merchant_repository


def get_order_repository():
    global _order_repository
    if _order_repository is None:
        _order_repository = SQLAlchemyOrderRepository(get_session_factory())
        logger.info("Created SQLAlchemyOrderRepository instance")
    return _order_repository


def get_product_repository():
    global _product_repository
    if _product_repository is None:
        _product_repository = SQLAlchemyProductRepository(get_session_factory())
    return _product_repository


def get_credential_store() -> CredentialCache:
    global _credential_store
    if _credential_store is None:
        settings = get_app_settings()
        _credential_store = CredentialCache(
            get_merchant_repository(),
            ttl_seconds=settings.upstream.credential_cache_ttl_seconds,
        )
        logger.info(
            f"Created CredentialCache (ttl={settings.upstream.credential_cache_ttl_seconds}s)"
        )
    return _credential_store


def get_adapter_factory() -> MarketplaceRegistry:
    global _adapter_factory
    if _adapter_factory is None:
        settings = get_app_settings()
        _adapter_factory = MarketplaceRegistry(
            shopify_settings=settings.shopify,
            woocommerce_settings=settings.woocommerce,
            upstream_settings=settings.upstream,
        )
    return _adapter_factory


# =============================================================================
# SERVICES
# =============================================================================

def get_order_resolver() -> OrderResolver:
    global _order_resolver
    if _order_resolver is None:
        _order_resolver = OrderResolver(
            credential_store=get_credential_store(),
            adapter_factory=get_adapter_factory(),
        )
        logger.info("Created OrderResolver instance")
    return _order_resolver


def get_order_listing_service() -> OrderListingService:
    global _order_listing_service
    if _order_listing_service is None:
        _order_listing_service = OrderListingService(
            credential_store=get_credential_store(),
            adapter_factory=get_adapter_factory(),
            order_repository=get_order_repository(),
        )
    return _order_listing_service


def get_store_sync_service() -> StoreSyncService:
    global _store_sync_service
    if _store_sync_service is None:
        _store_sync_service = StoreSyncService(
            merchant_repository=get_merchant_repository(),
            adapter_factory=get_adapter_factory(),
            order_repository=get_order_repository(),
            product_repository=get_product_repository(),
        )
        logger.info("Created StoreSyncService instance")
    return _store_sync_service


def get_webhook_service() -> WooCommerceWebhookService:
    global _webhook_service
    if _webhook_service is None:
        _webhook_service = WooCommerceWebhookService(
            credential_store=get_credential_store(),
            payload_mapper=WooCommerceWebhookMapper(),
            order_repository=get_order_repository(),
            product_repository=get_product_repository(),
        )
    return _webhook_service


# =============================================================================
# RESET (for testing)
# =============================================================================

def reset_dependencies():
    global _merchant_repository, _order_repository, _product_repository
    global _credential_store, _adapter_factory
    global _order_resolver, _order_listing_service, _store_sync_service, _webhook_service

    _merchant_repository = None
    _order_repository = None
    _product_repository = None
    _credential_store = None
    _adapter_factory = None
    _order_resolver = None
    _order_listing_service = None
    _store_sync_service = None
    _webhook_service = None

    logger.info("Dependencies reset")

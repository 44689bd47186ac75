"""Shared pytest configuration."""

import os

# Settings objects are built at import time; point them at throwaway values first.
os.environ.setdefault("DB_DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("DB_CONNECT_ATTEMPTS", "1")
os.environ.setdefault("DB_CONNECT_RETRY_DELAY", "0")

import pytest

from tests.mocks.payloads import make_merchant


@pytest.fixture
def merchant():
    """Store with Shopify and WooCommerce connected."""
    return make_merchant(shopify=True, woocommerce=True)

from __future__ import annotations

from pydantic import Field

from core.settings.base_settings import BackoBaseSettings


class ShopifySettings(BackoBaseSettings):
    """Shopify Admin REST client settings."""

    api_version: str = Field("2024-10", alias="SHOPIFY_API_VERSION")
    page_size: int = Field(250, alias="SHOPIFY_PAGE_SIZE")
    timeout_seconds: float = Field(30.0, alias="SHOPIFY_TIMEOUT_SECONDS")
    lookup_timeout_seconds: float = Field(10.0, alias="SHOPIFY_LOOKUP_TIMEOUT_SECONDS")

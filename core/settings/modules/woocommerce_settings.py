from __future__ import annotations

from pydantic import Field

from core.settings.base_settings import BackoBaseSettings


class WooCommerceSettings(BackoBaseSettings):
    """WooCommerce REST client settings."""

    api_version: str = Field("wc/v3", alias="WC_API_VERSION")
    page_size: int = Field(100, alias="WC_PAGE_SIZE")
    timeout_seconds: float = Field(30.0, alias="WC_TIMEOUT_SECONDS")
    lookup_timeout_seconds: float = Field(10.0, alias="WC_LOOKUP_TIMEOUT_SECONDS")

from __future__ import annotations

from functools import lru_cache

from pydantic import BaseModel, ConfigDict

from core.settings.modules.runtime_settings import RuntimeSettings
from core.settings.modules.shopify_settings import ShopifySettings
from core.settings.modules.upstream_settings import UpstreamSettings
from core.settings.modules.woocommerce_settings import WooCommerceSettings


class AppSettings(BaseModel):
    """Application settings aggregator."""

    model_config = ConfigDict(arbitrary_types_allowed=True, extra="ignore")

    runtime: RuntimeSettings
    shopify: ShopifySettings
    woocommerce: WooCommerceSettings
    upstream: UpstreamSettings


@lru_cache()
def get_app_settings() -> AppSettings:
    return AppSettings(
        runtime=RuntimeSettings(),
        shopify=ShopifySettings(),
        woocommerce=WooCommerceSettings(),
        upstream=UpstreamSettings(),
    )

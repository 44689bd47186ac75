# Settings modules
from .app_settings import AppSettings, get_app_settings
from .runtime_settings import RuntimeSettings
from .shopify_settings import ShopifySettings
from .upstream_settings import UpstreamSettings
from .woocommerce_settings import WooCommerceSettings

__all__ = [
    "AppSettings",
    "get_app_settings",
    "RuntimeSettings",
    "ShopifySettings",
    "UpstreamSettings",
    "WooCommerceSettings",
]

"""
Marketplace registry.

Builds platform adapters for a merchant from its stored connections and
the client settings.
"""
import logging
from typing import List, Optional

from backo_sdk import HttpTransport
from backo_sdk.shopify import ShopifyAPI
from backo_sdk.woocommerce import WooCommerceAPI
from core.application.interfaces import IUpstreamAdapter, IUpstreamAdapterFactory
from core.domain.entities import Merchant
from core.domain.enums import Platform
from core.infrastructure.marketplace.shopify import ShopifyAdapter
from core.infrastructure.marketplace.woocommerce import WooCommerceAdapter
from core.settings.modules import ShopifySettings, UpstreamSettings, WooCommerceSettings


logger = logging.getLogger(__name__)


class MarketplaceRegistry(IUpstreamAdapterFactory):

    def __init__(
        self,
        shopify_settings: ShopifySettings,
        woocommerce_settings: WooCommerceSettings,
        upstream_settings: UpstreamSettings,
        transport: Optional[HttpTransport] = None,
    ):
        self.shopify_settings = shopify_settings
        self.woocommerce_settings = woocommerce_settings
        self.upstream_settings = upstream_settings
        self.transport = transport

    def for_merchant(self, merchant: Merchant) -> List[IUpstreamAdapter]:
        return [self.for_platform(merchant, p) for p in merchant.connected_platforms()]

    def for_platform(self, merchant: Merchant, platform: Platform) -> IUpstreamAdapter:
        if platform == Platform.SHOPIFY:
            s = self.shopify_settings
            return ShopifyAdapter(ShopifyAPI(
                shop_domain=merchant.shopify.shop_domain,
                access_token=merchant.shopify.access_token,
                api_version=s.api_version,
                transport=self.transport,
                page_size=s.page_size,
                max_records=self.upstream_settings.max_records,
                timeout=s.timeout_seconds,
                lookup_timeout=s.lookup_timeout_seconds,
            ))

        if platform == Platform.WOOCOMMERCE:
            s = self.woocommerce_settings
            return WooCommerceAdapter(WooCommerceAPI(
                store_url=merchant.woocommerce.store_url,
                consumer_key=merchant.woocommerce.consumer_key,
                consumer_secret=merchant.woocommerce.consumer_secret,
                api_version=s.api_version,
                transport=self.transport,
                page_size=s.page_size,
                max_records=self.upstream_settings.max_records,
                timeout=s.timeout_seconds,
                lookup_timeout=s.lookup_timeout_seconds,
            ))

        raise ValueError(f"Unsupported platform: {platform}")

"""Shopify upstream adapter."""
from backo_sdk.shopify import ShopifyAPI
from core.domain.enums import Platform
from core.infrastructure.marketplace.base_adapter import MarketplaceAdapter
from core.infrastructure.marketplace.shopify.mapper import ShopifyOrderMapper


class ShopifyAdapter(MarketplaceAdapter):

    platform = Platform.SHOPIFY
    mapper = ShopifyOrderMapper

    def __init__(self, client: ShopifyAPI):
        super().__init__(client)

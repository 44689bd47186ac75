"""
Merchant (tenant) entity with its platform connections.

Secrets are excluded from repr so a merchant can be logged safely.
"""
from dataclasses import dataclass, field
from typing import List, Optional

from ..enums import Platform


@dataclass
class ShopifyConnection:
    shop_domain: str = ""
    access_token: str = field(default="", repr=False)
    is_connected: bool = False

    @property
    def is_usable(self) -> bool:
        return bool(self.is_connected and self.shop_domain and self.access_token)


@dataclass
class WooCommerceConnection:
    store_url: str = ""
    consumer_key: str = field(default="", repr=False)
    consumer_secret: str = field(default="", repr=False)
    secret_key: str = field(default="", repr=False)  # Shared secret in the webhook URL
    is_connected: bool = False

    @property
    def is_usable(self) -> bool:
        return bool(
            self.is_connected and self.store_url and self.consumer_key and self.consumer_secret
        )


@dataclass
class Merchant:
    """A store owner and the storefronts they connected."""
    id: str
    store_name: str = ""
    store_url: str = ""
    is_store_setup: bool = False
    shopify: ShopifyConnection = field(default_factory=ShopifyConnection)
    woocommerce: WooCommerceConnection = field(default_factory=WooCommerceConnection)

    def connected_platforms(self) -> List[Platform]:
        """Usable platforms in lookup order (Shopify first)."""
        platforms = []
        if self.shopify.is_usable:
            platforms.append(Platform.SHOPIFY)
        if self.woocommerce.is_usable:
            platforms.append(Platform.WOOCOMMERCE)
        return platforms

    def connection_for(self, platform: Platform) -> Optional[object]:
        if platform == Platform.SHOPIFY:
            return self.shopify
        if platform == Platform.WOOCOMMERCE:
            return self.woocommerce
        return None

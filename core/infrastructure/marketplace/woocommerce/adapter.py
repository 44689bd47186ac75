"""WooCommerce upstream adapter."""
from backo_sdk.woocommerce import WooCommerceAPI
from core.domain.enums import Platform
from core.infrastructure.marketplace.base_adapter import MarketplaceAdapter
from core.infrastructure.marketplace.woocommerce.mapper import WooCommerceOrderMapper


class WooCommerceAdapter(MarketplaceAdapter):

    platform = Platform.WOOCOMMERCE
    mapper = WooCommerceOrderMapper

    def __init__(self, client: WooCommerceAPI):
        super().__init__(client)

"""WooCommerce marketplace integration."""

from .adapter import WooCommerceAdapter
from .mapper import WooCommerceOrderMapper, WooCommerceWebhookMapper

__all__ = ["WooCommerceAdapter", "WooCommerceOrderMapper", "WooCommerceWebhookMapper"]

"""Shopify marketplace integration."""

from .adapter import ShopifyAdapter
from .mapper import ShopifyOrderMapper

__all__ = ["ShopifyAdapter", "ShopifyOrderMapper"]

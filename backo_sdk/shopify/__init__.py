"""Shopify Admin REST SDK module."""

from .client import ShopifyAPI, clean_shop_domain, extract_next_page_info

__all__ = ["ShopifyAPI", "clean_shop_domain", "extract_next_page_info"]

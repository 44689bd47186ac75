"""WooCommerce REST SDK module."""

from .client import WooCommerceAPI, clean_store_url

__all__ = ["WooCommerceAPI", "clean_store_url"]

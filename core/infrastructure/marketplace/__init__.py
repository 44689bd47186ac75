"""Marketplace integrations (Shopify, WooCommerce)."""

from .registry import MarketplaceRegistry

__all__ = ["MarketplaceRegistry"]

"""Application services."""

from .credential_cache import CredentialCache
from .customer_enrichment import CustomerEnrichmentCache
from .order_listing_service import OrderListingService, fetch_canonical_orders
from .order_resolver import OrderResolver
from .reconciliation import merge_orders, placed_sort_key
from .sync_service import StoreSyncService
from .webhook_service import WooCommerceWebhookService

__all__ = [
    "CredentialCache",
    "CustomerEnrichmentCache",
    "OrderListingService",
    "OrderResolver",
    "StoreSyncService",
    "WooCommerceWebhookService",
    "fetch_canonical_orders",
    "merge_orders",
    "placed_sort_key",
]

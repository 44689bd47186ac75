"""Application layer - services, interfaces, and DTOs."""

from .dtos import FindOrderRequest, OrderDTO, OrderListDTO, PublicOrderDTO
from .interfaces import ICredentialStore, IUpstreamAdapter, IUpstreamAdapterFactory, IWebhookPayloadMapper
from .services import (
    CredentialCache,
    CustomerEnrichmentCache,
    OrderListingService,
    OrderResolver,
    StoreSyncService,
    WooCommerceWebhookService,
    merge_orders,
)

__all__ = [
    # DTOs
    "FindOrderRequest",
    "OrderDTO",
    "OrderListDTO",
    "PublicOrderDTO",
    # Interfaces
    "ICredentialStore",
    "IUpstreamAdapter",
    "IUpstreamAdapterFactory",
    "IWebhookPayloadMapper",
    # Services
    "CredentialCache",
    "CustomerEnrichmentCache",
    "OrderListingService",
    "OrderResolver",
    "StoreSyncService",
    "WooCommerceWebhookService",
    "merge_orders",
]

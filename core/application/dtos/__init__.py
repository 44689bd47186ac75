"""Application DTOs."""

from .order_dto import (
    CustomerDTO,
    FindOrderRequest,
    OrderDTO,
    OrderItemDTO,
    OrderListDTO,
    PublicOrderDTO,
    ShippingAddressDTO,
)
from .sync_dto import (
    MerchantSyncReport,
    PlatformSyncReport,
    SyncCounts,
    SyncRequestDTO,
    WebhookRequestDTO,
    WebhookResultDTO,
)

__all__ = [
    "CustomerDTO",
    "FindOrderRequest",
    "MerchantSyncReport",
    "OrderDTO",
    "OrderItemDTO",
    "OrderListDTO",
    "PlatformSyncReport",
    "PublicOrderDTO",
    "ShippingAddressDTO",
    "SyncCounts",
    "SyncRequestDTO",
    "WebhookRequestDTO",
    "WebhookResultDTO",
]

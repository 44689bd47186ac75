"""
DTOs for store sync operations.
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# REQUEST DTOs
# =============================================================================

class SyncRequestDTO(BaseModel):
    """Request DTO for a merchant store sync."""

    model_config = ConfigDict(
        json_schema_extra={"example": {"delete_unlinked_orders": False}}
    )

    delete_unlinked_orders: bool = Field(
        default=False,
        description="Delete cached orders that have no platform order id (manual/seed data)",
    )


class WebhookRequestDTO(BaseModel):
    """Payload posted by the WooCommerce plugin."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"type": "order", "data": {"order_id": 123, "order_number": "1234"}}
        }
    )

    type: Optional[str] = Field(None, description="order, product or customer")
    data: Optional[Dict[str, Any]] = Field(None, description="Plugin payload for the entity")


# =============================================================================
# RESPONSE DTOs
# =============================================================================

class SyncCounts(BaseModel):
    created: int = 0
    updated: int = 0
    errors: int = 0

    @property
    def total(self) -> int:
        return self.created + self.updated


class PlatformSyncReport(BaseModel):
    """Outcome of syncing one platform of one merchant."""

    platform: str
    products: SyncCounts = Field(default_factory=SyncCounts)
    orders: SyncCounts = Field(default_factory=SyncCounts)
    error: Optional[str] = Field(None, description="Platform-level failure, if any")


class MerchantSyncReport(BaseModel):
    merchant_id: str
    store_name: str = ""
    platforms: List[PlatformSyncReport] = Field(default_factory=list)
    deleted_unlinked_orders: int = 0

    @property
    def success(self) -> bool:
        return all(p.error is None for p in self.platforms)


class WebhookResultDTO(BaseModel):
    success: bool = True
    message: str
    data: Dict[str, Any] = Field(default_factory=dict)

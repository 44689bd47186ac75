"""
Store sync endpoints.

Pull products and orders from connected platforms into the local cache.
"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
import logging

from core.application.dtos import SyncRequestDTO
from core.application.services import StoreSyncService
from core.domain.enums import Platform
from api.dependencies import get_store_sync_service


logger = logging.getLogger(__name__)
router = APIRouter()


@router.post(
    "/{merchant_id}/sync",
    status_code=status.HTTP_200_OK,
    summary="Sync a merchant store",
)
async def sync_merchant(
    merchant_id: str,
    request: Optional[SyncRequestDTO] = None,
    service: StoreSyncService = Depends(get_store_sync_service),
):
    """
    Sync products and orders of every connected platform.

    A failing platform is reported in its entry and does not abort the
    others.
    """
    options = request or SyncRequestDTO()
    report = await service.sync_merchant(merchant_id, delete_unlinked_orders=options.delete_unlinked_orders)
    return {
        "success": report.success,
        "data": report.model_dump(mode="json"),
    }


@router.post(
    "/{merchant_id}/connections/{platform}/verify",
    status_code=status.HTTP_200_OK,
    summary="Verify a platform connection",
)
async def verify_connection(
    merchant_id: str,
    platform: str,
    service: StoreSyncService = Depends(get_store_sync_service),
):
    try:
        target = Platform(platform.lower())
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unknown platform: {platform}",
        )

    check = await service.verify_connection(merchant_id, target)
    return {"success": check.success, "error": check.error, "details": check.details}

"""
Merchant order listing endpoints.
"""
from fastapi import APIRouter, Depends, status
import logging

from core.application.dtos import OrderDTO, OrderListDTO
from core.application.services import OrderListingService
from api.dependencies import get_order_listing_service


logger = logging.getLogger(__name__)
router = APIRouter()


@router.get(
    "/{merchant_id}/orders",
    status_code=status.HTTP_200_OK,
    summary="List merchant orders",
    description="Live orders from every connected platform merged with the local cache",
)
async def list_orders(
    merchant_id: str,
    service: OrderListingService = Depends(get_order_listing_service),
):
    """
    List orders of a merchant, newest first.

    Live platform orders shadow cached copies with the same order number;
    cached-only orders are appended. Each entry carries `source`
    (`api` or `database`).
    """
    orders = await service.list_orders(merchant_id)
    listing = OrderListDTO(total=len(orders), orders=[OrderDTO.from_entity(o) for o in orders])
    return {"success": True, "data": listing.model_dump(by_alias=True, mode="json")}

"""
Return-portal endpoints.

Unauthenticated: the shopper proves ownership of an order with the email
or phone number used at checkout.
"""
from fastapi import APIRouter, Depends, status
import logging

from core.application.dtos import FindOrderRequest
from core.application.services import OrderResolver
from api.dependencies import get_order_resolver


logger = logging.getLogger(__name__)
router = APIRouter()


@router.post(
    "/orders/find",
    status_code=status.HTTP_200_OK,
    summary="Find a returnable order",
    description="Locate an order by number for a store and verify the shopper's email or phone",
)
async def find_order(
    request: FindOrderRequest,
    resolver: OrderResolver = Depends(get_order_resolver),
):
    """
    Look up an order for the return portal.

    **Errors:**
    - 404: store or order not found, or no platform connected
    - 401: email/phone does not match the order
    - 400: order is not delivered yet
    """
    order = await resolver.resolve_public_order(
        order_id=request.order_id,
        email_or_phone=request.email_or_phone,
        store_url=request.store_url,
    )
    return {"success": True, "data": order.model_dump(by_alias=True, mode="json")}

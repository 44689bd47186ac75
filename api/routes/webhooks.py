"""
WooCommerce plugin webhook.

The shared secret in the URL identifies the merchant; payloads are not
signed.
"""
from fastapi import APIRouter, Depends
import logging

from core.application.dtos import WebhookRequestDTO
from core.application.services import WooCommerceWebhookService
from api.dependencies import get_webhook_service


logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/woocommerce/{secret_key}", summary="Receive a WooCommerce plugin delivery")
async def woocommerce_webhook(
    secret_key: str,
    request: WebhookRequestDTO,
    service: WooCommerceWebhookService = Depends(get_webhook_service),
):
    result = await service.handle(secret_key, request.type, request.data)
    return result.model_dump()


@router.get("/woocommerce/{secret_key}", summary="Webhook endpoint check")
async def woocommerce_webhook_info(secret_key: str):
    """Lets the plugin settings page confirm the URL is reachable."""
    return {
        "success": True,
        "message": "Webhook endpoint is active",
        "method": "POST",
        "instructions": 'This endpoint accepts POST requests only. Send your data with type: "order", "product", or "customer"',
        "example": {"type": "order", "data": {"order_id": 123, "order_number": "#1234"}},
    }

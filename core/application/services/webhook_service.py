"""
WooCommerce plugin webhook ingest.

The plugin posts `{type, data}` to a URL carrying the merchant's shared
secret. The secret is the only authentication.
"""
import logging
from typing import Any, Dict, Optional

from core.application.dtos import WebhookResultDTO
from core.application.interfaces import ICredentialStore, IWebhookPayloadMapper
from core.domain.entities import Merchant
from core.domain.exceptions import UnauthorizedError, ValidationError
from core.domain.repositories import OrderKey, OrderRepository, ProductRepository


logger = logging.getLogger(__name__)

WEBHOOK_TYPES = ("order", "product", "customer")


class WooCommerceWebhookService:

    def __init__(
        self,
        credential_store: ICredentialStore,
        payload_mapper: IWebhookPayloadMapper,
        order_repository: OrderRepository,
        product_repository: ProductRepository,
    ):
        self.credential_store = credential_store
        self.payload_mapper = payload_mapper
        self.order_repository = order_repository
        self.product_repository = product_repository

    async def handle(self, secret_key: str, webhook_type: Optional[str],
                     data: Optional[Dict[str, Any]]) -> WebhookResultDTO:
        """
        Apply one webhook delivery.

        Raises:
            UnauthorizedError: Missing or unknown secret key
            ValidationError: Missing/unknown type or malformed data
        """
        if not secret_key:
            raise UnauthorizedError("Secret key is required in URL")

        merchant = await self.credential_store.find_by_webhook_secret(secret_key)
        if merchant is None:
            logger.warning("Webhook rejected: invalid secret key")
            raise UnauthorizedError("Invalid secret key")

        if not webhook_type or not data:
            raise ValidationError(
                "Type and data are required. Type should be: order, product, or customer"
            )

        kind = webhook_type.strip().lower()
        if kind not in WEBHOOK_TYPES:
            raise ValidationError(
                f"Invalid type: {webhook_type}. Type must be: order, product, or customer"
            )

        try:
            if kind == "order":
                result = await self._handle_order(merchant, data)
            elif kind == "product":
                result = await self._handle_product(merchant, data)
            else:
                result = self._handle_customer(data)
        except ValueError as e:
            raise ValidationError(str(e)) from e

        return WebhookResultDTO(message=f"{kind} synced successfully", data=result)

    async def _handle_order(self, merchant: Merchant, data: Dict[str, Any]) -> Dict[str, Any]:
        order = self.payload_mapper.to_order(data)
        order.merchant_id = merchant.id
        _stored, created = await self.order_repository.upsert_order(
            OrderKey.for_order(merchant.id, order), order
        )
        action = "created" if created else "updated"
        logger.info(f"📦 Order {action} via webhook: {order.order_number} (merchant {merchant.id})")
        return {
            "orderId": order.platform_order_id,
            "orderNumber": order.order_number,
            "action": action,
        }

    async def _handle_product(self, merchant: Merchant, data: Dict[str, Any]) -> Dict[str, Any]:
        product = self.payload_mapper.to_product(data)
        product.merchant_id = merchant.id
        created = await self.product_repository.upsert_product(merchant.id, product)
        action = "created" if created else "updated"
        logger.info(f"📦 Product {action} via webhook: {product.name} (merchant {merchant.id})")
        return {
            "productId": product.platform_product_id,
            "name": product.name,
            "action": action,
        }

    @staticmethod
    def _handle_customer(data: Dict[str, Any]) -> Dict[str, Any]:
        customer_id = data.get("customer_id")
        email = data.get("email")
        if not customer_id and not email:
            raise ValueError("Customer ID or Email is required")
        # Customers are derived from orders; the delivery is only acknowledged
        logger.info(f"👤 Customer data received via webhook: {customer_id or 'by email'}")
        return {
            "customerId": customer_id,
            "email": email,
            "action": "received",
        }

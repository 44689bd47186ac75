"""
Order Resolver - return-portal order lookup.

Finds a shopper's order live on the merchant's connected platforms and
checks that the shopper owns it and that it can be returned.
"""
import logging
from typing import Dict, Optional

from backo_sdk import UpstreamError
from core.application.dtos import PublicOrderDTO
from core.application.interfaces import ICredentialStore, IUpstreamAdapter, IUpstreamAdapterFactory
from core.application.services.customer_enrichment import CustomerEnrichmentCache
from core.domain.entities import CanonicalOrder, Merchant, UpstreamCustomerRecord
from core.domain.exceptions import (
    IdentityMismatchError,
    IntegrationMissingError,
    NotReturnableError,
    OrderNotFoundError,
    StoreNotFoundError,
    ValidationError,
)
from core.domain.value_objects import OrderIdentifier, contact_matches, normalize_store_url


logger = logging.getLogger(__name__)


class OrderResolver:
    """
    Public order lookup across Shopify, then WooCommerce.

    Per platform: fetch all orders, enrich orders lacking an email, find the
    order by any identifier candidate. Identity and returnability failures
    stop the search; platform outages only skip that platform.
    """

    def __init__(self, credential_store: ICredentialStore, adapter_factory: IUpstreamAdapterFactory):
        self.credential_store = credential_store
        self.adapter_factory = adapter_factory

    async def resolve_public_order(self, order_id: str, email_or_phone: str, store_url: str) -> PublicOrderDTO:
        order = await self.find_order(order_id, email_or_phone, store_url)
        return PublicOrderDTO.from_entity(order)

    async def find_order(self, order_identifier: str, contact_value: str, store_url: str) -> CanonicalOrder:
        """
        Locate, verify and return a returnable order.

        Raises:
            StoreNotFoundError: Unknown store or store setup incomplete
            IntegrationMissingError: No usable platform connection
            OrderNotFoundError: No platform has the order
            IdentityMismatchError: Contact matches neither email nor phone
            NotReturnableError: Order is not Delivered
            UpstreamError: Every platform failed and nothing was found
        """
        try:
            identifier = OrderIdentifier(order_identifier)
        except ValueError as e:
            raise ValidationError(str(e)) from e
        contact = (contact_value or "").strip()
        if not contact:
            raise ValidationError("Email or phone number is required")

        merchant = await self.resolve_merchant(store_url)

        adapters = self.adapter_factory.for_merchant(merchant)
        if not adapters:
            logger.info(f"Merchant {merchant.id} has no connected platform")
            raise IntegrationMissingError()

        logger.info(
            f"Looking up order {identifier.value!r} for merchant {merchant.id} "
            f"on {', '.join(a.platform.value for a in adapters)}"
        )

        last_error: Optional[UpstreamError] = None
        failures = 0
        for adapter in adapters:
            try:
                order = await self._find_on_platform(adapter, identifier)
            except UpstreamError as e:
                failures += 1
                last_error = e
                logger.warning(f"{adapter.platform.value} lookup failed for merchant {merchant.id}: {e}")
                continue

            if order is None:
                logger.info(f"Order {identifier.value!r} not found on {adapter.platform.value}")
                continue

            order.merchant_id = merchant.id
            self._verify(order, contact)
            logger.info(f"✅ Order {order.order_number} verified on {adapter.platform.value}")
            return order

        if last_error is not None and failures == len(adapters):
            raise last_error
        raise OrderNotFoundError()

    async def resolve_merchant(self, store_url: str) -> Merchant:
        """Exact stored-URL match first, then a normalized scan of set-up stores."""
        if not store_url or not store_url.strip():
            raise StoreNotFoundError()

        merchant = await self.credential_store.find_by_store_url(store_url)
        if merchant is None:
            target = normalize_store_url(store_url)
            for candidate in await self.credential_store.list_with_store_setup():
                if candidate.store_url and normalize_store_url(candidate.store_url) == target:
                    merchant = candidate
                    break

        if merchant is None or not merchant.is_store_setup:
            logger.info(f"Store not found or not set up: {store_url}")
            raise StoreNotFoundError()
        return merchant

    async def _find_on_platform(
        self,
        adapter: IUpstreamAdapter,
        identifier: OrderIdentifier,
    ) -> Optional[CanonicalOrder]:
        cache = CustomerEnrichmentCache(adapter)
        raw_orders = await adapter.fetch_orders()

        enriched: Dict[int, Optional[UpstreamCustomerRecord]] = {}
        for index, raw in enumerate(raw_orders):
            enriched[index] = await cache.enrich(raw)

        for index, raw in enumerate(raw_orders):
            if not identifier.matches(*adapter.order_identifiers(raw)):
                continue
            # Portal lookups always prefer the customer record over the order snapshot
            customer = await cache.enrich(raw, force=True) or enriched.get(index)
            return adapter.convert_order(raw, customer=customer)

        return None

    @staticmethod
    def _verify(order: CanonicalOrder, contact: str) -> None:
        email, phone = order.customer.email, order.customer.phone
        if not contact_matches(contact, email, phone):
            checked = [name for name, value in (("email", email), ("phone number", phone)) if value]
            logger.info(f"Contact mismatch for order {order.order_number} (checked: {checked or 'nothing'})")
            raise IdentityMismatchError(checked_fields=checked)

        if not order.is_returnable:
            logger.info(f"Order {order.order_number} is {order.status.value}, not returnable")
            raise NotReturnableError(order.status)

"""
SQLAlchemy Order Repository Implementation.

Implements OrderRepository over the `orders` cache table. Each operation
runs in its own session and commits.
"""
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple
import logging
import uuid

from sqlalchemy import and_, delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from core.domain.entities import GUEST_NAME, CanonicalOrder, CustomerInfo, OrderItem, ShippingAddress
from core.domain.enums import OrderSource, OrderStatus, PaymentMethod, Platform
from core.domain.repositories import OrderKey, OrderRepository
from core.domain.value_objects import normalize_order_number
from core.infrastructure.database.models import OrderModel


logger = logging.getLogger(__name__)


def _aware(value: Optional[datetime]) -> Optional[datetime]:
    # SQLite hands back naive datetimes
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class SQLAlchemyOrderRepository(OrderRepository):
    """
    SQLAlchemy implementation of OrderRepository.

    Upsert lookup: (merchant, platform, platform order id) first, then
    (merchant, normalized order number) among rows of the same platform
    or manual rows.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        """
        Initialize repository with a session factory.

        Args:
            session_factory: SQLAlchemy async session factory
        """
        self.session_factory = session_factory

    async def find_order(self, key: OrderKey) -> Optional[CanonicalOrder]:
        async with self.session_factory() as session:
            model = await self._find_model(session, key)
            return self._to_domain_entity(model) if model else None

    async def upsert_order(self, key: OrderKey, order: CanonicalOrder) -> Tuple[CanonicalOrder, bool]:
        async with self.session_factory() as session:
            model = await self._find_model(session, key)
            created = model is None
            if created:
                model = OrderModel(id=str(uuid.uuid4()), merchant_id=key.merchant_id)
                session.add(model)

            self._apply(model, order)
            await session.commit()

            logger.debug(f"{'Created' if created else 'Updated'} cached order {order.order_number}")
            return self._to_domain_entity(model), created

    async def list_orders(self, merchant_id: str, limit: int = 1000) -> List[CanonicalOrder]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(OrderModel)
                .where(OrderModel.merchant_id == merchant_id)
                .order_by(OrderModel.placed_date.desc())
                .limit(limit)
            )
            return [self._to_domain_entity(m) for m in result.scalars().all()]

    async def delete_orders_without_platform_id(self, merchant_id: str) -> int:
        async with self.session_factory() as session:
            result = await session.execute(
                delete(OrderModel).where(
                    and_(
                        OrderModel.merchant_id == merchant_id,
                        OrderModel.platform_order_id.is_(None),
                    )
                )
            )
            await session.commit()
            return result.rowcount or 0

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def _platform_clause(platform: Optional[Platform]):
        if platform is None:
            return OrderModel.platform.is_(None)
        return or_(OrderModel.platform == platform.value, OrderModel.platform.is_(None))

    async def _find_model(self, session: AsyncSession, key: OrderKey) -> Optional[OrderModel]:
        if key.platform_order_id:
            result = await session.execute(
                select(OrderModel).where(
                    and_(
                        OrderModel.merchant_id == key.merchant_id,
                        OrderModel.platform_order_id == key.platform_order_id,
                        OrderModel.platform == (key.platform.value if key.platform else None),
                    )
                ).limit(1)
            )
            model = result.scalars().first()
            if model:
                return model

        if key.normalized_number:
            result = await session.execute(
                select(OrderModel).where(
                    and_(
                        OrderModel.merchant_id == key.merchant_id,
                        OrderModel.order_number_normalized == key.normalized_number,
                        self._platform_clause(key.platform),
                    )
                ).limit(1)
            )
            return result.scalars().first()

        return None

    @staticmethod
    def _apply(model: OrderModel, order: CanonicalOrder) -> None:
        model.platform = order.platform.value if order.platform else None
        model.platform_order_id = order.platform_order_id
        model.order_number = order.order_number
        model.order_number_normalized = normalize_order_number(order.order_number)
        # a blank contact from a failed lookup keeps the stored one
        customer = order.customer.filled_from(CustomerInfo(
            name=model.customer_name or GUEST_NAME,
            email=model.customer_email or "",
            phone=model.customer_phone or "",
        ))
        model.customer_name = customer.name
        model.customer_email = customer.email
        model.customer_phone = customer.phone
        model.upstream_customer_id = order.upstream_customer_id
        model.items = [
            {"product_name": i.product_name, "quantity": i.quantity, "price": str(i.price)}
            for i in order.items
        ]
        model.amount = order.amount
        model.payment_method = order.payment_method.value
        model.status = order.status.value
        model.placed_date = order.placed_date
        model.delivered_date = order.delivered_date
        model.shipping_address = _address_to_json(order.shipping_address)
        model.notes = order.notes or ""

    @staticmethod
    def _to_domain_entity(model: OrderModel) -> CanonicalOrder:
        address = model.shipping_address
        return CanonicalOrder(
            order_number=model.order_number,
            platform_order_id=model.platform_order_id,
            customer=CustomerInfo(
                name=model.customer_name,
                email=model.customer_email,
                phone=model.customer_phone,
            ),
            items=[
                OrderItem(
                    product_name=i.get("product_name", ""),
                    quantity=int(i.get("quantity", 1)),
                    price=Decimal(str(i.get("price", "0"))),
                )
                for i in model.items or []
            ],
            amount=Decimal(str(model.amount or 0)),
            payment_method=PaymentMethod(model.payment_method),
            status=OrderStatus(model.status),
            placed_date=_aware(model.placed_date),
            delivered_date=_aware(model.delivered_date),
            shipping_address=ShippingAddress(**address) if address else None,
            source=OrderSource.DATABASE,
            platform=Platform(model.platform) if model.platform else None,
            notes=model.notes or "",
            merchant_id=model.merchant_id,
            local_id=model.id,
            upstream_customer_id=model.upstream_customer_id,
        )


def _address_to_json(address: Optional[ShippingAddress]) -> Optional[Dict[str, Any]]:
    if address is None:
        return None
    return {
        "street": address.street,
        "city": address.city,
        "state": address.state,
        "zip_code": address.zip_code,
        "country": address.country,
    }

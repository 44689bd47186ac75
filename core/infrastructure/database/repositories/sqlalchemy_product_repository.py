"""SQLAlchemy Product Repository Implementation."""
from decimal import Decimal
from typing import List
import uuid

from sqlalchemy import and_, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from core.domain.entities import CanonicalProduct
from core.domain.enums import Platform
from core.domain.repositories import ProductRepository
from core.infrastructure.database.models import ProductModel


class SQLAlchemyProductRepository(ProductRepository):

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def upsert_product(self, merchant_id: str, product: CanonicalProduct) -> bool:
        async with self.session_factory() as session:
            result = await session.execute(
                select(ProductModel).where(
                    and_(
                        ProductModel.merchant_id == merchant_id,
                        ProductModel.platform == product.platform.value,
                        ProductModel.platform_product_id == product.platform_product_id,
                    )
                )
            )
            model = result.scalars().first()
            created = model is None
            if created:
                model = ProductModel(
                    id=str(uuid.uuid4()),
                    merchant_id=merchant_id,
                    platform=product.platform.value,
                    platform_product_id=product.platform_product_id,
                )
                session.add(model)

            model.name = product.name
            model.sku = product.sku
            model.price = product.price
            model.stock_quantity = product.stock_quantity
            model.status = product.status
            model.description = product.description
            model.image_urls = list(product.image_urls)
            model.tags = list(product.tags)

            await session.commit()
            return created

    async def list_products(self, merchant_id: str) -> List[CanonicalProduct]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(ProductModel)
                .where(ProductModel.merchant_id == merchant_id)
                .order_by(ProductModel.name)
            )
            return [
                CanonicalProduct(
                    platform_product_id=m.platform_product_id,
                    name=m.name,
                    platform=Platform(m.platform),
                    sku=m.sku,
                    price=Decimal(str(m.price or 0)),
                    stock_quantity=m.stock_quantity,
                    status=m.status,
                    description=m.description,
                    image_urls=list(m.image_urls or []),
                    tags=list(m.tags or []),
                    merchant_id=m.merchant_id,
                )
                for m in result.scalars().all()
            ]

"""SQLAlchemy Merchant Repository Implementation."""
from typing import List, Optional
import logging

from sqlalchemy import and_, or_, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from core.domain.entities import Merchant, ShopifyConnection, WooCommerceConnection
from core.domain.repositories import MerchantRepository
from core.infrastructure.database.models import MerchantModel


logger = logging.getLogger(__name__)


class SQLAlchemyMerchantRepository(MerchantRepository):

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def get_by_id(self, merchant_id: str) -> Optional[Merchant]:
        async with self.session_factory() as session:
            model = await session.get(MerchantModel, merchant_id)
            return self._to_domain_entity(model) if model else None

    async def find_by_store_url(self, store_url: str) -> Optional[Merchant]:
        return await self._first(MerchantModel.store_url == store_url)

    async def list_with_store_setup(self) -> List[Merchant]:
        return await self._all(MerchantModel.is_store_setup.is_(True))

    async def find_by_webhook_secret(self, secret_key: str) -> Optional[Merchant]:
        if not secret_key:
            return None
        return await self._first(
            and_(MerchantModel.wc_secret_key == secret_key, MerchantModel.wc_is_connected.is_(True))
        )

    async def list_connected(self) -> List[Merchant]:
        merchants = await self._all(
            or_(MerchantModel.shopify_is_connected.is_(True), MerchantModel.wc_is_connected.is_(True))
        )
        return [m for m in merchants if m.connected_platforms()]

    async def save(self, merchant: Merchant) -> None:
        async with self.session_factory() as session:
            model = await session.get(MerchantModel, merchant.id)
            if model is None:
                model = MerchantModel(id=merchant.id)
                session.add(model)
            self._apply(model, merchant)
            await session.commit()
        logger.info(f"Saved merchant {merchant.id}")

    async def _first(self, clause) -> Optional[Merchant]:
        async with self.session_factory() as session:
            result = await session.execute(select(MerchantModel).where(clause).limit(1))
            model = result.scalars().first()
            return self._to_domain_entity(model) if model else None

    async def _all(self, clause) -> List[Merchant]:
        async with self.session_factory() as session:
            result = await session.execute(select(MerchantModel).where(clause))
            return [self._to_domain_entity(m) for m in result.scalars().all()]

    @staticmethod
    def _apply(model: MerchantModel, merchant: Merchant) -> None:
        model.store_name = merchant.store_name
        model.store_url = merchant.store_url
        model.is_store_setup = merchant.is_store_setup
        model.shopify_shop_domain = merchant.shopify.shop_domain
        model.shopify_access_token = merchant.shopify.access_token
        model.shopify_is_connected = merchant.shopify.is_connected
        model.wc_store_url = merchant.woocommerce.store_url
        model.wc_consumer_key = merchant.woocommerce.consumer_key
        model.wc_consumer_secret = merchant.woocommerce.consumer_secret
        model.wc_secret_key = merchant.woocommerce.secret_key
        model.wc_is_connected = merchant.woocommerce.is_connected

    @staticmethod
    def _to_domain_entity(model: MerchantModel) -> Merchant:
        return Merchant(
            id=model.id,
            store_name=model.store_name,
            store_url=model.store_url,
            is_store_setup=model.is_store_setup,
            shopify=ShopifyConnection(
                shop_domain=model.shopify_shop_domain,
                access_token=model.shopify_access_token,
                is_connected=model.shopify_is_connected,
            ),
            woocommerce=WooCommerceConnection(
                store_url=model.wc_store_url,
                consumer_key=model.wc_consumer_key,
                consumer_secret=model.wc_consumer_secret,
                secret_key=model.wc_secret_key,
                is_connected=model.wc_is_connected,
            ),
        )

"""
Shopify Admin REST client.

Orders, products and customers are walked with cursor pagination: each
page advertises the next one in the `Link` header (`rel="next"`) and the
cursor travels as the `page_info` query parameter.
"""
import re
from typing import Any, Dict, List, Optional

from ..base import BasePlatformClient, ConnectionCheck, DEFAULT_MAX_RECORDS
from ..errors import UpstreamError
from ..http import HttpTransport, UpstreamResponse
from ..logging import get_logger


logger = get_logger("backo_sdk.shopify")

DEFAULT_API_VERSION = "2024-10"
DEFAULT_PAGE_SIZE = 250

_PAGE_INFO_RE = re.compile(r"page_info=([^&>]+)")


def extract_next_page_info(link_header: str) -> Optional[str]:
    """
    Pull the `page_info` cursor of the rel="next" entry out of a Link header.

    >>> extract_next_page_info('<https://x/orders.json?limit=250&page_info=abc>; rel="next"')
    'abc'
    """
    if not link_header:
        return None
    for part in link_header.split(","):
        if 'rel="next"' in part:
            match = _PAGE_INFO_RE.search(part)
            if match:
                return match.group(1)
    return None


def clean_shop_domain(shop_domain: str) -> str:
    domain = (shop_domain or "").strip()
    domain = re.sub(r"^https?://", "", domain, flags=re.IGNORECASE)
    return domain.rstrip("/")


class ShopifyAPI(BasePlatformClient):
    """Async client for one Shopify store."""

    platform = "Shopify"

    def __init__(
        self,
        shop_domain: str,
        access_token: str,
        api_version: str = DEFAULT_API_VERSION,
        transport: Optional[HttpTransport] = None,
        page_size: int = DEFAULT_PAGE_SIZE,
        max_records: int = DEFAULT_MAX_RECORDS,
        timeout: float = 30.0,
        lookup_timeout: float = 10.0,
    ):
        super().__init__(
            transport=transport,
            max_records=max_records,
            timeout=timeout,
            lookup_timeout=lookup_timeout,
        )
        self.shop_domain = clean_shop_domain(shop_domain)
        self.api_version = api_version
        self.page_size = page_size
        self._access_token = access_token

    def __repr__(self) -> str:
        return f"ShopifyAPI(shop_domain={self.shop_domain!r}, api_version={self.api_version!r})"

    @property
    def base_url(self) -> str:
        return f"https://{self.shop_domain}/admin/api/{self.api_version}"

    @property
    def headers(self) -> Dict[str, str]:
        return {
            "X-Shopify-Access-Token": self._access_token,
            "Content-Type": "application/json",
        }

    def _auth_error_message(self, response: UpstreamResponse) -> str:
        if response.status == 403:
            return (
                "Shopify denied access (HTTP 403). The app is missing a required scope; "
                "grant read_orders, read_products and read_customers and reinstall it."
            )
        return "Invalid Shopify access token (HTTP 401). Reconnect the store."

    async def _get(self, path: str, params: Optional[Dict[str, Any]] = None,
                   timeout: Optional[float] = None) -> UpstreamResponse:
        return await self.transport.get(
            f"{self.base_url}/{path}",
            headers=self.headers,
            params=params,
            timeout=timeout or self.timeout,
        )

    async def _paginate(self, path: str, key: str, params: Dict[str, Any]) -> List[Dict[str, Any]]:
        records: List[Dict[str, Any]] = []
        page_params: Dict[str, Any] = {"limit": self.page_size, **params}
        page = 0

        while True:
            page += 1
            response = await self._get(path, page_params)
            self._raise_for_response(response, key)

            batch = response.json().get(key) or []
            records.extend(batch)
            logger.info(f"Shopify {self.shop_domain}: page {page} returned {len(batch)} {key}")

            if self._reached_cap(records, key):
                break

            cursor = extract_next_page_info(response.header("link"))
            if not cursor or not batch:
                break
            # Filters are baked into the cursor; Shopify rejects them alongside page_info
            page_params = {"limit": self.page_size, "page_info": cursor}

        logger.info(f"Shopify {self.shop_domain}: fetched {len(records)} {key}")
        return records

    async def fetch_orders(self) -> List[Dict[str, Any]]:
        """Fetch every order in any status (capped at max_records)."""
        return await self._paginate("orders.json", "orders", {"status": "any"})

    async def fetch_products(self) -> List[Dict[str, Any]]:
        return await self._paginate("products.json", "products", {})

    async def fetch_customers(self) -> List[Dict[str, Any]]:
        return await self._paginate("customers.json", "customers", {})

    async def fetch_customer_by_id(self, customer_id: str) -> Optional[Dict[str, Any]]:
        """
        Fetch one customer record.

        Returns:
            Raw customer dict, or None when Shopify answers 404

        Raises:
            UpstreamTransportError: On any other failure
        """
        response = await self._get(f"customers/{customer_id}.json", timeout=self.lookup_timeout)
        if response.status == 404:
            logger.info(f"Shopify {self.shop_domain}: customer {customer_id} not found")
            return None
        self._raise_for_response(response, "customer")
        return response.json().get("customer")

    async def verify_connection(self) -> ConnectionCheck:
        """Probe shop.json with the stored token."""
        try:
            response = await self._get("shop.json", timeout=self.lookup_timeout)
            self._raise_for_response(response, "shop")
        except UpstreamError as e:
            return ConnectionCheck(success=False, error=str(e))

        shop = response.json().get("shop") or {}
        return ConnectionCheck(
            success=True,
            details={"name": shop.get("name"), "domain": shop.get("domain") or self.shop_domain},
        )

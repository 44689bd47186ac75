"""
WooCommerce REST (wc/v3) client.

Page-number pagination: `page` counts from 1 and the total number of pages
is reported in the `X-WP-TotalPages` response header.
"""
import re
from typing import Any, Dict, List, Optional
from urllib.parse import urlsplit

import aiohttp

from ..base import BasePlatformClient, ConnectionCheck, DEFAULT_MAX_RECORDS
from ..errors import UpstreamError, UpstreamTransportError
from ..http import HttpTransport, UpstreamResponse
from ..logging import get_logger


logger = get_logger("backo_sdk.woocommerce")

DEFAULT_API_VERSION = "wc/v3"
DEFAULT_PAGE_SIZE = 100


def clean_store_url(url: str) -> str:
    """
    Reduce a merchant-supplied store URL to `scheme://host`.

    Whitespace, paths and trailing slashes are dropped; a missing scheme
    defaults to https.
    """
    if not url:
        return ""
    cleaned = re.sub(r"\s+", "", url).rstrip("/")
    if not re.match(r"^https?://", cleaned, flags=re.IGNORECASE):
        cleaned = f"https://{cleaned}"
    parts = urlsplit(cleaned)
    if not parts.hostname:
        return cleaned
    return f"{parts.scheme.lower()}://{parts.hostname}"


class WooCommerceAPI(BasePlatformClient):
    """Async client for one WooCommerce store."""

    platform = "WooCommerce"

    def __init__(
        self,
        store_url: str,
        consumer_key: str,
        consumer_secret: str,
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
        self.store_url = clean_store_url(store_url)
        self.api_version = api_version
        self.page_size = page_size
        self._auth_header = aiohttp.BasicAuth(consumer_key, consumer_secret).encode()

    def __repr__(self) -> str:
        return f"WooCommerceAPI(store_url={self.store_url!r})"

    @property
    def base_url(self) -> str:
        return f"{self.store_url}/wp-json/{self.api_version}"

    @property
    def headers(self) -> Dict[str, str]:
        return {
            "Authorization": self._auth_header,
            "Content-Type": "application/json",
        }

    def _auth_error_message(self, response: UpstreamResponse) -> str:
        return (
            f"WooCommerce rejected the API keys (HTTP {response.status}). "
            "Check the consumer key/secret and that they have Read permission."
        )

    async def _get(self, path: str, params: Optional[Dict[str, Any]] = None,
                   timeout: Optional[float] = None) -> UpstreamResponse:
        return await self.transport.get(
            f"{self.base_url}/{path}",
            headers=self.headers,
            params=params,
            timeout=timeout or self.timeout,
        )

    async def _paginate(self, path: str, resource: str, params: Dict[str, Any]) -> List[Dict[str, Any]]:
        records: List[Dict[str, Any]] = []
        page = 1

        while True:
            response = await self._get(path, {"per_page": self.page_size, "page": page, **params})
            self._raise_for_response(response, resource)

            batch = response.json()
            if not isinstance(batch, list):
                raise UpstreamTransportError(
                    f"Unexpected WooCommerce payload for {resource}: expected a list",
                    platform=self.platform,
                    status=response.status,
                )
            records.extend(batch)

            try:
                total_pages = int(response.header("x-wp-totalpages", "1") or 1)
            except ValueError:
                total_pages = 1
            logger.info(
                f"WooCommerce {self.store_url}: page {page}/{total_pages} returned {len(batch)} {resource}"
            )

            if self._reached_cap(records, resource):
                break
            if page >= total_pages or not batch:
                break
            page += 1

        logger.info(f"WooCommerce {self.store_url}: fetched {len(records)} {resource}")
        return records

    async def fetch_orders(self) -> List[Dict[str, Any]]:
        """Fetch every order in any status (capped at max_records)."""
        return await self._paginate("orders", "orders", {"status": "any"})

    async def fetch_products(self) -> List[Dict[str, Any]]:
        return await self._paginate("products", "products", {})

    async def fetch_customers(self) -> List[Dict[str, Any]]:
        return await self._paginate("customers", "customers", {})

    async def fetch_customer_by_id(self, customer_id: str) -> Optional[Dict[str, Any]]:
        """Fetch one customer; None when WooCommerce answers 404."""
        response = await self._get(f"customers/{customer_id}", timeout=self.lookup_timeout)
        if response.status == 404:
            logger.info(f"WooCommerce {self.store_url}: customer {customer_id} not found")
            return None
        self._raise_for_response(response, "customer")
        return response.json()

    async def verify_connection(self) -> ConnectionCheck:
        """Probe the products endpoint with a single-record page."""
        if not self.store_url or "." not in self.store_url:
            return ConnectionCheck(
                success=False,
                error="Invalid store URL. Please enter a complete URL like https://yourstore.com",
            )
        try:
            response = await self._get("products", {"per_page": 1}, timeout=self.lookup_timeout)
            self._raise_for_response(response, "products")
            response.json()
        except UpstreamError as e:
            return ConnectionCheck(success=False, error=str(e))

        return ConnectionCheck(success=True, details={"store_url": self.store_url})

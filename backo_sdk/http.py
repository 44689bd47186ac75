"""
HTTP transport used by the platform clients.

The clients only speak to `HttpTransport`, so tests can swap in a scripted
transport while production uses aiohttp.
"""
import asyncio
import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

import aiohttp

from .errors import UpstreamTransportError
from .logging import get_logger


logger = get_logger("backo_sdk.http")


@dataclass
class UpstreamResponse:
    """Buffered upstream response (body already read)."""

    status: int
    text: str = ""
    headers: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        # Header lookups are case-insensitive
        self.headers = {k.lower(): v for k, v in (self.headers or {}).items()}

    def header(self, name: str, default: str = "") -> str:
        return self.headers.get(name.lower(), default)

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    @property
    def content_type(self) -> str:
        return self.header("content-type").lower()

    def json(self) -> Any:
        """Decode the body as JSON, raising UpstreamTransportError on garbage."""
        try:
            return json.loads(self.text) if self.text else {}
        except ValueError as e:
            raise UpstreamTransportError(
                f"Invalid JSON in upstream response: {e}", status=self.status
            ) from e


class HttpTransport(ABC):
    """Minimal async GET transport."""

    @abstractmethod
    async def get(
        self,
        url: str,
        *,
        headers: Optional[Mapping[str, str]] = None,
        params: Optional[Mapping[str, Any]] = None,
        timeout: float = 30.0,
    ) -> UpstreamResponse:
        """
        Perform a GET request.

        Args:
            url: Absolute URL
            headers: Request headers
            params: Query string parameters
            timeout: Total timeout in seconds

        Returns:
            Buffered response, whatever the status code

        Raises:
            UpstreamTransportError: On network failure or timeout
        """
        pass


class AiohttpTransport(HttpTransport):
    """aiohttp implementation; one short-lived ClientSession per call."""

    async def get(
        self,
        url: str,
        *,
        headers: Optional[Mapping[str, str]] = None,
        params: Optional[Mapping[str, Any]] = None,
        timeout: float = 30.0,
    ) -> UpstreamResponse:
        client_timeout = aiohttp.ClientTimeout(total=timeout)
        query = {k: str(v) for k, v in (params or {}).items()}
        try:
            async with aiohttp.ClientSession(timeout=client_timeout) as session:
                async with session.get(url, headers=dict(headers or {}), params=query) as response:
                    text = await response.text()
                    return UpstreamResponse(
                        status=response.status,
                        text=text,
                        headers=dict(response.headers),
                    )
        except asyncio.TimeoutError as e:
            logger.warning(f"Upstream request timed out after {timeout}s: {url}")
            raise UpstreamTransportError(f"Request timed out after {timeout}s") from e
        except aiohttp.ClientError as e:
            logger.warning(f"Upstream request failed: {url} ({e})")
            raise UpstreamTransportError(f"Connection failed: {e}") from e

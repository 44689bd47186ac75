"""Shared plumbing for the platform clients."""
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .errors import UpstreamAuthError, UpstreamTransportError
from .http import AiohttpTransport, HttpTransport, UpstreamResponse
from .logging import get_logger


logger = get_logger("backo_sdk")

DEFAULT_MAX_RECORDS = 1000


@dataclass(frozen=True)
class ConnectionCheck:
    """Outcome of a credential/connectivity probe."""

    success: bool
    error: Optional[str] = None
    details: Optional[Dict[str, Any]] = None


class BasePlatformClient:
    """
    Common behaviour for paginated REST platform clients.

    Subclasses set `platform` and implement their own pagination walk;
    this base takes care of status classification and the record cap.
    """

    platform = "upstream"

    def __init__(
        self,
        transport: Optional[HttpTransport] = None,
        max_records: int = DEFAULT_MAX_RECORDS,
        timeout: float = 30.0,
        lookup_timeout: float = 10.0,
    ):
        self.transport = transport or AiohttpTransport()
        self.max_records = max_records
        self.timeout = timeout
        self.lookup_timeout = lookup_timeout

    def _auth_error_message(self, response: UpstreamResponse) -> str:
        return f"{self.platform} rejected the credentials (HTTP {response.status})"

    def _raise_for_response(self, response: UpstreamResponse, resource: str) -> None:
        """Turn a non-2xx or HTML response into the matching UpstreamError."""
        if response.status in (401, 403):
            raise UpstreamAuthError(
                self._auth_error_message(response),
                platform=self.platform,
                status=response.status,
            )
        if not response.ok:
            snippet = response.text[:200] if response.text else ""
            raise UpstreamTransportError(
                f"{self.platform} API error fetching {resource}: HTTP {response.status} {snippet}".strip(),
                platform=self.platform,
                status=response.status,
            )
        if "text/html" in response.content_type:
            raise UpstreamTransportError(
                f"{self.platform} returned an HTML page instead of JSON while fetching "
                f"{resource}. Check that the store URL is correct and the REST API is enabled.",
                platform=self.platform,
                status=response.status,
            )

    def _reached_cap(self, records: List[Any], resource: str) -> bool:
        if len(records) >= self.max_records:
            logger.warning(
                f"{self.platform}: reached safety limit of {self.max_records} {resource}, "
                f"stopping pagination"
            )
            del records[self.max_records:]
            return True
        return False

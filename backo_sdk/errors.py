"""Errors raised by the platform clients."""

import re
from typing import Optional


_SECRET_PATTERNS = (
    re.compile(r"\b(shp(?:at|ca|pa|ss)_)[A-Za-z0-9]+"),
    re.compile(r"\b(c[ks]_)[A-Za-z0-9]+"),
    re.compile(r"(?i)\b((?:authorization|x-shopify-access-token)['\"]?\s*[:=]\s*['\"]?(?:basic\s+|bearer\s+)?)[^\s'\",}]+"),
    re.compile(r"(?i)\b((?:access_token|consumer_key|consumer_secret|password)=)[^&\s]+"),
)


def redact_secrets(text: str) -> str:
    """Mask platform tokens, API keys and auth header values in a message."""
    for pattern in _SECRET_PATTERNS:
        text = pattern.sub(r"\1[redacted]", text)
    return text


class UpstreamError(Exception):
    """Base error for any failed call to a storefront platform."""

    def __init__(self, message: str, platform: str = "", status: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.platform = platform
        self.status = status

    def __str__(self) -> str:
        return self.message


class UpstreamTransportError(UpstreamError):
    """Network failure, timeout, non-2xx status or an unusable response body."""


class UpstreamAuthError(UpstreamTransportError):
    """The platform rejected the stored credentials (401/403)."""

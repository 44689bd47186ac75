"""Backo SDK - thin async clients for the storefront platforms we integrate with."""

from .errors import UpstreamAuthError, UpstreamError, UpstreamTransportError, redact_secrets
from .http import AiohttpTransport, HttpTransport, UpstreamResponse
from .base import ConnectionCheck

__all__ = [
    "AiohttpTransport",
    "ConnectionCheck",
    "HttpTransport",
    "UpstreamAuthError",
    "UpstreamError",
    "UpstreamResponse",
    "UpstreamTransportError",
    "redact_secrets",
]

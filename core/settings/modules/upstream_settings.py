from __future__ import annotations

from pydantic import Field

from core.settings.base_settings import BackoBaseSettings


class UpstreamSettings(BackoBaseSettings):
    """
    Limits shared by all platform integrations.

    max_records: safety cap on bulk fetches (per resource, per call)
    credential_cache_ttl_seconds: how long merchant credentials stay cached
    """

    max_records: int = Field(1000, alias="UPSTREAM_MAX_RECORDS")
    credential_cache_ttl_seconds: float = Field(60.0, alias="CREDENTIAL_CACHE_TTL_SECONDS")

"""Upstream customer record."""
from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class UpstreamCustomerRecord:
    """
    Customer as returned by a platform's customer-by-id endpoint.

    Transient: lives only inside one enrichment cache.
    """
    id: str
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @classmethod
    def from_payload(cls, payload: Dict[str, Any], fallback_id: Optional[str] = None) -> "UpstreamCustomerRecord":
        """Build from a Shopify/WooCommerce customer payload (same key names on both)."""
        billing = payload.get("billing") or {}
        return cls(
            id=str(payload.get("id") or fallback_id or ""),
            first_name=(payload.get("first_name") or "").strip(),
            last_name=(payload.get("last_name") or "").strip(),
            email=(payload.get("email") or billing.get("email") or "").strip(),
            phone=(payload.get("phone") or billing.get("phone") or "").strip(),
        )

"""Canonical product entity."""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional

from ..enums import Platform


@dataclass
class CanonicalProduct:
    """Platform-neutral product, as kept in the local catalogue."""
    platform_product_id: str
    name: str
    platform: Platform
    sku: str = ""
    price: Decimal = Decimal("0")
    stock_quantity: int = 0
    status: str = "active"  # "active" | "draft"
    description: str = ""
    image_urls: List[str] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)
    merchant_id: Optional[str] = None

"""
Customer field resolution.

Customer name/email/phone are assembled from several places on a platform
order (enriched customer record, order-level fields, billing, shipping).
Each field is an ordered list of extractors; the first non-empty value wins.
"""
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, Optional, Sequence, TypeVar

from ..entities import UpstreamCustomerRecord


T = TypeVar("T")
Extractor = Callable[[T], Optional[str]]


class PriorityResolver(Generic[T]):
    """Return the first non-blank value produced by the extractors, in order."""

    def __init__(self, extractors: Sequence[Extractor], default: str = ""):
        self.extractors = list(extractors)
        self.default = default

    def resolve(self, source: T) -> str:
        for extract in self.extractors:
            value = extract(source)
            if value is None:
                continue
            text = str(value).strip()
            if text:
                return text
        return self.default


@dataclass(frozen=True)
class OrderContext:
    """Raw platform order plus the enriched customer record, if any."""
    order: Dict[str, Any]
    customer: Optional[UpstreamCustomerRecord] = None


def dig(data: Optional[Dict[str, Any]], *path: str) -> Any:
    """Nested dict lookup tolerant of missing/null levels."""
    current: Any = data
    for key in path:
        if not isinstance(current, dict):
            return None
        current = current.get(key)
    return current


def order_field(*path: str) -> Extractor:
    return lambda ctx: dig(ctx.order, *path)


def enriched(attribute: str) -> Extractor:
    return lambda ctx: getattr(ctx.customer, attribute) if ctx.customer else None


def joined_name(*prefix: str) -> Extractor:
    """'first_name last_name' under the given path."""
    def extract(ctx: OrderContext) -> str:
        first = dig(ctx.order, *prefix, "first_name") or ""
        last = dig(ctx.order, *prefix, "last_name") or ""
        return f"{first} {last}".strip()
    return extract

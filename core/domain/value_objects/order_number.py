"""Order identifier value object."""
from dataclasses import dataclass
from typing import Tuple


def normalize_order_number(value: str) -> str:
    """Canonical storage form of an order number: trimmed, no leading '#', lowercase."""
    return str(value or "").strip().lstrip("#").strip().lower()


@dataclass(frozen=True)
class OrderIdentifier:
    """
    Order number as typed by a shopper.

    Shoppers write "#1001", "1001" or "# 1001"; platforms report either the
    display name ("#1001") or the bare number. Matching is done against a
    small candidate set, case-insensitively:

    - the value as given
    - the value without its leading '#'
    - the bare value with '#' prepended
    """
    value: str

    def __post_init__(self):
        if not self.value or not str(self.value).strip():
            raise ValueError("Order number cannot be empty")

    @property
    def normalized(self) -> str:
        return normalize_order_number(self.value)

    @property
    def candidates(self) -> Tuple[str, ...]:
        given = str(self.value).strip().lower()
        bare = self.normalized
        ordered = (given, bare, f"#{bare}")
        # de-duplicate, keep order
        return tuple(dict.fromkeys(ordered))

    def matches(self, *values: object) -> bool:
        """True when any non-empty value equals one of the candidates."""
        candidates = self.candidates
        for value in values:
            if value is None:
                continue
            text = str(value).strip().lower()
            if text and text in candidates:
                return True
        return False

    def __str__(self) -> str:
        return self.value

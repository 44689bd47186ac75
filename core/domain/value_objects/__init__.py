"""Domain value objects."""

from .contact import contact_matches, digits_only, emails_match, phones_match
from .order_number import OrderIdentifier, normalize_order_number
from .store_url import normalize_store_url

__all__ = [
    "OrderIdentifier",
    "contact_matches",
    "digits_only",
    "emails_match",
    "normalize_order_number",
    "normalize_store_url",
    "phones_match",
]

"""Store URL normalization."""
import re


def normalize_store_url(url: str) -> str:
    """
    Comparable form of a merchant store URL.

    Lowercased, without scheme, leading "www." or trailing slash:

    >>> normalize_store_url("https://www.Example.com/")
    'example.com'
    """
    if not url:
        return ""
    normalized = url.strip().lower()
    normalized = re.sub(r"^https?://", "", normalized)
    normalized = re.sub(r"^www\.", "", normalized)
    return normalized.rstrip("/")

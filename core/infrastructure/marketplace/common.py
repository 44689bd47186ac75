"""Parsing helpers shared by the platform mappers."""
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Optional


def as_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def as_id(value: Any) -> Optional[str]:
    """Platform id as string; None, blank and 0 mean "no id"."""
    text = as_text(value)
    return text if text and text != "0" else None


def parse_decimal(value: Any) -> Decimal:
    if value in (None, ""):
        return Decimal("0")
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        return Decimal("0")


def parse_int(value: Any, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def parse_datetime(value: Any) -> Optional[datetime]:
    """ISO 8601 to an aware UTC datetime; naive values are taken as UTC."""
    if not value:
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = datetime.fromisoformat(str(value).strip().replace("Z", "+00:00"))
        except ValueError:
            return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)

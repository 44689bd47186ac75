"""
Shopper contact matching.

A shopper proves ownership of an order by typing the email or phone number
stored on it. Emails compare case-insensitively; phones compare verbatim
or by their digits, tolerating a national trunk prefix ("0300...") and a
country code ("+92 300...").
"""
import re


MIN_PHONE_DIGITS = 7
MAX_COUNTRY_CODE_DIGITS = 3

_NON_DIGITS = re.compile(r"\D+")


def digits_only(value: str) -> str:
    return _NON_DIGITS.sub("", value or "")


def emails_match(contact: str, email: str) -> bool:
    if not contact or not email:
        return False
    return contact.strip().lower() == email.strip().lower()


def phones_match(contact: str, phone: str) -> bool:
    """
    Compare two phone numbers written in arbitrary formats.

    >>> phones_match("+92 300 1234567", "0300-1234567")
    True
    >>> phones_match("0300-1234567", "0300-7654321")
    False
    """
    if not contact or not phone:
        return False
    if contact.strip() == phone.strip():
        return True

    a, b = digits_only(contact), digits_only(phone)
    if not a or not b:
        return False
    if a == b:
        return True

    # Drop trunk prefixes, then allow a short country code on one side
    a, b = a.lstrip("0"), b.lstrip("0")
    shorter, longer = sorted((a, b), key=len)
    if len(shorter) < MIN_PHONE_DIGITS:
        return False
    if shorter == longer:
        return True
    return longer.endswith(shorter) and len(longer) - len(shorter) <= MAX_COUNTRY_CODE_DIGITS


def contact_matches(contact: str, email: str, phone: str) -> bool:
    """True when `contact` matches the stored email or the stored phone."""
    return emails_match(contact, email) or phones_match(contact, phone)

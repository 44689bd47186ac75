"""Payment method values."""
from enum import Enum


class PaymentMethod(str, Enum):
    """How the shopper paid: cash on delivery or up front."""

    COD = "COD"
    PREPAID = "Prepaid"

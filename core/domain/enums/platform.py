"""
Platform and source enums.

`Platform` names the storefront an order came from; `OrderSource` tells
whether a canonical order was read live from that platform or from the
local cache.
"""
from enum import Enum


class Platform(str, Enum):
    SHOPIFY = "shopify"
    WOOCOMMERCE = "woocommerce"


class OrderSource(str, Enum):
    API = "api"
    DATABASE = "database"

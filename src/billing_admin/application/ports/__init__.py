"""Application ports package."""

from .billing_api import (
    ClientsApiPort,
    Fields,
    InvoicesApiPort,
    PaymentsApiPort,
    ProductsApiPort,
)
from .token_store import TokenStorePort

__all__ = [
    "ClientsApiPort",
    "Fields",
    "InvoicesApiPort",
    "PaymentsApiPort",
    "ProductsApiPort",
    "TokenStorePort",
]

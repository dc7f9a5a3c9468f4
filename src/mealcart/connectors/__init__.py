"""Connectors for third-party product search APIs."""

from mealcart.connectors.base import (
    ConnectorError,
    ConnectorResponse,
    ProductSearchConnector,
    RateLimitError,
)
from mealcart.connectors.bluecart import BlueCartConnector, ProductSearchResult

__all__ = [
    "BlueCartConnector",
    "ConnectorError",
    "ConnectorResponse",
    "ProductSearchConnector",
    "ProductSearchResult",
    "RateLimitError",
]

"""Base connector interface for product search integrations."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from mealcart.connectors.bluecart import ProductSearchResult


@dataclass
class ConnectorResponse:
    """Standardized response from connector API calls."""

    data: Any
    status_code: int
    headers: dict[str, str]

    @property
    def is_rate_limited(self) -> bool:
        """Check if response indicates rate limiting."""
        return self.status_code == 429

    @property
    def retry_after(self) -> int | None:
        """Get retry-after seconds from headers, if present."""
        retry_after = self.headers.get("retry-after") or self.headers.get("Retry-After")
        if retry_after:
            try:
                return int(retry_after)
            except ValueError:
                return None
        return None


class ConnectorError(Exception):
    """Base exception for connector errors."""

    def __init__(self, message: str, status_code: int | None = None, response: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.response = response


class RateLimitError(ConnectorError):
    """Raised when API rate limit is exceeded."""

    def __init__(self, message: str, retry_after: int | None = None):
        super().__init__(message, status_code=429)
        self.retry_after = retry_after


class ProductSearchConnector(ABC):
    """Abstract base class for product search APIs."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Return connector name for logging and identification."""
        pass

    @abstractmethod
    async def search_products(self, term: str) -> list["ProductSearchResult"]:
        """
        Search the upstream catalogue.

        Args:
            term: Free-text search term, typically an ingredient name.

        Returns:
            Products with name, price, currency and image where available.
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release any open HTTP resources."""
        pass

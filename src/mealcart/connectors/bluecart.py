"""BlueCart (Walmart) product search connector."""

from dataclasses import dataclass
from typing import Any

import httpx
from tenacity import (
    RetryError,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from mealcart.config import get_settings
from mealcart.connectors.base import (
    ConnectorError,
    ConnectorResponse,
    ProductSearchConnector,
    RateLimitError,
)
from mealcart.logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class ProductSearchResult:
    """A product as returned by the search proxy."""

    id: str | None
    name: str
    price: float | None = None
    currency: str | None = None
    image: str | None = None
    link: str | None = None
    rating: float | None = None

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> "ProductSearchResult":
        """Parse one entry of BlueCart's ``search_results`` list."""
        product = data.get("product") or {}
        primary_offer = (data.get("offers") or {}).get("primary") or {}
        images = product.get("images") or []

        price = primary_offer.get("price")
        rating = product.get("rating")

        return cls(
            id=product.get("item_id"),
            name=product.get("title") or "",
            price=float(price) if price is not None else None,
            currency=primary_offer.get("currency"),
            image=images[0] if images else None,
            link=product.get("link"),
            rating=float(rating) if rating is not None else None,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "price": self.price,
            "currency": self.currency,
            "image": self.image,
            "link": self.link,
            "rating": self.rating,
        }


class BlueCartConnector(ProductSearchConnector):
    """Connector for the BlueCart product search API."""

    DEFAULT_TIMEOUT = 30.0
    MAX_RETRIES = 3
    BACKOFF_BASE = 1
    BACKOFF_MAX = 30

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        domain: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
    ):
        settings = get_settings()
        self.api_key = api_key if api_key is not None else settings.product_search_api_key
        self.base_url = base_url or settings.product_search_base_url
        self.domain = domain or settings.product_search_domain
        self.timeout = timeout or settings.product_search_timeout or self.DEFAULT_TIMEOUT
        self.max_retries = max_retries or settings.product_search_max_retries or self.MAX_RETRIES
        self._client: httpx.AsyncClient | None = None

    @property
    def name(self) -> str:
        """Return connector name."""
        return "bluecart"

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                headers={
                    "Accept": "application/json",
                    "User-Agent": "Mealcart/1.0",
                },
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def _request(self, params: dict[str, Any]) -> ConnectorResponse:
        """Make an HTTP request with retry logic."""
        if not self.api_key:
            raise ConnectorError("Product search API key is not configured")

        client = await self._get_client()
        query = {"api_key": self.api_key, **params}

        @retry(
            retry=retry_if_exception_type((httpx.TimeoutException, httpx.NetworkError)),
            stop=stop_after_attempt(self.max_retries),
            wait=wait_exponential(multiplier=self.BACKOFF_BASE, max=self.BACKOFF_MAX),
            reraise=False,
        )
        async def _do_request() -> httpx.Response:
            return await client.get(self.base_url, params=query)

        try:
            response = await _do_request()
        except RetryError as e:
            logger.error(f"Product search failed after {self.max_retries} retries")
            raise ConnectorError(
                f"Request failed after {self.max_retries} retries",
                response=str(e),
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"Product search request failed: {e}")
            raise ConnectorError(f"Request failed: {e}", response=str(e)) from e

        result = ConnectorResponse(
            data=None,
            status_code=response.status_code,
            headers=dict(response.headers),
        )

        if result.is_rate_limited:
            raise RateLimitError("Product search rate limit exceeded", result.retry_after)

        if response.status_code >= 400:
            error_detail = response.text[:500] if response.text else "No details"
            logger.error(f"Product search error {response.status_code}: {error_detail}")
            raise ConnectorError(
                f"API request failed with status {response.status_code}",
                status_code=response.status_code,
                response=error_detail,
            )

        try:
            data = response.json() if response.text else {}
        except ValueError as e:
            raise ConnectorError("Product search returned invalid JSON", response=str(e)) from e

        result.data = data
        return result

    async def search_products(self, term: str) -> list[ProductSearchResult]:
        """
        Search Walmart products for ``term``.

        Returns:
            Parsed products; entries without a title are skipped.
        """
        response = await self._request(
            {
                "search_term": term,
                "walmart_domain": self.domain,
                "type": "search",
            }
        )

        search_results = (response.data or {}).get("search_results") or []
        products = [ProductSearchResult.from_api_response(item) for item in search_results]
        products = [product for product in products if product.name]

        logger.info(f"Product search '{term}' returned {len(products)} products")
        return products


"""API routes proxying the third-party product search."""

from collections.abc import AsyncIterator
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel

from mealcart.auth import get_current_user_id
from mealcart.connectors.base import ConnectorError, ProductSearchConnector, RateLimitError
from mealcart.connectors.bluecart import BlueCartConnector
from mealcart.logging_config import get_logger
from mealcart.schemas import ProductSchema

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1/products", tags=["products"])


class ProductSearchResponse(BaseModel):
    """Products matching a search term."""

    term: str
    total_products: int
    products: list[ProductSchema]


async def get_product_search_connector() -> AsyncIterator[ProductSearchConnector]:
    """Dependency providing a product search connector for one request."""
    connector = BlueCartConnector()
    try:
        yield connector
    finally:
        await connector.close()


@router.get("/search", response_model=ProductSearchResponse)
async def search_products(
    term: Annotated[str, Query(description="Product search term")] = "",
    user_id: str = Depends(get_current_user_id),
    connector: ProductSearchConnector = Depends(get_product_search_connector),
) -> ProductSearchResponse:
    """
    Search the product catalogue for an ingredient.

    Returns each product's name, price, currency and image so the client can
    attach them to a recipe ingredient.
    """
    term = term.strip()
    if not term:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Search term is required",
        )

    logger.info(f"Searching products: term={term}")

    try:
        products = await connector.search_products(term)
    except RateLimitError as e:
        logger.warning(f"Product search rate limited: {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Product search is temporarily unavailable",
        )
    except ConnectorError as e:
        logger.error(f"Product search failed for '{term}': {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to search products",
        )

    return ProductSearchResponse(
        term=term,
        total_products=len(products),
        products=[ProductSchema(**product.to_dict()) for product in products],
    )

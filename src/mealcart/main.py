"""FastAPI application entry point."""

import uuid
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from mealcart import models  # noqa: F401  (registers tables on Base.metadata)
from mealcart.config import get_settings
from mealcart.database import Base, async_engine
from mealcart.logging_config import LoggingContext, configure_logging, get_logger
from mealcart.routers import meal_plans_router, products_router, recipes_router

settings = get_settings()

# Configure logging on module load
configure_logging(log_level=settings.log_level)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan handler for startup and shutdown events."""
    logger.info("Starting Mealcart API")

    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables initialized")

    yield

    logger.info("Shutting down Mealcart API")
    await async_engine.dispose()


app = FastAPI(
    title="Mealcart API",
    description="Recipes, meal plans and consolidated shopping lists",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_context(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """Bind a request id to the logging context for the duration of a request."""
    request_id = request.headers.get("X-Request-Id") or str(uuid.uuid4())
    with LoggingContext(request_id=request_id):
        response = await call_next(request)
    response.headers["X-Request-Id"] = request_id
    return response


app.include_router(recipes_router)
app.include_router(meal_plans_router)
app.include_router(products_router)


@app.get("/health")
async def health_check() -> dict:
    """Basic health check endpoint."""
    return {"status": "ok", "service": "mealcart-api"}


@app.get("/")
async def root() -> dict:
    """Root endpoint with API information."""
    return {
        "name": "Mealcart API",
        "version": "0.1.0",
        "docs": "/docs",
        "health": "/health",
    }

"""Application configuration using pydantic-settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Database
    database_url: str = "postgresql+asyncpg://localhost/mealcart"

    # Product search (BlueCart / Walmart)
    product_search_api_key: str = ""
    product_search_base_url: str = "https://api.bluecartapi.com/request"
    product_search_domain: str = "walmart.com"
    product_search_timeout: float = 30.0  # request timeout in seconds
    product_search_max_retries: int = 3

    # Identity header set by the upstream auth layer
    user_id_header: str = "X-User-Id"

    # Application
    environment: str = "development"
    log_level: str = "INFO"
    allowed_origins: str = "http://localhost:3000,http://localhost:8000"

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment.lower() == "development"

    @property
    def allowed_origins_list(self) -> list[str]:
        """CORS origins as a list."""
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Service
    service_name: str = "drivelens"
    log_level: str = "INFO"

    # HTTP Client
    http_timeout_seconds: float = 8.0

    # Vehicle data (remote catalog enrichment)
    remote_catalog_enabled: bool = True
    nhtsa_api_base: str = "https://vpic.nhtsa.dot.gov/api"
    fueleconomy_api_base: str = "https://www.fueleconomy.gov/ws/rest"
    catalog_make: str = "Toyota"
    catalog_year: int = 2024
    catalog_cache_ttl_seconds: float = 6 * 60 * 60

    # Narration
    gemini_api_key: str | None = None
    gemini_api_base: str = "https://generativelanguage.googleapis.com/v1beta"
    narration_model: str = "gemini-1.5-flash"
    narration_timeout_seconds: float = 10.0

    # Cost assumptions
    fuel_price_per_gallon: float = 3.5
    price_per_kwh: float = 0.13

    # Recommender
    recommender_strategy: str = "diverse"  # diverse | top_n
    recommendation_count: int = 5
    max_trims_per_model: int = 2
    catalog_recommendation_count: int = 3


settings = Settings()

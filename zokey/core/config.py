from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    APP_NAME: str = "Zokey API"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    MOCK_MODE: bool = False  # Synthetic catalog + heuristic ranking + in-memory cache; users still need MongoDB
    DEFAULT_REGION: str = "UK"

    # MongoDB settings
    MONGO_URL: str = "mongodb://localhost:27017"
    MONGO_DB_NAME: str = "zokey"

    # Collection names
    SEARCH_CACHE_COLLECTION: str = "search_cache"
    USERS_COLLECTION: str = "users"
    SEARCH_HISTORY_COLLECTION: str = "search_history"
    ANALYTICS_COLLECTION: str = "analytics_events"

    # OpenAI settings (ranking only)
    OPENAI_API_KEY: str | None = None
    RANKING_MODEL: str = "gpt-4-turbo-preview"
    RANKING_TEMPERATURE: float = 0.3  # Low for consistent rankings
    RANKING_MAX_TOKENS: int = 2000
    RANKING_TIMEOUT_SECONDS: float = 30.0

    # Product Advertising API settings
    PRODUCT_API_ACCESS_KEY: str | None = None
    PRODUCT_API_SECRET_KEY: str | None = None
    PRODUCT_API_PARTNER_TAG_UK: str = "shopai-uk-20"
    PRODUCT_API_PARTNER_TAG_US: str = "shopai-us-20"
    PRODUCT_API_TIMEOUT_SECONDS: float = 10.0
    PRODUCT_RESULT_CAP: int = 10

    # Cache settings
    CACHE_TTL_HOURS: float = 1.0  # Provider reuse policy, not a tuning knob
    CACHE_TIMEOUT_SECONDS: float = 5.0

    # Quota settings
    FREE_SEARCH_LIMIT: int = 3


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()

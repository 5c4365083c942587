from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str

    REDIS_URL: str = "redis://localhost:6379/0"

    SECRET_KEY: str
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 1440  # 24 hours

    RATE_LIMIT: int = 20
    RATE_LIMIT_WINDOW: int = 600  # 10 minutes

    IDEMPOTENCY_TTL: int = 300  # 5 minutes
    PRICE_CACHE_TTL: int = 60   # 60 seconds

    GEOCODE_URL: str = "https://nominatim.openstreetmap.org/search"
    GEOCODE_USER_AGENT: str = "MelroseMobileRestrooms/1.0"
    GEOCODE_TIMEOUT: float = 5.0
    GEOCODE_LIMIT: int = 5
    GEOCODE_COUNTRY_CODES: str = "us"
    GEOCODE_CACHE_TTL: int = 86400  # 24 hours

    QUOTE_OVERDUE_HOURS: int = 48
    CONTACT_PHONE: str = "(469) 355-4659"

    API_TITLE: str = "Event Restroom Quotes"
    API_DESCRIPTION: str = "Quote requests, pricing and back-office for event restroom rentals"
    API_VERSION: str = "1.0.0"

    LOG_LEVEL: str = "INFO"
    DEBUG: bool = False

    class Config:
        env_file = ".env"
        case_sensitive = True

settings = Settings()

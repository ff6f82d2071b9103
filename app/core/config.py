from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    API_PREFIX: str = "/api"

    # Security
    JWT_SECRET: str
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_DAYS: int = 7
    AUTH_HEADER_NAME: str = "x-auth-token"
    PASSWORD_MIN_LENGTH: int = 6
    # bcrypt limit; longer secrets are rejected rather than truncated
    PASSWORD_MAX_BYTES: int = 72
    USERNAME_MIN_LENGTH: int = 3

    # Database (DATABASE_URL wins over the POSTGRES_* parts when set)
    DATABASE_URL: str | None = None
    POSTGRES_HOST: str = "db"
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_DB: str = "prompthub"

    # Startup reconnect loop
    DB_CONNECT_RETRIES: int = 5
    DB_CONNECT_BACKOFF_SECONDS: float = 5.0

    # CORS
    CORS_ORIGINS: list[str] = ["*"]


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()

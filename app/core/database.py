import json
import logging

from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker
from tenacity import before_sleep_log, retry, stop_after_attempt, wait_fixed

from .config import settings


logger = logging.getLogger("app.database")


def get_database_url() -> str:
    """Get database URL with SSL support for production databases."""
    if settings.DATABASE_URL:
        return settings.DATABASE_URL

    base_url = (
        f"postgresql+psycopg2://{settings.POSTGRES_USER}:"
        f"{settings.POSTGRES_PASSWORD}@{settings.POSTGRES_HOST}:"
        f"{settings.POSTGRES_PORT}/{settings.POSTGRES_DB}"
    )

    # Hosted PostgreSQL (Render and similar) requires SSL connections
    if ".render.com" in settings.POSTGRES_HOST or settings.ENVIRONMENT.lower() in ("production", "staging"):
        base_url += "?sslmode=require"

    return base_url


def json_serializer(value) -> str:
    # Keep non-ASCII tags searchable as plain text
    return json.dumps(value, ensure_ascii=False)


engine = create_engine(get_database_url(), pool_pre_ping=True, json_serializer=json_serializer)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@retry(
    wait=wait_fixed(settings.DB_CONNECT_BACKOFF_SECONDS),
    stop=stop_after_attempt(settings.DB_CONNECT_RETRIES),
    before_sleep=before_sleep_log(logger, logging.WARNING),
    reraise=True,
)
def wait_for_database() -> None:
    """Block until the database answers, retrying with a fixed backoff.

    Only used at process startup; requests that hit an unreachable database
    fail immediately instead of queuing.
    """
    logger.info("Connecting to database")
    with engine.connect() as connection:
        connection.execute(text("SELECT 1"))
    logger.info("Database connection established")

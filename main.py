import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.concurrency import run_in_threadpool

from app.api.v1 import auth, prompts, users
from app.core.config import settings
from app.core.database import wait_for_database
from app.core.errors import register_exception_handlers
from app.core.logging import configure_logging
from app.middleware.logging import LoggingMiddleware


logger = logging.getLogger("app.main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Blocking reconnect loop; keep it off the event loop
    await run_in_threadpool(wait_for_database)
    logger.info("PromptHub API started", extra={"environment": settings.ENVIRONMENT})
    yield


def create_app() -> FastAPI:
    configure_logging()

    app = FastAPI(
        title="PromptHub API",
        version="0.1.0",
        lifespan=lifespan,
    )

    # CORS middleware - must be added before other middleware
    wildcard = "*" in settings.CORS_ORIGINS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        # Browsers reject credentialed requests against a wildcard origin
        allow_credentials=not wildcard,
        allow_methods=["*"],
        allow_headers=["Content-Type", settings.AUTH_HEADER_NAME],
    )

    # Middleware
    app.add_middleware(LoggingMiddleware)

    register_exception_handlers(app)

    # API routes
    prefix = settings.API_PREFIX
    app.include_router(auth.router, prefix=prefix)
    app.include_router(users.router, prefix=prefix)
    app.include_router(prompts.router, prefix=prefix)

    @app.get("/health", tags=["health"])
    async def health_check() -> dict:
        return {"status": "ok", "environment": settings.ENVIRONMENT}

    return app


app = create_app()


if __name__ == "__main__":
    import os
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", "8000")),
        reload=settings.DEBUG,
    )

"""FastAPI application factory"""

import logging
import time
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from sqlmodel import SQLModel
from src.api.error import register_error_handlers
from src.api.routes import payments
from src.depends import engine

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield
    await engine.dispose()


def create_app(config) -> FastAPI:
    """
    Build the rent ledger API

    Args:
        config: ApplicationConfig-like object

    Returns:
        Configured FastAPI application
    """
    logging.basicConfig(level=config.LOG_LEVEL)

    if config.ENABLE_SENTRY and config.DSN_SENTRY:
        import sentry_sdk

        sentry_sdk.init(dsn=config.DSN_SENTRY, environment=config.SENTRY_ENVIRONMENT)

    app = FastAPI(title=config.API_TITLE, lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=config.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if config.ENABLE_LOGGING_MIDDLEWARE:

        @app.middleware("http")
        async def log_requests(request: Request, call_next):
            start_time = time.time()
            response = await call_next(request)
            elapsed_ms = int((time.time() - start_time) * 1000)
            logger.info(
                f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms}ms)"
            )
            return response

    register_error_handlers(app)

    app.include_router(payments.admin_router, prefix=config.API_PREFIX)
    app.include_router(payments.tenant_router, prefix=config.API_PREFIX)

    @app.get("/health", tags=["Health"])
    async def health():
        return {"status": "ok"}

    return app

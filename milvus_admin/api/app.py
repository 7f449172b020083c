"""FastAPI application for milvus-admin."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging

from milvus_admin import __version__
from milvus_admin.client import MilvusClientProvider
from .config import settings
from .exceptions import register_exception_handlers
from .routers import backup, health

# Configure milvus-admin logger with app-managed pattern
# This ensures INFO logs are visible regardless of uvicorn's logging config
import sys
import os

admin_logger = logging.getLogger("milvus-admin")
admin_logger.setLevel(logging.INFO)

# App-managed pattern: attach our own handler and don't propagate
admin_logger.propagate = False
admin_logger.handlers.clear()

console_handler = logging.StreamHandler(sys.stdout)
console_handler.setLevel(logging.INFO)

formatter = logging.Formatter(
    '%(asctime)s - [%(name)s] - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
console_handler.setFormatter(formatter)
admin_logger.addHandler(console_handler)

# Allow disabling app-managed logging via env var for production
if os.getenv("DISABLE_APP_LOGGING", "false").lower() == "true":
    admin_logger.handlers.clear()
    admin_logger.propagate = True  # Fall back to server-managed pattern

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage the Milvus client lifecycle."""
    logger.info("Initializing Milvus client...")

    app.state.backup_config = settings.backup_config()
    app.state.milvus = MilvusClientProvider(settings.milvus_config())

    try:
        app.state.milvus.get_client()
        logger.info("Milvus client initialized successfully")
    except Exception as e:
        logger.error(f"Failed to initialize Milvus client: {e}")
        raise

    yield

    logger.info("Shutting down Milvus client...")
    await app.state.milvus.close()


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        lifespan=lifespan,
        docs_url=f"{settings.api_prefix}/docs",
        openapi_url=f"{settings.api_prefix}/openapi.json",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(backup.router, prefix=settings.api_prefix)
    app.include_router(health.router, prefix=settings.api_prefix)

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "name": settings.api_title,
            "version": settings.api_version,
            "milvus_admin_version": __version__,
            "docs": f"{settings.api_prefix}/docs"
        }

    return app


# Create default app instance
app = create_app()

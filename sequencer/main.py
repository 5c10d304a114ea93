"""FastAPI application entry point.

This module creates and configures the FastAPI application instance.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sequencer.api.routes import health, imports
from sequencer.core.config import get_config
from sequencer.core.container import container
from sequencer.core.database import check_db_connection, close_db, init_db
from sequencer.core.logging import get_logger, setup_logging

# Setup logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan events.

    Handles startup and shutdown events for the FastAPI application.

    Args:
        app: FastAPI application instance

    Yields:
        None
    """
    config = get_config()
    engine = container.infrastructure.db_engine()
    # Startup
    logger.info("Starting Sequencer application", env=config.app_env)

    # Create tables in development; other environments manage their schema
    if config.is_development:
        if await check_db_connection(engine):
            await init_db(engine)
        else:
            logger.warning("Database connection not available, skipping initialization")

    yield

    # Shutdown
    logger.info("Shutting down Sequencer application")
    await container.infrastructure.http_client().close()
    await close_db(engine)
    logger.info("Cleanup complete")


# Create FastAPI application
_config = get_config()
app = FastAPI(
    title=_config.app_name,
    description="Compose image and video sequences from Drive and YouTube sources",
    version="0.1.0",
    docs_url="/docs" if _config.is_development else None,
    redoc_url="/redoc" if _config.is_development else None,
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=_config.cors_origins,
    allow_credentials=_config.cors_allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(imports.router)


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint.

    Returns:
        Welcome message
    """
    return {
        "message": "Sequencer API",
        "version": "0.1.0",
        "docs": "/docs" if get_config().is_development else "disabled",
    }

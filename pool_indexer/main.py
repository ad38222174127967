"""Pool Indexer API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map IndexerError → structured JSON responses
    - Database and EventPipeline initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - One EventPipeline per process on app.state: single ordering cursor and lock
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from pool_indexer.api.error_handlers import register_error_handlers
from pool_indexer.api.routes import accounts, events, health, pools
from pool_indexer.config import get_settings
from pool_indexer.infrastructure.database import init_db
from pool_indexer.infrastructure.observability import setup_logging
from pool_indexer.services.event_pipeline import EventPipeline

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    app.state.pipeline = EventPipeline(manager, settings)
    logger.info(f"Pool indexer started for {settings.pool_name}")
    yield
    await manager.dispose()
    logger.info("Pool indexer shutting down")


app = FastAPI(
    title="StableSwap Pool Indexer", version="1.0.0", lifespan=lifespan,
)

register_error_handlers(app)

# Routes — explicit registration
app.include_router(health.router)
app.include_router(events.router)
app.include_router(pools.router)
app.include_router(accounts.router)

"""
Main entry point for FastAPI application.
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.config import Settings, settings
from app.logging_config import setup_logging
from app.middleware import middleware_chain
from app.routes import players
from app.services.seed_service import check_and_seed
from app.utils.db_async import (
    DATABASE_URL,
    SessionLocal,
    describe_database_url,
    dispose_engine,
    init_db,
)

import logging
logger = logging.getLogger(__name__)

setup_logging(level=settings.log_level, access_log=settings.access_log)


def create_app(config: Settings = settings) -> FastAPI:
    """Build the API with its lifespan, middleware chain and routes."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Connecting to database: {describe_database_url(DATABASE_URL)}")
        try:
            await init_db()
            if config.seed_on_startup:
                async with SessionLocal() as db:
                    inserted = await check_and_seed(db)
                logger.info(f"Database ready ({inserted} players seeded).")
            else:
                logger.info("Skipping seed; seed_on_startup disabled")
        except Exception:
            # Startup is all-or-nothing; the server must not come up half-seeded
            logger.exception("Error while checking database")
            await dispose_engine()
            raise

        yield

        try:
            logger.info("Disposing DB engine…")
            await dispose_engine()
            logger.info("DB engine disposed.")
        except Exception:
            logger.exception("Failed to dispose DB engine")

    app = FastAPI(title="NBA Player API", lifespan=lifespan)
    # add_middleware wraps the existing stack, so add innermost first
    for middleware_cls in reversed(middleware_chain(config.cors_enabled)):
        app.add_middleware(middleware_cls)
    app.include_router(players.router)
    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn

    logger.info(f"Starting server on port {settings.backend_port}")
    uvicorn.run(app, host=settings.host, port=settings.backend_port)

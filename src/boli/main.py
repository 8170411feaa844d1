"""FastAPI application factory."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from sqlalchemy.exc import SQLAlchemyError

from boli.competition.router import router as competition_router
from boli.config import get_settings
from boli.contributions.router import router as contributions_router
from boli.contributions.seed import seed_catalog
from boli.database import close_db, get_session, init_db
from boli.entries.router import router as entries_router
from boli.gamification.requirements import validate_requirement_accessors
from boli.gamification.router import router as gamification_router
from boli.gamification.seed import seed_badges
from boli.health.router import router as health_router
from boli.ledger.router import router as ledger_router
from boli.middleware import setup_middleware
from boli.redis_client import close_redis, init_redis
from boli.variants.router import router as variants_router
from boli.voting.router import router as voting_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup and shutdown lifecycle."""
    settings = get_settings()
    validate_requirement_accessors()
    await init_db(settings.database_url)
    if settings.redis_url:
        await init_redis(settings.redis_url)

    if settings.seed_catalog_on_startup:
        try:
            async for db in get_session():
                await seed_badges(db)
                await seed_catalog(db)
                break
        except SQLAlchemyError:
            logger.warning("Catalog seeding failed (tables may not exist yet)", exc_info=True)

    yield

    await close_db()
    await close_redis()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="Boli Contribution Ledger API",
        description="Points, badges and variant voting for the Boli dialect vocabulary platform",
        version=settings.app_version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    setup_middleware(app, settings)
    app.include_router(health_router, tags=["Health"])
    app.include_router(ledger_router)
    app.include_router(gamification_router)
    app.include_router(contributions_router)
    app.include_router(entries_router)
    app.include_router(voting_router)
    app.include_router(variants_router)
    app.include_router(competition_router)

    return app


app = create_app()

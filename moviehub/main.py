"""FastAPI application: main entry point."""

import structlog
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI

from moviehub.config import get_settings
from moviehub.core.logging import configure_logging
from moviehub.core.middleware import setup_middleware
from moviehub.core.exceptions import AppError, app_error_handler, global_exception_handler
from moviehub.infrastructure.database import engine, Base

# Import models so SQLAlchemy knows about them
from moviehub.domain.models.user import User  # noqa: F401

from moviehub.interfaces.api.auth import router as auth_router
from moviehub.interfaces.api.catalog import router as catalog_router

settings = get_settings()

configure_logging()
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: startup and shutdown events."""
    logger.info(
        "Starting MovieHub...",
        env=settings.ENVIRONMENT,
        user_store=settings.USER_STORE,
        tmdb_configured=bool(settings.TMDB_API_KEY),
    )

    if settings.USER_STORE == "database":
        if engine.url.get_backend_name() == "sqlite" and engine.url.database:
            Path(engine.url.database).parent.mkdir(parents=True, exist_ok=True)
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables created/verified")
    else:
        logger.warning("Accounts are kept in memory and are lost on restart")

    yield

    logger.info("MovieHub stopped")


app = FastAPI(
    title="MovieHub",
    description="Movie lists by genre through a TMDb proxy, with a demo account system",
    version="1.0.0",
    lifespan=lifespan,
)

setup_middleware(app)

app.add_exception_handler(AppError, app_error_handler)
app.add_exception_handler(Exception, global_exception_handler)

app.include_router(auth_router)
app.include_router(catalog_router)


@app.get("/")
def root():
    return {
        "name": "MovieHub",
        "version": "1.0.0",
        "status": "running",
        "docs": "/docs",
    }


@app.get("/health")
def health():
    return {"status": "healthy"}

"""
FastAPI entry point for the hierarchy engine.

create_app() wires logging, Sentry, CORS and the health and hierarchy
routers. Tests build their own instance from explicit settings:

    app = create_app(Settings(environment="test", _env_file=None))

Production runs the module-level instance:

    uvicorn backend.main:app
"""

import logging
import os
from typing import Optional

import sentry_sdk
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.settings import Settings, get_settings

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure a FastAPI application instance.

    Args:
        settings: Optional Settings instance. If not provided, uses get_settings()
                  which loads from environment variables.

    Returns:
        Configured FastAPI application instance.
    """
    if settings is None:
        settings = get_settings()

    _configure_logging(settings)
    _init_sentry(settings)

    app = FastAPI(
        title="FitTrack Hierarchy Engine",
        description="Duplicate and cascade-delete program subtrees",
        version="1.0.0",
    )

    _configure_cors(app)
    _include_routers(app)
    _log_engine_configuration(settings)

    return app


def _configure_logging(settings: Settings) -> None:
    """Root logging setup; debug output outside production."""
    logging.basicConfig(
        level=logging.INFO if settings.is_production else logging.DEBUG,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _init_sentry(settings: Settings) -> None:
    """Initialize Sentry SDK if DSN is configured."""
    if settings.sentry_dsn:
        sentry_sdk.init(
            dsn=settings.sentry_dsn,
            environment=settings.environment,
            traces_sample_rate=0.1,  # 10% of transactions for performance monitoring
            profiles_sample_rate=0.1,
        )
        logger.info("Sentry initialized for hierarchy engine")


def _configure_cors(app: FastAPI) -> None:
    """Configure CORS middleware for the application."""
    trusted_origins = [
        "http://localhost:3000",
        "http://localhost:3001",
    ]
    production_origins = os.environ.get("CORS_ALLOWED_ORIGINS", "").split(",")
    trusted_origins.extend([origin.strip() for origin in production_origins if origin.strip()])

    app.add_middleware(
        CORSMiddleware,
        allow_origins=trusted_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def _include_routers(app: FastAPI) -> None:
    """Include all API routers in the application."""
    from api.routers import health_router, hierarchy_router

    # Health router (no prefix - /health at root)
    app.include_router(health_router)
    app.include_router(hierarchy_router)


def _log_engine_configuration(settings: Settings) -> None:
    """Log the engine tunables at startup."""
    logger.info(
        "Hierarchy engine: batch_max_operations=%d read_max_workers=%d commit_max_workers=%d",
        settings.batch_max_operations,
        settings.read_max_workers,
        settings.commit_max_workers,
    )
    logger.info(
        "Duplication: strength_weight_policy=%s copy_naming=%s root_ordering=%s audit=%s",
        settings.strength_weight_policy,
        settings.copy_naming,
        settings.root_ordering,
        settings.duplication_audit_enabled,
    )
    if not settings.firestore_configured:
        logger.warning("Firestore is not configured; hierarchy endpoints will return 503")


# Default app instance for uvicorn
# This allows: uvicorn backend.main:app --reload
app = create_app()

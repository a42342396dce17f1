"""ASGI application: tool surface, health and middleware wiring."""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from code_quality.api.container import get_container
from code_quality.api.dependencies import limiter
from code_quality.api.routes.health import router as health_router
from code_quality.api.routes.tools import router as tools_router
from code_quality.shared.logging import setup_logging

log = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    config = get_container().config
    setup_logging(
        level=config.log_level,
        file_path=config.log_file,
        rotation_max_mb=config.log_rotation_max_mb,
        rotation_backups=config.log_rotation_backups,
    )
    log.info(
        "service_started",
        deep_analysis="llm" if config.llm.enabled else "off",
        model=config.llm.model if config.llm.enabled else None,
        cache_dir=config.persistence.cache_dir,
    )
    yield
    log.info("service_stopped")


def create_app() -> FastAPI:
    """Build the FastAPI app from the global container's config."""
    config = get_container().config
    application = FastAPI(
        title="Code Quality Service",
        version="0.1.0",
        description="Project type detection, convention and lexical checks, quality scoring and trends",
        lifespan=lifespan,
    )
    application.state.limiter = limiter
    application.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=config.security.cors_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    application.include_router(health_router)
    application.include_router(tools_router)
    return application


app = create_app()

"""Application entry point."""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from idle_planner.api.container import Container, get_container
from idle_planner.api.dependencies import limiter
from idle_planner.api.routes.plan import router as plan_router
from idle_planner.infrastructure.config.planner_validator import validate_planner_config
from idle_planner.shared.logging import setup_logging

log = structlog.get_logger()


def _apply_logging_config(container: Container) -> None:
    c = container.config
    setup_logging(
        level=c.log_level,
        file_path=c.log_file or "",
        rotation_max_mb=c.log_rotation_max_mb,
        rotation_backups=c.log_rotation_backups,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: setup logging, validate planner settings, build the registry."""
    container = get_container()
    _apply_logging_config(container)
    log.info("startup_begin", package_manager=container.config.planner.package_manager)
    validate_planner_config(container.config)
    log.info("startup_complete", analyzers=container.registry.list_types())
    yield
    log.info("shutdown_complete")


app = FastAPI(
    title="Idle Planner",
    version="0.1.0",
    description="Picks one maintenance task to run while a project is idle",
    lifespan=lifespan,
)

# Rate limiting
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

container = get_container()
app.add_middleware(
    CORSMiddleware,
    allow_origins=container.config.security.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(plan_router)


@app.get("/health")
@limiter.limit("100/minute")
async def health(request: Request) -> dict:
    """Health check with the enabled analyzers."""
    return {
        "status": "ok",
        "service": "idle-planner",
        "analyzers": get_container().registry.list_types(),
    }

"""FastAPI dependencies."""

from functools import lru_cache

from slowapi import Limiter
from slowapi.util import get_remote_address

from idle_planner.api.container import get_container
from idle_planner.application.planning.use_case import MaintenancePlanner
from idle_planner.domain.ports.config import AppConfig
from idle_planner.infrastructure.config import load_config

limiter = Limiter(key_func=get_remote_address)


@lru_cache
def get_config() -> AppConfig:
    """Load config once at startup."""
    return load_config()


def plan_rate_limit() -> str:
    """Per-client limit for planning endpoints, from [security]."""
    return f"{get_container().config.security.rate_limit_requests_per_minute}/minute"


def get_planner() -> MaintenancePlanner:
    return get_container().planner

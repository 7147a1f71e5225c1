"""Dependency Injection Container - centralized service management."""

from functools import cached_property

from idle_planner.application.analyzers.registry import AnalyzerRegistry, create_default_registry
from idle_planner.application.planning.use_case import MaintenancePlanner
from idle_planner.domain.ports.config import AppConfig
from idle_planner.infrastructure.config import load_config


class Container:
    """Lazily builds and caches config, analyzer registry and planner.

    Usage:
        container = Container()
        result = container.planner.plan(analysis)
    """

    def __init__(self, config: AppConfig | None = None):
        self._config_override = config

    @cached_property
    def config(self) -> AppConfig:
        if self._config_override:
            return self._config_override
        return load_config()

    @cached_property
    def registry(self) -> AnalyzerRegistry:
        """Analyzers enabled in [planner], in configured order."""
        return create_default_registry(self.config.planner)

    @cached_property
    def planner(self) -> MaintenancePlanner:
        return MaintenancePlanner(self.registry)

    def reset(self) -> None:
        """Drop cached instances so the next access rebuilds them."""
        for attr in list(self.__dict__.keys()):
            if not attr.startswith("_"):
                delattr(self, attr)


_container: Container | None = None


def get_container() -> Container:
    """Get or create global container instance."""
    global _container
    if _container is None:
        _container = Container()
    return _container


def reset_container() -> None:
    """Reset global container (for testing)."""
    global _container
    if _container:
        _container.reset()
    _container = None

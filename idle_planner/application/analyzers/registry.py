"""Analyzer registry - the analyzers a planner runs, in registration order."""

import logging

from idle_planner.application.analyzers.docs import DocsAnalyzer
from idle_planner.application.analyzers.maintenance import MaintenanceAnalyzer
from idle_planner.application.analyzers.refactoring import RefactoringAnalyzer
from idle_planner.domain.entities.candidate import AnalyzerType
from idle_planner.domain.ports.analyzer import AnalyzerPort
from idle_planner.domain.ports.config import PlannerConfig

logger = logging.getLogger(__name__)


class AnalyzerRegistry:
    """Registry for analyzers, keyed by analyzer type."""

    def __init__(self) -> None:
        """Create empty registry."""
        self._analyzers: dict[str, AnalyzerPort] = {}

    def register(self, analyzer: AnalyzerPort) -> None:
        """Register an analyzer. A second analyzer of the same type replaces the first."""
        self._analyzers[analyzer.type.value] = analyzer

    def get(self, analyzer_type: str | AnalyzerType) -> AnalyzerPort | None:
        """Get analyzer for type."""
        if isinstance(analyzer_type, AnalyzerType):
            analyzer_type = analyzer_type.value
        return self._analyzers.get(analyzer_type.lower())

    def has(self, analyzer_type: str | AnalyzerType) -> bool:
        """Check if an analyzer is registered for type."""
        return self.get(analyzer_type) is not None

    def analyzers(self) -> list[AnalyzerPort]:
        """All analyzers in registration order."""
        return list(self._analyzers.values())

    def list_types(self) -> list[str]:
        """List all registered analyzer types."""
        return list(self._analyzers.keys())

    def __len__(self) -> int:
        return len(self._analyzers)


def create_default_registry(config: PlannerConfig | None = None) -> AnalyzerRegistry:
    """Create registry with the analyzers enabled in config.

    Without config all three run: maintenance, docs, refactoring.
    """
    config = config or PlannerConfig()
    factories = {
        AnalyzerType.MAINTENANCE.value: lambda: MaintenanceAnalyzer(config.package_manager),
        AnalyzerType.DOCS.value: DocsAnalyzer,
        AnalyzerType.REFACTORING.value: RefactoringAnalyzer,
    }

    registry = AnalyzerRegistry()
    for name in config.enabled_analyzers:
        factory = factories.get(name.strip().lower())
        if factory is None:
            logger.warning("Unknown analyzer %r in planner config, skipping", name)
            continue
        registry.register(factory())
    return registry

"""Strategy analyzers: maintenance, docs, refactoring."""

from idle_planner.application.analyzers.base import BaseAnalyzer, sanitize_id
from idle_planner.application.analyzers.docs import DocsAnalyzer
from idle_planner.application.analyzers.maintenance import MaintenanceAnalyzer
from idle_planner.application.analyzers.refactoring import RefactoringAnalyzer
from idle_planner.application.analyzers.registry import (
    AnalyzerRegistry,
    create_default_registry,
)

__all__ = [
    "BaseAnalyzer",
    "sanitize_id",
    "MaintenanceAnalyzer",
    "DocsAnalyzer",
    "RefactoringAnalyzer",
    "AnalyzerRegistry",
    "create_default_registry",
]

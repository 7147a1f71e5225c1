"""Analyzer Port - what the planner needs from an analyzer."""

from typing import Protocol

from idle_planner.domain.entities.candidate import AnalyzerType, TaskCandidate
from idle_planner.domain.entities.snapshot import ProjectAnalysis


class AnalyzerPort(Protocol):
    """Converts a snapshot into scored candidates of one category."""

    @property
    def type(self) -> AnalyzerType:
        """Category tag (maintenance, docs, refactoring)."""
        ...

    def analyze(self, analysis: ProjectAnalysis) -> list[TaskCandidate]:
        """Return candidates for the snapshot. Never raises on a valid snapshot."""
        ...

    def prioritize(self, candidates: list[TaskCandidate]) -> TaskCandidate | None:
        """Return the best candidate, or None for an empty list."""
        ...

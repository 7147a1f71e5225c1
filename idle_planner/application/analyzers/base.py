"""Base analyzer interface."""

import re
from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence

from idle_planner.domain.entities.candidate import (
    AnalyzerType,
    RemediationSuggestion,
    TaskCandidate,
    TaskEffort,
    TaskPriority,
)
from idle_planner.domain.entities.snapshot import ProjectAnalysis
from idle_planner.domain.services.candidate_selector import select_best

_UNSAFE_ID_CHARS = re.compile(r"[^A-Za-z0-9-]")


def sanitize_id(value: str) -> str:
    """Replace every character outside [A-Za-z0-9-] with '-'."""
    return _UNSAFE_ID_CHARS.sub("-", value)


def pluralize(count: int, singular: str, plural: str | None = None) -> str:
    """Return singular for exactly one item, plural otherwise."""
    if count == 1:
        return singular
    return plural if plural is not None else f"{singular}s"


def preview(items: Sequence[str], limit: int = 3, *, more_suffix: bool = False) -> str:
    """Join the first `limit` items.

    Longer lists end with "..." or, with more_suffix, " and N more".
    """
    shown = ", ".join(items[:limit])
    hidden = len(items) - limit
    if hidden <= 0:
        return shown
    if more_suffix:
        return f"{shown} and {hidden} more"
    return f"{shown}..."


class BaseAnalyzer(ABC):
    """Base class for strategy analyzers.

    Subclasses implement `type` and `analyze`. `analyze` must be total over
    valid snapshots: absent optional data skips a rule instead of raising.
    """

    @property
    @abstractmethod
    def type(self) -> AnalyzerType:
        """Category tag this analyzer emits (e.g. maintenance, docs)."""
        ...

    @abstractmethod
    def analyze(self, analysis: ProjectAnalysis) -> list[TaskCandidate]:
        """Convert a snapshot into scored candidates.

        Args:
            analysis: Project snapshot (possibly partial)

        Returns:
            Candidates in deterministic order, possibly empty
        """
        ...

    def prioritize(self, candidates: list[TaskCandidate]) -> TaskCandidate | None:
        """Return the highest-scoring candidate, or None for an empty list."""
        return select_best(candidates)

    def prefixed_id(self, slug: str) -> str:
        """Candidate id namespaced by analyzer type (docs-..., refactoring-...)."""
        return f"{self.type.value}-{slug}"

    def create_candidate(
        self,
        candidate_id: str,
        title: str,
        description: str,
        *,
        priority: TaskPriority,
        effort: TaskEffort,
        workflow: str,
        rationale: str,
        score: float,
        remediation_suggestions: Iterable[RemediationSuggestion] = (),
    ) -> TaskCandidate:
        """Build a TaskCandidate."""
        return TaskCandidate(
            candidate_id=candidate_id,
            title=title,
            description=description,
            priority=priority,
            effort=effort,
            workflow=workflow,
            rationale=rationale,
            score=score,
            remediation_suggestions=list(remediation_suggestions),
        )

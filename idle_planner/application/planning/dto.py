"""DTOs for the planning use case."""

from dataclasses import dataclass, field

from idle_planner.domain.entities.candidate import TaskCandidate


@dataclass
class AnalyzerRun:
    """Candidates produced by one analyzer."""

    analyzer_type: str
    candidates: list[TaskCandidate] = field(default_factory=list)


@dataclass
class PlanResult:
    """Outcome of one planning pass.

    candidates keeps analyzer order (registry order, then each analyzer's
    own order). selected is None when no analyzer produced anything.
    """

    selected: TaskCandidate | None
    candidates: list[TaskCandidate] = field(default_factory=list)
    counts: dict[str, int] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return self.selected is None

"""Planning use case - run every analyzer over one snapshot and pick a task."""

import structlog

from idle_planner.application.analyzers.registry import AnalyzerRegistry, create_default_registry
from idle_planner.application.planning.dto import AnalyzerRun, PlanResult
from idle_planner.domain.entities.candidate import TaskCandidate
from idle_planner.domain.entities.snapshot import ProjectAnalysis
from idle_planner.domain.services.candidate_selector import rank_candidates, select_best

log = structlog.get_logger()


class MaintenancePlanner:
    """Aggregates analyzer output and selects the single best candidate.

    Pure and synchronous: no state is kept between calls, so one planner can
    serve many snapshots. Candidates from different analyzers are not
    deduplicated against each other.
    """

    def __init__(self, registry: AnalyzerRegistry | None = None) -> None:
        self._registry = registry or create_default_registry()

    @property
    def registry(self) -> AnalyzerRegistry:
        return self._registry

    def run_analyzers(self, analysis: ProjectAnalysis) -> list[AnalyzerRun]:
        """Run each registered analyzer once, in registry order."""
        runs: list[AnalyzerRun] = []
        for analyzer in self._registry.analyzers():
            candidates = analyzer.analyze(analysis)
            log.debug(
                "analyzer_completed",
                analyzer=analyzer.type.value,
                candidates=len(candidates),
            )
            runs.append(AnalyzerRun(analyzer_type=analyzer.type.value, candidates=candidates))
        return runs

    def collect(self, analysis: ProjectAnalysis) -> list[TaskCandidate]:
        """All candidates from all analyzers, concatenated."""
        return [c for run in self.run_analyzers(analysis) for c in run.candidates]

    def select(self, candidates: list[TaskCandidate]) -> TaskCandidate | None:
        """Best candidate by score, then priority rank, then candidate id."""
        return select_best(candidates)

    def rank(self, analysis: ProjectAnalysis) -> list[TaskCandidate]:
        """All candidates best-first."""
        return rank_candidates(self.collect(analysis))

    def plan(self, analysis: ProjectAnalysis) -> PlanResult:
        """Analyze the snapshot and choose one task."""
        log.info("plan_started", analyzers=self._registry.list_types())

        runs = self.run_analyzers(analysis)
        candidates = [c for run in runs for c in run.candidates]
        counts = {run.analyzer_type: len(run.candidates) for run in runs}
        selected = self.select(candidates)

        log.info(
            "plan_completed",
            candidates=len(candidates),
            selected=selected.candidate_id if selected else None,
            score=selected.score if selected else None,
        )
        return PlanResult(selected=selected, candidates=candidates, counts=counts)

"""Candidate selector - pick the single best candidate from a ranked pool."""

from collections.abc import Iterable, Sequence

from idle_planner.domain.entities.candidate import PRIORITY_RANK, TaskCandidate


def ranking_key(candidate: TaskCandidate) -> tuple[float, int, str]:
    """Sort key: lower sorts first.

    Score descending, then priority rank descending, then candidate id
    ascending. Python's stable sort keeps input order for full ties.
    """
    return (-candidate.score, -PRIORITY_RANK[candidate.priority], candidate.candidate_id)


def rank_candidates(candidates: Iterable[TaskCandidate]) -> list[TaskCandidate]:
    """Return candidates best-first."""
    return sorted(candidates, key=ranking_key)


def select_best(candidates: Sequence[TaskCandidate]) -> TaskCandidate | None:
    """Return the best candidate, or None for an empty pool."""
    if not candidates:
        return None
    return min(candidates, key=ranking_key)

"""Planning API - pick the next idle-time maintenance task for a project snapshot."""

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel

from idle_planner.api.dependencies import get_planner, limiter, plan_rate_limit
from idle_planner.application.planning.use_case import MaintenancePlanner
from idle_planner.domain.entities.candidate import TaskCandidate
from idle_planner.domain.entities.snapshot import ProjectAnalysis

router = APIRouter(prefix="/plan", tags=["plan"])


class PlanResponse(BaseModel):
    """Selected task plus everything it was chosen from."""

    selected: TaskCandidate | None
    candidates: list[TaskCandidate]
    counts: dict[str, int]


class CandidatesResponse(BaseModel):
    """All candidates, best first."""

    candidates: list[TaskCandidate]
    total: int


class AnalyzersResponse(BaseModel):
    analyzers: list[str]


@router.post("", response_model=PlanResponse)
@limiter.limit(plan_rate_limit)
async def plan(
    request: Request,
    analysis: ProjectAnalysis,
    planner: MaintenancePlanner = Depends(get_planner),
) -> PlanResponse:
    """Run all enabled analyzers and return the best candidate.

    selected is null when the snapshot gives no analyzer anything to do.
    """
    result = planner.plan(analysis)
    return PlanResponse(
        selected=result.selected,
        candidates=result.candidates,
        counts=result.counts,
    )


@router.post("/candidates", response_model=CandidatesResponse)
@limiter.limit(plan_rate_limit)
async def ranked_candidates(
    request: Request,
    analysis: ProjectAnalysis,
    planner: MaintenancePlanner = Depends(get_planner),
) -> CandidatesResponse:
    """All candidates ranked by score, priority, then id."""
    ranked = planner.rank(analysis)
    return CandidatesResponse(candidates=ranked, total=len(ranked))


@router.get("/analyzers", response_model=AnalyzersResponse)
async def list_analyzers(planner: MaintenancePlanner = Depends(get_planner)) -> AnalyzersResponse:
    return AnalyzersResponse(analyzers=planner.registry.list_types())

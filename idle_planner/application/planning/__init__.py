"""Planning application layer."""

from idle_planner.application.planning.dto import AnalyzerRun, PlanResult
from idle_planner.application.planning.use_case import MaintenancePlanner

__all__ = ["AnalyzerRun", "PlanResult", "MaintenancePlanner"]

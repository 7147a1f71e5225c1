"""Validate planner settings at startup."""

import structlog

from idle_planner.application.analyzers.package_managers import PACKAGE_MANAGERS
from idle_planner.domain.entities.candidate import AnalyzerType
from idle_planner.domain.ports.config import AppConfig

log = structlog.get_logger()


def validate_planner_config(config: AppConfig) -> list[str]:
    """Log warnings for analyzer or package manager names nobody implements.

    Does not fail startup: unknown analyzers are skipped by the registry and an
    unknown package manager falls back to npm. Returns the problems found.
    """
    planner = config.planner
    known = {t.value for t in AnalyzerType}
    problems: list[str] = []

    names = [name.strip().lower() for name in planner.enabled_analyzers]
    unknown = [raw for raw, name in zip(planner.enabled_analyzers, names) if name not in known]
    if unknown:
        problems.append(f"unknown analyzers: {', '.join(unknown)}")
        log.warning(
            "unknown_analyzers_configured",
            unknown=unknown,
            available=sorted(known),
            hint="Fix [planner].enabled_analyzers in development.toml",
        )

    if not any(name in known for name in names):
        problems.append("no analyzers enabled")
        log.warning("no_analyzers_enabled", configured=planner.enabled_analyzers)

    if planner.package_manager.strip().lower() not in PACKAGE_MANAGERS:
        problems.append(f"unknown package manager: {planner.package_manager}")
        log.warning(
            "unknown_package_manager_configured",
            package_manager=planner.package_manager,
            available=sorted(PACKAGE_MANAGERS),
            fallback="npm",
        )

    if not problems:
        log.debug(
            "planner_config_ok",
            analyzers=planner.enabled_analyzers,
            package_manager=planner.package_manager,
        )
    return problems

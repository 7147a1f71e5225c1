"""Refactoring analyzer - complexity hotspots, duplication, code smells and lint debt.

Hotspots are ranked with a weighted score over three metrics, each normalised
against its critical threshold:

    0.40 * cyclomatic + 0.35 * cognitive + 0.25 * line count

plus a bonus when both cyclomatic and cognitive complexity are high or worse.
"""

from dataclasses import dataclass
from pathlib import PurePosixPath

from idle_planner.application.analyzers.base import (
    BaseAnalyzer,
    pluralize,
    preview,
    sanitize_id,
)
from idle_planner.domain.entities.candidate import (
    AnalyzerType,
    RemediationSuggestion,
    SuggestionPriority,
    SuggestionType,
    TaskCandidate,
    TaskEffort,
    TaskPriority,
)
from idle_planner.domain.entities.snapshot import (
    CodeSmell,
    ComplexityHotspot,
    DuplicatePattern,
    ProjectAnalysis,
)

WORKFLOW = "refactoring"

LEVELS = ("low", "medium", "high", "critical")


@dataclass(frozen=True)
class Thresholds:
    """Upper bounds (exclusive) of the low, medium and high bands."""

    medium: int
    high: int
    critical: int

    def classify(self, value: float) -> str:
        if value > self.critical:
            return "critical"
        if value > self.high:
            return "high"
        if value > self.medium:
            return "medium"
        return "low"


CYCLOMATIC = Thresholds(medium=20, high=30, critical=50)
COGNITIVE = Thresholds(medium=25, high=40, critical=60)
LINE_COUNT = Thresholds(medium=500, high=1000, critical=2000)

WEIGHT_CYCLOMATIC = 0.40
WEIGHT_COGNITIVE = 0.35
WEIGHT_LINES = 0.25
COMBINED_COMPLEXITY_BONUS = 0.15

HOTSPOT_BASE_SCORE = 0.6
HOTSPOT_SCORE_SPAN = 0.35
HOTSPOT_MAX_SCORE = 0.95
SWEEP_ABOVE = 3

LEVEL_TO_PRIORITY = {
    "critical": TaskPriority.URGENT,
    "high": TaskPriority.HIGH,
    "medium": TaskPriority.NORMAL,
    "low": TaskPriority.LOW,
}

# smell severity -> (priority, effort, score)
SMELL_RULES: dict[str, tuple[TaskPriority, TaskEffort, float]] = {
    "critical": (TaskPriority.URGENT, TaskEffort.HIGH, 0.85),
    "high": (TaskPriority.HIGH, TaskEffort.HIGH, 0.75),
    "medium": (TaskPriority.NORMAL, TaskEffort.MEDIUM, 0.6),
    "low": (TaskPriority.LOW, TaskEffort.LOW, 0.4),
}

# smell type -> (title, rationale)
SMELL_INFO: dict[str, tuple[str, str]] = {
    "long-method": ("Refactor Long Method", "Long methods reduce readability and maintainability"),
    "large-class": ("Break Down Large Class", "Large classes take on too many responsibilities"),
    "deep-nesting": ("Reduce Deep Nesting", "Deep nesting makes code difficult to understand and test"),
    "duplicate-code": ("Eliminate Code Duplication", "Duplicate code increases maintenance burden and bug risk"),
    "dead-code": ("Remove Dead Code", "Dead code clutters the codebase and confuses readers"),
    "magic-numbers": ("Replace Magic Numbers", "Magic numbers hide intent and are easy to get wrong"),
    "feature-envy": ("Fix Feature Envy", "Feature envy indicates poor method placement and weak cohesion"),
    "data-clumps": ("Consolidate Data Clumps", "Data clumps indicate missing abstractions"),
}

SMELL_ACTIONS: dict[str, str] = {
    "long-method": "Break the method into smaller, focused functions",
    "large-class": "Split the class along its responsibilities",
    "deep-nesting": "Use early returns and guard clauses to flatten control flow",
    "duplicate-code": "Extract the shared logic into a reusable function",
    "dead-code": "Delete unused functions, variables and imports",
    "magic-numbers": "Replace literals with named constants",
    "feature-envy": "Move the method closer to the data it uses",
    "data-clumps": "Introduce a parameter object for the grouped values",
}

LINT_RULES: tuple[tuple[int, TaskPriority, TaskEffort, float], ...] = (
    (200, TaskPriority.HIGH, TaskEffort.HIGH, 0.7),
    (50, TaskPriority.NORMAL, TaskEffort.MEDIUM, 0.5),
    (10, TaskPriority.LOW, TaskEffort.LOW, 0.3),
)


@dataclass(frozen=True)
class HotspotSeverity:
    cyclomatic: str
    cognitive: str
    lines: str

    @property
    def overall(self) -> str:
        return max((self.cyclomatic, self.cognitive, self.lines), key=LEVELS.index)

    @property
    def combined_high(self) -> bool:
        """Both cyclomatic and cognitive complexity are high or critical."""
        return _at_least_high(self.cyclomatic) and _at_least_high(self.cognitive)


def _at_least_high(level: str) -> bool:
    return LEVELS.index(level) >= LEVELS.index("high")


def hotspot_severity(hotspot: ComplexityHotspot) -> HotspotSeverity:
    return HotspotSeverity(
        cyclomatic=CYCLOMATIC.classify(hotspot.cyclomatic_complexity),
        cognitive=COGNITIVE.classify(hotspot.cognitive_complexity),
        lines=LINE_COUNT.classify(hotspot.line_count),
    )


def hotspot_priority_score(hotspot: ComplexityHotspot) -> float:
    """Weighted complexity score in [0, 1], above 1.0 only with the combined bonus."""
    score = (
        WEIGHT_CYCLOMATIC * _clamp_unit(hotspot.cyclomatic_complexity / CYCLOMATIC.critical)
        + WEIGHT_COGNITIVE * _clamp_unit(hotspot.cognitive_complexity / COGNITIVE.critical)
        + WEIGHT_LINES * _clamp_unit(hotspot.line_count / LINE_COUNT.critical)
    )
    if hotspot_severity(hotspot).combined_high:
        score += COMBINED_COMPLEXITY_BONUS
    return score


def hotspot_recommendations(severity: HotspotSeverity) -> list[str]:
    recommendations: list[str] = []
    if _at_least_high(severity.cyclomatic):
        recommendations.append("Extract methods to reduce branching complexity")
        recommendations.append("Simplify nested control structures using early returns")
    if _at_least_high(severity.cognitive):
        recommendations.append("Flatten control flow to improve readability")
        recommendations.append("Extract helper functions for complex logic blocks")
    if _at_least_high(severity.lines):
        recommendations.append("Split into multiple modules by responsibility")
    if severity.combined_high:
        recommendations.append("Consider a larger restructuring into smaller, focused modules")
    if not recommendations:
        recommendations.append("Review for potential simplification opportunities")
    return recommendations


def _clamp_unit(value: float) -> float:
    return min(1.0, max(0.0, value))


def _basename(path: str) -> str:
    return PurePosixPath(path).name or path


class RefactoringAnalyzer(BaseAnalyzer):
    """Refactoring strategy: one candidate per hotspot, duplicate pattern and smell."""

    @property
    def type(self) -> AnalyzerType:
        return AnalyzerType.REFACTORING

    def analyze(self, analysis: ProjectAnalysis) -> list[TaskCandidate]:
        quality = analysis.code_quality
        candidates: list[TaskCandidate] = []
        candidates.extend(self._hotspot_candidates(quality.complexity_hotspots))
        candidates.extend(self._duplicate_candidates(quality.duplicated_code))
        candidates.extend(self._smell_candidates(quality.code_smells))
        if quality.lint_issues > 0:
            candidates.append(self._lint_candidate(quality.lint_issues))
        return candidates

    # --- Complexity ---

    def _hotspot_candidates(self, hotspots: list[ComplexityHotspot]) -> list[TaskCandidate]:
        scored = sorted(
            ((hotspot_priority_score(h), h) for h in hotspots),
            key=lambda pair: (
                -pair[0],
                pair[1].file,
                pair[1].cyclomatic_complexity,
                pair[1].cognitive_complexity,
                pair[1].line_count,
            ),
        )
        candidates = [
            self._hotspot_task(index, hotspot, priority_score)
            for index, (priority_score, hotspot) in enumerate(scored)
        ]

        if len(scored) > SWEEP_ABOVE:
            critical = sum(1 for _, h in scored if hotspot_severity(h).overall == "critical")
            description = f"Systematic refactoring of {len(scored)} complexity hotspots"
            if critical:
                description += f" ({critical} critical)"
            candidates.append(
                self.create_candidate(
                    self.prefixed_id("complexity-sweep"),
                    "Address Codebase Complexity",
                    description,
                    priority=TaskPriority.HIGH if critical else TaskPriority.NORMAL,
                    effort=TaskEffort.HIGH,
                    workflow=WORKFLOW,
                    rationale="Multiple complexity hotspots indicate systemic code quality issues",
                    score=0.55,
                    remediation_suggestions=self._common_suggestions("the most complex modules"),
                )
            )
        return candidates

    def _hotspot_task(self, index: int, hotspot: ComplexityHotspot, priority_score: float) -> TaskCandidate:
        severity = hotspot_severity(hotspot)
        overall = severity.overall

        description = (
            f"Reduce complexity in {hotspot.file}: "
            f"cyclomatic {hotspot.cyclomatic_complexity} ({severity.cyclomatic}), "
            f"cognitive {hotspot.cognitive_complexity} ({severity.cognitive}), "
            f"{hotspot.line_count} lines ({severity.lines})"
        )
        if severity.combined_high:
            description += ". High cyclomatic and cognitive complexity together call for a major refactoring"

        recommendations = hotspot_recommendations(severity)
        rationale = f"Overall complexity is {overall}. Recommended actions: " + "; ".join(recommendations)

        return self.create_candidate(
            self.prefixed_id(f"complexity-hotspot-{index}"),
            f"Refactor {_basename(hotspot.file)}",
            description,
            priority=LEVEL_TO_PRIORITY[overall],
            effort=TaskEffort.HIGH if _at_least_high(overall) else TaskEffort.MEDIUM,
            workflow=WORKFLOW,
            rationale=rationale,
            score=_clamp_unit(min(HOTSPOT_MAX_SCORE, HOTSPOT_BASE_SCORE + HOTSPOT_SCORE_SPAN * priority_score)),
            remediation_suggestions=self._common_suggestions(hotspot.file),
        )

    # --- Duplication ---

    def _duplicate_candidates(self, patterns: list[DuplicatePattern]) -> list[TaskCandidate]:
        ordered = sorted(
            patterns,
            key=lambda p: (-_clamp_unit(p.similarity), p.pattern, tuple(sorted(p.locations))),
        )
        return [self._duplicate_task(index, pattern) for index, pattern in enumerate(ordered)]

    def _duplicate_task(self, index: int, pattern: DuplicatePattern) -> TaskCandidate:
        similarity = _clamp_unit(pattern.similarity)
        locations = sorted(set(pattern.locations))
        count = len(locations)
        if count <= 2:
            effort = TaskEffort.LOW
        elif count <= 5:
            effort = TaskEffort.MEDIUM
        else:
            effort = TaskEffort.HIGH

        return self.create_candidate(
            self.prefixed_id(f"duplicated-code-{index}"),
            "Eliminate Duplicated Code",
            f"Consolidate a pattern repeated in {count} {pluralize(count, 'location')} "
            f"({similarity:.0%} similar): {preview(locations, more_suffix=True)}",
            priority=TaskPriority.HIGH if similarity >= 0.9 else TaskPriority.NORMAL,
            effort=effort,
            workflow=WORKFLOW,
            rationale="Duplicated code increases maintenance burden and bug risk when changes are needed",
            score=min(0.9, 0.6 + 0.3 * similarity),
            remediation_suggestions=self._common_suggestions("each duplicated location"),
        )

    # --- Code smells ---

    def _smell_candidates(self, smells: list[CodeSmell]) -> list[TaskCandidate]:
        # Indexed per id slug so types differing only in punctuation keep distinct ids
        by_slug: dict[str, list[CodeSmell]] = {}
        for smell in smells:
            by_slug.setdefault(sanitize_id(smell.type), []).append(smell)

        candidates: list[TaskCandidate] = []
        for slug in sorted(by_slug):
            ordered = sorted(by_slug[slug], key=lambda s: (s.type, s.file, s.details, s.severity))
            candidates.extend(
                self._smell_task(smell.type, index, smell) for index, smell in enumerate(ordered)
            )
        return candidates

    def _smell_task(self, smell_type: str, index: int, smell: CodeSmell) -> TaskCandidate:
        level = smell.severity.strip().lower()
        if level not in SMELL_RULES:
            level = "low"
        priority, effort, score = SMELL_RULES[level]
        title, rationale = SMELL_INFO.get(
            smell_type,
            (f"Fix {smell_type} Code Smell", f"Code smell '{smell_type}' reduces code quality"),
        )

        description = f"{title} in {smell.file}"
        if smell.details:
            description += f": {smell.details}"

        suggestions = [
            RemediationSuggestion(
                type=SuggestionType.MANUAL_REVIEW,
                description=SMELL_ACTIONS.get(smell_type, f"Review and refactor the {smell_type} in {smell.file}"),
                priority=SuggestionPriority(level),
                expected_outcome=f"{_basename(smell.file)} no longer shows the {smell_type} smell",
            ),
            self._testing_reminder(smell.file),
        ]

        return self.create_candidate(
            self.prefixed_id(f"code-smell-{sanitize_id(smell_type)}-{index}"),
            title,
            description,
            priority=priority,
            effort=effort,
            workflow=WORKFLOW,
            rationale=rationale,
            score=score,
            remediation_suggestions=suggestions,
        )

    # --- Lint ---

    def _lint_candidate(self, issue_count: int) -> TaskCandidate:
        priority, effort, score = TaskPriority.LOW, TaskEffort.LOW, 0.2
        for above, rule_priority, rule_effort, rule_score in LINT_RULES:
            if issue_count > above:
                priority, effort, score = rule_priority, rule_effort, rule_score
                break

        return self.create_candidate(
            self.prefixed_id("lint-issues"),
            "Fix Linting Issues",
            f"Address {issue_count} linting {pluralize(issue_count, 'issue')} in the codebase",
            priority=priority,
            effort=effort,
            workflow=WORKFLOW,
            rationale="Linting issues indicate code quality problems that could lead to bugs",
            score=score,
            remediation_suggestions=self._common_suggestions("files with lint warnings"),
        )

    # --- Suggestions ---

    def _common_suggestions(self, target: str) -> list[RemediationSuggestion]:
        return [
            RemediationSuggestion(
                type=SuggestionType.MANUAL_REVIEW,
                description=f"Review {target} and plan the refactoring in small steps",
                priority=SuggestionPriority.MEDIUM,
                expected_outcome="A refactoring plan that keeps behaviour unchanged",
            ),
            self._testing_reminder(target),
        ]

    def _testing_reminder(self, target: str) -> RemediationSuggestion:
        return RemediationSuggestion(
            type=SuggestionType.TESTING_REMINDER,
            description=f"Run the test suite before and after refactoring {target}",
            priority=SuggestionPriority.MEDIUM,
            expected_outcome="Behaviour preserved across the refactoring",
        )

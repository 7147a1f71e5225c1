"""Documentation analyzer - coverage gaps, stale docs, exports, README and API completeness."""

import logging
import re
from dataclasses import dataclass
from pathlib import PurePosixPath

from idle_planner.application.analyzers.base import BaseAnalyzer, pluralize, preview
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
    APICompleteness,
    MissingReadmeSection,
    OutdatedDocumentation,
    ProjectAnalysis,
    UndocumentedExport,
)

logger = logging.getLogger(__name__)

WORKFLOW = "documentation"

CRITICAL_COVERAGE_BELOW = 20.0
IMPROVE_COVERAGE_BELOW = 50.0
MISSING_DOCS_REPORT_ABOVE = 5
MISSING_DOCS_HIGH_EFFORT_ABOVE = 10
CORE_MODULE_PATTERN = re.compile(r"index|core|main|api|service", re.IGNORECASE)

CRITICAL_TYPE_KINDS = frozenset({"class", "interface", "type", "enum"})
OTHER_EXPORTS_REPORT_ABOVE = 5
OPTIONAL_SECTIONS_REPORT_ABOVE = 2

API_CRITICAL_BELOW = 30.0
API_IMPROVE_BELOW = 60.0
API_COMPLETE_BELOW = 80.0

TIERS = ("high", "medium", "low")

# tier -> (id suffix, priority, effort, score)
TIER_RULES: dict[str, tuple[str, TaskPriority, TaskEffort, float]] = {
    "high": ("-critical", TaskPriority.HIGH, TaskEffort.MEDIUM, 0.8),
    "medium": ("-medium", TaskPriority.NORMAL, TaskEffort.LOW, 0.6),
    "low": ("", TaskPriority.LOW, TaskEffort.LOW, 0.4),
}


@dataclass(frozen=True)
class OutdatedDocRule:
    """Wording for one outdated-documentation category, per severity tier."""

    doc_type: str
    slug: str
    noun: str
    plural: str
    titles: dict[str, str]
    descriptions: dict[str, str]
    rationales: dict[str, str]


OUTDATED_DOC_RULES: tuple[OutdatedDocRule, ...] = (
    OutdatedDocRule(
        doc_type="stale-reference",
        slug="resolve-stale-comments",
        noun="stale comment",
        plural="stale comments",
        titles={
            "high": "Resolve Critical Stale Comments",
            "medium": "Resolve Stale Comments",
            "low": "Review Stale Comments",
        },
        descriptions={
            "high": "Resolve {count} critical {noun} older than 90 days",
            "medium": "Resolve {count} {noun} older than 60 days",
            "low": "Review {count} {noun} older than 30 days",
        },
        rationales={
            "high": "Long-forgotten TODO and FIXME comments hide unfinished work and mislead readers",
            "medium": "Stale comments should be resolved or removed before they become misleading",
            "low": "Regular review of stale comments keeps technical debt visible",
        },
    ),
    OutdatedDocRule(
        doc_type="version-mismatch",
        slug="fix-version-mismatches",
        noun="version mismatch",
        plural="version mismatches",
        titles={
            "high": "Fix Critical Version Mismatches",
            "medium": "Fix Version Mismatches",
            "low": "Review Version References",
        },
        descriptions={
            "high": "Fix {count} critical {noun} between documentation and package metadata",
            "medium": "Fix {count} {noun} between documentation and package metadata",
            "low": "Review {count} {noun} in documentation",
        },
        rationales={
            "high": "Version mismatches cause confusion and lead users to install the wrong release",
            "medium": "Version mismatches should be resolved to keep documentation accurate",
            "low": "Regular review of version references prevents documentation drift",
        },
    ),
    OutdatedDocRule(
        doc_type="broken-link",
        slug="fix-broken-links",
        noun="broken link",
        plural="broken links",
        titles={
            "high": "Fix Critical Broken Links",
            "medium": "Fix Broken Documentation Links",
            "low": "Review Documentation Links",
        },
        descriptions={
            "high": "Fix {count} critical {noun} in API documentation",
            "medium": "Fix {count} {noun} in documentation",
            "low": "Review {count} {noun} in documentation",
        },
        rationales={
            "high": "Broken @see tags and cross-references to core APIs block navigation",
            "medium": "Broken links reduce documentation usability",
            "low": "Regular review of documentation links keeps references healthy",
        },
    ),
    OutdatedDocRule(
        doc_type="deprecated-api",
        slug="fix-deprecated-api-docs",
        noun="@deprecated tag",
        plural="@deprecated tags",
        titles={
            "high": "Document Critical Deprecated APIs",
            "medium": "Improve Deprecated API Documentation",
            "low": "Review Deprecated API Tags",
        },
        descriptions={
            "high": "Document {count} critical {noun} that lack migration guidance",
            "medium": "Improve {count} {noun} that lack replacement details",
            "low": "Review {count} {noun} for clarity",
        },
        rationales={
            "high": "Deprecated APIs without guidance make migration difficult for users",
            "medium": "Deprecated APIs need clear alternatives and migration paths",
            "low": "Deprecation notices should give adequate guidance to users",
        },
    ),
)


def _export_label(item: UndocumentedExport) -> str:
    return f"{item.name} ({item.type})"


def _export_key(item: UndocumentedExport) -> tuple[str, str, int]:
    return (item.file, item.name, item.line or 0)


def _export_effort(count: int) -> TaskEffort:
    if count <= 5:
        return TaskEffort.LOW
    if count <= 15:
        return TaskEffort.MEDIUM
    return TaskEffort.HIGH


def _readme_effort(count: int) -> TaskEffort:
    if count <= 2:
        return TaskEffort.LOW
    if count <= 4:
        return TaskEffort.MEDIUM
    return TaskEffort.HIGH


def _api_effort(count: int) -> TaskEffort:
    if count <= 10:
        return TaskEffort.LOW
    if count <= 25:
        return TaskEffort.MEDIUM
    return TaskEffort.HIGH


class DocsAnalyzer(BaseAnalyzer):
    """Documentation strategy.

    Each rule group fires at most one candidate: the highest applicable tier.
    """

    @property
    def type(self) -> AnalyzerType:
        return AnalyzerType.DOCS

    def analyze(self, analysis: ProjectAnalysis) -> list[TaskCandidate]:
        docs = analysis.documentation
        candidates: list[TaskCandidate] = []
        candidates.extend(self._coverage_candidates(docs.coverage))
        candidates.extend(self._missing_file_candidates(docs.missing_docs))
        candidates.extend(self._outdated_doc_candidates(docs.outdated_docs))
        candidates.extend(self._export_candidates(docs.undocumented_exports))
        candidates.extend(self._readme_candidates(docs.missing_readme_sections))
        candidates.extend(self._api_candidates(docs.api_completeness))
        logger.debug("Docs analysis produced %d candidates", len(candidates))
        return candidates

    # --- Coverage and missing files ---

    def _coverage_candidates(self, coverage: float) -> list[TaskCandidate]:
        if coverage < CRITICAL_COVERAGE_BELOW:
            return [
                self.create_candidate(
                    self.prefixed_id("critical-docs"),
                    "Critical: Add Missing Documentation",
                    f"Documentation coverage is critically low at {coverage:.1f}%. "
                    "Document core modules and public APIs first.",
                    priority=TaskPriority.HIGH,
                    effort=TaskEffort.HIGH,
                    workflow=WORKFLOW,
                    rationale="Very low documentation coverage makes the codebase hard to use and maintain",
                    score=0.9,
                    remediation_suggestions=[
                        self._pointer("Add module and function documentation starting with entry points"),
                        self._review("Identify the most used modules that lack documentation"),
                    ],
                )
            ]
        if coverage < IMPROVE_COVERAGE_BELOW:
            return [
                self.create_candidate(
                    self.prefixed_id("improve-docs-coverage"),
                    "Improve Documentation Coverage",
                    f"Improve documentation coverage from {coverage:.1f}% to at least 50%",
                    priority=TaskPriority.LOW,
                    effort=TaskEffort.MEDIUM,
                    workflow=WORKFLOW,
                    rationale="Better documentation coverage eases onboarding and reduces support load",
                    score=0.4,
                    remediation_suggestions=[
                        self._pointer("Document the undocumented modules with the most dependents"),
                    ],
                )
            ]
        return []

    def _missing_file_candidates(self, missing_docs: list[str]) -> list[TaskCandidate]:
        candidates: list[TaskCandidate] = []
        paths = sorted(set(missing_docs))

        core_files = [p for p in paths if CORE_MODULE_PATTERN.search(p)]
        if core_files:
            count = len(core_files)
            names = [PurePosixPath(p).name for p in core_files]
            candidates.append(
                self.create_candidate(
                    self.prefixed_id("core-module-docs"),
                    "Document Core Modules",
                    f"Add documentation to {count} core {pluralize(count, 'module')}: {preview(names)}",
                    priority=TaskPriority.NORMAL,
                    effort=TaskEffort.MEDIUM,
                    workflow=WORKFLOW,
                    rationale="Core modules are entry points for most readers and deserve documentation first",
                    score=0.7,
                    remediation_suggestions=[
                        self._pointer(f"Add module-level documentation to {preview(core_files)}"),
                    ],
                )
            )

        if len(paths) > MISSING_DOCS_REPORT_ABOVE:
            count = len(paths)
            candidates.append(
                self.create_candidate(
                    self.prefixed_id("missing-docs"),
                    "Add Missing Documentation Files",
                    f"Add documentation for {count} undocumented files",
                    priority=TaskPriority.LOW,
                    effort=TaskEffort.HIGH if count > MISSING_DOCS_HIGH_EFFORT_ABOVE else TaskEffort.MEDIUM,
                    workflow=WORKFLOW,
                    rationale="Undocumented files slow down maintenance and code review",
                    score=0.5,
                    remediation_suggestions=[
                        self._pointer(f"Document files in batches, starting with {preview(paths)}"),
                    ],
                )
            )
        return candidates

    # --- Outdated documentation ---

    def _outdated_doc_candidates(self, outdated: list[OutdatedDocumentation]) -> list[TaskCandidate]:
        candidates: list[TaskCandidate] = []
        for rule in OUTDATED_DOC_RULES:
            items = [d for d in outdated if d.type == rule.doc_type]
            if not items:
                continue
            by_tier: dict[str, list[OutdatedDocumentation]] = {tier: [] for tier in TIERS}
            for item in items:
                by_tier.get(item.severity.strip().lower(), by_tier["low"]).append(item)
            tier = next(t for t in TIERS if by_tier[t])
            candidates.append(self._outdated_doc_task(rule, tier, by_tier[tier]))
        return candidates

    def _outdated_doc_task(
        self, rule: OutdatedDocRule, tier: str, items: list[OutdatedDocumentation]
    ) -> TaskCandidate:
        suffix, priority, effort, score = TIER_RULES[tier]
        count = len(items)
        noun = pluralize(count, rule.noun, rule.plural)
        files = sorted({d.file for d in items})
        description = rule.descriptions[tier].format(count=count, noun=noun)
        description += f". Affected files: {preview(files)}"

        suggestions = [self._pointer(f"Update documentation in {preview(files)}")]
        hints = sorted({d.suggestion for d in items if d.suggestion})
        if hints:
            suggestions.append(self._review(preview(hints, more_suffix=True)))

        return self.create_candidate(
            self.prefixed_id(f"{rule.slug}{suffix}"),
            rule.titles[tier],
            description,
            priority=priority,
            effort=effort,
            workflow=WORKFLOW,
            rationale=rule.rationales[tier],
            score=score,
            remediation_suggestions=suggestions,
        )

    # --- Undocumented exports ---

    def _export_candidates(self, exports: list[UndocumentedExport]) -> list[TaskCandidate]:
        ordered = sorted(exports, key=_export_key)
        public = [e for e in ordered if e.is_public]
        critical_types = [e for e in ordered if not e.is_public and e.type in CRITICAL_TYPE_KINDS]
        others = [e for e in ordered if not e.is_public and e.type not in CRITICAL_TYPE_KINDS]

        if public:
            count = len(public)
            return [
                self._export_task(
                    "undocumented-public-exports",
                    "Document Public API Exports",
                    f"Add documentation to {count} public API {pluralize(count, 'export')}",
                    public,
                    priority=TaskPriority.HIGH,
                    score=0.85,
                    rationale="Public APIs are user-facing and need documentation for correct usage",
                )
            ]
        if critical_types:
            count = len(critical_types)
            return [
                self._export_task(
                    "undocumented-critical-types",
                    "Document Core Type Exports",
                    f"Add documentation to {count} core type {pluralize(count, 'export')}",
                    critical_types,
                    priority=TaskPriority.NORMAL,
                    score=0.65,
                    rationale="Classes and interfaces define contracts that other code relies on",
                )
            ]
        if len(others) > OTHER_EXPORTS_REPORT_ABOVE:
            return [
                self._export_task(
                    "undocumented-exports",
                    "Add Docstrings to Undocumented Exports",
                    f"Document {len(others)} undocumented exports",
                    others,
                    priority=TaskPriority.LOW,
                    score=0.45,
                    rationale="Documented exports make internal code easier to reuse",
                )
            ]
        return []

    def _export_task(
        self,
        slug: str,
        title: str,
        summary: str,
        exports: list[UndocumentedExport],
        *,
        priority: TaskPriority,
        score: float,
        rationale: str,
    ) -> TaskCandidate:
        labels = [_export_label(e) for e in exports]
        return self.create_candidate(
            self.prefixed_id(slug),
            title,
            f"{summary}: {preview(labels, more_suffix=True)}",
            priority=priority,
            effort=_export_effort(len(exports)),
            workflow=WORKFLOW,
            rationale=rationale,
            score=score,
            remediation_suggestions=[
                self._pointer(f"Add docstrings to {preview(sorted({e.file for e in exports}))}"),
            ],
        )

    # --- README ---

    def _readme_candidates(self, sections: list[MissingReadmeSection]) -> list[TaskCandidate]:
        by_priority: dict[str, list[str]] = {"required": [], "recommended": [], "optional": []}
        for item in sorted(sections, key=lambda s: s.section):
            by_priority.get(item.priority.strip().lower(), by_priority["optional"]).append(item.section)

        if by_priority["required"]:
            return [
                self._readme_task(
                    "required", "Add Required README Sections", by_priority["required"],
                    TaskPriority.HIGH, 0.8,
                    "Required README sections are essential for anyone installing or using the project",
                )
            ]
        if by_priority["recommended"]:
            return [
                self._readme_task(
                    "recommended", "Add Recommended README Sections", by_priority["recommended"],
                    TaskPriority.NORMAL, 0.55,
                    "Recommended README sections help contributors and users find their way",
                )
            ]
        if len(by_priority["optional"]) > OPTIONAL_SECTIONS_REPORT_ABOVE:
            return [
                self._readme_task(
                    "optional", "Enhance README with Additional Sections", by_priority["optional"],
                    TaskPriority.LOW, 0.35,
                    "Optional README sections round out the project documentation",
                )
            ]
        return []

    def _readme_task(
        self,
        level: str,
        title: str,
        sections: list[str],
        priority: TaskPriority,
        score: float,
        rationale: str,
    ) -> TaskCandidate:
        count = len(sections)
        return self.create_candidate(
            self.prefixed_id(f"readme-{level}-sections"),
            title,
            f"Add {count} {level} README {pluralize(count, 'section')}: {preview(sections, more_suffix=True)}",
            priority=priority,
            effort=_readme_effort(count),
            workflow=WORKFLOW,
            rationale=rationale,
            score=score,
            remediation_suggestions=[self._pointer("Extend README.md with the missing sections")],
        )

    # --- API completeness ---

    def _api_candidates(self, api: APICompleteness | None) -> list[TaskCandidate]:
        if api is None:
            return []
        percentage = api.percentage
        items = api.details.undocumented_items
        issues = api.details.common_issues
        count = len(items)
        effort = _api_effort(count)
        item_names = sorted(i.name for i in items)

        if percentage < API_CRITICAL_BELOW:
            return [
                self._api_task(
                    "critical", "Document Critical API Surface",
                    f"API documentation coverage is {percentage:.1f}%. Document {count} API {pluralize(count, 'item')}",
                    item_names, TaskPriority.HIGH, effort, 0.75,
                    "Low API coverage indicates major gaps in what users can learn without reading the code",
                )
            ]
        if percentage < API_IMPROVE_BELOW:
            return [
                self._api_task(
                    "improvement", "Improve API Documentation Coverage",
                    f"API documentation coverage is {percentage:.1f}%. Document {count} API {pluralize(count, 'item')}",
                    item_names, TaskPriority.NORMAL, effort, 0.55,
                    "Partial API documentation leaves users guessing about behaviour",
                )
            ]
        if percentage < API_COMPLETE_BELOW and items:
            return [
                self._api_task(
                    "completion", "Complete API Documentation",
                    f"API documentation coverage is {percentage:.1f}%. Document the remaining {count} API {pluralize(count, 'item')}",
                    item_names, TaskPriority.LOW, effort, 0.4,
                    "Closing the last gaps gives the project complete API documentation",
                )
            ]
        if issues:
            return [
                self._api_task(
                    "quality", "Address API Documentation Quality Issues",
                    f"Fix {len(issues)} common API documentation {pluralize(len(issues), 'issue')}: "
                    f"{preview(issues, more_suffix=True)}",
                    [], TaskPriority.LOW, effort, 0.3,
                    "Documentation quality issues reduce the value of existing API docs",
                )
            ]
        return []

    def _api_task(
        self,
        level: str,
        title: str,
        description: str,
        item_names: list[str],
        priority: TaskPriority,
        effort: TaskEffort,
        score: float,
        rationale: str,
    ) -> TaskCandidate:
        if item_names:
            description += f": {preview(item_names, more_suffix=True)}"
        return self.create_candidate(
            self.prefixed_id(f"api-docs-{level}"),
            title,
            description,
            priority=priority,
            effort=effort,
            workflow=WORKFLOW,
            rationale=rationale,
            score=score,
            remediation_suggestions=[
                self._pointer("Document parameters, return values and errors of each API item"),
                self._review("Check existing API docs against the implementation"),
            ],
        )

    # --- Suggestions ---

    def _pointer(self, description: str) -> RemediationSuggestion:
        return RemediationSuggestion(
            type=SuggestionType.DOCUMENTATION_POINTER,
            description=description,
            priority=SuggestionPriority.MEDIUM,
            expected_outcome="Documentation reflects the current code",
        )

    def _review(self, description: str) -> RemediationSuggestion:
        return RemediationSuggestion(
            type=SuggestionType.MANUAL_REVIEW,
            description=description,
            priority=SuggestionPriority.LOW,
            expected_outcome="Remaining documentation gaps identified",
        )


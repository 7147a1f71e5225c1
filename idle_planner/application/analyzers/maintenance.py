"""Maintenance analyzer - security vulnerabilities, outdated and deprecated dependencies."""

import logging
import re
from collections.abc import Callable, Iterable
from typing import TypeVar

from idle_planner.application.analyzers.base import (
    BaseAnalyzer,
    pluralize,
    preview,
    sanitize_id,
)
from idle_planner.application.analyzers.package_managers import (
    NPM,
    PackageManagerCommands,
    get_package_manager,
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
    SEVERITY_ORDER,
    DeprecatedPackage,
    LegacySource,
    OutdatedDependency,
    ProjectAnalysis,
    RichSource,
    SecurityVulnerability,
    UpdateType,
    VulnerabilitySeverity,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

WORKFLOW = "maintenance"

CVE_PATTERN = re.compile(r"^CVE-\d{4}-\d{4,}$")
NVD_URL = "https://nvd.nist.gov/vuln/detail/{cve_id}"

# Individual candidates up to this many high-severity findings
HIGH_SEVERITY_INDIVIDUAL_LIMIT = 2
SECURITY_GROUP_HIGH_EFFORT_ABOVE = 5

LEGACY_OUTDATED_HIGH_EFFORT_ABOVE = 10
PRE_RELEASE_MARKERS = ("@^0.", "@~0.")

# severity -> (priority, score)
SECURITY_RULES: dict[VulnerabilitySeverity, tuple[TaskPriority, float]] = {
    VulnerabilitySeverity.CRITICAL: (TaskPriority.URGENT, 1.0),
    VulnerabilitySeverity.HIGH: (TaskPriority.HIGH, 0.9),
    VulnerabilitySeverity.MEDIUM: (TaskPriority.NORMAL, 0.7),
    VulnerabilitySeverity.LOW: (TaskPriority.LOW, 0.5),
}

SEVERITY_RATIONALE = {
    VulnerabilitySeverity.CRITICAL: "Critical vulnerabilities require immediate attention to prevent system compromise",
    VulnerabilitySeverity.HIGH: "High severity vulnerabilities pose significant security risks",
    VulnerabilitySeverity.MEDIUM: "Medium severity vulnerabilities should be addressed promptly",
    VulnerabilitySeverity.LOW: "Low severity vulnerabilities help maintain overall security posture",
}

# update type -> (priority, score, individual limit); major is never grouped
UPDATE_RULES: dict[UpdateType, tuple[TaskPriority, float, int | None]] = {
    UpdateType.MAJOR: (TaskPriority.HIGH, 0.8, None),
    UpdateType.MINOR: (TaskPriority.NORMAL, 0.6, 3),
    UpdateType.PATCH: (TaskPriority.LOW, 0.4, 2),
}

UPDATE_RATIONALE = {
    UpdateType.MAJOR: "Major updates may include breaking changes but keep the dependency supported and secure",
    UpdateType.MINOR: "Minor updates bring new features and fixes without breaking changes",
    UpdateType.PATCH: "Patch updates deliver bug and security fixes with minimal risk",
}

UPDATE_GROUP_LOW_EFFORT_LIMIT = 5


def is_public_cve(cve_id: str) -> bool:
    """True for canonical CVE ids. Advisory and NO-CVE placeholder ids are not public CVEs."""
    return bool(CVE_PATTERN.match(cve_id))


def legacy_package_name(token: str) -> str:
    """Package name from a legacy "name@version" token (scoped names kept)."""
    head, sep, _ = token.strip().rpartition("@")
    if sep and head:
        return head
    return token.strip()


def _severity_label(severity: VulnerabilitySeverity) -> str:
    return severity.value.capitalize()


def _suggestion_priority(severity: VulnerabilitySeverity) -> SuggestionPriority:
    return SuggestionPriority(severity.value)


def _unique(values: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(values))


def _group_by_slug(items: Iterable[T], slug: Callable[[T], str]) -> list[list[T]]:
    """Partition items sharing a candidate id slug, in first-appearance order."""
    groups: dict[str, list[T]] = {}
    for item in items:
        groups.setdefault(slug(item), []).append(item)
    return list(groups.values())


def _vulnerability_key(vuln: SecurityVulnerability) -> tuple[str, str, str, str]:
    return (vuln.cve_id, vuln.name, vuln.affected_versions, vuln.description)


def _dependency_key(dep: OutdatedDependency) -> tuple[str, str, str]:
    return (dep.name, dep.current_version, dep.latest_version)


def _deprecated_key(pkg: DeprecatedPackage) -> tuple[str, str, str]:
    return (pkg.name, pkg.current_version, pkg.replacement or "")


class MaintenanceAnalyzer(BaseAnalyzer):
    """Turns dependency health into security, update and replacement tasks.

    Rule groups run independently: security, outdated, deprecated. Inside
    every severity or update-type bucket items are sorted by natural key,
    so the result does not depend on input order.
    """

    def __init__(self, package_manager: str | PackageManagerCommands = NPM):
        if isinstance(package_manager, str):
            package_manager = get_package_manager(package_manager)
        self._pm = package_manager

    @property
    def type(self) -> AnalyzerType:
        return AnalyzerType.MAINTENANCE

    @property
    def package_manager(self) -> PackageManagerCommands:
        return self._pm

    def analyze(self, analysis: ProjectAnalysis) -> list[TaskCandidate]:
        deps = analysis.dependencies
        candidates: list[TaskCandidate] = []
        candidates.extend(self._security_candidates(deps.security_source()))
        candidates.extend(self._outdated_candidates(deps.outdated_source()))
        candidates.extend(self._deprecated_candidates(deps.deprecated_packages or []))
        logger.debug("Maintenance analysis produced %d candidates", len(candidates))
        return candidates

    # --- Security ---

    def _security_candidates(
        self, source: RichSource[SecurityVulnerability] | LegacySource
    ) -> list[TaskCandidate]:
        if isinstance(source, LegacySource):
            if not source.entries:
                return []
            return [self._legacy_security_task(list(source.entries))]

        by_severity: dict[VulnerabilitySeverity, list[SecurityVulnerability]] = {
            severity: [] for severity in SEVERITY_ORDER
        }
        for vuln in source.items:
            by_severity[vuln.severity].append(vuln)

        candidates: list[TaskCandidate] = []
        for severity in SEVERITY_ORDER:
            bucket = sorted(by_severity[severity], key=_vulnerability_key)
            if not bucket:
                continue
            priority, score = SECURITY_RULES[severity]
            if severity == VulnerabilitySeverity.CRITICAL or (
                severity == VulnerabilitySeverity.HIGH
                and len(bucket) <= HIGH_SEVERITY_INDIVIDUAL_LIMIT
            ):
                candidates.extend(
                    self._security_task(group, priority, score)
                    for group in _group_by_slug(bucket, lambda v: sanitize_id(v.cve_id))
                )
            else:
                candidates.append(self._security_group_task(severity, bucket, priority, score))
        return candidates

    def _security_task(
        self, vulns: list[SecurityVulnerability], priority: TaskPriority, score: float
    ) -> TaskCandidate:
        """One candidate per id slug. Packages sharing an advisory are fixed together."""
        vuln = vulns[0]
        label = _severity_label(vuln.severity)
        affected = ", ".join(_unique(f"{v.name}@{v.affected_versions}" for v in vulns))
        details = "; ".join(_unique(v.description for v in vulns if v.description))
        description = f"{label} vulnerability in {affected}: {details}"
        if is_public_cve(vuln.cve_id):
            description += f" CVE: {vuln.cve_id}"

        rationale = SEVERITY_RATIONALE[vuln.severity]
        if is_public_cve(vuln.cve_id):
            rationale += f". {vuln.cve_id} has been publicly disclosed and may be actively exploited."

        return self.create_candidate(
            f"security-{vuln.severity.value}-{sanitize_id(vuln.cve_id)}",
            f"Fix {label} Security Vulnerability: {vuln.cve_id}",
            description,
            priority=priority,
            effort=TaskEffort.HIGH if vuln.severity == VulnerabilitySeverity.CRITICAL else TaskEffort.MEDIUM,
            workflow=WORKFLOW,
            rationale=rationale,
            score=score,
            remediation_suggestions=self._security_suggestions(vulns),
        )

    def _security_group_task(
        self,
        severity: VulnerabilitySeverity,
        vulns: list[SecurityVulnerability],
        priority: TaskPriority,
        score: float,
    ) -> TaskCandidate:
        count = len(vulns)
        label = _severity_label(severity)
        noun = pluralize(count, "vulnerability", "vulnerabilities")
        cve_ids = _unique(v.cve_id for v in vulns)

        with_cve = sum(1 for v in vulns if is_public_cve(v.cve_id))
        rationale = f"{count} {severity.value} severity {noun} need to be addressed"
        if with_cve:
            rationale += f". {with_cve} have public CVE identifiers and may be actively exploited."
        else:
            rationale += " to maintain security posture."

        return self.create_candidate(
            f"security-group-{severity.value}",
            f"Fix {count} {label} Security {noun.capitalize()}",
            f"Address {count} {severity.value} severity security {noun} in dependencies: {preview(cve_ids)}",
            priority=priority,
            effort=TaskEffort.HIGH if count > SECURITY_GROUP_HIGH_EFFORT_ABOVE else TaskEffort.MEDIUM,
            workflow=WORKFLOW,
            rationale=rationale,
            score=score,
            remediation_suggestions=self._security_group_suggestions(severity, vulns),
        )

    def _legacy_security_task(self, entries: list[str]) -> TaskCandidate:
        count = len(entries)
        noun = pluralize(count, "vulnerability", "vulnerabilities")
        return self.create_candidate(
            "security-deps-legacy",
            "Fix Security Vulnerabilities",
            f"Fix {count} security {noun} in dependencies: {preview(entries)}",
            priority=TaskPriority.URGENT,
            effort=TaskEffort.MEDIUM,
            workflow=WORKFLOW,
            rationale="Security vulnerabilities can expose the system to attacks and data breaches",
            score=1.0,
            remediation_suggestions=self._legacy_security_suggestions(),
        )

    def _security_suggestions(self, vulns: list[SecurityVulnerability]) -> list[RemediationSuggestion]:
        pm = self._pm
        vuln = vulns[0]
        names = _unique(v.name for v in vulns)
        subject = ", ".join(names)
        priority = _suggestion_priority(vuln.severity)
        suggestions = [
            RemediationSuggestion(
                type=SuggestionType.DEPENDENCY_UPDATE,
                description=f"Update {subject} to the latest secure version",
                command=pm.update_packages(names),
                priority=priority,
                expected_outcome=f"{subject} will be updated to resolve the security vulnerability",
            ),
            RemediationSuggestion(
                type=SuggestionType.PACKAGE_MANAGER_UPGRADE,
                description=f"Alternative: Use {pm.alternative_name} to upgrade {subject}",
                command=pm.upgrade_with_alternative(names),
                priority=priority,
                expected_outcome=f"{subject} will be updated using {pm.alternative_name}",
            ),
        ]
        if is_public_cve(vuln.cve_id):
            suggestions.append(
                RemediationSuggestion(
                    type=SuggestionType.SECURITY_ADVISORY_LINK,
                    description=f"Review official security advisory for {vuln.cve_id}",
                    link=NVD_URL.format(cve_id=vuln.cve_id),
                    priority=SuggestionPriority.MEDIUM,
                    expected_outcome="Better understanding of the vulnerability impact and mitigation strategies",
                )
            )
        if vuln.severity == VulnerabilitySeverity.CRITICAL:
            suggestions.append(
                RemediationSuggestion(
                    type=SuggestionType.MANUAL_REVIEW,
                    description=f"Manually review code using {subject} for potential exploitation",
                    priority=SuggestionPriority.HIGH,
                    expected_outcome="Identification of any vulnerable code patterns that need immediate attention",
                    warning="Critical vulnerabilities may require immediate mitigation steps beyond just updating",
                )
            )
        return suggestions

    def _security_group_suggestions(
        self, severity: VulnerabilitySeverity, vulns: list[SecurityVulnerability]
    ) -> list[RemediationSuggestion]:
        pm = self._pm
        names = _unique(v.name for v in vulns)
        return [
            RemediationSuggestion(
                type=SuggestionType.DEPENDENCY_UPDATE,
                description="Update all vulnerable packages in batch",
                command=pm.update_packages(names),
                priority=_suggestion_priority(severity),
                expected_outcome=f"All {len(vulns)} security vulnerabilities will be resolved",
            ),
            RemediationSuggestion(
                type=SuggestionType.SHELL_COMMAND,
                description=f"Run {pm.audit_fix} to automatically apply security fixes",
                command=pm.audit_fix,
                priority=SuggestionPriority.HIGH,
                expected_outcome="Automatic resolution of vulnerabilities where possible",
                warning="May update packages to breaking versions. Review changes carefully.",
            ),
            RemediationSuggestion(
                type=SuggestionType.SHELL_COMMAND,
                description=f"Alternative: Use {pm.alternative_name} to review and fix vulnerabilities",
                command=pm.alternative_audit_fix,
                priority=SuggestionPriority.MEDIUM,
                expected_outcome=f"Security vulnerabilities resolved using {pm.alternative_name}",
            ),
        ]

    def _legacy_security_suggestions(self) -> list[RemediationSuggestion]:
        pm = self._pm
        return [
            RemediationSuggestion(
                type=SuggestionType.SHELL_COMMAND,
                description=f"Run {pm.audit_fix} to automatically resolve security vulnerabilities",
                command=pm.audit_fix,
                priority=SuggestionPriority.CRITICAL,
                expected_outcome="Automatic resolution of known security vulnerabilities",
                warning="May update packages to breaking versions. Test thoroughly after applying.",
            ),
            RemediationSuggestion(
                type=SuggestionType.SHELL_COMMAND,
                description="Review detailed security audit report",
                command=pm.audit,
                priority=SuggestionPriority.HIGH,
                expected_outcome="Detailed information about each vulnerability for manual resolution",
            ),
            RemediationSuggestion(
                type=SuggestionType.SHELL_COMMAND,
                description=f"Alternative: Use {pm.alternative_name} to audit and fix vulnerabilities",
                command=pm.alternative_audit_fix,
                priority=SuggestionPriority.MEDIUM,
                expected_outcome=f"Security fixes applied using {pm.alternative_name}",
            ),
        ]

    # --- Outdated dependencies ---

    def _outdated_candidates(
        self, source: RichSource[OutdatedDependency] | LegacySource
    ) -> list[TaskCandidate]:
        if isinstance(source, LegacySource):
            return self._legacy_outdated_candidates(list(source.entries))

        by_type: dict[UpdateType, list[OutdatedDependency]] = {t: [] for t in UpdateType}
        for dep in source.items:
            by_type[dep.update_type].append(dep)

        candidates: list[TaskCandidate] = []
        for update_type in UpdateType:
            bucket = sorted(by_type[update_type], key=_dependency_key)
            if not bucket:
                continue
            _, _, individual_limit = UPDATE_RULES[update_type]
            if individual_limit is None or len(bucket) <= individual_limit:
                candidates.extend(
                    self._update_task(group)
                    for group in _group_by_slug(bucket, lambda d: sanitize_id(d.name))
                )
            else:
                candidates.append(self._update_group_task(update_type, bucket))
        return candidates

    def _update_task(self, deps: list[OutdatedDependency]) -> TaskCandidate:
        dep = deps[0]
        update_type = dep.update_type
        priority, score, _ = UPDATE_RULES[update_type]
        effort = TaskEffort.MEDIUM if update_type == UpdateType.MAJOR else TaskEffort.LOW
        names = _unique(d.name for d in deps)
        changes = ", ".join(f"{d.name} from {d.current_version} to {d.latest_version}" for d in deps)
        return self.create_candidate(
            f"outdated-{update_type.value}-{sanitize_id(dep.name)}",
            f"{update_type.value.capitalize()} Update: {', '.join(names)}",
            f"Update {changes} ({update_type.value} update)",
            priority=priority,
            effort=effort,
            workflow=WORKFLOW,
            rationale=UPDATE_RATIONALE[update_type],
            score=score,
            remediation_suggestions=self._update_suggestions(deps),
        )

    def _update_group_task(self, update_type: UpdateType, deps: list[OutdatedDependency]) -> TaskCandidate:
        priority, score, _ = UPDATE_RULES[update_type]
        count = len(deps)
        names = _unique(d.name for d in deps)
        label = update_type.value.capitalize()
        return self.create_candidate(
            f"outdated-group-{update_type.value}",
            f"{count} {label} Updates",
            f"Update {count} packages with {update_type.value} version changes: {preview(names)}",
            priority=priority,
            effort=TaskEffort.LOW if count <= UPDATE_GROUP_LOW_EFFORT_LIMIT else TaskEffort.HIGH,
            workflow=WORKFLOW,
            rationale=UPDATE_RATIONALE[update_type],
            score=score,
            remediation_suggestions=[
                RemediationSuggestion(
                    type=SuggestionType.DEPENDENCY_UPDATE,
                    description=f"Apply {count} {update_type.value} updates in one batch",
                    command=self._pm.update_packages(names),
                    priority=SuggestionPriority.MEDIUM,
                    expected_outcome=f"All {count} packages updated to their latest {update_type.value} release",
                ),
                self._testing_reminder("the updated packages"),
            ],
        )

    def _update_suggestions(self, deps: list[OutdatedDependency]) -> list[RemediationSuggestion]:
        dep = deps[0]
        is_major = dep.update_type == UpdateType.MAJOR
        names = _unique(d.name for d in deps)
        subject = ", ".join(names)
        if len(deps) == 1:
            update_description = f"Update {dep.name} to {dep.latest_version}"
            outcome = f"{dep.name} updated from {dep.current_version} to {dep.latest_version}"
            guide_description = (
                f"Review the {dep.name} migration guide for {dep.current_version} -> {dep.latest_version}"
            )
        else:
            update_description = f"Update {subject} to their latest releases"
            outcome = f"{subject} updated to their latest releases"
            guide_description = f"Review the migration guides for {subject}"
        suggestions = [
            RemediationSuggestion(
                type=SuggestionType.DEPENDENCY_UPDATE,
                description=update_description,
                command=self._pm.update_packages(names),
                priority=SuggestionPriority.HIGH if is_major else SuggestionPriority.MEDIUM,
                expected_outcome=outcome,
            ),
        ]
        if is_major:
            suggestions.extend([
                RemediationSuggestion(
                    type=SuggestionType.MIGRATION_GUIDE,
                    description=guide_description,
                    priority=SuggestionPriority.HIGH,
                    expected_outcome="Understanding of API changes and required code updates",
                    warning="Major version updates may introduce breaking changes",
                ),
                RemediationSuggestion(
                    type=SuggestionType.MANUAL_REVIEW,
                    description=f"Review code using {subject} for compatibility issues",
                    priority=SuggestionPriority.MEDIUM,
                    expected_outcome="Call sites adjusted to the new major version",
                ),
            ])
        suggestions.append(self._testing_reminder(subject))
        return suggestions

    def _legacy_outdated_candidates(self, entries: list[str]) -> list[TaskCandidate]:
        if not entries:
            return []
        candidates: list[TaskCandidate] = []

        pre_release = [e for e in entries if any(marker in e for marker in PRE_RELEASE_MARKERS)]
        if pre_release:
            count = len(pre_release)
            candidates.append(
                self.create_candidate(
                    "critical-outdated-deps",
                    "Update Pre-1.0 Dependencies",
                    f"Update {count} pre-1.0 {pluralize(count, 'dependency', 'dependencies')}: {preview(pre_release)}",
                    priority=TaskPriority.HIGH,
                    effort=TaskEffort.MEDIUM,
                    workflow=WORKFLOW,
                    rationale="Pre-1.0 dependencies may have breaking changes and security issues",
                    score=0.8,
                    remediation_suggestions=self._legacy_outdated_suggestions(pre_release, pre_release_only=True),
                )
            )

        count = len(entries)
        candidates.append(
            self.create_candidate(
                "outdated-deps",
                "Update Outdated Dependencies",
                f"Update {count} outdated {pluralize(count, 'dependency', 'dependencies')}",
                priority=TaskPriority.NORMAL,
                effort=TaskEffort.HIGH if count > LEGACY_OUTDATED_HIGH_EFFORT_ABOVE else TaskEffort.MEDIUM,
                workflow=WORKFLOW,
                rationale="Outdated dependencies may have security vulnerabilities and missing features",
                score=0.5,
                remediation_suggestions=self._legacy_outdated_suggestions(entries, pre_release_only=False),
            )
        )
        return candidates

    def _legacy_outdated_suggestions(
        self, entries: list[str], *, pre_release_only: bool
    ) -> list[RemediationSuggestion]:
        pm = self._pm
        names = _unique(n for n in (legacy_package_name(e) for e in entries) if n)
        suggestions: list[RemediationSuggestion] = []
        if pre_release_only:
            suggestions.append(
                RemediationSuggestion(
                    type=SuggestionType.MIGRATION_GUIDE,
                    description="Review migration guides before updating pre-1.0 dependencies",
                    priority=SuggestionPriority.HIGH,
                    expected_outcome="Understanding of breaking changes and migration requirements",
                    warning="Pre-1.0 versions may introduce breaking changes. Plan for testing and potential code updates.",
                )
            )
        suggestions.extend([
            RemediationSuggestion(
                type=SuggestionType.DEPENDENCY_UPDATE,
                description=f"Update {'critical ' if pre_release_only else ''}outdated dependencies",
                command=pm.update_packages(names),
                priority=SuggestionPriority.HIGH if pre_release_only else SuggestionPriority.MEDIUM,
                expected_outcome="All outdated dependencies updated to latest compatible versions",
            ),
            RemediationSuggestion(
                type=SuggestionType.SHELL_COMMAND,
                description="Check which packages are outdated and their available versions",
                command=pm.list_outdated,
                priority=SuggestionPriority.MEDIUM,
                expected_outcome="List of outdated packages with current and latest versions",
            ),
            RemediationSuggestion(
                type=SuggestionType.PACKAGE_MANAGER_UPGRADE,
                description=f"Alternative: Use {pm.alternative_name} to upgrade outdated dependencies",
                command=pm.upgrade_with_alternative(names),
                priority=SuggestionPriority.MEDIUM,
                expected_outcome=f"Dependencies updated using {pm.alternative_name}",
            ),
        ])
        return suggestions

    # --- Deprecated packages ---

    def _deprecated_candidates(self, packages: list[DeprecatedPackage]) -> list[TaskCandidate]:
        ordered = sorted(packages, key=_deprecated_key)
        return [
            self._deprecated_task(group)
            for group in _group_by_slug(ordered, lambda p: sanitize_id(p.name))
        ]

    def _deprecated_task(self, pkgs: list[DeprecatedPackage]) -> TaskCandidate:
        parts: list[str] = []
        for pkg in pkgs:
            parts.append(f"Package {pkg.name}@{pkg.current_version} is deprecated.")
            if pkg.reason:
                parts.append(f"Reason: {pkg.reason}")
            if pkg.replacement:
                parts.append(f"Recommended replacement: {pkg.replacement}")

        if all(pkg.replacement for pkg in pkgs):
            moves = ", ".join(_unique(f"{p.name} → {p.replacement}" for p in pkgs))
            targets = ", ".join(_unique(p.replacement or "" for p in pkgs))
            title = f"Replace Deprecated Package: {moves}"
            priority, score = TaskPriority.NORMAL, 0.6
            rationale = (
                "Deprecated packages may stop receiving security updates and bug fixes. "
                f"Migration to {targets} ensures continued support and compatibility."
            )
        else:
            parts.append("No direct replacement available - manual migration required.")
            title = f"Replace Deprecated Package: {', '.join(_unique(p.name for p in pkgs))}"
            priority, score = TaskPriority.HIGH, 0.8
            rationale = (
                "Deprecated packages may stop receiving security updates and bug fixes, "
                "requiring urgent attention to find alternative solutions."
            )

        return self.create_candidate(
            f"deprecated-pkg-{sanitize_id(pkgs[0].name)}",
            title,
            " ".join(parts),
            priority=priority,
            effort=TaskEffort.MEDIUM,
            workflow=WORKFLOW,
            rationale=rationale,
            score=score,
            remediation_suggestions=self._deprecated_suggestions(pkgs),
        )

    def _deprecated_suggestions(self, pkgs: list[DeprecatedPackage]) -> list[RemediationSuggestion]:
        subject = ", ".join(_unique(p.name for p in pkgs))
        moves = {(p.name, p.replacement): p for p in pkgs if p.replacement}
        replacements = [
            RemediationSuggestion(
                type=SuggestionType.PACKAGE_REPLACEMENT,
                description=f"Replace {name} with {replacement}",
                command=self._pm.replace_package(name, replacement),
                priority=SuggestionPriority.HIGH,
                expected_outcome=f"{name} replaced with modern alternative {replacement}",
            )
            for name, replacement in moves
        ]
        if not all(p.replacement for p in pkgs):
            return [
                RemediationSuggestion(
                    type=SuggestionType.MANUAL_REVIEW,
                    description=f"Research alternative packages to replace {subject}",
                    priority=SuggestionPriority.CRITICAL,
                    expected_outcome="Identification of suitable alternative packages or implementations",
                    warning="No direct replacement available. Manual research and potentially significant code changes required.",
                ),
                RemediationSuggestion(
                    type=SuggestionType.DOCUMENTATION_POINTER,
                    description=f"Check {subject} documentation for recommended alternatives",
                    priority=SuggestionPriority.HIGH,
                    expected_outcome="Official guidance on migration paths and alternatives",
                ),
                *replacements,
            ]
        targets = ", ".join(_unique(replacement for _, replacement in moves))
        return [
            *replacements,
            RemediationSuggestion(
                type=SuggestionType.MIGRATION_GUIDE,
                description=f"Review migration guide for transitioning from {subject} to {targets}",
                priority=SuggestionPriority.HIGH,
                expected_outcome="Understanding of API changes and required code updates",
                warning="API changes may require updates to existing code",
            ),
            RemediationSuggestion(
                type=SuggestionType.MANUAL_REVIEW,
                description=f"Update all imports and usage of {subject} to use {targets}",
                priority=SuggestionPriority.MEDIUM,
                expected_outcome="All code updated to use the new package API",
            ),
        ]

    def _testing_reminder(self, subject: str) -> RemediationSuggestion:
        return RemediationSuggestion(
            type=SuggestionType.TESTING_REMINDER,
            description=f"Run the full test suite after updating {subject}",
            priority=SuggestionPriority.MEDIUM,
            expected_outcome="Regressions caught before the update is merged",
        )

"""Tests for MaintenanceAnalyzer - security, outdated and deprecated rules."""

import random

import pytest

from idle_planner.application.analyzers.maintenance import MaintenanceAnalyzer, is_public_cve
from idle_planner.application.analyzers.package_managers import PIP
from idle_planner.domain.entities.candidate import (
    COMMAND_SUGGESTION_TYPES,
    AnalyzerType,
    SuggestionType,
    TaskEffort,
    TaskPriority,
)


def _vuln(name: str, cve_id: str, severity: str) -> dict:
    return {
        "name": name,
        "cveId": cve_id,
        "severity": severity,
        "affectedVersions": "<2.0.0",
        "description": f"Issue in {name}",
    }


def _dep(name: str, current: str, latest: str, update_type: str) -> dict:
    return {"name": name, "currentVersion": current, "latestVersion": latest, "updateType": update_type}


@pytest.fixture
def analyzer():
    return MaintenanceAnalyzer()


def _analyze(analyzer, make_analysis, **deps):
    return analyzer.analyze(make_analysis(dependencies=deps))


class TestMaintenanceBasics:
    """Contract behaviour shared by all rule groups."""

    def test_type_is_maintenance(self, analyzer):
        assert analyzer.type == AnalyzerType.MAINTENANCE

    def test_clean_snapshot_yields_nothing(self, analyzer, clean_analysis):
        assert analyzer.analyze(clean_analysis) == []

    def test_prioritize_empty_is_none(self, analyzer):
        assert analyzer.prioritize([]) is None

    def test_idempotent(self, analyzer, make_analysis):
        analysis = make_analysis(dependencies={
            "securityIssues": [_vuln("a", "CVE-2024-0001", "critical"), _vuln("b", "CVE-2024-0002", "medium")],
            "outdatedPackages": [_dep("react", "17.0.0", "18.2.0", "major")],
        })
        first = analyzer.analyze(analysis)
        second = analyzer.analyze(analysis)
        assert [(c.candidate_id, c.score, c.priority, c.effort) for c in first] == [
            (c.candidate_id, c.score, c.priority, c.effort) for c in second
        ]

    def test_order_independent(self, analyzer, make_analysis):
        vulns = [_vuln(f"pkg{i}", f"CVE-2024-{1000 + i}", sev)
                 for i, sev in enumerate(["critical", "high", "high", "high", "medium", "low"])]
        deps = [_dep(f"lib{i}", "1.0.0", "1.1.0", "minor") for i in range(5)]
        shuffled_vulns = vulns[:]
        shuffled_deps = deps[:]
        random.Random(7).shuffle(shuffled_vulns)
        random.Random(7).shuffle(shuffled_deps)

        a = _analyze(analyzer, make_analysis, securityIssues=vulns, outdatedPackages=deps)
        b = _analyze(analyzer, make_analysis, securityIssues=shuffled_vulns, outdatedPackages=shuffled_deps)
        assert a == b

    def test_command_suggestions_carry_commands(self, analyzer, make_analysis):
        candidates = _analyze(
            analyzer,
            make_analysis,
            securityIssues=[_vuln("a", "CVE-2024-0001", "critical")] + [
                _vuln(f"m{i}", f"CVE-2024-2{i:03d}", "medium") for i in range(3)
            ],
            outdatedPackages=[_dep("react", "17.0.0", "18.2.0", "major")],
            deprecatedPackages=[{"name": "request", "currentVersion": "2.88.2", "replacement": "axios"}],
        )
        for candidate in candidates:
            for suggestion in candidate.remediation_suggestions:
                if suggestion.type in COMMAND_SUGGESTION_TYPES:
                    assert suggestion.command


class TestSecurityRules:
    """Severity buckets, grouping and scores."""

    def test_mixed_severities_scenario(self, analyzer, make_analysis):
        """critical + high + 2 medium + 2 low gives four candidates."""
        candidates = _analyze(analyzer, make_analysis, securityIssues=[
            _vuln("a", "CVE-2024-0001", "critical"),
            _vuln("b", "CVE-2024-0002", "high"),
            _vuln("c", "CVE-2024-0003", "medium"),
            _vuln("d", "CVE-2024-0004", "medium"),
            _vuln("e", "CVE-2024-0005", "low"),
            _vuln("f", "CVE-2024-0006", "low"),
        ])
        assert [c.score for c in candidates] == [1.0, 0.9, 0.7, 0.5]
        assert [c.priority for c in candidates] == [
            TaskPriority.URGENT, TaskPriority.HIGH, TaskPriority.NORMAL, TaskPriority.LOW,
        ]

    def test_individual_candidate_shape(self, analyzer, make_analysis):
        [candidate] = _analyze(analyzer, make_analysis, securityIssues=[_vuln("lodash", "CVE-2021-23337", "critical")])
        assert candidate.candidate_id == "security-critical-CVE-2021-23337"
        assert candidate.title == "Fix Critical Security Vulnerability: CVE-2021-23337"
        assert candidate.effort == TaskEffort.HIGH
        assert candidate.workflow == "maintenance"
        assert "CVE: CVE-2021-23337" in candidate.description
        assert "publicly disclosed" in candidate.rationale

        types = [s.type for s in candidate.remediation_suggestions]
        assert SuggestionType.SECURITY_ADVISORY_LINK in types
        assert SuggestionType.MANUAL_REVIEW in types
        link = next(s for s in candidate.remediation_suggestions if s.type == SuggestionType.SECURITY_ADVISORY_LINK)
        assert link.link == "https://nvd.nist.gov/vuln/detail/CVE-2021-23337"
        update = candidate.remediation_suggestions[0]
        assert update.command == "npm update lodash"

    def test_advisory_id_is_not_public_cve(self, analyzer, make_analysis):
        [candidate] = _analyze(analyzer, make_analysis, securityIssues=[_vuln("x", "GHSA-xxxx-yyyy-zzzz", "high")])
        assert candidate.candidate_id == "security-high-GHSA-xxxx-yyyy-zzzz"
        assert "publicly disclosed" not in candidate.rationale
        assert all(s.type != SuggestionType.SECURITY_ADVISORY_LINK for s in candidate.remediation_suggestions)

    def test_cve_id_sanitized(self, analyzer, make_analysis):
        [candidate] = _analyze(analyzer, make_analysis, securityIssues=[_vuln("x", "NO CVE/x:1", "critical")])
        assert candidate.candidate_id == "security-critical-NO-CVE-x-1"

    @pytest.mark.parametrize("count,expected_candidates", [(1, 1), (2, 2), (3, 1), (4, 1)])
    def test_high_severity_grouping_threshold(self, analyzer, make_analysis, count, expected_candidates):
        vulns = [_vuln(f"p{i}", f"CVE-2024-{3000 + i}", "high") for i in range(count)]
        candidates = _analyze(analyzer, make_analysis, securityIssues=vulns)
        assert len(candidates) == expected_candidates
        if count >= 3:
            assert candidates[0].candidate_id == "security-group-high"
            assert candidates[0].title == f"Fix {count} High Security Vulnerabilities"

    def test_criticals_never_grouped(self, analyzer, make_analysis):
        vulns = [_vuln(f"p{i}", f"CVE-2024-{4000 + i}", "critical") for i in range(5)]
        candidates = _analyze(analyzer, make_analysis, securityIssues=vulns)
        assert len(candidates) == 5
        assert all(c.score == 1.0 for c in candidates)

    def test_group_effort_and_preview(self, analyzer, make_analysis):
        vulns = [_vuln(f"p{i}", f"CVE-2024-{5000 + i}", "medium") for i in range(6)]
        [group] = _analyze(analyzer, make_analysis, securityIssues=vulns)
        assert group.candidate_id == "security-group-medium"
        assert group.effort == TaskEffort.HIGH
        assert group.description.endswith("CVE-2024-5000, CVE-2024-5001, CVE-2024-5002...")
        commands = [s.command for s in group.remediation_suggestions]
        assert "npm audit fix" in commands
        assert "yarn audit --fix" in commands

    def test_duplicate_cve_ids_merge(self, analyzer, make_analysis):
        candidates = _analyze(analyzer, make_analysis, securityIssues=[
            _vuln("a", "CVE-2024-0001", "critical"),
            _vuln("b", "CVE-2024-0001", "critical"),
        ])
        assert [c.candidate_id for c in candidates] == ["security-critical-CVE-2024-0001"]
        assert "a@<2.0.0, b@<2.0.0" in candidates[0].description
        assert candidates[0].remediation_suggestions[0].command == "npm update a b"

    def test_shared_cve_lists_every_package(self, analyzer, make_analysis):
        [candidate] = _analyze(analyzer, make_analysis, securityIssues=[
            _vuln("log4j-core", "CVE-2021-44228", "critical"),
            _vuln("log4j-api", "CVE-2021-44228", "critical"),
        ])
        assert candidate.candidate_id == "security-critical-CVE-2021-44228"
        assert candidate.description == (
            "Critical vulnerability in log4j-api@<2.0.0, log4j-core@<2.0.0: "
            "Issue in log4j-api; Issue in log4j-core CVE: CVE-2021-44228"
        )
        commands = [s.command for s in candidate.remediation_suggestions if s.command]
        assert commands == ["npm update log4j-api log4j-core", "yarn upgrade log4j-api log4j-core"]

    def test_legacy_security(self, analyzer, make_analysis):
        [candidate] = _analyze(analyzer, make_analysis, security=["lodash@4.17.0", "minimist@0.0.8"])
        assert candidate.candidate_id == "security-deps-legacy"
        assert candidate.score == 1.0
        assert candidate.priority == TaskPriority.URGENT
        assert all(s.type == SuggestionType.SHELL_COMMAND for s in candidate.remediation_suggestions)

    def test_legacy_security_preview(self, analyzer, make_analysis):
        [candidate] = _analyze(analyzer, make_analysis, security=["a@1", "b@2", "c@3", "d@4"])
        assert candidate.description == "Fix 4 security vulnerabilities in dependencies: a@1, b@2, c@3..."

    def test_empty_rich_security_falls_back_to_legacy(self, analyzer, make_analysis):
        candidates = _analyze(analyzer, make_analysis, security=["lodash@4.17.0"], securityIssues=[])
        assert [c.candidate_id for c in candidates] == ["security-deps-legacy"]

    def test_security_scores_are_fixed_constants(self, analyzer, make_analysis):
        vulns = [
            _vuln(f"p{i}", f"CVE-2024-{6000 + i}", sev)
            for i, sev in enumerate(["critical", "high", "high", "high", "medium", "low", "unknown"])
        ]
        scores = {c.score for c in _analyze(analyzer, make_analysis, securityIssues=vulns)}
        assert scores <= {1.0, 0.9, 0.7, 0.5}


class TestOutdatedRules:
    """Update type buckets and legacy tokens."""

    def test_major_and_patch_scenario(self, analyzer, make_analysis):
        candidates = _analyze(analyzer, make_analysis, outdatedPackages=[
            _dep("react", "17.0.2", "18.2.0", "major"),
            _dep("lodash", "4.17.20", "4.17.21", "patch"),
        ])
        assert len(candidates) == 2
        major, patch = candidates
        assert (major.score, major.priority) == (0.8, TaskPriority.HIGH)
        assert (patch.score, patch.priority) == (0.4, TaskPriority.LOW)
        assert major.candidate_id == "outdated-major-react"
        assert major.title == "Major Update: react"
        assert major.description == "Update react from 17.0.2 to 18.2.0 (major update)"
        assert major.effort == TaskEffort.MEDIUM
        assert patch.effort == TaskEffort.LOW

    def test_major_update_suggestions(self, analyzer, make_analysis):
        [candidate] = _analyze(analyzer, make_analysis, outdatedPackages=[_dep("react", "17.0.2", "18.2.0", "major")])
        types = [s.type for s in candidate.remediation_suggestions]
        assert types == [
            SuggestionType.DEPENDENCY_UPDATE,
            SuggestionType.MIGRATION_GUIDE,
            SuggestionType.MANUAL_REVIEW,
            SuggestionType.TESTING_REMINDER,
        ]
        guide = candidate.remediation_suggestions[1]
        assert guide.warning == "Major version updates may introduce breaking changes"

    @pytest.mark.parametrize(
        "update_type,count,grouped",
        [("minor", 3, False), ("minor", 4, True), ("patch", 2, False), ("patch", 3, True), ("major", 6, False)],
    )
    def test_grouping_thresholds(self, analyzer, make_analysis, update_type, count, grouped):
        deps = [_dep(f"lib{i}", "1.0.0", "1.0.1", update_type) for i in range(count)]
        candidates = _analyze(analyzer, make_analysis, outdatedPackages=deps)
        if grouped:
            assert [c.candidate_id for c in candidates] == [f"outdated-group-{update_type}"]
        else:
            assert len(candidates) == count

    def test_group_shape(self, analyzer, make_analysis):
        deps = [_dep(f"lib{i}", "1.0.0", "1.1.0", "minor") for i in range(4)]
        [group] = _analyze(analyzer, make_analysis, outdatedPackages=deps)
        assert group.title == "4 Minor Updates"
        assert group.description == "Update 4 packages with minor version changes: lib0, lib1, lib2..."
        assert group.score == 0.6
        assert group.effort == TaskEffort.LOW

    def test_large_group_is_high_effort(self, analyzer, make_analysis):
        deps = [_dep(f"lib{i}", "1.0.0", "1.0.1", "patch") for i in range(6)]
        [group] = _analyze(analyzer, make_analysis, outdatedPackages=deps)
        assert group.effort == TaskEffort.HIGH

    def test_legacy_pre_release_scenario(self, analyzer, make_analysis):
        candidates = _analyze(analyzer, make_analysis, outdated=["pkg@^0.3.0"])
        assert [(c.candidate_id, c.score) for c in candidates] == [
            ("critical-outdated-deps", 0.8),
            ("outdated-deps", 0.5),
        ]
        update = next(
            s for s in candidates[1].remediation_suggestions if s.type == SuggestionType.DEPENDENCY_UPDATE
        )
        assert update.command == "npm update pkg"

    def test_legacy_without_pre_release(self, analyzer, make_analysis):
        candidates = _analyze(analyzer, make_analysis, outdated=["react@17.0.2", "@types/node@18.0.0"])
        assert [c.candidate_id for c in candidates] == ["outdated-deps"]
        update = next(
            s for s in candidates[0].remediation_suggestions if s.type == SuggestionType.DEPENDENCY_UPDATE
        )
        assert update.command == "npm update react @types/node"

    def test_rich_outdated_suppresses_legacy(self, analyzer, make_analysis):
        candidates = _analyze(analyzer, make_analysis, outdated=["pkg@^0.3.0"], outdatedPackages=[])
        assert candidates == []

    def test_names_sharing_an_id_merge(self, analyzer, make_analysis):
        [candidate] = _analyze(analyzer, make_analysis, outdatedPackages=[
            _dep("日本", "1.0.0", "2.0.0", "major"),
            _dep("中国", "3.0.0", "4.0.0", "major"),
        ])
        assert candidate.candidate_id == "outdated-major---"
        assert candidate.title == "Major Update: 中国, 日本"
        assert candidate.description == "Update 中国 from 3.0.0 to 4.0.0, 日本 from 1.0.0 to 2.0.0 (major update)"
        assert candidate.remediation_suggestions[0].command == "npm update 中国 日本"
        assert [s.type for s in candidate.remediation_suggestions] == [
            SuggestionType.DEPENDENCY_UPDATE,
            SuggestionType.MIGRATION_GUIDE,
            SuggestionType.MANUAL_REVIEW,
            SuggestionType.TESTING_REMINDER,
        ]


class TestDeprecatedRules:
    def test_with_replacement_scenario(self, analyzer, make_analysis):
        [candidate] = _analyze(analyzer, make_analysis, deprecatedPackages=[
            {"name": "request", "currentVersion": "2.88.2", "reason": "No longer maintained", "replacement": "axios"},
        ])
        assert candidate.candidate_id == "deprecated-pkg-request"
        assert candidate.score == 0.6
        assert "request" in candidate.title and "axios" in candidate.title
        replacement = candidate.remediation_suggestions[0]
        assert replacement.type == SuggestionType.PACKAGE_REPLACEMENT
        assert replacement.command == "npm uninstall request && npm install axios"

    def test_without_replacement(self, analyzer, make_analysis):
        [candidate] = _analyze(analyzer, make_analysis, deprecatedPackages=[{"name": "left-pad"}])
        assert (candidate.score, candidate.priority) == (0.8, TaskPriority.HIGH)
        assert [s.type for s in candidate.remediation_suggestions] == [
            SuggestionType.MANUAL_REVIEW,
            SuggestionType.DOCUMENTATION_POINTER,
        ]
        assert candidate.remediation_suggestions[0].warning

    def test_scoped_name_sanitized(self, analyzer, make_analysis):
        [candidate] = _analyze(analyzer, make_analysis, deprecatedPackages=[{"name": "@babel/polyfill"}])
        assert candidate.candidate_id == "deprecated-pkg--babel-polyfill"

    def test_names_sharing_an_id_merge(self, analyzer, make_analysis):
        [candidate] = _analyze(analyzer, make_analysis, deprecatedPackages=[
            {"name": "a/b", "replacement": "y"},
            {"name": "a.b", "replacement": "x"},
        ])
        assert candidate.candidate_id == "deprecated-pkg-a-b"
        assert candidate.title == "Replace Deprecated Package: a.b → x, a/b → y"
        commands = [s.command for s in candidate.remediation_suggestions if s.command]
        assert commands == ["npm uninstall a.b && npm install x", "npm uninstall a/b && npm install y"]

    def test_merge_without_every_replacement_needs_research(self, analyzer, make_analysis):
        [candidate] = _analyze(analyzer, make_analysis, deprecatedPackages=[
            {"name": "a.b", "replacement": "x"},
            {"name": "a/b"},
        ])
        assert (candidate.score, candidate.priority) == (0.8, TaskPriority.HIGH)
        assert "No direct replacement available" in candidate.description
        assert [s.type for s in candidate.remediation_suggestions] == [
            SuggestionType.MANUAL_REVIEW,
            SuggestionType.DOCUMENTATION_POINTER,
            SuggestionType.PACKAGE_REPLACEMENT,
        ]


class TestPackageManagerWording:
    def test_pip_commands(self, make_analysis):
        analyzer = MaintenanceAnalyzer("pip")
        assert analyzer.package_manager is PIP
        [candidate] = _analyze(analyzer, make_analysis, deprecatedPackages=[
            {"name": "nose", "replacement": "pytest"},
        ])
        assert candidate.remediation_suggestions[0].command == "pip uninstall -y nose && pip install pytest"


@pytest.mark.parametrize(
    "cve_id,expected",
    [("CVE-2021-44228", True), ("CVE-2021-123", False), ("GHSA-abcd-efgh-ijkl", False), ("NO-CVE-LODASH", False)],
)
def test_is_public_cve(cve_id, expected):
    assert is_public_cve(cve_id) is expected

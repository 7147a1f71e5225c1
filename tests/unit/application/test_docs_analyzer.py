"""Tests for DocsAnalyzer."""

import pytest

from idle_planner.application.analyzers.docs import DocsAnalyzer
from idle_planner.domain.entities.candidate import AnalyzerType, TaskEffort, TaskPriority


@pytest.fixture
def analyzer():
    return DocsAnalyzer()


def _docs(analyzer, make_analysis, **documentation):
    documentation.setdefault("coverage", 90.0)
    return analyzer.analyze(make_analysis(documentation=documentation))


def _ids(candidates):
    return [c.candidate_id for c in candidates]


class TestCoverage:
    """Coverage thresholds: <20 critical, <50 improve, otherwise nothing."""

    def test_type_is_docs(self, analyzer):
        assert analyzer.type == AnalyzerType.DOCS

    def test_critical_coverage(self, analyzer, make_analysis):
        [candidate] = _docs(analyzer, make_analysis, coverage=15)
        assert candidate.candidate_id == "docs-critical-docs"
        assert candidate.score == 0.9
        assert candidate.priority == TaskPriority.HIGH
        assert "15.0%" in candidate.description
        assert candidate.workflow == "documentation"

    def test_improve_coverage(self, analyzer, make_analysis):
        [candidate] = _docs(analyzer, make_analysis, coverage=35)
        assert candidate.candidate_id == "docs-improve-docs-coverage"
        assert candidate.score == 0.4
        assert "from 35.0% to at least 50%" in candidate.description

    def test_good_coverage_is_quiet(self, analyzer, make_analysis):
        assert _docs(analyzer, make_analysis, coverage=70) == []

    @pytest.mark.parametrize("coverage,expected", [(19.9, "docs-critical-docs"), (20, "docs-improve-docs-coverage")])
    def test_boundaries(self, analyzer, make_analysis, coverage, expected):
        assert _ids(_docs(analyzer, make_analysis, coverage=coverage)) == [expected]

    def test_fifty_is_enough(self, analyzer, make_analysis):
        assert _docs(analyzer, make_analysis, coverage=50) == []


class TestMissingDocs:
    def test_core_modules_detected(self, analyzer, make_analysis):
        [candidate] = _docs(analyzer, make_analysis, missingDocs=["src/api/users.ts", "src/utils/fmt.ts"])
        assert candidate.candidate_id == "docs-core-module-docs"
        assert candidate.score == 0.7
        assert candidate.description == "Add documentation to 1 core module: users.ts"

    def test_many_missing_files(self, analyzer, make_analysis):
        files = [f"src/lib/file{i}.ts" for i in range(12)]
        [candidate] = _docs(analyzer, make_analysis, missingDocs=files)
        assert candidate.candidate_id == "docs-missing-docs"
        assert candidate.effort == TaskEffort.HIGH
        assert candidate.description == "Add documentation for 12 undocumented files"

    def test_five_missing_files_not_reported(self, analyzer, make_analysis):
        files = [f"src/lib/file{i}.ts" for i in range(5)]
        assert _docs(analyzer, make_analysis, missingDocs=files) == []

    def test_duplicates_counted_once(self, analyzer, make_analysis):
        files = ["src/lib/a.ts"] * 10
        assert _docs(analyzer, make_analysis, missingDocs=files) == []


class TestOutdatedDocs:
    """Highest severity tier wins per documentation type."""

    def test_highest_tier_only(self, analyzer, make_analysis):
        [candidate] = _docs(analyzer, make_analysis, outdatedDocs=[
            {"file": "src/a.ts", "type": "stale-reference", "severity": "low"},
            {"file": "src/b.ts", "type": "stale-reference", "severity": "high"},
        ])
        assert candidate.candidate_id == "docs-resolve-stale-comments-critical"
        assert candidate.score == 0.8
        assert candidate.description.endswith("Affected files: src/b.ts")

    def test_each_type_independent(self, analyzer, make_analysis):
        candidates = _docs(analyzer, make_analysis, outdatedDocs=[
            {"file": "README.md", "type": "version-mismatch", "severity": "medium"},
            {"file": "docs/api.md", "type": "broken-link", "severity": "low"},
            {"file": "src/old.ts", "type": "deprecated-api", "severity": "high"},
        ])
        assert _ids(candidates) == [
            "docs-fix-version-mismatches-medium",
            "docs-fix-broken-links",
            "docs-fix-deprecated-api-docs-critical",
        ]
        assert [c.score for c in candidates] == [0.6, 0.4, 0.8]

    def test_unknown_severity_treated_as_low(self, analyzer, make_analysis):
        [candidate] = _docs(analyzer, make_analysis, outdatedDocs=[
            {"file": "a.md", "type": "broken-link", "severity": "urgent"},
        ])
        assert candidate.candidate_id == "docs-fix-broken-links"

    def test_unknown_type_ignored(self, analyzer, make_analysis):
        assert _docs(analyzer, make_analysis, outdatedDocs=[{"file": "a.md", "type": "typo"}]) == []


class TestUndocumentedExports:
    def test_public_exports_win(self, analyzer, make_analysis):
        [candidate] = _docs(analyzer, make_analysis, undocumentedExports=[
            {"file": "src/index.ts", "name": "createClient", "type": "function", "isPublic": True},
            {"file": "src/types.ts", "name": "Options", "type": "interface"},
        ])
        assert candidate.candidate_id == "docs-undocumented-public-exports"
        assert candidate.score == 0.85
        assert candidate.description.endswith(": createClient (function)")

    def test_critical_types(self, analyzer, make_analysis):
        [candidate] = _docs(analyzer, make_analysis, undocumentedExports=[
            {"file": "src/types.ts", "name": "Options", "type": "interface"},
        ])
        assert candidate.candidate_id == "docs-undocumented-critical-types"
        assert candidate.score == 0.65

    def test_few_other_exports_ignored(self, analyzer, make_analysis):
        exports = [{"file": "src/util.ts", "name": f"fn{i}", "type": "function"} for i in range(5)]
        assert _docs(analyzer, make_analysis, undocumentedExports=exports) == []

    def test_many_other_exports(self, analyzer, make_analysis):
        exports = [{"file": "src/util.ts", "name": f"fn{i}", "type": "function"} for i in range(7)]
        [candidate] = _docs(analyzer, make_analysis, undocumentedExports=exports)
        assert candidate.candidate_id == "docs-undocumented-exports"
        assert candidate.score == 0.45
        assert candidate.description.endswith("and 4 more")
        assert candidate.effort == TaskEffort.MEDIUM


class TestReadmeSections:
    def test_required_sections(self, analyzer, make_analysis):
        [candidate] = _docs(analyzer, make_analysis, missingReadmeSections=[
            {"section": "Usage", "priority": "required"},
            {"section": "Installation", "priority": "required"},
            {"section": "FAQ", "priority": "optional"},
        ])
        assert candidate.candidate_id == "docs-readme-required-sections"
        assert candidate.score == 0.8
        assert candidate.description == "Add 2 required README sections: Installation, Usage"

    def test_recommended_sections(self, analyzer, make_analysis):
        [candidate] = _docs(analyzer, make_analysis, missingReadmeSections=[
            {"section": "Contributing", "priority": "recommended"},
        ])
        assert candidate.candidate_id == "docs-readme-recommended-sections"
        assert candidate.description == "Add 1 recommended README section: Contributing"

    def test_priority_label_normalised(self, analyzer, make_analysis):
        [candidate] = _docs(analyzer, make_analysis, missingReadmeSections=[
            {"section": "Usage", "priority": " Required "},
            {"section": "License", "priority": "RECOMMENDED"},
        ])
        assert candidate.candidate_id == "docs-readme-required-sections"
        assert candidate.description == "Add 1 required README section: Usage"

    def test_optional_needs_more_than_two(self, analyzer, make_analysis):
        two = [{"section": s} for s in ("FAQ", "Changelog")]
        assert _docs(analyzer, make_analysis, missingReadmeSections=two) == []
        three = two + [{"section": "Credits", "priority": "whatever"}]
        [candidate] = _docs(analyzer, make_analysis, missingReadmeSections=three)
        assert candidate.candidate_id == "docs-readme-optional-sections"
        assert candidate.score == 0.35


class TestAPICompleteness:
    @pytest.mark.parametrize(
        "percentage,expected_id,score",
        [
            (10, "docs-api-docs-critical", 0.75),
            (45, "docs-api-docs-improvement", 0.55),
            (70, "docs-api-docs-completion", 0.4),
        ],
    )
    def test_tiers(self, analyzer, make_analysis, percentage, expected_id, score):
        [candidate] = _docs(analyzer, make_analysis, apiCompleteness={
            "percentage": percentage,
            "details": {"undocumentedItems": [{"name": "getUser"}, {"name": "createUser"}]},
        })
        assert candidate.candidate_id == expected_id
        assert candidate.score == score
        assert candidate.description.endswith(": createUser, getUser")

    def test_quality_issues_when_complete(self, analyzer, make_analysis):
        [candidate] = _docs(analyzer, make_analysis, apiCompleteness={
            "percentage": 95,
            "details": {"commonIssues": ["Missing @returns"]},
        })
        assert candidate.candidate_id == "docs-api-docs-quality"
        assert candidate.description == "Fix 1 common API documentation issue: Missing @returns"

    def test_complete_api_is_quiet(self, analyzer, make_analysis):
        assert _docs(analyzer, make_analysis, apiCompleteness={"percentage": 100}) == []

    def test_absent_api_completeness(self, analyzer, clean_analysis):
        assert analyzer.analyze(clean_analysis) == []

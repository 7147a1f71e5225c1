"""Project analysis snapshot - the structural input every analyzer reads.

Built by an external scanner. Wire names are camelCase; attributes are
snake_case. Every list defaults to empty and every rich field defaults to
None, so partial snapshots validate and analyzers treat absence as
"no applicable issues".
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class SnapshotModel(BaseModel):
    """Base for snapshot models: camelCase on the wire, snake_case in code."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )


class VulnerabilitySeverity(str, Enum):
    """Four-level ordinal, critical > high > medium > low."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


SEVERITY_ORDER: tuple[VulnerabilitySeverity, ...] = (
    VulnerabilitySeverity.CRITICAL,
    VulnerabilitySeverity.HIGH,
    VulnerabilitySeverity.MEDIUM,
    VulnerabilitySeverity.LOW,
)

_SEVERITY_ALIASES = {
    "critical": VulnerabilitySeverity.CRITICAL,
    "high": VulnerabilitySeverity.HIGH,
    "medium": VulnerabilitySeverity.MEDIUM,
    "moderate": VulnerabilitySeverity.MEDIUM,
    "low": VulnerabilitySeverity.LOW,
}


def normalize_severity(value: object) -> VulnerabilitySeverity:
    """Map any label to a severity. Unknown, empty and non-string labels map to LOW."""
    if isinstance(value, VulnerabilitySeverity):
        return value
    if not isinstance(value, str):
        return VulnerabilitySeverity.LOW
    return _SEVERITY_ALIASES.get(value.strip().lower(), VulnerabilitySeverity.LOW)


class UpdateType(str, Enum):
    """Semver distance between installed and latest version."""

    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"


class SecurityVulnerability(SnapshotModel):
    """Known vulnerability in a dependency."""

    name: str
    cve_id: str
    severity: VulnerabilitySeverity = VulnerabilitySeverity.LOW
    affected_versions: str = ""
    description: str = ""

    @field_validator("severity", mode="before")
    @classmethod
    def _bucket_severity(cls, value: object) -> VulnerabilitySeverity:
        return normalize_severity(value)


class OutdatedDependency(SnapshotModel):
    """Dependency with a newer release available."""

    name: str
    current_version: str
    latest_version: str
    update_type: UpdateType


class DeprecatedPackage(SnapshotModel):
    """Deprecated dependency. replacement=None means no known substitute."""

    name: str
    current_version: str = ""
    reason: str = ""
    replacement: str | None = None


@dataclass(frozen=True)
class RichSource(Generic[T]):
    """Structured dependency data, preferred when present."""

    items: tuple[T, ...]


@dataclass(frozen=True)
class LegacySource:
    """Free-form legacy tokens ("name@version" or descriptions)."""

    entries: tuple[str, ...]


class DependencyHealth(SnapshotModel):
    """Dependency state in both legacy and rich shapes."""

    outdated: list[str] = []
    security: list[str] = []
    outdated_packages: list[OutdatedDependency] | None = None
    security_issues: list[SecurityVulnerability] | None = None
    deprecated_packages: list[DeprecatedPackage] | None = None

    def security_source(self) -> RichSource[SecurityVulnerability] | LegacySource:
        """Rich vulnerabilities win only when non-empty; otherwise legacy tokens."""
        if self.security_issues:
            return RichSource(tuple(self.security_issues))
        return LegacySource(tuple(self.security))

    def outdated_source(self) -> RichSource[OutdatedDependency] | LegacySource:
        """Rich data wins whenever present, even as an empty list."""
        if self.outdated_packages is not None:
            return RichSource(tuple(self.outdated_packages))
        return LegacySource(tuple(self.outdated))


class ComplexityHotspot(SnapshotModel):
    """File whose complexity metrics exceed comfortable limits."""

    file: str
    cyclomatic_complexity: int = 15
    cognitive_complexity: int = 20
    line_count: int = 300


class DuplicatePattern(SnapshotModel):
    """Code pattern repeated across several locations."""

    pattern: str
    locations: list[str] = []
    similarity: float = 0.0


class CodeSmell(SnapshotModel):
    """Single anti-pattern occurrence."""

    file: str
    type: str
    severity: str = "low"
    details: str = ""


class CodeQuality(SnapshotModel):
    """Code quality signals."""

    lint_issues: int = 0
    duplicated_code: list[DuplicatePattern] = []
    complexity_hotspots: list[ComplexityHotspot] = []
    code_smells: list[CodeSmell] = []

    @field_validator("complexity_hotspots", mode="before")
    @classmethod
    def _expand_legacy_hotspots(cls, value: object) -> object:
        # Legacy scanners report a bare file path per hotspot
        if isinstance(value, list):
            return [{"file": item} if isinstance(item, str) else item for item in value]
        return value


class UndocumentedExport(SnapshotModel):
    """Exported symbol without documentation."""

    file: str
    name: str
    type: str = "function"
    line: int | None = None
    is_public: bool = False


class OutdatedDocumentation(SnapshotModel):
    """Documentation issue. severity is assigned upstream (age or impact based)."""

    file: str
    type: str
    description: str = ""
    severity: str = "low"
    line: int | None = None
    suggestion: str | None = None


class MissingReadmeSection(SnapshotModel):
    """README section the project lacks."""

    section: str
    priority: str = "optional"
    description: str = ""


class UndocumentedAPIItem(SnapshotModel):
    """API item without documentation."""

    name: str
    file: str = ""
    type: str = "function"


class APICompletenessDetails(SnapshotModel):
    """Breakdown behind the API completeness percentage."""

    total_endpoints: int = 0
    documented_endpoints: int = 0
    undocumented_items: list[UndocumentedAPIItem] = []
    well_documented_examples: list[str] = []
    common_issues: list[str] = []


class APICompleteness(SnapshotModel):
    """Share of the API surface that is documented."""

    percentage: float
    details: APICompletenessDetails = APICompletenessDetails()


class DocumentationAnalysis(SnapshotModel):
    """Documentation signals. Everything beyond coverage is optional."""

    coverage: float = 100.0
    missing_docs: list[str] = []
    undocumented_exports: list[UndocumentedExport] = []
    outdated_docs: list[OutdatedDocumentation] = []
    missing_readme_sections: list[MissingReadmeSection] = []
    api_completeness: APICompleteness | None = None


class CodebaseSize(SnapshotModel):
    """Size of the codebase."""

    files: int = 0
    lines: int = 0
    languages: dict[str, int] = {}


class CoverageSummary(SnapshotModel):
    """Test coverage summary. Not read by the analyzers."""

    percentage: float = 0.0
    uncovered_files: list[str] = []


class PerformanceSignals(SnapshotModel):
    """Performance signals. Not read by the analyzers."""

    bundle_size: int | None = None
    slow_tests: list[str] = []
    bottlenecks: list[str] = []


class ProjectAnalysis(SnapshotModel):
    """Point-in-time structural summary of a project."""

    codebase_size: CodebaseSize
    dependencies: DependencyHealth
    code_quality: CodeQuality
    documentation: DocumentationAnalysis
    test_coverage: CoverageSummary | None = None
    performance: PerformanceSignals = PerformanceSignals()

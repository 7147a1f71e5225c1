"""Task candidate entities - the output vocabulary shared by all analyzers."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class AnalyzerType(str, Enum):
    """Category tag used by downstream routing."""

    MAINTENANCE = "maintenance"
    DOCS = "docs"
    REFACTORING = "refactoring"


class TaskPriority(str, Enum):
    """Priority of a maintenance task."""

    URGENT = "urgent"
    HIGH = "high"
    NORMAL = "normal"
    LOW = "low"


# Higher rank wins ties in selection
PRIORITY_RANK: dict[TaskPriority, int] = {
    TaskPriority.URGENT: 3,
    TaskPriority.HIGH: 2,
    TaskPriority.NORMAL: 1,
    TaskPriority.LOW: 0,
}


class TaskEffort(str, Enum):
    """Estimated effort of a maintenance task."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class SuggestionType(str, Enum):
    """Kind of remediation step."""

    DEPENDENCY_UPDATE = "dependency-update"
    PACKAGE_MANAGER_UPGRADE = "package-manager-upgrade"
    SHELL_COMMAND = "shell-command"
    SECURITY_ADVISORY_LINK = "security-advisory-link"
    MANUAL_REVIEW = "manual-review"
    MIGRATION_GUIDE = "migration-guide"
    PACKAGE_REPLACEMENT = "package-replacement"
    DOCUMENTATION_POINTER = "documentation-pointer"
    TESTING_REMINDER = "testing-reminder"


# Suggestions of these types always carry a non-empty command
COMMAND_SUGGESTION_TYPES: frozenset[SuggestionType] = frozenset({
    SuggestionType.DEPENDENCY_UPDATE,
    SuggestionType.PACKAGE_MANAGER_UPGRADE,
    SuggestionType.SHELL_COMMAND,
    SuggestionType.PACKAGE_REPLACEMENT,
})


class SuggestionPriority(str, Enum):
    """Urgency of a single remediation step."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class CandidateModel(BaseModel):
    """Base for candidate models: camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class RemediationSuggestion(CandidateModel):
    """Concrete follow-up action attached to a candidate."""

    type: SuggestionType
    description: str
    priority: SuggestionPriority
    expected_outcome: str
    command: str | None = None
    link: str | None = None
    warning: str | None = None


class TaskCandidate(CandidateModel):
    """One scored, actionable maintenance opportunity."""

    candidate_id: str = Field(min_length=1)
    title: str
    description: str
    priority: TaskPriority
    effort: TaskEffort
    workflow: str
    rationale: str
    score: float = Field(ge=0.0, le=1.0)
    remediation_suggestions: list[RemediationSuggestion] = []

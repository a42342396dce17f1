"""Quality report entities: issues, stats, reports, snapshots, trends, quick wins.

Python attributes are snake_case; the wire and persisted form is camelCase
(``model_dump(by_alias=True)``). Models accept either form on input.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Severity = Literal["error", "warning", "info"]
AnalysisType = Literal["fast", "deep"]


class CamelModel(BaseModel):
    """Base model with camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_payload(self) -> dict:
        """Wire form: camelCase keys, absent optionals omitted."""
        return self.model_dump(by_alias=True, exclude_none=True)


class Issue(CamelModel):
    """Single finding. Immutable."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    severity: Severity
    category: str
    message: str
    rule: str
    file: str | None = None
    line: int | None = None


class SubProject(CamelModel):
    """Nested project found under the root (e.g. client/, functions/)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    path: str
    type: str
    dependencies: list[str] = Field(default_factory=list)


class ProjectInfo(CamelModel):
    """Detected project types for a root directory."""

    types: list[str] = Field(default_factory=list)
    is_multi_project: bool = False
    sub_projects: list[SubProject] | None = None
    main_framework: str | None = None


class QualityStats(CamelModel):
    """Aggregate statistics over the sampled files."""

    total_files: int = 0
    total_lines: int = 0
    average_file_size: int = 0
    duplicate_code: int = 0
    unused_code: int = 0
    complexity: int = 0


class QualityReport(CamelModel):
    """Result of one analysis run."""

    project_path: str
    project_types: list[str] = Field(default_factory=list)
    score: int = 100
    issues: list[Issue] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    stats: QualityStats = Field(default_factory=QualityStats)
    analysis_type: AnalysisType = "fast"
    ai_insights: list[str] | None = None


class Snapshot(CamelModel):
    """Persisted report for one project path."""

    project_path: str
    timestamp: str
    report: QualityReport


class CategoryTrend(CamelModel):
    """Issue count change for one category between two runs."""

    category: str
    before: int
    after: int
    change: int


class Trend(CamelModel):
    """Comparison of the current report against the last snapshot."""

    current_score: int
    current_issue_count: int
    timestamp: str
    previous_score: int | None = None
    score_change: int | None = None
    previous_issue_count: int | None = None
    issue_change: int | None = None
    improving_areas: list[CategoryTrend] = Field(default_factory=list)
    degrading_areas: list[CategoryTrend] = Field(default_factory=list)


class QuickWin(CamelModel):
    """Remediation opportunity for a group of same-rule issues."""

    title: str
    description: str
    effort: int  # minutes
    impact: Literal["Low", "Medium", "High"]
    score_gain: float
    files_affected: int


class ProblemCategory(CamelModel):
    """Issue count per category with percentage share."""

    category: str
    count: int
    percentage: int


class FileHotspot(CamelModel):
    """File with the most issues."""

    file: str
    issue_count: int
    severity: Literal["critical", "warning"]


class SmartSummary(CamelModel):
    """Condensed view of a report."""

    score: int
    total_issues: int
    critical_count: int
    estimated_fix_time: str
    top_problems: list[ProblemCategory] = Field(default_factory=list)
    top_files: list[FileHotspot] = Field(default_factory=list)


class AnalysisOptions(CamelModel):
    """Per-run toggles."""

    deep_analysis: bool = False
    ai_enabled: bool = False
    check_unused_code: bool = True
    check_complexity: bool = False
    check_security: bool = False

    @property
    def uses_oracle(self) -> bool:
        return self.deep_analysis or self.ai_enabled

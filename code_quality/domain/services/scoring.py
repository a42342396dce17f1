"""Issue-to-score reduction and canned recommendations."""

import math
from collections.abc import Iterable

from code_quality.domain.entities.quality import Issue, ProjectInfo

SEVERITY_WEIGHTS: dict[str, float] = {
    "error": 5.0,
    "warning": 2.0,
    "info": 0.5,
}

# Checked in this order; every category present contributes its advice.
CATEGORY_RECOMMENDATIONS: tuple[tuple[str, str], ...] = (
    ("file-size", "Consider breaking down large files into smaller, more focused modules"),
    ("function-length", "Extract long functions into smaller helpers with a single responsibility"),
    ("imports", "Set up path aliases in tsconfig.json to avoid deep relative imports"),
    ("firebase-structure", "Split Firebase functions into separate files (max 5 functions per file)"),
    ("code-quality", "Replace console.log with proper logging framework"),
    ("unused-code", "Remove unused variables and exports to reduce dead code"),
    ("maintenance", "Resolve or track TODO/FIXME markers in the issue tracker"),
    ("comments", "Write code comments in English for a consistent codebase"),
    ("error-handling", "Log or re-throw errors in every catch block"),
    ("code-style", "Configure a formatter to keep lines within the length limit"),
    ("complexity", "Reduce branching in complex functions (early returns, lookup tables)"),
    ("security", "Move credentials and hosts into environment configuration"),
)

MULTI_PROJECT_RECOMMENDATION = (
    "Consider using a monorepo tool like Lerna or Nx for better dependency management"
)

QUALITY_LEVELS: tuple[tuple[int, str], ...] = (
    (90, "excellent"),
    (75, "good"),
    (60, "fair"),
    (40, "needs improvement"),
)


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def penalty(issues: Iterable[Issue]) -> float:
    """Sum of severity weights."""
    return sum(SEVERITY_WEIGHTS.get(i.severity, 0.0) for i in issues)


def calculate_score(issues: Iterable[Issue]) -> int:
    """Score 0-100: 100 minus weighted issue count, rounded half up, clamped."""
    return max(0, min(100, round_half_up(100 - penalty(issues))))


def quality_level(score: int) -> str:
    """Human label for a score."""
    for threshold, label in QUALITY_LEVELS:
        if score >= threshold:
            return label
    return "poor"


def generate_recommendations(
    issues: Iterable[Issue],
    project_info: ProjectInfo | None = None,
) -> list[str]:
    """Map categories present in the issue set to canned advice."""
    present = {i.category for i in issues}
    recommendations = [text for category, text in CATEGORY_RECOMMENDATIONS if category in present]
    if project_info is not None and project_info.is_multi_project:
        recommendations.append(MULTI_PROJECT_RECOMMENDATION)
    return recommendations

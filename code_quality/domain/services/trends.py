"""Derived views over reports: trends, quick wins, smart summary.

Pure functions of report data; issues are never recomputed here.
"""

from collections import Counter, defaultdict
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import PurePath

from code_quality.domain.entities.quality import (
    CategoryTrend,
    FileHotspot,
    Issue,
    ProblemCategory,
    QualityReport,
    QuickWin,
    SmartSummary,
    Trend,
)
from code_quality.domain.services.scoring import round_half_up

QUICK_WIN_MIN_GROUP = 5
TOP_N = 5

FIX_MINUTES: dict[str, int] = {"error": 15, "warning": 5, "info": 2}
MINUTES_PER_HOUR = 60
MINUTES_PER_DAY = 8 * MINUTES_PER_HOUR


def utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


def compute_trend(
    previous: QualityReport | None,
    current: QualityReport,
    timestamp: str | None = None,
) -> Trend:
    """Compare current report with the previous one (if any)."""
    trend = Trend(
        current_score=current.score,
        current_issue_count=len(current.issues),
        timestamp=timestamp or utc_now(),
    )
    if previous is None:
        return trend

    trend.previous_score = previous.score
    trend.score_change = current.score - previous.score
    trend.previous_issue_count = len(previous.issues)
    trend.issue_change = len(current.issues) - len(previous.issues)

    before = Counter(i.category for i in previous.issues)
    after = Counter(i.category for i in current.issues)
    for category in sorted(set(before) | set(after)):
        b, a = before.get(category, 0), after.get(category, 0)
        if a == b:
            continue
        entry = CategoryTrend(category=category, before=b, after=a, change=a - b)
        if a < b:
            trend.improving_areas.append(entry)
        else:
            trend.degrading_areas.append(entry)
    return trend


@dataclass(frozen=True)
class QuickWinProfile:
    """How a same-rule issue group turns into a QuickWin."""

    title: str
    description: str
    minutes_each: int
    impact: str
    gain: Callable[[int], float]


QUICK_WIN_PROFILES: dict[str, QuickWinProfile] = {
    "no-unused-vars": QuickWinProfile(
        title="Remove unused variables",
        description="Delete {count} unused variable declarations",
        minutes_each=2,
        impact="Medium",
        gain=lambda n: min(15, n),
    ),
    "no-console": QuickWinProfile(
        title="Replace console statements",
        description="Replace {count} console calls with a logger",
        minutes_each=1,
        impact="Low",
        gain=lambda n: min(8, n / 2),
    ),
    "no-non-english-comments": QuickWinProfile(
        title="Translate comments to English",
        description="Translate {count} non-English comments",
        minutes_each=3,
        impact="Low",
        gain=lambda n: min(5, n / 3),
    ),
    "no-todo-comments": QuickWinProfile(
        title="Resolve TODO comments",
        description="Resolve or ticket {count} TODO/FIXME markers",
        minutes_each=5,
        impact="Medium",
        gain=lambda n: min(10, n / 2),
    ),
}

DEFAULT_PROFILE = QuickWinProfile(
    title="Fix {rule} issues",
    description="Address {count} occurrences of {rule}",
    minutes_each=3,
    impact="Low",
    gain=lambda n: min(5, n / 4),
)


def generate_quick_wins(report: QualityReport) -> list[QuickWin]:
    """Group issues by rule; groups of 5+ become QuickWins ranked by gain per minute."""
    groups: dict[str, list[Issue]] = defaultdict(list)
    for issue in report.issues:
        groups[issue.rule].append(issue)

    wins: list[QuickWin] = []
    for rule, issues in groups.items():
        count = len(issues)
        if count < QUICK_WIN_MIN_GROUP:
            continue
        profile = QUICK_WIN_PROFILES.get(rule, DEFAULT_PROFILE)
        wins.append(
            QuickWin(
                title=profile.title.format(rule=rule, count=count),
                description=profile.description.format(rule=rule, count=count),
                effort=count * profile.minutes_each,
                impact=profile.impact,
                score_gain=round(profile.gain(count), 1),
                files_affected=len({i.file for i in issues if i.file}),
            )
        )
    wins.sort(key=lambda w: w.score_gain / w.effort, reverse=True)
    return wins[:TOP_N]


def estimate_fix_minutes(issues: list[Issue]) -> int:
    return sum(FIX_MINUTES.get(i.severity, 0) for i in issues)


def format_fix_time(minutes: int) -> str:
    """Minutes below an hour, hours below a working day, else 8h days."""
    if minutes < MINUTES_PER_HOUR:
        return f"{minutes} minutes"
    if minutes < MINUTES_PER_DAY:
        return f"{round_half_up(minutes / MINUTES_PER_HOUR)} hours"
    return f"{round_half_up(minutes / MINUTES_PER_DAY)} days"


def generate_smart_summary(report: QualityReport) -> SmartSummary:
    """Top categories, file hotspots and estimated fix time."""
    total = len(report.issues)
    by_category = Counter(i.category for i in report.issues)
    top_problems = [
        ProblemCategory(
            category=category,
            count=count,
            percentage=round_half_up(count / total * 100),
        )
        for category, count in by_category.most_common(TOP_N)
    ]

    by_file: dict[str, list[Issue]] = defaultdict(list)
    for issue in report.issues:
        if issue.file:
            by_file[issue.file].append(issue)
    hotspots = sorted(by_file.items(), key=lambda kv: len(kv[1]), reverse=True)[:TOP_N]
    top_files = [
        FileHotspot(
            file=PurePath(path).name,
            issue_count=len(issues),
            severity="critical" if any(i.severity == "error" for i in issues) else "warning",
        )
        for path, issues in hotspots
    ]

    return SmartSummary(
        score=report.score,
        total_issues=total,
        critical_count=sum(1 for i in report.issues if i.severity == "error"),
        estimated_fix_time=format_fix_time(estimate_fix_minutes(report.issues)),
        top_problems=top_problems,
        top_files=top_files,
    )

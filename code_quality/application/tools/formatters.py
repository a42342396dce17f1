"""Markdown renderings of summaries, quick wins and trends."""

from code_quality.domain.entities.quality import QuickWin, SmartSummary, Trend
from code_quality.domain.services.scoring import quality_level


def _bar(percentage: int, width: int = 20) -> str:
    filled = max(0, min(width, round(percentage / 100 * width)))
    return "█" * filled + "░" * (width - filled)


def _signed(value: int | float) -> str:
    return f"+{value}" if value > 0 else str(value)


def format_smart_summary(summary: SmartSummary) -> str:
    lines = [
        "# 📊 Code Quality Summary",
        "",
        f"**Score:** {summary.score}/100 ({quality_level(summary.score)})",
        f"**Total issues:** {summary.total_issues}",
        f"**Critical issues:** {summary.critical_count}",
        f"**Estimated fix time:** {summary.estimated_fix_time}",
        "",
    ]
    if summary.top_problems:
        lines += ["## 🔥 Top problems", ""]
        for problem in summary.top_problems:
            lines.append(
                f"- `{problem.category}` {_bar(problem.percentage)} {problem.count} ({problem.percentage}%)"
            )
        lines.append("")
    if summary.top_files:
        lines += ["## 📁 Files needing attention", ""]
        for hotspot in summary.top_files:
            marker = "🔴" if hotspot.severity == "critical" else "🟡"
            lines.append(f"- {marker} `{hotspot.file}`: {hotspot.issue_count} issues")
        lines.append("")
    if not summary.top_problems:
        lines.append("✅ No issues found.")
    return "\n".join(lines).rstrip() + "\n"


def format_quick_wins(wins: list[QuickWin]) -> str:
    if not wins:
        return "# ⚡ Quick Wins\n\nNo quick wins: no rule has 5 or more occurrences.\n"
    lines = ["# ⚡ Quick Wins", ""]
    for idx, win in enumerate(wins, 1):
        lines += [
            f"## {idx}. {win.title}",
            f"{win.description}",
            f"- Effort: {win.effort} minutes",
            f"- Impact: {win.impact}",
            f"- Score gain: +{win.score_gain}",
            f"- Files affected: {win.files_affected}",
            "",
        ]
    total_gain = round(sum(w.score_gain for w in wins), 1)
    total_effort = sum(w.effort for w in wins)
    lines.append(f"**Total:** +{total_gain} points for about {total_effort} minutes of work")
    return "\n".join(lines) + "\n"


def format_trends(trend: Trend) -> str:
    lines = ["# 📈 Quality Trends", ""]
    if trend.previous_score is None:
        lines += [
            f"**Current score:** {trend.current_score}/100",
            f"**Current issues:** {trend.current_issue_count}",
            "",
            "First analysis for this project; a snapshot was saved for future comparison.",
        ]
        return "\n".join(lines) + "\n"

    direction = "📈" if (trend.score_change or 0) > 0 else "📉" if (trend.score_change or 0) < 0 else "➡️"
    lines += [
        f"**Score:** {trend.previous_score} → {trend.current_score} ({_signed(trend.score_change or 0)}) {direction}",
        f"**Issues:** {trend.previous_issue_count} → {trend.current_issue_count} ({_signed(trend.issue_change or 0)})",
        f"**Compared at:** {trend.timestamp}",
        "",
    ]
    if trend.improving_areas:
        lines += ["## ✅ Improving", ""]
        lines += [f"- `{a.category}`: {a.before} → {a.after} ({_signed(a.change)})" for a in trend.improving_areas]
        lines.append("")
    if trend.degrading_areas:
        lines += ["## ⚠️ Degrading", ""]
        lines += [f"- `{a.category}`: {a.before} → {a.after} ({_signed(a.change)})" for a in trend.degrading_areas]
        lines.append("")
    if not trend.improving_areas and not trend.degrading_areas:
        lines.append("No category changed since the last snapshot.")
    return "\n".join(lines).rstrip() + "\n"

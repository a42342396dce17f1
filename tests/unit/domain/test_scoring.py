"""Tests for score reduction and recommendations."""

import pytest

from code_quality.domain.entities.quality import Issue, ProjectInfo
from code_quality.domain.services.scoring import (
    MULTI_PROJECT_RECOMMENDATION,
    calculate_score,
    generate_recommendations,
    quality_level,
)


def _issue(severity: str, category: str = "code-quality", rule: str = "r") -> Issue:
    return Issue(severity=severity, category=category, rule=rule, message="m")


class TestCalculateScore:
    """Score = clamp(round(100 - weighted count), 0, 100)."""

    def test_clean(self):
        assert calculate_score([]) == 100

    def test_mixed_severities(self):
        issues = [_issue("error")] * 3 + [_issue("warning")] * 2 + [_issue("info")] * 4
        assert calculate_score(issues) == 79

    def test_single_error(self):
        assert calculate_score([_issue("error")]) == 95

    def test_half_point_rounds_up(self):
        assert calculate_score([_issue("info")]) == 100
        assert calculate_score([_issue("info")] * 3) == 99

    def test_floor_at_zero(self):
        assert calculate_score([_issue("error")] * 30) == 0

    @pytest.mark.parametrize(
        ("score", "level"),
        [(95, "excellent"), (90, "excellent"), (80, "good"), (60, "fair"), (45, "needs improvement"), (10, "poor")],
    )
    def test_quality_level(self, score: int, level: str):
        assert quality_level(score) == level


class TestRecommendations:
    """Category-driven canned advice in fixed order."""

    def test_none_for_clean(self):
        assert generate_recommendations([]) == []

    def test_fixed_order_not_frequency(self):
        issues = [_issue("info", "code-quality")] * 5 + [_issue("info", "file-size")]
        recs = generate_recommendations(issues)
        assert len(recs) == 2
        assert "breaking down large files" in recs[0]
        assert "console.log" in recs[1]

    def test_unknown_category_ignored(self):
        assert generate_recommendations([_issue("error", "react-structure")]) == []

    def test_multi_project(self):
        info = ProjectInfo(types=["react", "nodejs"], is_multi_project=True)
        assert generate_recommendations([], info) == [MULTI_PROJECT_RECOMMENDATION]

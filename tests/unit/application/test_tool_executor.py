"""Tests for QualityToolExecutor."""

import json
from pathlib import Path

import pytest

from code_quality.application.tools import QualityToolExecutor, ToolResult, paginate_report
from code_quality.domain.entities.quality import Issue, QualityReport
from code_quality.infrastructure.analyzer.quality_analyzer import QualityAnalyzer
from code_quality.infrastructure.persistence.snapshot_store import SnapshotStore

UNUSED_NAMES = ("valueOne", "valueTwo", "valueThree", "valueFour", "valueFive", "valueSix")


def _text(result: ToolResult) -> str:
    return result.to_payload()["content"][0]["text"]


@pytest.fixture()
def project(tmp_path: Path) -> Path:
    root = tmp_path / "app"
    (root / "src").mkdir(parents=True)
    body = "\n".join(f"  const {name} = load();" for name in UNUSED_NAMES)
    (root / "src" / "a.ts").write_text(f"function setup() {{\n{body}\n  run();\n}}\n", encoding="utf-8")
    return root


@pytest.fixture()
def store(tmp_path: Path) -> SnapshotStore:
    return SnapshotStore(tmp_path / "cache")


@pytest.fixture()
def executor(store: SnapshotStore) -> QualityToolExecutor:
    return QualityToolExecutor(QualityAnalyzer(), store)


class TestToolResult:
    def test_success_payload(self):
        payload = ToolResult(success=True, content="ok").to_payload()
        assert payload == {"content": [{"type": "text", "text": "ok"}], "isError": False}

    def test_error_payload(self):
        payload = ToolResult(success=False, content="", error="boom").to_payload()
        assert payload == {"content": [{"type": "text", "text": "Error: boom"}], "isError": True}


class TestPaginateReport:
    def _report(self, n: int) -> QualityReport:
        issues = [
            Issue(severity="warning" if i % 2 else "error", category="c", message=f"m{i}", rule="r")
            for i in range(n)
        ]
        return QualityReport(project_path="/p", issues=issues, score=50)

    def test_middle_page(self):
        payload = paginate_report(self._report(45), page=2, page_size=20)
        assert [i["message"] for i in payload["issues"]][:2] == ["m20", "m21"]
        assert payload["pagination"] == {
            "currentPage": 2,
            "pageSize": 20,
            "totalIssues": 45,
            "totalPages": 3,
            "hasNextPage": True,
            "hasPrevPage": True,
            "issuesOnCurrentPage": 20,
            "startIndex": 21,
            "endIndex": 40,
        }
        assert payload["issuesSummary"] == {"byCategory": {"c": 45}, "bySeverity": {"error": 23, "warning": 22}}

    def test_page_past_end(self):
        payload = paginate_report(self._report(3), page=5, page_size=20)
        assert payload["issues"] == []
        assert payload["pagination"]["startIndex"] == 0
        assert payload["pagination"]["hasNextPage"] is False

    def test_no_issues(self):
        payload = paginate_report(self._report(0), page=1, page_size=20)
        assert payload["pagination"]["totalPages"] == 1
        assert payload["score"] == 50


class TestQualityToolExecutor:
    def test_list_tools(self, executor: QualityToolExecutor):
        names = [t["function"]["name"] for t in executor.list_tools()]
        assert names == [
            "analyze_project",
            "check_quality",
            "get_recommendations",
            "get_smart_summary",
            "get_quick_wins",
            "get_trends",
        ]

    @pytest.mark.asyncio
    async def test_unknown_tool(self, executor: QualityToolExecutor):
        result = await executor.execute("delete_everything", {})
        assert result.success is False
        assert _text(result) == "Error: Unknown tool: delete_everything"

    @pytest.mark.asyncio
    async def test_missing_project_path(self, executor: QualityToolExecutor):
        result = await executor.execute("check_quality", {})
        assert result.success is False
        assert result.error.startswith("Invalid arguments for check_quality")

    @pytest.mark.asyncio
    async def test_path_is_not_directory(self, executor: QualityToolExecutor, project: Path):
        result = await executor.execute("check_quality", {"projectPath": str(project / "src" / "a.ts")})
        assert result.to_payload()["isError"] is True
        assert "not a directory" in result.error

    @pytest.mark.asyncio
    async def test_missing_path(self, executor: QualityToolExecutor, tmp_path: Path):
        result = await executor.execute("get_quick_wins", {"projectPath": str(tmp_path / "nope")})
        assert "does not exist" in result.error

    @pytest.mark.asyncio
    async def test_analyze_project(self, executor: QualityToolExecutor, project: Path):
        (project / "package.json").write_text('{"dependencies": {"react": "18"}}', encoding="utf-8")
        result = await executor.execute("analyze_project", {"projectPath": str(project)})
        data = json.loads(result.content)
        assert data["types"] == ["react"]
        assert data["isMultiProject"] is False

    @pytest.mark.asyncio
    async def test_check_quality_paginates(self, executor: QualityToolExecutor, project: Path):
        result = await executor.execute(
            "check_quality",
            {"projectPath": str(project), "page": 2, "pageSize": 4},
        )
        assert result.success, result.error
        data = json.loads(result.content)
        assert data["pagination"]["totalIssues"] == 6
        assert data["pagination"]["issuesOnCurrentPage"] == 2
        assert data["pagination"]["startIndex"] == 5
        assert data["issuesSummary"]["byCategory"] == {"unused-code": 6}
        assert data["stats"]["unusedCode"] == 6
        assert data["analysisType"] == "fast"

    @pytest.mark.asyncio
    async def test_page_size_clamped(self, executor: QualityToolExecutor, project: Path):
        result = await executor.execute("check_quality", {"projectPath": str(project), "pageSize": 500, "page": 0})
        pagination = json.loads(result.content)["pagination"]
        assert (pagination["pageSize"], pagination["currentPage"]) == (100, 1)

    @pytest.mark.asyncio
    async def test_recommendations(self, executor: QualityToolExecutor, project: Path):
        result = await executor.execute("get_recommendations", {"projectPath": str(project)})
        data = json.loads(result.content)
        assert data["score"] == 88
        assert len(data["topIssues"]) == 5
        assert data["recommendations"]

    @pytest.mark.asyncio
    async def test_quick_wins(self, executor: QualityToolExecutor, project: Path):
        text = (await executor.execute("get_quick_wins", {"projectPath": str(project)})).content
        assert text.startswith("# ⚡ Quick Wins")
        assert "Files affected: 1" in text

    @pytest.mark.asyncio
    async def test_smart_summary_saves_snapshot(
        self, executor: QualityToolExecutor, store: SnapshotStore, project: Path
    ):
        result = await executor.execute("get_smart_summary", {"projectPath": str(project)})
        assert "**Score:** 88/100" in result.content
        assert store.latest(str(project.resolve())) is not None

    @pytest.mark.asyncio
    async def test_trends_compare_with_previous_run(self, executor: QualityToolExecutor, project: Path):
        first = await executor.execute("get_trends", {"projectPath": str(project)})
        assert "First analysis" in first.content

        (project / "src" / "a.ts").write_text("function setup() {\n  run();\n}\n", encoding="utf-8")
        second = await executor.execute("get_trends", {"projectPath": str(project)})
        assert "**Score:** 88 → 100 (+12)" in second.content
        assert "`unused-code`: 6 → 0 (-6)" in second.content

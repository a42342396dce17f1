"""Tool executor - runs quality tools by name and shapes their results."""

import asyncio
import json
import logging
import math
from collections import Counter
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError

from code_quality.application.tools.formatters import format_quick_wins, format_smart_summary, format_trends
from code_quality.application.tools.schemas import (
    QUALITY_TOOLS,
    TOOL_ARGS,
    AnalyzeProjectArgs,
    CheckQualityArgs,
    ProjectPathArgs,
)
from code_quality.domain.entities.quality import AnalysisOptions, QualityReport
from code_quality.domain.services.trends import generate_quick_wins, generate_smart_summary
from code_quality.infrastructure.analyzer.quality_analyzer import QualityAnalyzer
from code_quality.infrastructure.persistence.snapshot_store import SnapshotStore

logger = logging.getLogger(__name__)

TOP_ISSUES = 5


@dataclass
class ToolResult:
    """Result of tool execution."""

    success: bool
    content: str
    error: str | None = None
    tool: str = ""
    args: dict[str, Any] = field(default_factory=dict)

    def to_payload(self) -> dict:
        """Transport payload: text content plus error flag."""
        text = self.content if self.success else f"Error: {self.error}"
        return {"content": [{"type": "text", "text": text}], "isError": not self.success}


def _dumps(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)


def paginate_report(report: QualityReport, page: int, page_size: int) -> dict:
    """Report payload with one page of issues, pagination block and issue summary."""
    total = len(report.issues)
    total_pages = max(1, math.ceil(total / page_size))
    start = (page - 1) * page_size
    page_issues = report.issues[start:start + page_size]

    payload = report.to_payload()
    payload["issues"] = [i.to_payload() for i in page_issues]
    payload["pagination"] = {
        "currentPage": page,
        "pageSize": page_size,
        "totalIssues": total,
        "totalPages": total_pages,
        "hasNextPage": page < total_pages,
        "hasPrevPage": page > 1,
        "issuesOnCurrentPage": len(page_issues),
        "startIndex": start + 1 if page_issues else 0,
        "endIndex": start + len(page_issues),
    }
    payload["issuesSummary"] = {
        "byCategory": dict(Counter(i.category for i in report.issues)),
        "bySeverity": dict(Counter(i.severity for i in report.issues)),
    }
    return payload


class QualityToolExecutor:
    """Executes quality tools against an analyzer and a snapshot store."""

    def __init__(self, analyzer: QualityAnalyzer, store: SnapshotStore) -> None:
        self._analyzer = analyzer
        self._store = store
        self._handlers: dict[str, Callable[[Any], Awaitable[str]]] = {
            "analyze_project": self._analyze_project,
            "check_quality": self._check_quality,
            "get_recommendations": self._get_recommendations,
            "get_smart_summary": self._get_smart_summary,
            "get_quick_wins": self._get_quick_wins,
            "get_trends": self._get_trends,
        }

    @staticmethod
    def list_tools() -> list[dict]:
        return QUALITY_TOOLS

    async def execute(self, tool: str, args: dict[str, Any] | None = None) -> ToolResult:
        """Execute tool with given args; every failure becomes an error result."""
        args = args or {}
        name = tool.strip()
        handler = self._handlers.get(name)
        if handler is None:
            return ToolResult(success=False, content="", error=f"Unknown tool: {tool}", tool=tool, args=args)
        try:
            parsed = TOOL_ARGS[name].model_validate(args)
            content = await handler(parsed)
        except ValidationError as e:
            fields = ", ".join(".".join(str(p) for p in err["loc"]) or "arguments" for err in e.errors())
            return ToolResult(
                success=False,
                content="",
                error=f"Invalid arguments for {name}: {fields}",
                tool=name,
                args=args,
            )
        except ValueError as e:
            return ToolResult(success=False, content="", error=str(e), tool=name, args=args)
        except Exception as e:  # noqa: BLE001
            logger.exception("Tool %s failed", name)
            return ToolResult(success=False, content="", error=str(e) or type(e).__name__, tool=name, args=args)
        return ToolResult(success=True, content=content, tool=name, args=args)

    async def _report(self, project_path: str) -> QualityReport:
        return await self._analyzer.analyze(project_path)

    async def _analyze_project(self, args: AnalyzeProjectArgs) -> str:
        info = await asyncio.to_thread(self._analyzer.detect, args.project_path, args.deep)
        return _dumps(info.to_payload())

    async def _check_quality(self, args: CheckQualityArgs) -> str:
        options = AnalysisOptions(
            deep_analysis=args.deep_analysis,
            ai_enabled=args.ai_enabled,
            check_unused_code=args.check_unused_code,
            check_complexity=args.check_complexity,
            check_security=args.check_security,
        )
        report = await self._analyzer.analyze(args.project_path, args.project_type, options)
        return _dumps(paginate_report(report, args.page, args.page_size))

    async def _get_recommendations(self, args: ProjectPathArgs) -> str:
        report = await self._report(args.project_path)
        return _dumps(
            {
                "score": report.score,
                "projectTypes": report.project_types,
                "recommendations": report.recommendations,
                "topIssues": [i.to_payload() for i in report.issues[:TOP_ISSUES]],
            }
        )

    async def _get_smart_summary(self, args: ProjectPathArgs) -> str:
        report = await self._report(args.project_path)
        self._store.save(report.project_path, report)
        return format_smart_summary(generate_smart_summary(report))

    async def _get_quick_wins(self, args: ProjectPathArgs) -> str:
        report = await self._report(args.project_path)
        return format_quick_wins(generate_quick_wins(report))

    async def _get_trends(self, args: ProjectPathArgs) -> str:
        report = await self._report(args.project_path)
        trend = self._store.trend(report.project_path, report)
        self._store.save(report.project_path, report)
        return format_trends(trend)

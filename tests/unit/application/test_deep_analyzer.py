"""Tests for LLMDeepAnalyzer."""

import json
from unittest.mock import AsyncMock

import pytest

from code_quality.application.analysis.deep_analyzer import LLMDeepAnalyzer, parse_review
from code_quality.domain.ports.deep_analysis import NoOpDeepAnalyzer
from code_quality.domain.ports.llm import LLMResponse


class TestParseReview:
    """Tests for parse_review."""

    def test_valid_json(self):
        resp = json.dumps(
            {
                "issues": [
                    {"severity": "warning", "category": "naming", "message": "Vague name 'data'", "line": 4},
                ],
                "insights": ["State is duplicated between two hooks"],
            }
        )
        result = parse_review(resp, "src/App.tsx")
        assert len(result.issues) == 1
        issue = result.issues[0]
        assert (issue.severity, issue.category, issue.rule, issue.file, issue.line) == (
            "warning",
            "naming",
            "ai-naming",
            "src/App.tsx",
            4,
        )
        assert result.insights == ["State is duplicated between two hooks"]

    def test_json_in_markdown_block(self):
        resp = 'Here you go:\n```json\n{"issues": [{"message": "Magic number"}]}\n```'
        result = parse_review(resp, "a.ts")
        assert [i.message for i in result.issues] == ["Magic number"]
        assert result.issues[0].severity == "info"
        assert result.issues[0].rule == "ai-code-smell"

    def test_empty_and_invalid(self):
        assert parse_review("", "a.ts").issues == []
        assert parse_review("   ", "a.ts").issues == []
        assert parse_review("not json", "a.ts").issues == []
        assert parse_review("[1, 2]", "a.ts").issues == []

    def test_non_list_fields_ignored(self):
        result = parse_review('{"issues": 3, "insights": "use constants"}', "a.ts")
        assert result.issues == []
        assert result.insights == []
        assert parse_review('{"issues": null, "insights": {"a": 1}}', "a.ts").issues == []

    def test_unknown_severity_and_bad_line(self):
        resp = '{"issues": [{"severity": "CRITICAL", "message": "x", "line": -3}]}'
        issue = parse_review(resp, "a.ts").issues[0]
        assert issue.severity == "info"
        assert issue.line is None

    def test_items_without_message_dropped(self):
        resp = '{"issues": [{"severity": "error"}, "oops", {"message": "kept"}]}'
        assert [i.message for i in parse_review(resp, "a.ts").issues] == ["kept"]

    def test_limits(self):
        resp = json.dumps(
            {
                "issues": [{"message": f"m{i}"} for i in range(15)],
                "insights": ["a", "b", "c", "d"],
            }
        )
        result = parse_review(resp, "a.ts")
        assert len(result.issues) == 10
        assert result.insights == ["a", "b", "c"]


class TestLLMDeepAnalyzer:
    """Tests for LLMDeepAnalyzer."""

    @pytest.mark.asyncio
    async def test_prompts_model_with_file(self):
        llm = AsyncMock()
        llm.generate.return_value = LLMResponse(
            content='{"issues": [{"severity": "error", "category": "bug", "message": "Null deref"}]}',
            model="m",
        )
        analyzer = LLMDeepAnalyzer(llm, model="qwen2.5-coder:7b")

        result = await analyzer.analyze("const a = b.c;\n", "src/a.ts")

        assert [i.rule for i in result.issues] == ["ai-bug"]
        messages = llm.generate.call_args.args[0]
        assert messages[0].role == "system"
        assert "src/a.ts" in messages[1].content
        assert "const a = b.c;" in messages[1].content
        assert llm.generate.call_args.kwargs["model"] == "qwen2.5-coder:7b"

    @pytest.mark.asyncio
    async def test_llm_failure_yields_empty(self):
        llm = AsyncMock()
        llm.generate.side_effect = ConnectionError("ollama down")
        result = await LLMDeepAnalyzer(llm).analyze("x = 1", "a.ts")
        assert result.issues == []
        assert result.insights == []

    @pytest.mark.asyncio
    async def test_malformed_answer_yields_empty(self):
        llm = AsyncMock()
        llm.generate.return_value = LLMResponse(content='{"issues": 3, "insights": 7}', model="m")
        result = await LLMDeepAnalyzer(llm).analyze("x = 1", "a.ts")
        assert result.issues == []
        assert result.insights == []

    @pytest.mark.asyncio
    async def test_empty_content_skips_model(self):
        llm = AsyncMock()
        result = await LLMDeepAnalyzer(llm).analyze("  \n", "a.ts")
        assert result.issues == []
        llm.generate.assert_not_called()

    @pytest.mark.asyncio
    async def test_noop_oracle(self):
        result = await NoOpDeepAnalyzer().analyze("anything", "a.ts")
        assert result.issues == []
        assert result.insights == []
